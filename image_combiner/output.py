import logging
from enum import Enum

import numpy as np

from .errors import CapacityError, OutputStateError
from .image import RGB_CHANNELS, as_byte_buffer

logger = logging.getLogger(__name__)


class OutputState(Enum):
    RESERVED = "reserved"
    COMMITTED = "committed"


class OutputImage:
    """Destination image: reserved with a byte capacity, then committed once.

    ``set_data`` is the only transition (RESERVED -> COMMITTED) and is guarded
    by the capacity check; a rejected buffer leaves the descriptor reserved
    and empty.
    """

    def __init__(self, width, height, name, channels=RGB_CHANNELS):
        self.width = width
        self.height = height
        self.name = name
        self.channels = channels
        self._capacity = width * height * channels
        self._data = np.empty(0, dtype=np.uint8)
        self.state = OutputState.RESERVED

    @property
    def capacity(self):
        return self._capacity

    @property
    def data(self):
        return self._data

    @property
    def committed(self):
        return self.state is OutputState.COMMITTED

    def set_data(self, data):
        if self.committed:
            raise OutputStateError(f"Output image {self.name!r} already holds data")
        buffer = as_byte_buffer(data)
        if buffer.shape[0] > self._capacity:
            logger.error(f"Buffer too small for {self.name}: {buffer.shape[0]} > {self._capacity}")
            raise CapacityError(buffer.shape[0], self._capacity)
        self._data = buffer
        self.state = OutputState.COMMITTED
        logger.debug(f"Committed {buffer.shape[0]} bytes to {self.name}")

    def __repr__(self):
        return (
            f"OutputImage(name={self.name!r}, width={self.width}, height={self.height}, "
            f"state={self.state.value}, bytes={self._data.shape[0]}/{self._capacity})"
        )
