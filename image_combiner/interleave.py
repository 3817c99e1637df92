import logging

import numpy as np
from numba import jit

from .errors import InterleaveFault
from .image import as_byte_buffer

logger = logging.getLogger(__name__)

WINDOW_STRIDE = 4
INTERLEAVE_PERIOD = 8


def plan_windows(length_1, length_2):
    """Return (starts, ends) of the inclusive windows walked over buffer 1.

    Windows start every WINDOW_STRIDE bytes and are clamped to the last index
    of buffer 1. Each window is checked against the buffer it will be read
    from; the first bad window raises InterleaveFault.
    """
    starts = np.arange(0, length_1, WINDOW_STRIDE, dtype=np.int64)
    ends = np.minimum(starts + (WINDOW_STRIDE - 1), length_1 - 1)
    source_lengths = np.where(starts % INTERLEAVE_PERIOD == 0, length_1, length_2)
    bad = (starts >= source_lengths) | (ends >= source_lengths) | (starts > ends)
    if bad.any():
        idx = int(np.argmax(bad))
        length, start, end = int(source_lengths[idx]), int(starts[idx]), int(ends[idx])
        logger.error(f"Vector length: {length}, Start: {start}, End: {end}")
        raise InterleaveFault(length, start, end)
    return starts, ends


@jit(nopython=True)
def _copy_windows(buffer_1, buffer_2, starts, ends, out):
    for w in range(starts.shape[0]):
        start = starts[w]
        stop = ends[w] + 1
        if start % INTERLEAVE_PERIOD == 0:
            out[start:stop] = buffer_1[start:stop]
        else:
            out[start:stop] = buffer_2[start:stop]


def alternate_windows(buffer_1, buffer_2):
    """Interleave two flat byte buffers in 4-byte windows.

    Windows starting at a multiple of 8 come from ``buffer_1``, the rest from
    ``buffer_2``. The result has the length of ``buffer_1``.
    """
    buffer_1 = as_byte_buffer(buffer_1)
    buffer_2 = as_byte_buffer(buffer_2)
    starts, ends = plan_windows(buffer_1.shape[0], buffer_2.shape[0])

    combined = np.empty(buffer_1.shape[0], dtype=np.uint8)
    if starts.shape[0]:
        _copy_windows(buffer_1, buffer_2, starts, ends, combined)
    logger.debug(f"Interleaved {starts.shape[0]} windows into {combined.shape[0]} bytes")
    return combined


def combine(image_1, image_2):
    """Combine two equally sized images into one flat RGB byte buffer."""
    vec_1 = image_1.to_rgb_bytes()
    vec_2 = image_2.to_rgb_bytes()
    return alternate_windows(vec_1, vec_2)
