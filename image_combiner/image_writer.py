import logging
import os

import cv2

from .errors import ImageEncodeError
from .image import RGB_CHANNELS, RGBA_CHANNELS, as_byte_buffer
from .utils import ensure_dirs

logger = logging.getLogger(__name__)


def save_buffer_with_format(name, data, width, height, image_format):
    """Encode a flat RGB or RGBA buffer as ``image_format`` and write it to ``name``.

    The colour layout follows the buffer density (3 or 4 bytes per pixel),
    not the capacity reserved for it. The format is applied even when the
    file name carries another extension.
    """
    buffer = as_byte_buffer(data)
    pixels = width * height
    if pixels and buffer.shape[0] == pixels * RGB_CHANNELS:
        arr = cv2.cvtColor(buffer.reshape(height, width, RGB_CHANNELS), cv2.COLOR_RGB2BGR)
    elif pixels and buffer.shape[0] == pixels * RGBA_CHANNELS:
        arr = cv2.cvtColor(buffer.reshape(height, width, RGBA_CHANNELS), cv2.COLOR_RGBA2BGRA)
    else:
        logger.error(f"Buffer of {buffer.shape[0]} bytes does not fit {width}x{height}")
        raise ImageEncodeError(f"Buffer of {buffer.shape[0]} bytes does not match a {width}x{height} image")

    ok, encoded = cv2.imencode(image_format.extension, arr)
    if not ok:
        logger.error(f"Failed to encode {name} as {image_format.name}")
        raise ImageEncodeError(f"Could not encode {name} as {image_format.name}")

    ensure_dirs(os.path.dirname(os.path.abspath(name)))
    with open(name, "wb") as f:
        f.write(encoded.tobytes())
    logger.info(f"Saved {width}x{height} {image_format.name} image: {name}")
    return name
