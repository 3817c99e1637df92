import logging
import os

import cv2
import numpy as np

from .errors import ImageDecodeError
from .image import Image, ImageFormat

logger = logging.getLogger(__name__)


def find_image_from_path(path):
    """Open an image file and return (Image, ImageFormat).

    The format is taken from the file extension; pixel data is decoded with
    OpenCV and converted to RGB.
    """
    path = os.fspath(path)
    if not os.path.isfile(path):
        logger.error(f"Image not found: {path}")
        raise FileNotFoundError(f"Image not found: {path}")

    image_format = ImageFormat.from_path(path)
    raw = np.fromfile(path, dtype=np.uint8)
    decoded = cv2.imdecode(raw, cv2.IMREAD_COLOR) if raw.size else None
    if decoded is None:
        logger.error(f"Could not decode {path} as {image_format.name}")
        raise ImageDecodeError(f"Could not decode image: {path}")

    image = Image.from_bgr(decoded)
    logger.debug(f"Loaded {path}: format={image_format.name}, size={image.dimensions}")
    return image, image_format
