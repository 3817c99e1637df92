import logging

from .dimensions import smallest_dimension

logger = logging.getLogger(__name__)


def standardize(image_1, image_2):
    """Resize one of the two images so both share the smaller-area dimension.

    If ``image_2`` already has that dimension, ``image_1`` is resized and
    ``image_2`` is returned as is; otherwise ``image_2`` is resized. An image
    that already matches is never resampled.
    """
    width, height = smallest_dimension(image_1.dimensions, image_2.dimensions)
    logger.info(f"width: {width}, height: {height}")

    if image_2.dimensions == (width, height):
        if image_1.dimensions == (width, height):
            return image_1, image_2
        logger.debug(f"Resizing first image from {image_1.dimensions} to {(width, height)}")
        return image_1.resize_exact(width, height), image_2
    logger.debug(f"Resizing second image from {image_2.dimensions} to {(width, height)}")
    return image_1, image_2.resize_exact(width, height)
