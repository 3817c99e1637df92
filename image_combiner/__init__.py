"""Combine two images by interleaving 4-byte blocks of their RGB pixel bytes."""

from .dimensions import smallest_dimension
from .errors import CapacityError, FormatMismatchError, ImageCombineError, InterleaveFault
from .image import Image, ImageFormat
from .interleave import alternate_windows, combine
from .normalize import standardize
from .output import OutputImage
from .pipeline import batch_combine, combine_files, combine_images

__all__ = [
    "smallest_dimension",
    "standardize",
    "combine",
    "alternate_windows",
    "Image",
    "ImageFormat",
    "OutputImage",
    "combine_images",
    "combine_files",
    "batch_combine",
    "ImageCombineError",
    "FormatMismatchError",
    "CapacityError",
    "InterleaveFault",
]
