import os
from dataclasses import dataclass
from enum import Enum

import cv2
import numpy as np

from .errors import UnsupportedFormatError

RGB_CHANNELS = 3
RGBA_CHANNELS = 4


class ImageFormat(Enum):
    PNG = ".png"
    JPEG = ".jpg"
    BMP = ".bmp"
    TIFF = ".tiff"
    WEBP = ".webp"
    PNM = ".ppm"

    @property
    def extension(self):
        return self.value

    @classmethod
    def from_path(cls, path):
        ext = os.path.splitext(str(path))[1].lower()
        fmt = _EXTENSIONS.get(ext)
        if fmt is None:
            raise UnsupportedFormatError(f"Unsupported image format for {path!r}")
        return fmt


_EXTENSIONS = {
    ".png": ImageFormat.PNG,
    ".jpg": ImageFormat.JPEG,
    ".jpeg": ImageFormat.JPEG,
    ".bmp": ImageFormat.BMP,
    ".tif": ImageFormat.TIFF,
    ".tiff": ImageFormat.TIFF,
    ".webp": ImageFormat.WEBP,
    ".ppm": ImageFormat.PNM,
    ".pgm": ImageFormat.PNM,
    ".pnm": ImageFormat.PNM,
}


@dataclass(frozen=True, eq=False)
class Image:
    """Decoded raster held as an (height, width, 3) uint8 RGB array.

    Operations never modify ``pixels``; they return new buffers or images.
    """
    pixels: np.ndarray

    @classmethod
    def from_array(cls, array):
        """Build from a grayscale, RGB or RGBA uint8 array. Alpha is dropped."""
        arr = np.asarray(array)
        if arr.dtype != np.uint8:
            raise ValueError(f"Expected uint8 pixels, got {arr.dtype}")
        if arr.ndim == 2:
            arr = cv2.cvtColor(arr, cv2.COLOR_GRAY2RGB)
        elif arr.ndim == 3 and arr.shape[2] == RGBA_CHANNELS:
            arr = cv2.cvtColor(arr, cv2.COLOR_RGBA2RGB)
        elif arr.ndim != 3 or arr.shape[2] != RGB_CHANNELS:
            raise ValueError(f"Unsupported pixel array shape {arr.shape}")
        return cls(np.ascontiguousarray(arr))

    @classmethod
    def from_bgr(cls, array):
        """Build from an OpenCV-ordered (BGR or BGRA) array."""
        arr = np.asarray(array)
        if arr.ndim == 3 and arr.shape[2] == RGBA_CHANNELS:
            arr = cv2.cvtColor(arr, cv2.COLOR_BGRA2RGB)
        elif arr.ndim == 3 and arr.shape[2] == RGB_CHANNELS:
            arr = cv2.cvtColor(arr, cv2.COLOR_BGR2RGB)
        return cls.from_array(arr)

    @property
    def width(self) -> int:
        return int(self.pixels.shape[1])

    @property
    def height(self) -> int:
        return int(self.pixels.shape[0])

    @property
    def dimensions(self):
        return self.width, self.height

    def to_rgb_bytes(self) -> np.ndarray:
        """Row-major RGB bytes, 3 per pixel, no row padding."""
        return np.ascontiguousarray(self.pixels, dtype=np.uint8).reshape(-1).copy()

    def resize_exact(self, width, height):
        # cv2 takes (width, height); INTER_LINEAR is the triangle filter
        resized = cv2.resize(self.pixels, (width, height), interpolation=cv2.INTER_LINEAR)
        return Image(np.ascontiguousarray(resized))


def as_byte_buffer(data):
    """View bytes-like objects or arrays as a flat uint8 array."""
    if isinstance(data, (bytes, bytearray, memoryview)):
        return np.frombuffer(data, dtype=np.uint8)
    return np.ascontiguousarray(data, dtype=np.uint8).reshape(-1)
