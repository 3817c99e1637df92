class ImageCombineError(Exception):
    """Base class for recoverable errors surfaced to the caller."""


class FormatMismatchError(ImageCombineError):
    def __init__(self, format_1, format_2):
        self.format_1 = format_1
        self.format_2 = format_2
        super().__init__(f"Images have different formats: {format_1.name} vs {format_2.name}")


class UnsupportedFormatError(ImageCombineError):
    pass


class ImageDecodeError(ImageCombineError):
    pass


class ImageEncodeError(ImageCombineError):
    pass


class CapacityError(ImageCombineError):
    def __init__(self, length, capacity):
        self.length = length
        self.capacity = capacity
        super().__init__(f"Buffer of {length} bytes exceeds reserved capacity of {capacity} bytes")


class OutputStateError(ImageCombineError):
    pass


class InterleaveFault(RuntimeError):
    """Out-of-bounds or inverted window during interleaving.

    Not an ImageCombineError: it signals a broken internal invariant and
    callers are not expected to recover from it.
    """

    def __init__(self, length, start, end):
        self.length = length
        self.start = start
        self.end = end
        super().__init__(
            f"Start or end index is out of bounds (vector length: {length}, start: {start}, end: {end})"
        )
