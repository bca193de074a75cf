from enum import Enum


class PixelFormat(Enum):
    """Pixel layout of a caller buffer."""
    MONO8 = "Mono8"    # 8 bit luminance
    BGR8 = "BGR8"      # blue, green, red; often called RGB
    BGRA8 = "BGRA8"    # blue, green, red, alpha; often called RGBA
    INVALID = "Invalid"


class Orientation(Enum):
    """Which line an image starts with."""
    TOP_DOWN = "TopDown"
    BOTTOM_UP = "BottomUp"
    INVALID = "Invalid"


class ImageProperties:
    """
    Describes the layout of a pixel buffer.

    Filled by bmpfile.load_properties() / bmpfile.load(), or by the caller
    before bmpfile.save(). line_padding is the number of extra bytes after
    every line in the buffer, e.g. to align lines to 4 bytes.
    """

    def __init__(self, width=0, height=0, line_padding=0,
                 pixel_format=PixelFormat.INVALID,
                 orientation=Orientation.BOTTOM_UP):
        self.width = width
        self.height = height
        self.line_padding = line_padding
        self.pixel_format = pixel_format
        self.orientation = orientation

    def reset(self):
        self.width = 0
        self.height = 0
        self.line_padding = 0
        self.pixel_format = PixelFormat.INVALID
        self.orientation = Orientation.BOTTOM_UP

    def copy(self):
        return ImageProperties(self.width, self.height, self.line_padding,
                               self.pixel_format, self.orientation)

    def is_valid(self) -> bool:
        return (self.width > 0 and self.height > 0
                and self.pixel_format != PixelFormat.INVALID)

    def __eq__(self, other):
        if not isinstance(other, ImageProperties):
            return NotImplemented
        return (self.width == other.width
                and self.height == other.height
                and self.line_padding == other.line_padding
                and self.pixel_format == other.pixel_format
                and self.orientation == other.orientation)

    __hash__ = None

    def __repr__(self):
        return (f"ImageProperties(width={self.width}, height={self.height}, "
                f"line_padding={self.line_padding}, "
                f"pixel_format={self.pixel_format.name}, "
                f"orientation={self.orientation.name})")


class OperationResultType(Enum):
    OK = 0
    FILE_NOT_FOUND = 1
    FILE_OPEN_FOR_WRITING_ERROR = 2
    FILE_READ_ERROR = 3
    FILE_WRITE_ERROR = 4
    BUFFER_TOO_SMALL = 5
    NOT_A_BMP_FILE = 6
    UNSUPPORTED_COMPRESSION = 7
    UNSUPPORTED_BIT_PER_PIXEL = 8
    UNSUPPORTED_USE_OF_COLOR_TABLE = 9  # color table on a 24 or 32 bit file
    TOO_LARGE_COLOR_TABLE = 10
    CORRUPT = 11    # looks like a BMP but header and size checks failed
    NULL_ARGUMENT = 12
    INVALID_ARGUMENT = 13
    INVALID = 14    # unset, never returned by an operation


_DESCRIPTIONS = {
    OperationResultType.OK: "BMP file operation successful.",
    OperationResultType.FILE_NOT_FOUND: "BMP file not found.",
    OperationResultType.FILE_OPEN_FOR_WRITING_ERROR: "Failed to open BMP file for writing.",
    OperationResultType.FILE_READ_ERROR: "BMP file read error.",
    OperationResultType.FILE_WRITE_ERROR: "BMP file write error.",
    OperationResultType.BUFFER_TOO_SMALL: "Buffer too small for BMP file operation.",
    OperationResultType.NOT_A_BMP_FILE: "BMP file read error. Not a BMP file.",
    OperationResultType.UNSUPPORTED_COMPRESSION: "BMP file read error. Compression type not supported.",
    OperationResultType.UNSUPPORTED_BIT_PER_PIXEL: "BMP file read error. Bit per pixel not supported.",
    OperationResultType.UNSUPPORTED_USE_OF_COLOR_TABLE: "BMP file read error. Color table variant not supported.",
    OperationResultType.TOO_LARGE_COLOR_TABLE: "BMP file read error. Color table too large.",
    OperationResultType.CORRUPT: "BMP file read error. File has been corrupted.",
    OperationResultType.NULL_ARGUMENT: "Argument must not be null.",
    OperationResultType.INVALID_ARGUMENT: "An argument passed is invalid.",
    OperationResultType.INVALID: "Invalid operation type. No operation executed.",
}


def operation_result_type_to_string(result_type) -> str:
    if isinstance(result_type, OperationResult):
        result_type = result_type.result_type
    return _DESCRIPTIONS.get(result_type, "Unsupported operation result type.")


class OperationResult:
    """
    Outcome of a codec operation: OK or exactly one error kind.

    Check is_ok() (or the truth value) before trusting any output.
    """

    def __init__(self, result_type=OperationResultType.INVALID):
        self._result_type = result_type

    @property
    def result_type(self) -> OperationResultType:
        return self._result_type

    def is_ok(self) -> bool:
        return self._result_type == OperationResultType.OK

    def __bool__(self):
        return self.is_ok()

    def __eq__(self, other):
        if isinstance(other, OperationResult):
            return self._result_type == other._result_type
        if isinstance(other, OperationResultType):
            return self._result_type == other
        return NotImplemented

    def __hash__(self):
        return hash(self._result_type)

    def __str__(self):
        return operation_result_type_to_string(self._result_type)

    def __repr__(self):
        return f"OperationResult({self._result_type.name})"


class BMPFileError(Exception):
    """Raised inside the codec, turned into an OperationResult by bmpfile."""

    def __init__(self, result_type: OperationResultType):
        super().__init__(operation_result_type_to_string(result_type))
        self.result_type = result_type
