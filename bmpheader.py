import logging
import struct
from collections import namedtuple

from bmptypes import BMPFileError, OperationResultType, Orientation, PixelFormat
from bmpgeometry import file_line_padding, file_stride

logger = logging.getLogger(__name__)

BMP_MAGIC = b"BM"
FILE_HEADER_SIZE = 14
INFO_HEADER_SIZE = 40
HEADER_SIZE = FILE_HEADER_SIZE + INFO_HEADER_SIZE  # 54

KNOWN_BPP = (1, 4, 8, 16, 24, 32)
SUPPORTED_BPP = (8, 24, 32)
MAX_COLOR_TABLE_ENTRIES = 256
COLOR_TABLE_ENTRY_SIZE = 4

# default palette length when the header declares 0 colors
_DEFAULT_COLOR_COUNT = {1: 1, 4: 16, 8: 256}

# magic, file size, reserved1, reserved2, pixel offset,
# info header size, width, height, planes, bpp, compression, image size,
# x resolution, y resolution, colors, important colors
_HEADER_STRUCT = struct.Struct("<2sIHHIIiiHHIIiiII")


ColorTableEntry = namedtuple("ColorTableEntry", "blue green red reserved")


class BMPHeader:
    """File header plus BITMAPINFOHEADER, 54 bytes on disk."""

    def __init__(self):
        self.magic = BMP_MAGIC
        self.file_size = 0
        self.reserved1 = 0
        self.reserved2 = 0
        self.offset = HEADER_SIZE
        self.info_header_size = INFO_HEADER_SIZE
        self.width = 0
        self.height = 0     # negative for top down files
        self.planes = 1
        self.bpp = 0
        self.compression = 0
        self.image_size = 0
        self.x_resolution = 0
        self.y_resolution = 0
        self.num_colors = 0
        self.important_colors = 0

    @classmethod
    def unpack(cls, data):
        header = cls()
        (header.magic, header.file_size, header.reserved1, header.reserved2,
         header.offset, header.info_header_size, header.width, header.height,
         header.planes, header.bpp, header.compression, header.image_size,
         header.x_resolution, header.y_resolution, header.num_colors,
         header.important_colors) = _HEADER_STRUCT.unpack(data)
        return header

    def pack(self):
        return _HEADER_STRUCT.pack(
            self.magic, self.file_size, self.reserved1, self.reserved2,
            self.offset, self.info_header_size, self.width, self.height,
            self.planes, self.bpp, self.compression, self.image_size,
            self.x_resolution, self.y_resolution, self.num_colors,
            self.important_colors)

    def orientation(self):
        return Orientation.TOP_DOWN if self.height < 0 else Orientation.BOTTOM_UP


def read_header(stream):
    try:
        data = stream.read(HEADER_SIZE)
    except OSError as e:
        raise BMPFileError(OperationResultType.NOT_A_BMP_FILE) from e
    if len(data) != HEADER_SIZE:
        raise BMPFileError(OperationResultType.NOT_A_BMP_FILE)
    header = BMPHeader.unpack(data)
    check_header(header)
    logger.debug(
        "BMP header: width=%d height=%d bpp=%d compression=%d offset=%d "
        "info header=%d image size=%d colors=%d/%d",
        header.width, header.height, header.bpp, header.compression,
        header.offset, header.info_header_size, header.image_size,
        header.num_colors, header.important_colors)
    return header


def check_header(header):
    """
    Validates a header, raising BMPFileError for the first failing check.
    File size, reserved fields, planes and resolution are not checked.
    """
    if header.magic != BMP_MAGIC:
        raise BMPFileError(OperationResultType.NOT_A_BMP_FILE)
    if header.info_header_size < INFO_HEADER_SIZE:
        raise BMPFileError(OperationResultType.CORRUPT)
    if header.offset < HEADER_SIZE:
        raise BMPFileError(OperationResultType.CORRUPT)
    if header.height == 0 or header.width <= 0:
        raise BMPFileError(OperationResultType.CORRUPT)
    if header.bpp not in KNOWN_BPP:
        raise BMPFileError(OperationResultType.CORRUPT)
    if header.compression != 0:
        raise BMPFileError(OperationResultType.UNSUPPORTED_COMPRESSION)
    if header.bpp not in SUPPORTED_BPP:
        raise BMPFileError(OperationResultType.UNSUPPORTED_BIT_PER_PIXEL)
    if header.bpp in (24, 32) and (header.num_colors or header.important_colors):
        raise BMPFileError(OperationResultType.UNSUPPORTED_USE_OF_COLOR_TABLE)
    if header.bpp == 8 and (header.num_colors > MAX_COLOR_TABLE_ENTRIES
                            or header.important_colors > MAX_COLOR_TABLE_ENTRIES):
        raise BMPFileError(OperationResultType.TOO_LARGE_COLOR_TABLE)
    image_data_size = file_stride(header.bpp, header.width) * abs(header.height)
    if header.image_size not in (0, image_data_size):
        raise BMPFileError(OperationResultType.CORRUPT)


def color_table_length(header):
    if header.num_colors:
        return header.num_colors
    return _DEFAULT_COLOR_COUNT.get(header.bpp, 0)


def read_color_table(stream, header):
    # the color table follows the info header, whatever its size
    stream.seek(header.info_header_size + FILE_HEADER_SIZE)

    num_colors = color_table_length(header)
    if num_colors == 0:
        raise BMPFileError(OperationResultType.UNSUPPORTED_USE_OF_COLOR_TABLE)

    palette_bytes = num_colors * COLOR_TABLE_ENTRY_SIZE
    data = stream.read(palette_bytes)
    if len(data) != palette_bytes:
        raise BMPFileError(OperationResultType.FILE_READ_ERROR)

    return [ColorTableEntry(*data[i:i + COLOR_TABLE_ENTRY_SIZE])
            for i in range(0, palette_bytes, COLOR_TABLE_ENTRY_SIZE)]


def is_mono8(color_table):
    return all(e.red == e.green == e.blue for e in color_table)


def is_linear_mono8(color_table):
    return all(e.red == e.green == e.blue == i
               for i, e in enumerate(color_table))


def linear_mono8_color_table():
    return [ColorTableEntry(i, i, i, 0) for i in range(MAX_COLOR_TABLE_ENTRIES)]


def pack_color_table(color_table):
    return b"".join(bytes(entry) for entry in color_table)


def mono8_lookup(color_table):
    """
    256 byte translation table mapping a pixel index to the gray value of
    its palette entry. Indices beyond a short palette map to black.
    """
    lut = bytearray(MAX_COLOR_TABLE_ENTRIES)
    for i, entry in enumerate(color_table[:MAX_COLOR_TABLE_ENTRIES]):
        lut[i] = entry.blue
    return bytes(lut)


def bgr8_lookup(color_table):
    """Per index 3 byte B, G, R values, black beyond a short palette."""
    lut = [b"\x00\x00\x00"] * MAX_COLOR_TABLE_ENTRIES
    for i, entry in enumerate(color_table[:MAX_COLOR_TABLE_ENTRIES]):
        lut[i] = bytes((entry.blue, entry.green, entry.red))
    return lut


def determine_image_properties(header, color_table, props):
    props.width = abs(header.width)
    props.height = abs(header.height)
    if header.bpp <= 8:
        if is_mono8(color_table):
            props.pixel_format = PixelFormat.MONO8
        else:
            props.pixel_format = PixelFormat.BGR8
    elif header.bpp == 24:
        props.pixel_format = PixelFormat.BGR8
    else:
        props.pixel_format = PixelFormat.BGRA8
    props.orientation = header.orientation()
    props.line_padding = file_line_padding(header.bpp, header.width)
    logger.debug("Image properties from file: %r", props)
