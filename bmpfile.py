"""
Loading and saving BMP files from and to caller owned pixel buffers.

Uncompressed 8, 24 and 32 bit files are supported. The buffer layout is
chosen by the caller through ImageProperties: Mono8, BGR8 or BGRA8 pixels,
any number of padding bytes per line and either orientation.

    props = ImageProperties()
    if bmpfile.load_properties("image.bmp", props):
        buffer = bytearray(bmpfile.compute_buffer_size(props))
        result = bmpfile.load("image.bmp", buffer, len(buffer), props)
"""
import logging
import os

from bmptypes import (
    BMPFileError, ImageProperties, OperationResult, OperationResultType,
    Orientation, PixelFormat, operation_result_type_to_string,
)
from bmpgeometry import (
    buffer_row_index, buffer_stride, compute_buffer_size, file_line_padding,
    file_stride,
)
from bmpheader import (
    COLOR_TABLE_ENTRY_SIZE, HEADER_SIZE, INFO_HEADER_SIZE,
    MAX_COLOR_TABLE_ENTRIES, BMPHeader, bgr8_lookup,
    determine_image_properties, is_linear_mono8, linear_mono8_color_table,
    mono8_lookup, pack_color_table, read_color_table, read_header,
)

__all__ = [
    "ImageProperties", "OperationResult", "OperationResultType",
    "Orientation", "PixelFormat", "compute_buffer_size", "load",
    "load_properties", "operation_result_type_to_string", "save",
]

logger = logging.getLogger(__name__)

_BPP_FOR_FORMAT = {
    PixelFormat.MONO8: 8,
    PixelFormat.BGR8: 24,
    PixelFormat.BGRA8: 32,
}

_INT32_MAX = 0x7FFFFFFF
_UINT32_MAX = 0xFFFFFFFF


def load_properties(filename, props):
    """
    Reads the image properties of a BMP file, e.g. to size a buffer with
    compute_buffer_size(). props is reset to its defaults on failure.
    """
    if filename is None:
        props.reset()
        return OperationResult(OperationResultType.NULL_ARGUMENT)
    if not _is_path(filename):
        props.reset()
        return OperationResult(OperationResultType.INVALID_ARGUMENT)
    try:
        with _open_for_reading(filename) as f:
            _load_image_properties(f, props)
    except BMPFileError as e:
        props.reset()
        return _failed("load_properties", filename, e.result_type)
    return OperationResult(OperationResultType.OK)


def load(filename, buffer, buffer_size, props,
         force_line_padding=False, force_orientation=False):
    """
    Loads the image into buffer and its properties into props.

    By default the buffer is filled in the file's own layout. With
    force_line_padding / force_orientation the line padding / orientation
    already set in props are used instead. buffer_size may be None to use
    the whole buffer. props is reset to its defaults on failure.
    """
    if filename is None or buffer is None:
        props.reset()
        return OperationResult(OperationResultType.NULL_ARGUMENT)

    view = _byte_view(buffer)
    if (not _is_path(filename) or view is None or view.readonly
            or (force_orientation and props.orientation == Orientation.INVALID)
            or (force_line_padding and props.line_padding < 0)):
        props.reset()
        return OperationResult(OperationResultType.INVALID_ARGUMENT)
    buffer_size = _usable_size(view, buffer_size)

    requested_orientation = props.orientation
    requested_line_padding = props.line_padding
    try:
        with _open_for_reading(filename) as f:
            header, color_table = _load_image_properties(f, props)
            native_orientation = props.orientation
            if force_line_padding:
                props.line_padding = requested_line_padding
            if force_orientation:
                props.orientation = requested_orientation

            if compute_buffer_size(props) > buffer_size:
                raise BMPFileError(OperationResultType.BUFFER_TOO_SMALL)

            f.seek(header.offset)
            _read_pixels(f, header, color_table, view, props, native_orientation)
    except BMPFileError as e:
        props.reset()
        return _failed("load", filename, e.result_type)
    except OSError as e:
        logger.debug("Reading %s failed: %s", filename, e)
        props.reset()
        return OperationResult(OperationResultType.FILE_READ_ERROR)
    return OperationResult(OperationResultType.OK)


def save(filename, buffer, buffer_size, props, force_bottom_up=True):
    """
    Saves the image in buffer, described by props, to a BMP file.

    Files are written bottom up for best compatibility with other readers.
    Pass force_bottom_up=False to keep a top down buffer top down on disk.
    Mono8 images always get a linear 256 entry gray color table.
    """
    if filename is None or buffer is None:
        return OperationResult(OperationResultType.NULL_ARGUMENT)

    view = _byte_view(buffer)
    if not _is_path(filename) or view is None:
        return OperationResult(OperationResultType.INVALID_ARGUMENT)
    buffer_size = _usable_size(view, buffer_size)
    if (props.height <= 0 or props.width <= 0
            or props.height > _INT32_MAX or props.width > _INT32_MAX
            or props.pixel_format not in _BPP_FOR_FORMAT
            or props.orientation == Orientation.INVALID
            or props.line_padding < 0
            or buffer_size == 0
            or buffer_stride(props) == 0):
        return OperationResult(OperationResultType.INVALID_ARGUMENT)
    if compute_buffer_size(props) > buffer_size:
        return OperationResult(OperationResultType.BUFFER_TOO_SMALL)

    header = _header_for(props, force_bottom_up)
    if header.file_size > _UINT32_MAX:
        return OperationResult(OperationResultType.INVALID_ARGUMENT)

    try:
        f = open(filename, "wb")
    except OSError as e:
        logger.debug("Opening %s for writing failed: %s", filename, e)
        return OperationResult(OperationResultType.FILE_OPEN_FOR_WRITING_ERROR)

    try:
        with f:
            _write_pixels(f, header, view, props)
    except OSError as e:
        logger.debug("Writing %s failed: %s", filename, e)
        return OperationResult(OperationResultType.FILE_WRITE_ERROR)
    logger.debug("Saved %s: %r", filename, props)
    return OperationResult(OperationResultType.OK)


def _failed(operation, filename, result_type):
    logger.debug("%s(%s) failed: %s", operation, filename, result_type.name)
    return OperationResult(result_type)


def _is_path(filename):
    # an int would be taken as a file descriptor and closed afterwards
    return isinstance(filename, (str, bytes, os.PathLike))


def _open_for_reading(filename):
    try:
        return open(filename, "rb")
    except OSError as e:
        logger.debug("Opening %s failed: %s", filename, e)
        raise BMPFileError(OperationResultType.FILE_NOT_FOUND) from e


def _byte_view(buffer):
    """Flat unsigned byte view of any contiguous buffer, or None."""
    try:
        view = memoryview(buffer)
        if view.format != "B" or view.ndim != 1:
            view = view.cast("B")
    except TypeError:
        return None
    return view


def _usable_size(view, buffer_size):
    if buffer_size is None:
        return view.nbytes
    return min(buffer_size, view.nbytes)


def _load_image_properties(stream, props):
    try:
        header = read_header(stream)
        color_table = []
        if header.bpp == 8:
            color_table = read_color_table(stream, header)
    except OSError as e:
        raise BMPFileError(OperationResultType.FILE_READ_ERROR) from e
    determine_image_properties(header, color_table, props)
    return header, color_table


def _read_exact(stream, size):
    data = stream.read(size)
    if len(data) != size:
        raise BMPFileError(OperationResultType.FILE_READ_ERROR)
    return data


def _read_pixels(stream, header, color_table, view, props, native_orientation):
    height = props.height
    stride_in_buffer = buffer_stride(props)
    stride_in_file = file_stride(header.bpp, header.width)
    padding_in_file = file_line_padding(header.bpp, header.width)
    line_bytes = stride_in_file - padding_in_file

    def target(line):
        row = buffer_row_index(props.orientation, native_orientation, line, height)
        return row * stride_in_buffer

    if header.bpp > 8 and props.pixel_format in (PixelFormat.BGR8, PixelFormat.BGRA8):
        logger.debug("Copying %d lines of %d bytes", height, line_bytes)
        for line in range(height):
            start = target(line)
            view[start:start + line_bytes] = _read_exact(stream, line_bytes)
            if padding_in_file:
                stream.seek(padding_in_file, os.SEEK_CUR)

    elif props.pixel_format == PixelFormat.MONO8:
        # b == g == r for every color table entry
        lut = None if is_linear_mono8(color_table) else mono8_lookup(color_table)
        logger.debug("Copying %d mono lines, lookup: %s", height, lut is not None)
        for line in range(height):
            start = target(line)
            data = _read_exact(stream, line_bytes)
            if lut is not None:
                data = data.translate(lut)
            view[start:start + line_bytes] = data
            if padding_in_file:
                stream.seek(padding_in_file, os.SEEK_CUR)

    elif props.pixel_format == PixelFormat.BGR8 and header.bpp == 8:
        lut = bgr8_lookup(color_table)
        width = props.width
        logger.debug("Expanding %d indexed lines through the color table", height)
        for line in range(height):
            indices = _read_exact(stream, stride_in_file)
            start = target(line)
            view[start:start + width * 3] = b"".join(lut[i] for i in indices[:width])

    else:
        raise BMPFileError(OperationResultType.UNSUPPORTED_BIT_PER_PIXEL)


def _header_for(props, force_bottom_up):
    header = BMPHeader()
    header.width = props.width
    header.height = props.height
    if not force_bottom_up and props.orientation == Orientation.TOP_DOWN:
        header.height = -props.height
    header.bpp = _BPP_FOR_FORMAT[props.pixel_format]
    header.info_header_size = INFO_HEADER_SIZE
    header.offset = HEADER_SIZE
    if props.pixel_format == PixelFormat.MONO8:
        header.offset += MAX_COLOR_TABLE_ENTRIES * COLOR_TABLE_ENTRY_SIZE
        header.num_colors = MAX_COLOR_TABLE_ENTRIES
        header.important_colors = MAX_COLOR_TABLE_ENTRIES
    header.image_size = file_stride(header.bpp, header.width) * props.height
    header.file_size = header.offset + header.image_size
    return header


def _write_pixels(stream, header, view, props):
    height = props.height
    stride_in_buffer = buffer_stride(props)
    line_bytes = stride_in_buffer - props.line_padding
    padding = bytes(file_line_padding(header.bpp, header.width))
    orientation_in_file = header.orientation()

    stream.write(header.pack())
    if props.pixel_format == PixelFormat.MONO8:
        stream.write(pack_color_table(linear_mono8_color_table()))

    for line in range(height):
        row = buffer_row_index(props.orientation, orientation_in_file, line, height)
        start = row * stride_in_buffer
        stream.write(view[start:start + line_bytes])
        if padding:
            stream.write(padding)
