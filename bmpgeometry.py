from bmptypes import PixelFormat


_FILE_BYTES_PER_PIXEL = {8: 1, 24: 3, 32: 4}

_BUFFER_BYTES_PER_PIXEL = {
    PixelFormat.MONO8: 1,
    PixelFormat.BGR8: 3,
    PixelFormat.BGRA8: 4,
}


def bytes_per_pixel_in_file(bits_per_pixel):
    # bits_per_pixel has to be validated by the header check first
    try:
        return _FILE_BYTES_PER_PIXEL[bits_per_pixel]
    except KeyError:
        raise ValueError(f"Unsupported bpp: {bits_per_pixel}") from None


def bytes_per_pixel(pixel_format) -> int:
    return _BUFFER_BYTES_PER_PIXEL.get(pixel_format, 0)


def file_stride(bits_per_pixel, width):
    """Bytes per line in the file, padded to a multiple of 4."""
    stride = bytes_per_pixel_in_file(bits_per_pixel) * abs(width)
    return (stride + 3) // 4 * 4


def file_line_padding(bits_per_pixel, width):
    return file_stride(bits_per_pixel, width) - bytes_per_pixel_in_file(bits_per_pixel) * abs(width)


def buffer_stride(props):
    # the caller's padding is taken as is, no alignment is enforced
    return props.width * bytes_per_pixel(props.pixel_format) + props.line_padding


def compute_buffer_size(props) -> int:
    """
    Returns the number of bytes a buffer needs to hold an image described
    by props, or 0 if width, height or pixel format are not usable.
    """
    if (props.width <= 0 or props.height <= 0
            or bytes_per_pixel(props.pixel_format) == 0):
        return 0
    stride = buffer_stride(props)
    if stride <= 0:
        return 0
    return stride * props.height


def buffer_row_index(requested, native, line, height):
    """
    Maps line `line` of the file to a line of the buffer. Both sides share
    the index when their orientation matches, otherwise the buffer is
    addressed mirrored.
    """
    if requested == native:
        return line
    return height - 1 - line


def aligned_line_padding(width, pixel_format, alignment=4):
    """Padding that makes a buffer line a multiple of `alignment` bytes."""
    return -(width * bytes_per_pixel(pixel_format)) % alignment
