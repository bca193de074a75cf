import pytest

from bmpgeometry import (
    aligned_line_padding, buffer_row_index, buffer_stride, bytes_per_pixel,
    bytes_per_pixel_in_file, compute_buffer_size, file_line_padding,
    file_stride,
)
from bmptypes import ImageProperties, Orientation, PixelFormat


@pytest.mark.parametrize("bpp, width, stride, padding", [
    (8, 90, 92, 2),
    (8, 4, 4, 0),
    (8, 1, 4, 3),
    (24, 90, 272, 2),
    (24, 1, 4, 1),
    (24, 4, 12, 0),
    (32, 90, 360, 0),
    (32, 3, 12, 0),
])
def test_file_stride_and_padding(bpp, width, stride, padding):
    assert file_stride(bpp, width) == stride
    assert file_line_padding(bpp, width) == padding
    assert file_stride(bpp, -width) == stride


def test_bytes_per_pixel():
    assert bytes_per_pixel(PixelFormat.MONO8) == 1
    assert bytes_per_pixel(PixelFormat.BGR8) == 3
    assert bytes_per_pixel(PixelFormat.BGRA8) == 4
    assert bytes_per_pixel(PixelFormat.INVALID) == 0
    assert bytes_per_pixel_in_file(8) == 1
    assert bytes_per_pixel_in_file(24) == 3
    assert bytes_per_pixel_in_file(32) == 4
    with pytest.raises(ValueError):
        bytes_per_pixel_in_file(16)


@pytest.mark.parametrize("pixel_format, bpp", [
    (PixelFormat.MONO8, 1), (PixelFormat.BGR8, 3), (PixelFormat.BGRA8, 4),
])
@pytest.mark.parametrize("padding", [0, 1, 2, 30])
def test_compute_buffer_size(pixel_format, bpp, padding):
    props = ImageProperties(90, 100, padding, pixel_format, Orientation.BOTTOM_UP)
    assert buffer_stride(props) == 90 * bpp + padding
    assert compute_buffer_size(props) == (90 * bpp + padding) * 100


def test_compute_buffer_size_ignores_orientation():
    props = ImageProperties(90, 100, 2, PixelFormat.MONO8, Orientation.INVALID)
    assert compute_buffer_size(props) == 92 * 100


@pytest.mark.parametrize("props", [
    ImageProperties(0, 100, 2, PixelFormat.MONO8),
    ImageProperties(90, 0, 2, PixelFormat.MONO8),
    ImageProperties(90, 100, 2, PixelFormat.INVALID),
    ImageProperties(-5, 100, 0, PixelFormat.BGR8),
    ImageProperties(),
])
def test_compute_buffer_size_returns_zero_for_unusable_properties(props):
    assert compute_buffer_size(props) == 0


def test_buffer_row_index():
    td, bu = Orientation.TOP_DOWN, Orientation.BOTTOM_UP
    assert buffer_row_index(td, td, 0, 10) == 0
    assert buffer_row_index(bu, bu, 7, 10) == 7
    assert buffer_row_index(td, bu, 0, 10) == 9
    assert buffer_row_index(bu, td, 9, 10) == 0
    assert [buffer_row_index(td, bu, i, 4) for i in range(4)] == [3, 2, 1, 0]


def test_aligned_line_padding():
    assert aligned_line_padding(90, PixelFormat.MONO8) == 2
    assert aligned_line_padding(90, PixelFormat.BGR8) == 2
    assert aligned_line_padding(90, PixelFormat.BGRA8) == 0
    assert aligned_line_padding(3, PixelFormat.BGR8) == 3
