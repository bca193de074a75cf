import struct
from types import SimpleNamespace

import pytest

WIDTH = 90
HEIGHT = 100
PADDING = 2  # file padding of 90 pixel lines at 8 and 24 bpp

_HEADER_FIELDS = (
    "magic", "file_size", "reserved1", "reserved2", "offset", "info_size",
    "width", "height", "planes", "bpp", "compression", "image_size",
    "x_resolution", "y_resolution", "colors", "important_colors",
)


def pattern_value(file_row, column, height=HEIGHT):
    # file row 0 is the bottom line of a bottom up file
    return (column + height - file_row) & 0xFF


def pattern_rows(channels, width=WIDTH, height=HEIGHT, alpha=None):
    rows = []
    for row in range(height):
        line = bytearray()
        for column in range(width):
            v = pattern_value(row, column, height)
            line += bytes([v] * channels)
            if alpha is not None:
                line.append(alpha)
        rows.append(bytes(line))
    return rows


def gray_palette():
    return [(i, i, i, 0) for i in range(256)]


def bmp_bytes(width, height, bpp, rows, palette=None, /, top_down=False, **overrides):
    """Builds a BMP file image from file ordered rows without padding."""
    row_bytes = width * bpp // 8
    stride = (row_bytes + 3) // 4 * 4
    palette_data = b"".join(bytes(entry) for entry in palette or [])
    offset = 54 + len(palette_data)
    fields = {
        "magic": b"BM",
        "file_size": offset + stride * height,
        "reserved1": 0,
        "reserved2": 0,
        "offset": offset,
        "info_size": 40,
        "width": width,
        "height": -height if top_down else height,
        "planes": 1,
        "bpp": bpp,
        "compression": 0,
        "image_size": stride * height,
        "x_resolution": 2835,
        "y_resolution": 2835,
        "colors": len(palette) if palette else 0,
        "important_colors": 0,
    }
    fields.update(overrides)
    header = struct.pack("<2sIHHIIiiHHIIiiII", *(fields[k] for k in _HEADER_FIELDS))
    pixels = b"".join(row + bytes(stride - row_bytes) for row in rows)
    return header + palette_data + pixels


def header_bytes(**overrides):
    """A valid 8 bit header followed by its palette and pixels, with overrides."""
    return bmp_bytes(WIDTH, HEIGHT, 8, pattern_rows(1), gray_palette(), **overrides)


@pytest.fixture
def images(tmp_path):
    def write(name, data):
        path = tmp_path / name
        path.write_bytes(data)
        return str(path)

    mono = pattern_rows(1)
    non_linear = gray_palette()
    non_linear[0x13], non_linear[0x14] = non_linear[0x14], non_linear[0x13]
    color = gray_palette()
    color[32] = (32, 33, 34, 0)

    return SimpleNamespace(
        mono8=write("Mono8.bmp", bmp_bytes(WIDTH, HEIGHT, 8, mono, gray_palette())),
        mono8_flipped=write("Mono8_flipped.bmp", bmp_bytes(
            WIDTH, HEIGHT, 8, mono[::-1], gray_palette(), top_down=True)),
        mono8_non_linear=write("Mono8_non_linear.bmp", bmp_bytes(
            WIDTH, HEIGHT, 8, mono, non_linear)),
        color256=write("256_color.bmp", bmp_bytes(WIDTH, HEIGHT, 8, mono, color)),
        bgr8=write("BGR8.bmp", bmp_bytes(WIDTH, HEIGHT, 24, pattern_rows(3))),
        bgr8_flipped=write("BGR8_flipped.bmp", bmp_bytes(
            WIDTH, HEIGHT, 24, pattern_rows(3)[::-1], top_down=True)),
        bgra8=write("BGRA8.bmp", bmp_bytes(WIDTH, HEIGHT, 32, pattern_rows(3, alpha=255))),
        too_small=write("TooSmall.bmp", b"BM\x00\x00"),
        missing=str(tmp_path / "NotThere.bmp"),
        write=write,
        tmp_path=tmp_path,
    )
