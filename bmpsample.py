"""
Sample program: writes a synthetic Mono8 test image, then reads its
properties and pixels back.
"""
import argparse
import logging
import sys

import bmpfile
from bmptypes import ImageProperties, Orientation, PixelFormat

logger = logging.getLogger(__name__)


def make_test_image(width, height):
    props = ImageProperties(width=width, height=height, line_padding=0,
                            pixel_format=PixelFormat.MONO8,
                            orientation=Orientation.TOP_DOWN)
    buffer = bytearray(bmpfile.compute_buffer_size(props))
    i = 0
    for line in range(height):
        for column in range(width):
            buffer[i] = (line + column) & 0xFF
            i += 1
    return props, buffer


def run(width, height, output):
    props_a, buffer_a = make_test_image(width, height)

    result = bmpfile.save(output, buffer_a, len(buffer_a), props_a)
    print(result)
    if not result:
        return False

    props_b = ImageProperties()
    result = bmpfile.load_properties(output, props_b)
    print(result)
    if not result:
        return False
    logger.info("Properties of %s: %r", output, props_b)

    # the file is bottom up, ask for the layout of the original buffer
    props_b.orientation = props_a.orientation
    props_b.line_padding = props_a.line_padding
    buffer_b = bytearray(bmpfile.compute_buffer_size(props_b))
    result = bmpfile.load(output, buffer_b, len(buffer_b), props_b,
                          force_line_padding=True, force_orientation=True)
    print(result)
    if not result:
        return False
    return buffer_a == buffer_b


def main(argv=None):
    parser = argparse.ArgumentParser(description="Save and reload a Mono8 test image as BMP.")
    parser.add_argument("--width", type=int, default=640)
    parser.add_argument("--height", type=int, default=480)
    parser.add_argument("--output", default="TestImage.bmp", help="BMP file to write")
    parser.add_argument("-v", "--verbose", action="store_true", help="log codec details")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO,
                        format="%(name)s -- %(message)s")

    if args.width <= 0 or args.height <= 0:
        parser.error("width and height must be positive")

    ok = run(args.width, args.height, args.output)
    if not ok:
        logger.error("Round trip through %s failed", args.output)
    return 0 if ok else 1


if __name__ == "__main__":
    sys.exit(main())
