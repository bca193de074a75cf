from PyQt5.QtCore import Qt
from PyQt5.QtWidgets import QLabel
from PyQt5.QtGui import QImage, QPixmap, QColor

import bmpfile
from bmpgeometry import aligned_line_padding, buffer_stride
from bmptypes import ImageProperties, Orientation, PixelFormat


# BGRA8 is shown without alpha, many 32 bit files leave it at zero
QIMAGE_FORMATS = {
    PixelFormat.MONO8: QImage.Format_Grayscale8,
    PixelFormat.BGR8: QImage.Format_BGR888,
    PixelFormat.BGRA8: QImage.Format_RGB32,
}


def qimage_format(pixel_format):
    return QIMAGE_FORMATS.get(pixel_format, QImage.Format_Invalid)


def viewer_properties(file_props):
    """Buffer layout QImage can use directly: top down, 4 byte aligned lines."""
    props = file_props.copy()
    props.orientation = Orientation.TOP_DOWN
    props.line_padding = aligned_line_padding(props.width, props.pixel_format)
    return props


def buffer_to_qimage(buffer, props):
    # QImage does not own the data, copy() detaches it from the buffer
    image = QImage(bytes(buffer), props.width, props.height,
                   buffer_stride(props), qimage_format(props.pixel_format))
    return image.copy()


class ImageView(QLabel):
    def __init__(self, width=200, height=200):
        super().__init__()
        self.width_ = width
        self.height_ = height

        self.buffer = None
        self.props = ImageProperties()
        self.scale = 1.0

        # backing image
        self.image = QImage(width, height, QImage.Format_RGB32)
        self.image.fill(QColor(0, 0, 0))
        self.setPixmap(QPixmap.fromImage(self.image))

    def load_file(self, path):
        """
        Loads a BMP through the codec and renders it.
        Returns the OperationResult, file_props hold the layout in the file.
        """
        file_props = ImageProperties()
        result = bmpfile.load_properties(path, file_props)
        if not result:
            return result, file_props

        props = viewer_properties(file_props)
        buffer = bytearray(bmpfile.compute_buffer_size(props))
        result = bmpfile.load(path, buffer, len(buffer), props,
                              force_line_padding=True, force_orientation=True)
        if result:
            self.render_buffer(buffer, props)
        return result, file_props

    def save_file(self, path, force_bottom_up=True):
        if self.buffer is None:
            return bmpfile.OperationResult(bmpfile.OperationResultType.NULL_ARGUMENT)
        return bmpfile.save(path, self.buffer, len(self.buffer), self.props, force_bottom_up)

    def render_buffer(self, buffer, props):
        self.buffer = buffer
        self.props = props.copy()
        self.scale = 1.0
        self.image = buffer_to_qimage(buffer, props)
        self.rebuild()

    def set_scale(self, factor: float):
        if self.buffer is None:
            return
        self.scale = max(0.01, float(factor))
        self.rebuild()

    def rebuild(self):
        if self.buffer is None:
            return
        new_w = max(1, int(self.image.width() * self.scale))
        new_h = max(1, int(self.image.height() * self.scale))
        pixmap = QPixmap.fromImage(self.image)
        if new_w != self.image.width() or new_h != self.image.height():
            pixmap = pixmap.scaled(new_w, new_h, Qt.KeepAspectRatio, Qt.SmoothTransformation)
        self.setMinimumSize(new_w, new_h)
        self.setPixmap(pixmap)
