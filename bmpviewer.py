import logging
import os
import sys

from PyQt5.QtCore import Qt, pyqtSignal
from PyQt5.QtGui import QFont
from PyQt5.QtWidgets import (
    QApplication, QPushButton, QMainWindow, QWidget, QVBoxLayout, QLabel,
    QHBoxLayout, QSlider, QFileDialog, QMessageBox
)

from imageView import ImageView

logger = logging.getLogger(__name__)


class FileDrop(QWidget):
    dropped = pyqtSignal(str)

    def __init__(self):
        super().__init__()
        self.setAcceptDrops(True)

        layout = QVBoxLayout()
        self.setLayout(layout)

        self.label = QLabel("Drop BMP file here")
        self.label.setAlignment(Qt.AlignCenter)
        self.label.setFont(QFont("Segoe UI", 14, QFont.Bold))
        layout.addWidget(self.label)

        self.setHoverStyle(False)
        self.setMinimumSize(300, 120)

    def checkMimeData(self, event):
        if event.mimeData().hasUrls():
            urls = event.mimeData().urls()
            if len(urls) == 1:
                return urls[0].toLocalFile().lower().endswith(".bmp")
        return False

    def dragEnterEvent(self, event):
        if self.checkMimeData(event):
            event.accept()
            self.setHoverStyle(True)
        else:
            event.ignore()

    def dragMoveEvent(self, event):
        if self.checkMimeData(event):
            event.accept()
        else:
            event.ignore()

    def dragLeaveEvent(self, event):
        self.setHoverStyle(False)

    def dropEvent(self, event):
        self.setHoverStyle(False)
        if self.checkMimeData(event):
            event.accept()
            self.dropped.emit(event.mimeData().urls()[0].toLocalFile())
        else:
            event.ignore()

    def setHoverStyle(self, hovering: bool):
        border = "3px solid #42a5f5" if hovering else "3px dashed #aaa"
        background = "#e3f2fd" if hovering else "#f9f9f9"
        self.setStyleSheet(f"""
            QWidget {{
                background-color: {background};
                border: {border};
                border-radius: 20px;
            }}
            QLabel {{
                color: #555;
                padding: 20px;
            }}
        """)


class MainWindow(QMainWindow):
    def __init__(self):
        super().__init__()
        self.setWindowTitle("BMP Viewer")

        self.mainwidget = QWidget()
        layout = QVBoxLayout()

        # file info
        info_layout = QHBoxLayout()
        self.filename_label = QLabel("Filename: ")
        self.size_label = QLabel("Size: ")
        self.dimensions_label = QLabel("Dimensions: ")
        self.format_label = QLabel("Pixel format: ")
        self.orientation_label = QLabel("Orientation: ")
        self.padding_label = QLabel("Line padding: ")
        for w in (self.filename_label, self.size_label, self.dimensions_label,
                  self.format_label, self.orientation_label, self.padding_label):
            info_layout.addWidget(w)
        layout.addLayout(info_layout)

        fdrop = FileDrop()
        fdrop.dropped.connect(self.onBMPOpen)
        layout.addWidget(fdrop)

        # scale slider
        self.scalelabel = QLabel("Scale: 100%")
        layout.addWidget(self.scalelabel)
        self.scale_slider = QSlider(Qt.Horizontal)
        self.scale_slider.setRange(5, 200)
        self.scale_slider.setValue(100)
        self.scale_slider.sliderReleased.connect(self.apply_scale)
        layout.addWidget(self.scale_slider)

        self.ImageViewer = ImageView(300, 300)
        layout.addWidget(self.ImageViewer)

        button_row = QHBoxLayout()
        self.save_btn = QPushButton("Save As...")
        self.save_btn.setEnabled(False)
        self.save_btn.clicked.connect(self.onSave)
        close_btn = QPushButton("Close")
        close_btn.clicked.connect(self.close)
        button_row.addWidget(self.save_btn)
        button_row.addWidget(close_btn)
        layout.addLayout(button_row)

        self.mainwidget.setLayout(layout)
        self.setCentralWidget(self.mainwidget)

    def _readableFileSizeScale(self, size):
        if size < 1000: return f"{size} bytes"
        if size < 1_000_000: return f"{size/1000:.2f} KB"
        if size < 1_000_000_000: return f"{size/1_000_000:.2f} MB"
        return f"{size/1_000_000_000:.2f} GB"

    def showFileMetadata(self, path, props):
        self.filename_label.setText("Filename: " + os.path.basename(path))
        self.size_label.setText("Size: " + self._readableFileSizeScale(os.path.getsize(path)))
        self.dimensions_label.setText(f"Dimensions: {props.width}×{props.height}")
        self.format_label.setText("Pixel format: " + props.pixel_format.value)
        self.orientation_label.setText("Orientation: " + props.orientation.value)
        self.padding_label.setText(f"Line padding: {props.line_padding}")

    def onBMPOpen(self, path):
        result, file_props = self.ImageViewer.load_file(path)
        if not result:
            logger.info("Loading %s failed: %s", path, result)
            QMessageBox.warning(self, "BMP Viewer", f"{path}\n{result}")
            return
        logger.info("Loaded %s: %r", path, file_props)
        self.showFileMetadata(path, file_props)
        self.scale_slider.setValue(100)
        self.scalelabel.setText("Scale: 100%")
        self.save_btn.setEnabled(True)

    def onSave(self):
        path, _ = QFileDialog.getSaveFileName(self, "Save BMP File", "", "BMP Files (*.bmp)")
        if not path:
            return
        result = self.ImageViewer.save_file(path)
        if not result:
            QMessageBox.warning(self, "BMP Viewer", f"{path}\n{result}")
        else:
            logger.info("Saved %s", path)

    def apply_scale(self):
        slider_val = self.scale_slider.value()
        self.scalelabel.setText(f"Scale: {slider_val}%")
        self.ImageViewer.set_scale(slider_val / 100.0)


def main(argv=None):
    argv = sys.argv if argv is None else argv
    logging.basicConfig(level=logging.INFO, format="%(name)s: %(message)s")
    app = QApplication(argv)
    window = MainWindow()
    if len(argv) > 1:
        window.onBMPOpen(argv[1])
    window.show()
    return app.exec()


if __name__ == '__main__':
    sys.exit(main())
