"""
CHIP-8の画面を表示するウィジェット。
フレームバッファの内容をRGBA画像に変換し、ウィジェットサイズに合わせて拡大描画します。
"""
from typing import Optional

from PySide6.QtWidgets import QWidget
from PySide6.QtGui import QImage, QPainter, QColor
from PySide6.QtCore import Qt, QSize

from chip8_tracer.common.types import PixelGrid
from chip8_tracer.arch.chip8.framebuffer import DISPLAY_WIDTH, DISPLAY_HEIGHT
from chip8_tracer.ui.renderer import render_rgba

DEFAULT_SCALE = 10

# @intent:responsibility フレームバッファのスナップショットを最近傍補間で拡大表示します。
class DisplayView(QWidget):
    def __init__(self, parent=None, scale: int = DEFAULT_SCALE):
        super().__init__(parent)
        self._scale = scale
        self._image: Optional[QImage] = None
        self.setMinimumSize(DISPLAY_WIDTH, DISPLAY_HEIGHT)
        self.setStyleSheet("background-color: #000000;")

    def sizeHint(self) -> QSize:
        return QSize(DISPLAY_WIDTH * self._scale, DISPLAY_HEIGHT * self._scale)

    # @intent:responsibility 表示する画素グリッドを更新し、再描画を要求します。
    def update_display(self, pixels: PixelGrid) -> None:
        height = len(pixels)
        width = len(pixels[0]) if height else 0
        data = render_rgba(pixels)
        # QImageはバッファを参照するだけなのでcopy()で所有させる
        self._image = QImage(data, width, height, width * 4, QImage.Format_RGBA8888).copy()
        self.update()

    def get_image(self) -> Optional[QImage]:
        return self._image

    def paintEvent(self, event):
        painter = QPainter(self)
        painter.fillRect(self.rect(), QColor(0, 0, 0))
        if self._image is not None:
            target = self._image.scaled(self.size(), Qt.KeepAspectRatio, Qt.FastTransformation)
            x = (self.width() - target.width()) // 2
            y = (self.height() - target.height()) // 2
            painter.drawImage(x, y, target)
        painter.end()
