# src/chip8_core_tracer/ui/display_view.py
"""
フレームバッファを表示するウィジェット。
64x32 のピクセルを整数倍に拡大して描画します（レンダラ）。
"""
from PySide6.QtCore import QSize, Qt
from PySide6.QtGui import QColor, QImage, QPainter
from PySide6.QtWidgets import QWidget

from chip8_core_tracer.core.display import DISPLAY_WIDTH, DISPLAY_HEIGHT, Framebuffer
from chip8_core_tracer.ui.theme import COLOR_PIXEL_ON, COLOR_PIXEL_OFF

# @intent:responsibility CPUのフレームバッファを読み取り専用で描画します。
class DisplayView(QWidget):
    def __init__(self, scale: int = 10, parent=None):
        super().__init__(parent)
        self._scale = scale
        self._on_color = QColor(COLOR_PIXEL_ON)
        self._off_color = QColor(COLOR_PIXEL_OFF)
        self._image = QImage(DISPLAY_WIDTH, DISPLAY_HEIGHT, QImage.Format_RGB32)
        self._image.fill(self._off_color)
        self.setMinimumSize(DISPLAY_WIDTH * scale, DISPLAY_HEIGHT * scale)
        self.setFocusPolicy(Qt.NoFocus)

    def sizeHint(self) -> QSize:
        return QSize(DISPLAY_WIDTH * self._scale, DISPLAY_HEIGHT * self._scale)

    def set_scale(self, scale: int) -> None:
        self._scale = scale
        self.setMinimumSize(DISPLAY_WIDTH * scale, DISPLAY_HEIGHT * scale)
        self.updateGeometry()

    def image(self) -> QImage:
        return self._image

    # @intent:responsibility フレームバッファの内容をオフスクリーン画像に反映し、再描画を要求します。
    def update_framebuffer(self, framebuffer: Framebuffer) -> None:
        self._image.fill(self._off_color)
        for y, row in enumerate(framebuffer.rows()):
            for x, lit in enumerate(row):
                if lit:
                    self._image.setPixelColor(x, y, self._on_color)
        self.update()

    def paintEvent(self, event):
        painter = QPainter(self)
        # 最近傍で拡大する（SmoothPixmapTransform は無効のまま）
        painter.drawImage(self.rect(), self._image)
        painter.end()
