# tests/ui/test_display_view.py
"""
DisplayViewがフレームバッファの内容を画像に反映することを検証するテスト。
"""
from PySide6.QtGui import QColor

from chip8_core_tracer.core.display import Framebuffer
from chip8_core_tracer.ui.display_view import DisplayView
from chip8_core_tracer.ui.theme import COLOR_PIXEL_ON, COLOR_PIXEL_OFF

def test_update_framebuffer(qapp):
    view = DisplayView(scale=4)
    fb = Framebuffer()
    fb.draw_sprite(0, 0, [0x80])
    fb.xor_pixel(63, 31)

    view.update_framebuffer(fb)
    image = view.image()
    assert image.width() == 64 and image.height() == 32
    assert image.pixelColor(0, 0) == QColor(COLOR_PIXEL_ON)
    assert image.pixelColor(63, 31) == QColor(COLOR_PIXEL_ON)
    assert image.pixelColor(1, 0) == QColor(COLOR_PIXEL_OFF)

    fb.clear()
    view.update_framebuffer(fb)
    assert view.image().pixelColor(0, 0) == QColor(COLOR_PIXEL_OFF)

def test_scale_controls_size_hint(qapp):
    view = DisplayView(scale=4)
    assert view.sizeHint().width() == 256
    view.set_scale(10)
    assert view.sizeHint().width() == 640
    assert view.sizeHint().height() == 320
