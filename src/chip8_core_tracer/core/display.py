# src/chip8_core_tracer/core/display.py
"""
Core Layer (フレームバッファ)

64x32 モノクロのフレームバッファを定義します。
描画命令によるXOR合成と衝突判定の責務を負います。
"""
from typing import List

DISPLAY_WIDTH = 64
DISPLAY_HEIGHT = 32

# @intent:responsibility 64x32ピクセルのオン/オフ状態を保持します。
# @intent:rationale ピクセルは bytearray に保持し、Snapshot用のコピーを安価にします。
class Framebuffer:
    """
    CHIP-8のフレームバッファ。各ピクセルはオン(True)/オフ(False)の2値です。
    """
    def __init__(self):
        self._pixels = bytearray(DISPLAY_WIDTH * DISPLAY_HEIGHT)

    # @intent:responsibility 全ピクセルをオフにします。
    def clear(self) -> None:
        self._pixels = bytearray(DISPLAY_WIDTH * DISPLAY_HEIGHT)

    def get_pixel(self, x: int, y: int) -> bool:
        return self._pixels[(y % DISPLAY_HEIGHT) * DISPLAY_WIDTH + (x % DISPLAY_WIDTH)] != 0

    # @intent:responsibility 1ピクセルをXOR合成します。
    # @intent:return オンからオフに変化した（衝突した）場合はTrue。
    def xor_pixel(self, x: int, y: int) -> bool:
        index = (y % DISPLAY_HEIGHT) * DISPLAY_WIDTH + (x % DISPLAY_WIDTH)
        collided = self._pixels[index] != 0
        self._pixels[index] ^= 1
        return collided

    # @intent:responsibility スプライトを描画し、衝突の有無を返します。
    def draw_sprite(self, origin_x: int, origin_y: int, rows: List[int]) -> bool:
        """
        各バイトを8ピクセル幅の行として (origin_x, origin_y) に描画します。
        bit7 が左端です。画面端を超えたピクセルは反対側に折り返します。
        """
        origin_x %= DISPLAY_WIDTH
        origin_y %= DISPLAY_HEIGHT
        collision = False
        for row, sprite_byte in enumerate(rows):
            for bit in range(8):
                if sprite_byte & (0x80 >> bit):
                    if self.xor_pixel(origin_x + bit, origin_y + row):
                        collision = True
        return collision

    # @intent:responsibility 行ごとのブール値リストとしてピクセルを返します（レンダラ用）。
    def rows(self) -> List[List[bool]]:
        return [
            [self._pixels[y * DISPLAY_WIDTH + x] != 0 for x in range(DISPLAY_WIDTH)]
            for y in range(DISPLAY_HEIGHT)
        ]

    def count_lit(self) -> int:
        return sum(self._pixels)

    def copy(self) -> "Framebuffer":
        clone = Framebuffer()
        clone._pixels = bytearray(self._pixels)
        return clone

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Framebuffer):
            return NotImplemented
        return self._pixels == other._pixels
