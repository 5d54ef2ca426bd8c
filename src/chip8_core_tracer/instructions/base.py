# src/chip8_core_tracer/instructions/base.py
"""
CHIP-8命令実装用の共通ユーティリティ。
"""
import random
from dataclasses import dataclass, field
from typing import Tuple

from chip8_core_tracer.transport.keypad import Keypad

FONT_ADDRESS = 0x050   # フォントグリフの先頭アドレス（予約領域内）
FONT_GLYPH_SIZE = 5    # 1文字あたりのバイト数

# @intent:responsibility 命令実行時にCPU状態とメモリ以外で参照する外部依存をまとめます。
# @intent:rationale 乱数源やキーパッドをグローバルではなく明示的な依存として渡し、テストで差し替え可能にします。
@dataclass
class Peripherals:
    keypad: Keypad = field(default_factory=Keypad)
    rng: random.Random = field(default_factory=random.Random)
    font_address: int = FONT_ADDRESS

# @intent:utility_function 16bitワードを4つのニブルに分割します。
def split_nibbles(word: int) -> Tuple[int, int, int, int]:
    return (word >> 12) & 0xF, (word >> 8) & 0xF, (word >> 4) & 0xF, word & 0xF

def reg(index: int) -> str:
    return f"V{index:X}"

def byte_str(value: int) -> str:
    return f"${value:02X}"

def addr_str(value: int) -> str:
    return f"${value:03X}"
