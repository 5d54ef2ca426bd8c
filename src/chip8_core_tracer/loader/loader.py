# src/chip8_core_tracer/loader/loader.py
"""
コードローダーモジュール。
CHIP-8のプログラム（ROMイメージ）とインタプリタ内蔵フォントをメモリにロードします。
"""
from pathlib import Path
from typing import Union

from chip8_core_tracer.common.errors import RomTooLargeError
from chip8_core_tracer.instructions.base import FONT_ADDRESS
from chip8_core_tracer.transport.memory import Memory, PROGRAM_START, ADDRESS_MAX

MAX_ROM_SIZE = ADDRESS_MAX - PROGRAM_START + 1  # 3584 bytes

# @intent:constant 16進数字 0-F の 4x5 ピクセルグリフ（1文字5バイト、密に配置）。
FONT_SET = bytes([
    0xF0, 0x90, 0x90, 0x90, 0xF0,  # 0
    0x20, 0x60, 0x20, 0x20, 0x70,  # 1
    0xF0, 0x10, 0xF0, 0x80, 0xF0,  # 2
    0xF0, 0x10, 0xF0, 0x10, 0xF0,  # 3
    0x90, 0x90, 0xF0, 0x10, 0x10,  # 4
    0xF0, 0x80, 0xF0, 0x10, 0xF0,  # 5
    0xF0, 0x80, 0xF0, 0x90, 0xF0,  # 6
    0xF0, 0x10, 0x20, 0x40, 0x40,  # 7
    0xF0, 0x90, 0xF0, 0x90, 0xF0,  # 8
    0xF0, 0x90, 0xF0, 0x10, 0xF0,  # 9
    0xF0, 0x90, 0xF0, 0x90, 0x90,  # A
    0xE0, 0x90, 0xE0, 0x90, 0xE0,  # B
    0xF0, 0x80, 0x80, 0x80, 0xF0,  # C
    0xE0, 0x90, 0x90, 0x90, 0xE0,  # D
    0xF0, 0x80, 0xF0, 0x80, 0xF0,  # E
    0xF0, 0x80, 0xF0, 0x80, 0x80,  # F
])

class RomLoader:
    """
    バイナリ形式のCHIP-8 ROMを 0x200 からメモリにロードするローダー。
    """
    def load_rom(self, file_path: Union[str, Path], memory: Memory) -> int:
        with open(file_path, 'rb') as f:
            data = f.read()
        return self.load_bytes(data, memory)

    # @intent:responsibility バイト列をプログラム領域の先頭に書き込みます。
    # @intent:pre-condition データサイズはプログラム領域 (3584バイト) 以下である必要があります。
    def load_bytes(self, data: bytes, memory: Memory) -> int:
        if len(data) > MAX_ROM_SIZE:
            raise RomTooLargeError(len(data), MAX_ROM_SIZE)
        for offset, byte_data in enumerate(data):
            memory.load(PROGRAM_START + offset, byte_data)
        return len(data)

class FontLoader:
    """
    16進フォントを予約領域にロードするローダー。
    """
    # @intent:rationale フォントは予約領域に置かれるため、通常の write ではなく load バックドアを使用します。
    def load_font(self, memory: Memory, address: int = FONT_ADDRESS) -> None:
        if address < 0 or address + len(FONT_SET) > PROGRAM_START:
            raise ValueError(f"Font at {address:#05x} does not fit in the interpreter area.")
        for offset, byte_data in enumerate(FONT_SET):
            memory.load(address + offset, byte_data)
