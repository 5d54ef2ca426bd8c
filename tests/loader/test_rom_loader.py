# tests/loader/test_rom_loader.py
"""
chip8_core_tracer.loader.loaderモジュールの単体テスト。
"""
import pytest

from chip8_core_tracer.common.errors import RomTooLargeError
from chip8_core_tracer.instructions.base import FONT_ADDRESS
from chip8_core_tracer.loader.loader import RomLoader, FontLoader, FONT_SET, MAX_ROM_SIZE
from chip8_core_tracer.transport.memory import Memory

def test_load_rom_file(tmp_path):
    rom = tmp_path / "test.ch8"
    rom.write_bytes(bytes([0x00, 0xE0, 0x12, 0x00]))
    memory = Memory()

    size = RomLoader().load_rom(rom, memory)
    assert size == 4
    assert [memory.peek(0x200 + k) for k in range(4)] == [0x00, 0xE0, 0x12, 0x00]
    assert memory.get_and_clear_activity_log() == []

def test_maximum_rom_fits():
    memory = Memory()
    assert RomLoader().load_bytes(bytes([0xAA]) * MAX_ROM_SIZE, memory) == MAX_ROM_SIZE
    assert memory.peek(0xFFF) == 0xAA

# @intent:test_case プログラム領域に収まらないROMがメモリを変更せずに拒否されることを確認します。
def test_rom_too_large():
    memory = Memory()
    with pytest.raises(RomTooLargeError) as excinfo:
        RomLoader().load_bytes(bytes([0xAA]) * (MAX_ROM_SIZE + 1), memory)
    assert excinfo.value.size == MAX_ROM_SIZE + 1
    assert memory.peek(0x200) == 0

def test_missing_rom_file(tmp_path):
    with pytest.raises(OSError):
        RomLoader().load_rom(tmp_path / "missing.ch8", Memory())

def test_load_font():
    memory = Memory()
    FontLoader().load_font(memory)
    assert len(FONT_SET) == 80
    assert [memory.peek(FONT_ADDRESS + k) for k in range(5)] == [0xF0, 0x90, 0x90, 0x90, 0xF0]
    assert memory.peek(FONT_ADDRESS + 79) == 0x80

def test_font_must_fit_below_program_area():
    with pytest.raises(ValueError):
        FontLoader().load_font(Memory(), address=0x1C0)
