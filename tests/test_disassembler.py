# tests/test_disassembler.py
"""
chip8_core_tracer.disassemblerモジュールの単体テスト。
"""
from chip8_core_tracer.disassembler import disassemble, format_word
from chip8_core_tracer.transport.memory import Memory

def test_format_word():
    assert format_word(0x00EE) == "RET"
    assert format_word(0x6A42) == "LD VA, $42"

def test_format_invalid_word_as_data():
    assert format_word(0x5121) == "DW $5121"

# @intent:test_case 逆アセンブルがアクセスログを汚さず、メモリ末尾で止まることを確認します。
def test_disassemble_range():
    memory = Memory()
    for offset, byte_data in enumerate([0x00, 0xE0, 0xA2, 0x0A, 0xFF, 0xFF]):
        memory.write(0x200 + offset, byte_data)

    lines = disassemble(memory, 0x200, 6)
    assert lines == [
        (0x200, "00 E0", "CLS"),
        (0x202, "A2 0A", "LD I, $20A"),
        (0x204, "FF FF", "DW $FFFF"),
    ]
    assert memory.get_and_clear_activity_log() == []

def test_disassemble_stops_at_end_of_memory():
    memory = Memory()
    lines = disassemble(memory, 0xFFC, 16)
    assert [addr for addr, _, _ in lines] == [0xFFC, 0xFFE]

def test_disassemble_reserved_area():
    memory = Memory()
    memory.load(0x000, 0x00)
    memory.load(0x001, 0xE0)
    assert disassemble(memory, 0x000, 2) == [(0x000, "00 E0", "CLS")]
