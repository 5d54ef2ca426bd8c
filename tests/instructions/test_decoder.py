# tests/instructions/test_decoder.py
"""
命令デコーダ（decode_opcode）の単体テスト。
全ての16bitワードに対して純粋かつ全域的に振る舞うことを検証します。
"""
import pytest

from chip8_core_tracer.common.errors import InvalidInstructionError
from chip8_core_tracer.core.snapshot import Instruction
from chip8_core_tracer.instructions import decode_opcode
from chip8_core_tracer.instructions.maps import EXECUTE_MAP

# 各命令の代表的なワード
REPRESENTATIVE_WORDS = {
    0x0123: Instruction.SYSTEM_CALL,
    0x00E0: Instruction.CLEAR_DISPLAY,
    0x00EE: Instruction.RETURN,
    0x1234: Instruction.JUMP,
    0x2345: Instruction.CALL,
    0x3A42: Instruction.SKIP_IF_EQUAL,
    0x4A42: Instruction.SKIP_IF_NOT_EQUAL,
    0x5AB0: Instruction.SKIP_IF_REGISTERS_EQUAL,
    0x6A42: Instruction.SET_REGISTER,
    0x7A42: Instruction.ADD,
    0x8AB0: Instruction.COPY_REGISTER,
    0x8AB1: Instruction.OR,
    0x8AB2: Instruction.AND,
    0x8AB3: Instruction.XOR,
    0x8AB4: Instruction.ADD_REGISTERS,
    0x8AB5: Instruction.SUBTRACT,
    0x8AB6: Instruction.SHIFT_RIGHT,
    0x8AB7: Instruction.REVERSE_SUBTRACT,
    0x8ABE: Instruction.SHIFT_LEFT,
    0x9AB0: Instruction.SKIP_IF_REGISTERS_NOT_EQUAL,
    0xA123: Instruction.SET_I,
    0xB123: Instruction.JUMP_PLUS_V0,
    0xCA0F: Instruction.RANDOM_BYTE,
    0xDAB5: Instruction.DRAW,
    0xEA9E: Instruction.SKIP_IF_KEY_PRESSED,
    0xEAA1: Instruction.SKIP_IF_KEY_NOT_PRESSED,
    0xFA07: Instruction.SET_REGISTER_TO_DELAY_TIMER,
    0xFA0A: Instruction.STORE_INPUT,
    0xFA15: Instruction.SET_DELAY_TIMER,
    0xFA18: Instruction.SET_SOUND_TIMER,
    0xFA1E: Instruction.ADD_TO_I,
    0xFA29: Instruction.SET_I_TO_SPRITE_LOCATION,
    0xFA33: Instruction.STORE_BINARY_CODED_DECIMAL,
    0xFA55: Instruction.STORE_REGISTERS,
    0xFA65: Instruction.LOAD_REGISTERS,
}

# @intent:test_case 35種類全ての命令が代表ワードから正しくデコードされることを確認します。
@pytest.mark.parametrize("word, kind", sorted(REPRESENTATIVE_WORDS.items()))
def test_decode_representative_words(word, kind):
    assert decode_opcode(word).kind == kind

def test_every_instruction_is_covered():
    assert set(REPRESENTATIVE_WORDS.values()) == set(Instruction)
    assert len(Instruction) == 35

def test_execute_map_covers_every_instruction():
    assert set(EXECUTE_MAP) == set(Instruction)

# @intent:test_case 全16bitワードについて、デコードが決定的で、結果は1つの命令かデコードエラーのどちらかであることを確認します。
def test_decode_is_pure_and_total():
    decoded = 0
    for word in range(0x10000):
        try:
            first = decode_opcode(word)
        except InvalidInstructionError as e:
            assert e.word == word
            with pytest.raises(InvalidInstructionError):
                decode_opcode(word)
            continue
        assert decode_opcode(word) == first
        assert first.opcode == word
        assert first.kind in Instruction
        decoded += 1
    assert decoded > 0

@pytest.mark.parametrize("word", [0x5121, 0x512F, 0x9121, 0x8008, 0x800F, 0xE000, 0xE09F, 0xF000, 0xF0FF])
def test_invalid_words(word):
    with pytest.raises(InvalidInstructionError):
        decode_opcode(word)

def test_word_outside_16_bits_is_rejected():
    with pytest.raises(ValueError):
        decode_opcode(0x10000)

def test_operand_extraction():
    op = decode_opcode(0xD125)
    assert (op.x, op.y, op.n) == (0x1, 0x2, 0x5)
    assert op.to_assembly() == "DRW V1, V2, 5"

    op = decode_opcode(0x7A42)
    assert (op.x, op.kk) == (0xA, 0x42)
    assert op.to_assembly() == "ADD VA, $42"

    op = decode_opcode(0x2ABC)
    assert op.nnn == 0xABC
    assert op.opcode_hex == "2ABC"
    assert op.to_assembly() == "CALL $ABC"

def test_shift_assembly_omits_y():
    assert decode_opcode(0x8126).to_assembly() == "SHR V1"
    assert decode_opcode(0x812E).to_assembly() == "SHL V1"

@pytest.mark.parametrize("word, text", [
    (0x00E0, "CLS"),
    (0xB200, "JP V0, $200"),
    (0xF10A, "LD V1, K"),
    (0xF229, "LD F, V2"),
    (0xF333, "LD B, V3"),
    (0xF455, "LD [I], V4"),
    (0xF565, "LD V5, [I]"),
    (0xF607, "LD V6, DT"),
    (0xF715, "LD DT, V7"),
    (0xF818, "LD ST, V8"),
    (0xF91E, "ADD I, V9"),
    (0xA2F0, "LD I, $2F0"),
])
def test_assembly_text(word, text):
    assert decode_opcode(word).to_assembly() == text
