# src/chip8_core_tracer/instructions/maps.py
"""
命令ワードと命令実装のマッピング定義。
"""
from chip8_core_tracer.core.snapshot import Instruction
from . import control
from . import alu
from . import load
from . import io

# @intent:map 先頭ニブルだけで命令が決まるものの、先頭ニブルからデコード関数へのマッピングテーブル。
# 5xy0 / 9xy0 は末尾ニブルが0であることを追加で確認します。
PRIMARY_DECODE_MAP = {
    0x0: control.decode_sys,
    0x1: control.decode_jp,
    0x2: control.decode_call,
    0x3: control.decode_se_imm,
    0x4: control.decode_sne_imm,
    0x5: control.decode_se_reg,
    0x6: alu.decode_ld_imm,
    0x7: alu.decode_add_imm,
    0x9: control.decode_sne_reg,
    0xA: load.decode_ld_i,
    0xB: control.decode_jp_v0,
    0xC: alu.decode_rnd,
    0xD: io.decode_drw,
}

# @intent:map 0___ 系: ワード全体で判定します。該当しないものは PRIMARY_DECODE_MAP の SYS nnn です。
SYSTEM_DECODE_MAP = {
    0x00E0: control.decode_cls,
    0x00EE: control.decode_ret,
}

# @intent:map 8xy_ 系: 末尾ニブルで判定します。
ALU_DECODE_MAP = {
    0x0: alu.decode_ld_reg,
    0x1: alu.decode_or,
    0x2: alu.decode_and,
    0x3: alu.decode_xor,
    0x4: alu.decode_add_reg,
    0x5: alu.decode_sub,
    0x6: alu.decode_shr,
    0x7: alu.decode_subn,
    0xE: alu.decode_shl,
}

# @intent:map Ex__ 系: 下位バイトで判定します。
KEY_DECODE_MAP = {
    0x9E: io.decode_skp,
    0xA1: io.decode_sknp,
}

# @intent:map Fx__ 系: 下位バイトで判定します。
MISC_DECODE_MAP = {
    0x07: load.decode_ld_vx_dt,
    0x0A: io.decode_ld_vx_k,
    0x15: load.decode_ld_dt_vx,
    0x18: load.decode_ld_st_vx,
    0x1E: load.decode_add_i,
    0x29: load.decode_ld_f,
    0x33: load.decode_ld_b,
    0x55: load.decode_ld_mem_vx,
    0x65: load.decode_ld_vx_mem,
}

# @intent:map 命令タグから実行関数へのマッピングテーブル。全ての Instruction を網羅します。
EXECUTE_MAP = {
    # Control
    Instruction.SYSTEM_CALL: control.execute_sys,
    Instruction.CLEAR_DISPLAY: control.execute_cls,
    Instruction.RETURN: control.execute_ret,
    Instruction.JUMP: control.execute_jp,
    Instruction.CALL: control.execute_call,
    Instruction.SKIP_IF_EQUAL: control.execute_se_imm,
    Instruction.SKIP_IF_NOT_EQUAL: control.execute_sne_imm,
    Instruction.SKIP_IF_REGISTERS_EQUAL: control.execute_se_reg,
    Instruction.SKIP_IF_REGISTERS_NOT_EQUAL: control.execute_sne_reg,
    Instruction.JUMP_PLUS_V0: control.execute_jp_v0,

    # ALU
    Instruction.SET_REGISTER: alu.execute_ld_imm,
    Instruction.ADD: alu.execute_add_imm,
    Instruction.COPY_REGISTER: alu.execute_ld_reg,
    Instruction.OR: alu.execute_or,
    Instruction.AND: alu.execute_and,
    Instruction.XOR: alu.execute_xor,
    Instruction.ADD_REGISTERS: alu.execute_add_reg,
    Instruction.SUBTRACT: alu.execute_sub,
    Instruction.SHIFT_RIGHT: alu.execute_shr,
    Instruction.REVERSE_SUBTRACT: alu.execute_subn,
    Instruction.SHIFT_LEFT: alu.execute_shl,
    Instruction.RANDOM_BYTE: alu.execute_rnd,

    # Load/Store
    Instruction.SET_I: load.execute_ld_i,
    Instruction.SET_REGISTER_TO_DELAY_TIMER: load.execute_ld_vx_dt,
    Instruction.SET_DELAY_TIMER: load.execute_ld_dt_vx,
    Instruction.SET_SOUND_TIMER: load.execute_ld_st_vx,
    Instruction.ADD_TO_I: load.execute_add_i,
    Instruction.SET_I_TO_SPRITE_LOCATION: load.execute_ld_f,
    Instruction.STORE_BINARY_CODED_DECIMAL: load.execute_ld_b,
    Instruction.STORE_REGISTERS: load.execute_ld_mem_vx,
    Instruction.LOAD_REGISTERS: load.execute_ld_vx_mem,

    # I/O
    Instruction.DRAW: io.execute_drw,
    Instruction.SKIP_IF_KEY_PRESSED: io.execute_skp,
    Instruction.SKIP_IF_KEY_NOT_PRESSED: io.execute_sknp,
    Instruction.STORE_INPUT: io.execute_ld_vx_k,
}
