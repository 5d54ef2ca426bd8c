# src/chip8_core_tracer/instructions/alu.py
"""
算術論理演算命令の実装。

VF はフラグ出力として使われます。x が F の場合、ADD (8xy4) ではフラグが、
SUB/SUBN/SHR/SHL では演算結果が最終的に VF に残ります（フラグを先に設定するため）。
"""
from chip8_core_tracer.core.snapshot import Instruction, Operation
from chip8_core_tracer.core.state import Chip8CpuState
from chip8_core_tracer.transport.memory import Memory
from .base import Peripherals, split_nibbles, reg, byte_str

# --- LD Vx, byte ---
def decode_ld_imm(word: int) -> Operation:
    _, x, _, _ = split_nibbles(word)
    kk = word & 0xFF
    return Operation(Instruction.SET_REGISTER, word, "LD", [reg(x), byte_str(kk)], x=x, kk=kk)

def execute_ld_imm(state: Chip8CpuState, memory: Memory, op: Operation, peripherals: Peripherals) -> None:
    state.v[op.x] = op.kk

# --- ADD Vx, byte ---
def decode_add_imm(word: int) -> Operation:
    _, x, _, _ = split_nibbles(word)
    kk = word & 0xFF
    return Operation(Instruction.ADD, word, "ADD", [reg(x), byte_str(kk)], x=x, kk=kk)

# @intent:responsibility 即値を加算します。VFは変更しません。
def execute_add_imm(state: Chip8CpuState, memory: Memory, op: Operation, peripherals: Peripherals) -> None:
    state.v[op.x] = (state.v[op.x] + op.kk) & 0xFF

# --- 8xy_ ---
def _decode_xy(kind: Instruction, mnemonic: str, word: int) -> Operation:
    _, x, y, _ = split_nibbles(word)
    return Operation(kind, word, mnemonic, [reg(x), reg(y)], x=x, y=y)

def _decode_x(kind: Instruction, mnemonic: str, word: int) -> Operation:
    _, x, _, _ = split_nibbles(word)
    return Operation(kind, word, mnemonic, [reg(x)], x=x)

def decode_ld_reg(word: int) -> Operation:
    return _decode_xy(Instruction.COPY_REGISTER, "LD", word)

def execute_ld_reg(state: Chip8CpuState, memory: Memory, op: Operation, peripherals: Peripherals) -> None:
    state.v[op.x] = state.v[op.y]

def decode_or(word: int) -> Operation:
    return _decode_xy(Instruction.OR, "OR", word)

def execute_or(state: Chip8CpuState, memory: Memory, op: Operation, peripherals: Peripherals) -> None:
    state.v[op.x] |= state.v[op.y]

def decode_and(word: int) -> Operation:
    return _decode_xy(Instruction.AND, "AND", word)

def execute_and(state: Chip8CpuState, memory: Memory, op: Operation, peripherals: Peripherals) -> None:
    state.v[op.x] &= state.v[op.y]

def decode_xor(word: int) -> Operation:
    return _decode_xy(Instruction.XOR, "XOR", word)

def execute_xor(state: Chip8CpuState, memory: Memory, op: Operation, peripherals: Peripherals) -> None:
    state.v[op.x] ^= state.v[op.y]

# --- ADD Vx, Vy ---
def decode_add_reg(word: int) -> Operation:
    return _decode_xy(Instruction.ADD_REGISTERS, "ADD", word)

# @intent:responsibility レジスタ同士を加算し、キャリーをVFに設定します。
def execute_add_reg(state: Chip8CpuState, memory: Memory, op: Operation, peripherals: Peripherals) -> None:
    res = state.v[op.x] + state.v[op.y]
    state.v[op.x] = res & 0xFF
    state.vf = 1 if res > 0xFF else 0

# --- SUB Vx, Vy ---
def decode_sub(word: int) -> Operation:
    return _decode_xy(Instruction.SUBTRACT, "SUB", word)

# @intent:responsibility Vx - Vy を計算します。VF は Vx > Vy のとき1（ボローなし）。
def execute_sub(state: Chip8CpuState, memory: Memory, op: Operation, peripherals: Peripherals) -> None:
    v1 = state.v[op.x]
    v2 = state.v[op.y]
    state.vf = 1 if v1 > v2 else 0
    state.v[op.x] = (v1 - v2) & 0xFF

# --- SHR Vx ---
def decode_shr(word: int) -> Operation:
    return _decode_x(Instruction.SHIFT_RIGHT, "SHR", word)

def execute_shr(state: Chip8CpuState, memory: Memory, op: Operation, peripherals: Peripherals) -> None:
    v1 = state.v[op.x]
    state.vf = v1 & 0x01
    state.v[op.x] = v1 >> 1

# --- SUBN Vx, Vy ---
def decode_subn(word: int) -> Operation:
    return _decode_xy(Instruction.REVERSE_SUBTRACT, "SUBN", word)

# @intent:responsibility Vy - Vx を計算します。VF は Vy > Vx のとき1。
def execute_subn(state: Chip8CpuState, memory: Memory, op: Operation, peripherals: Peripherals) -> None:
    v1 = state.v[op.x]
    v2 = state.v[op.y]
    state.vf = 1 if v2 > v1 else 0
    state.v[op.x] = (v2 - v1) & 0xFF

# --- SHL Vx ---
def decode_shl(word: int) -> Operation:
    return _decode_x(Instruction.SHIFT_LEFT, "SHL", word)

def execute_shl(state: Chip8CpuState, memory: Memory, op: Operation, peripherals: Peripherals) -> None:
    v1 = state.v[op.x]
    state.vf = (v1 >> 7) & 0x01
    state.v[op.x] = (v1 << 1) & 0xFF

# --- RND Vx, byte ---
def decode_rnd(word: int) -> Operation:
    _, x, _, _ = split_nibbles(word)
    kk = word & 0xFF
    return Operation(Instruction.RANDOM_BYTE, word, "RND", [reg(x), byte_str(kk)], x=x, kk=kk)

# @intent:responsibility 注入された乱数源から1バイトを取り、kkでマスクしてVxに格納します。
def execute_rnd(state: Chip8CpuState, memory: Memory, op: Operation, peripherals: Peripherals) -> None:
    state.v[op.x] = peripherals.rng.randint(0, 0xFF) & op.kk
