# src/chip8_core_tracer/instructions/load.py
"""
ロード/ストア命令（Iレジスタ、タイマー、メモリ転送）の実装。
"""
from chip8_core_tracer.core.snapshot import Instruction, Operation
from chip8_core_tracer.core.state import Chip8CpuState
from chip8_core_tracer.transport.memory import Memory
from .base import Peripherals, FONT_GLYPH_SIZE, split_nibbles, reg, addr_str

def _decode_fx(kind: Instruction, word: int, mnemonic: str, dst: str, src: str) -> Operation:
    _, x, _, _ = split_nibbles(word)
    operands = [dst.format(x=reg(x)), src.format(x=reg(x))]
    return Operation(kind, word, mnemonic, operands, x=x)

# --- LD I, addr ---
def decode_ld_i(word: int) -> Operation:
    nnn = word & 0x0FFF
    return Operation(Instruction.SET_I, word, "LD", ["I", addr_str(nnn)], nnn=nnn)

def execute_ld_i(state: Chip8CpuState, memory: Memory, op: Operation, peripherals: Peripherals) -> None:
    state.i = op.nnn

# --- LD Vx, DT ---
def decode_ld_vx_dt(word: int) -> Operation:
    return _decode_fx(Instruction.SET_REGISTER_TO_DELAY_TIMER, word, "LD", "{x}", "DT")

def execute_ld_vx_dt(state: Chip8CpuState, memory: Memory, op: Operation, peripherals: Peripherals) -> None:
    state.v[op.x] = state.dt

# --- LD DT, Vx ---
def decode_ld_dt_vx(word: int) -> Operation:
    return _decode_fx(Instruction.SET_DELAY_TIMER, word, "LD", "DT", "{x}")

def execute_ld_dt_vx(state: Chip8CpuState, memory: Memory, op: Operation, peripherals: Peripherals) -> None:
    state.dt = state.v[op.x]

# --- LD ST, Vx ---
def decode_ld_st_vx(word: int) -> Operation:
    return _decode_fx(Instruction.SET_SOUND_TIMER, word, "LD", "ST", "{x}")

def execute_ld_st_vx(state: Chip8CpuState, memory: Memory, op: Operation, peripherals: Peripherals) -> None:
    state.st = state.v[op.x]

# --- ADD I, Vx ---
def decode_add_i(word: int) -> Operation:
    return _decode_fx(Instruction.ADD_TO_I, word, "ADD", "I", "{x}")

# @intent:responsibility I に Vx を加算します。
# @intent:rationale I は16bit幅で保持し12bitに丸めません。0xFFFを超えたIによるメモリアクセスはOUT_OF_RANGEとして検出されます。
def execute_add_i(state: Chip8CpuState, memory: Memory, op: Operation, peripherals: Peripherals) -> None:
    state.i = (state.i + state.v[op.x]) & 0xFFFF

# --- LD F, Vx ---
def decode_ld_f(word: int) -> Operation:
    return _decode_fx(Instruction.SET_I_TO_SPRITE_LOCATION, word, "LD", "F", "{x}")

# @intent:responsibility Vxの下位4bitに対応するフォントグリフのアドレスをIに設定します。
def execute_ld_f(state: Chip8CpuState, memory: Memory, op: Operation, peripherals: Peripherals) -> None:
    state.i = peripherals.font_address + (state.v[op.x] & 0x0F) * FONT_GLYPH_SIZE

# --- LD B, Vx ---
def decode_ld_b(word: int) -> Operation:
    return _decode_fx(Instruction.STORE_BINARY_CODED_DECIMAL, word, "LD", "B", "{x}")

# @intent:responsibility Vxを10進の3桁に分解し、I, I+1, I+2 に書き込みます。
def execute_ld_b(state: Chip8CpuState, memory: Memory, op: Operation, peripherals: Peripherals) -> None:
    value = state.v[op.x]
    memory.write(state.i, value // 100)
    memory.write(state.i + 1, (value // 10) % 10)
    memory.write(state.i + 2, value % 10)

# --- LD [I], Vx ---
def decode_ld_mem_vx(word: int) -> Operation:
    return _decode_fx(Instruction.STORE_REGISTERS, word, "LD", "[I]", "{x}")

# @intent:responsibility V0..Vx を I..I+x に書き込みます。I は変更しません。
def execute_ld_mem_vx(state: Chip8CpuState, memory: Memory, op: Operation, peripherals: Peripherals) -> None:
    for index in range(op.x + 1):
        memory.write(state.i + index, state.v[index])

# --- LD Vx, [I] ---
def decode_ld_vx_mem(word: int) -> Operation:
    return _decode_fx(Instruction.LOAD_REGISTERS, word, "LD", "{x}", "[I]")

# @intent:responsibility I..I+x から V0..Vx を読み込みます。I は変更しません。
def execute_ld_vx_mem(state: Chip8CpuState, memory: Memory, op: Operation, peripherals: Peripherals) -> None:
    for index in range(op.x + 1):
        state.v[index] = memory.read(state.i + index)
