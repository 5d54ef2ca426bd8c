# src/chip8_core_tracer/instructions/control.py
"""
制御命令（ジャンプ、サブルーチン、条件スキップ）の実装。

実行関数が呼ばれる時点で、PCは既に次の命令を指しています。
"""
from chip8_core_tracer.common.errors import StackOverflowError, StackUnderflowError
from chip8_core_tracer.core.snapshot import Instruction, Operation
from chip8_core_tracer.core.state import Chip8CpuState, STACK_CAPACITY
from chip8_core_tracer.transport.memory import Memory
from .base import Peripherals, split_nibbles, reg, byte_str, addr_str

# @intent:utility_function 次の命令をスキップします。
def skip_next(state: Chip8CpuState) -> None:
    state.pc = (state.pc + 2) & 0xFFFF

# --- SYS ---
def decode_sys(word: int) -> Operation:
    nnn = word & 0x0FFF
    return Operation(Instruction.SYSTEM_CALL, word, "SYS", [addr_str(nnn)], nnn=nnn)

# @intent:responsibility SYS命令を実行します。機械語ルーチン呼び出しは無視されます。
# @intent:rationale 0nnn をデコードエラーではなく無視される命令として扱うため、ゼロクリアされたメモリ (0x0000) に
#                  暴走したプログラムは最初のゼロワードでは停止せず、0x1000 のフェッチで OUT_OF_RANGE になるまで進みます。
def execute_sys(state: Chip8CpuState, memory: Memory, op: Operation, peripherals: Peripherals) -> None:
    pass

# --- CLS ---
def decode_cls(word: int) -> Operation:
    return Operation(Instruction.CLEAR_DISPLAY, word, "CLS")

def execute_cls(state: Chip8CpuState, memory: Memory, op: Operation, peripherals: Peripherals) -> None:
    state.framebuffer.clear()

# --- RET ---
def decode_ret(word: int) -> Operation:
    return Operation(Instruction.RETURN, word, "RET")

# @intent:responsibility サブルーチンから復帰します。
# @intent:post-condition スタックが空の場合、StackUnderflowErrorを発生させます。
def execute_ret(state: Chip8CpuState, memory: Memory, op: Operation, peripherals: Peripherals) -> None:
    if state.sp == 0:
        raise StackUnderflowError()
    state.sp -= 1
    state.pc = state.stack[state.sp]

# --- JP addr ---
def decode_jp(word: int) -> Operation:
    nnn = word & 0x0FFF
    return Operation(Instruction.JUMP, word, "JP", [addr_str(nnn)], nnn=nnn)

def execute_jp(state: Chip8CpuState, memory: Memory, op: Operation, peripherals: Peripherals) -> None:
    state.pc = op.nnn

# --- CALL addr ---
def decode_call(word: int) -> Operation:
    nnn = word & 0x0FFF
    return Operation(Instruction.CALL, word, "CALL", [addr_str(nnn)], nnn=nnn)

# @intent:responsibility 戻りアドレス（CALLの次の命令）を積み、サブルーチンへジャンプします。
# @intent:post-condition スタックが満杯の場合、StackOverflowErrorを発生させます。
def execute_call(state: Chip8CpuState, memory: Memory, op: Operation, peripherals: Peripherals) -> None:
    if state.sp >= STACK_CAPACITY:
        raise StackOverflowError(op.nnn, STACK_CAPACITY)
    state.stack[state.sp] = state.pc
    state.sp += 1
    state.pc = op.nnn

# --- SE Vx, byte ---
def decode_se_imm(word: int) -> Operation:
    _, x, _, _ = split_nibbles(word)
    kk = word & 0xFF
    return Operation(Instruction.SKIP_IF_EQUAL, word, "SE", [reg(x), byte_str(kk)], x=x, kk=kk)

def execute_se_imm(state: Chip8CpuState, memory: Memory, op: Operation, peripherals: Peripherals) -> None:
    if state.v[op.x] == op.kk:
        skip_next(state)

# --- SNE Vx, byte ---
def decode_sne_imm(word: int) -> Operation:
    _, x, _, _ = split_nibbles(word)
    kk = word & 0xFF
    return Operation(Instruction.SKIP_IF_NOT_EQUAL, word, "SNE", [reg(x), byte_str(kk)], x=x, kk=kk)

def execute_sne_imm(state: Chip8CpuState, memory: Memory, op: Operation, peripherals: Peripherals) -> None:
    if state.v[op.x] != op.kk:
        skip_next(state)

# --- SE Vx, Vy ---
def decode_se_reg(word: int) -> Operation:
    _, x, y, _ = split_nibbles(word)
    return Operation(Instruction.SKIP_IF_REGISTERS_EQUAL, word, "SE", [reg(x), reg(y)], x=x, y=y)

def execute_se_reg(state: Chip8CpuState, memory: Memory, op: Operation, peripherals: Peripherals) -> None:
    if state.v[op.x] == state.v[op.y]:
        skip_next(state)

# --- SNE Vx, Vy ---
def decode_sne_reg(word: int) -> Operation:
    _, x, y, _ = split_nibbles(word)
    return Operation(Instruction.SKIP_IF_REGISTERS_NOT_EQUAL, word, "SNE", [reg(x), reg(y)], x=x, y=y)

def execute_sne_reg(state: Chip8CpuState, memory: Memory, op: Operation, peripherals: Peripherals) -> None:
    if state.v[op.x] != state.v[op.y]:
        skip_next(state)

# --- JP V0, addr ---
def decode_jp_v0(word: int) -> Operation:
    nnn = word & 0x0FFF
    return Operation(Instruction.JUMP_PLUS_V0, word, "JP", ["V0", addr_str(nnn)], nnn=nnn)

# @intent:responsibility nnn + V0 へジャンプします。0xFFFを超えた場合は次のフェッチでOUT_OF_RANGEになります。
def execute_jp_v0(state: Chip8CpuState, memory: Memory, op: Operation, peripherals: Peripherals) -> None:
    state.pc = (op.nnn + state.v[0]) & 0xFFFF
