# src/chip8_core_tracer/instructions/io.py
"""
入出力命令（描画、キー入力）の実装。
"""
from chip8_core_tracer.core.snapshot import Instruction, Operation
from chip8_core_tracer.core.state import Chip8CpuState
from chip8_core_tracer.transport.memory import Memory
from .base import Peripherals, split_nibbles, reg
from .control import skip_next

# --- DRW Vx, Vy, nibble ---
def decode_drw(word: int) -> Operation:
    _, x, y, n = split_nibbles(word)
    return Operation(Instruction.DRAW, word, "DRW", [reg(x), reg(y), str(n)], x=x, y=y, n=n)

# @intent:responsibility Iから読んだnバイトのスプライトを (Vx, Vy) にXOR描画し、衝突をVFに設定します。
# @intent:rationale スプライト行はインタプリタ権限で読み出し、予約領域のフォントグリフも描画可能にします。
#                  全行を読み終えてから描画するため、読み出し失敗時にフレームバッファは変化しません。
def execute_drw(state: Chip8CpuState, memory: Memory, op: Operation, peripherals: Peripherals) -> None:
    rows = [memory.read(state.i + row, allow_reserved=True) for row in range(op.n)]
    collision = state.framebuffer.draw_sprite(state.v[op.x], state.v[op.y], rows)
    state.vf = 1 if collision else 0

# --- SKP Vx ---
def decode_skp(word: int) -> Operation:
    _, x, _, _ = split_nibbles(word)
    return Operation(Instruction.SKIP_IF_KEY_PRESSED, word, "SKP", [reg(x)], x=x)

def execute_skp(state: Chip8CpuState, memory: Memory, op: Operation, peripherals: Peripherals) -> None:
    if peripherals.keypad.is_pressed(state.v[op.x] & 0x0F):
        skip_next(state)

# --- SKNP Vx ---
def decode_sknp(word: int) -> Operation:
    _, x, _, _ = split_nibbles(word)
    return Operation(Instruction.SKIP_IF_KEY_NOT_PRESSED, word, "SKNP", [reg(x)], x=x)

def execute_sknp(state: Chip8CpuState, memory: Memory, op: Operation, peripherals: Peripherals) -> None:
    if not peripherals.keypad.is_pressed(state.v[op.x] & 0x0F):
        skip_next(state)

# --- LD Vx, K ---
def decode_ld_vx_k(word: int) -> Operation:
    _, x, _, _ = split_nibbles(word)
    return Operation(Instruction.STORE_INPUT, word, "LD", [reg(x), "K"], x=x)

# @intent:responsibility キーが押されるまでこの命令に留まり、押されたらそのキー番号をVxに格納します。
# @intent:rationale ブロッキングせず、PCを命令の先頭へ戻すことで次のステップで再実行させます。
def execute_ld_vx_k(state: Chip8CpuState, memory: Memory, op: Operation, peripherals: Peripherals) -> None:
    key = peripherals.keypad.first_pressed()
    if key is None:
        state.waiting_for_key = True
        state.pc = (state.pc - op.length) & 0xFFFF
        return
    state.v[op.x] = key
    state.waiting_for_key = False
