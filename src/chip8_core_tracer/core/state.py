# src/chip8_core_tracer/core/state.py
"""
Core Layer (CPU状態)

このモジュールは、CHIP-8 CPUの状態（レジスタ群、スタック、タイマー、フレームバッファ）を保持するデータ構造を定義します。
"""
from dataclasses import dataclass, field, fields, replace
from typing import Dict, List

from chip8_core_tracer.core.display import Framebuffer
from chip8_core_tracer.transport.memory import PROGRAM_START

REGISTER_COUNT = 16
STACK_CAPACITY = 16
VF = 0xF  # キャリー/ボロー/衝突フラグとして使われるレジスタ

# @intent:responsibility CHIP-8 CPUの全ての状態を保持します。
@dataclass
class Chip8CpuState:
    """
    CHIP-8 CPUの状態を保持するデータクラス。
    全てのレジスタは構築時に0で初期化され、PCは0x200から始まります。
    """
    pc: int = PROGRAM_START  # Program Counter
    sp: int = 0              # Stack Pointer (積まれている戻りアドレスの数。0=空)
    i: int = 0x000           # Address Register
    dt: int = 0              # Delay Timer
    st: int = 0              # Sound Timer
    v: List[int] = field(default_factory=lambda: [0] * REGISTER_COUNT)
    stack: List[int] = field(default_factory=lambda: [0] * STACK_CAPACITY)
    framebuffer: Framebuffer = field(default_factory=Framebuffer)
    # @intent:rationale Fx0A のキー待ちをブロッキング呼び出しではなく再入可能なフラグで表現します。
    waiting_for_key: bool = False

    @property
    def vf(self) -> int:
        return self.v[VF]

    @vf.setter
    def vf(self, value: int) -> None:
        self.v[VF] = value & 0xFF

    # @intent:responsibility 別の状態の全フィールドをこのオブジェクトに書き戻します（参照は共有しません）。
    def overwrite_with(self, other: "Chip8CpuState") -> None:
        source = other.copy()
        for f in fields(self):
            setattr(self, f.name, getattr(source, f.name))

    # @intent:responsibility 可変フィールドを複製した独立したコピーを返します。
    def copy(self) -> "Chip8CpuState":
        return replace(
            self,
            v=list(self.v),
            stack=list(self.stack),
            framebuffer=self.framebuffer.copy(),
        )

# @intent:responsibility 状態から名前付きレジスタ値の辞書を作成します（UI/デバッガ用）。
def register_map(state: Chip8CpuState) -> Dict[str, int]:
    registers = {f"V{index:X}": state.v[index] for index in range(REGISTER_COUNT)}
    registers.update({"I": state.i, "PC": state.pc, "SP": state.sp, "DT": state.dt, "ST": state.st})
    return registers
