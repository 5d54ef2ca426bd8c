# src/chip8_core_tracer/debugger/debugger.py
"""
CHIP-8 トレースデバッガ。

Chip8Cpu を1命令ずつ進めながら Snapshot を履歴として蓄積し、
条件（PC・メモリアクセス・レジスタ）が成立した時点で実行を止めます。
履歴に残ったメモリ書き込みの旧値を使って、ステップ単位で巻き戻すこともできます。
"""
from collections import deque
from dataclasses import dataclass
from enum import Enum
from typing import Deque, Dict, List, Optional
import time

from chip8_core_tracer.common.errors import Chip8Error
from chip8_core_tracer.core.cpu import Chip8Cpu
from chip8_core_tracer.core.snapshot import Snapshot
from chip8_core_tracer.core.state import Chip8CpuState, register_map
from chip8_core_tracer.transport.memory import AccessType

DEFAULT_HISTORY_LIMIT = 4096

# @intent:responsibility 停止条件の種類を列挙します。
class BreakpointConditionType(Enum):
    PC_MATCH = "PC_MATCH"               # 次に実行する命令のアドレス
    MEMORY_READ = "MEMORY_READ"         # 直前の命令が読んだアドレス（フェッチを含む）
    MEMORY_WRITE = "MEMORY_WRITE"       # 直前の命令が書いたアドレス (Fx33, Fx55)
    REGISTER_VALUE = "REGISTER_VALUE"   # レジスタが指定値と等しい
    REGISTER_CHANGE = "REGISTER_CHANGE" # レジスタが直前の命令で変化した

# @intent:responsibility 1つの停止条件を表します。
@dataclass(frozen=True)
class BreakpointCondition:
    """
    condition_type に応じて value / address / register_name のいずれかを使います。
    register_name は Chip8Cpu.get_register_map() のキー ("V0".."VF", "I", "PC", "SP", "DT", "ST") です。
    """
    condition_type: BreakpointConditionType
    value: Optional[int] = None
    address: Optional[int] = None
    register_name: Optional[str] = None
    enabled: bool = True

class Debugger:
    """
    CPUの実行制御（ステップ、連続実行、停止、巻き戻し）とブレークポイントを管理します。
    CPUが送出した Chip8Error は握りつぶさず、実行を止めた上で呼び出し元へ伝えます。
    """
    def __init__(self, cpu: Chip8Cpu, history_limit: int = DEFAULT_HISTORY_LIMIT):
        self._cpu = cpu
        self._conditions: List[BreakpointCondition] = []
        self._running = False
        self._history: Deque[Snapshot] = deque(maxlen=history_limit)
        self._last_snapshot: Optional[Snapshot] = None
        # 巻き戻しの終点と、REGISTER_CHANGE 判定用の直前レジスタ値
        self._initial_state: Chip8CpuState = cpu.get_state().copy()
        self._registers_before: Dict[str, int] = register_map(self._initial_state)

    def add_breakpoint(self, condition: BreakpointCondition) -> None:
        if condition not in self._conditions:
            self._conditions.append(condition)

    def remove_breakpoint(self, condition: BreakpointCondition) -> None:
        if condition in self._conditions:
            self._conditions.remove(condition)

    def get_breakpoints(self) -> List[BreakpointCondition]:
        return list(self._conditions)

    def get_history(self) -> List[Snapshot]:
        return list(self._history)

    def get_last_snapshot(self) -> Optional[Snapshot]:
        return self._last_snapshot

    @property
    def is_running(self) -> bool:
        return self._running

    def _active(self, condition_type: BreakpointConditionType) -> List[BreakpointCondition]:
        return [c for c in self._conditions if c.enabled and c.condition_type == condition_type]

    def _pc_breakpoint_hit(self, pc: int) -> bool:
        return any(c.value == pc for c in self._active(BreakpointConditionType.PC_MATCH))

    # @intent:responsibility 実行済みの命令の Snapshot に対して、PC以外の停止条件を評価します。
    def _check_other_breakpoints(self, snapshot: Snapshot) -> bool:
        reads = {a.address for a in snapshot.memory_activity if a.access_type == AccessType.READ}
        writes = {a.address for a in snapshot.memory_activity if a.access_type == AccessType.WRITE}
        if any(c.address in reads for c in self._active(BreakpointConditionType.MEMORY_READ)):
            return True
        if any(c.address in writes for c in self._active(BreakpointConditionType.MEMORY_WRITE)):
            return True

        registers = register_map(snapshot.state)
        for c in self._active(BreakpointConditionType.REGISTER_VALUE):
            if c.register_name in registers and registers[c.register_name] == c.value:
                return True
        for c in self._active(BreakpointConditionType.REGISTER_CHANGE):
            if c.register_name in registers and registers[c.register_name] != self._registers_before.get(c.register_name):
                return True
        return False

    # @intent:responsibility 1命令を実行し、Snapshotを履歴に追加して返します。
    def step_instruction(self) -> Snapshot:
        self._registers_before = self._cpu.get_register_map()
        snapshot = self._cpu.step()
        if len(self._history) == self._history.maxlen:
            # 押し出される最古の履歴の状態が、新しい巻き戻しの終点になる
            self._initial_state = self._history[0].state
        self._history.append(snapshot)
        self._last_snapshot = snapshot
        return snapshot

    # @intent:responsibility 直前の1命令を取り消します。
    # @intent:return 巻き戻し後の最新Snapshot。履歴の先頭まで戻った場合はNone。
    def step_back(self) -> Optional[Snapshot]:
        if not self._history:
            return None

        undone = self._history.pop()
        memory = self._cpu.get_memory()
        # 同じ命令内で同じアドレスに複数回書いた場合も最初の旧値が残るよう、逆順に戻す
        for access in reversed(undone.memory_activity):
            if access.access_type == AccessType.WRITE and access.previous_data is not None:
                memory.load(access.address, access.previous_data)

        if self._history:
            self._last_snapshot = self._history[-1]
            self._cpu.restore_state(self._last_snapshot.state)
        else:
            self._last_snapshot = None
            self._cpu.restore_state(self._initial_state)
        return self._last_snapshot

    def run(self, max_steps: Optional[int] = None) -> None:
        """
        停止条件の成立、stop() の呼び出し、または max_steps 命令の実行まで連続実行します。
        再開直後は現在のPCにあるブレークポイントで止まらず、1命令進めてから判定します。
        """
        self._running = True
        executed = 0
        resume_from_breakpoint = self._pc_breakpoint_hit(self._cpu.get_state().pc)

        while self._running:
            if max_steps is not None and executed >= max_steps:
                break
            time.sleep(0)

            pc = self._cpu.get_state().pc
            if not resume_from_breakpoint and self._pc_breakpoint_hit(pc):
                print(f"Breakpoint hit at PC: {pc:#05x}")
                break
            resume_from_breakpoint = False

            snapshot = self._step_or_stop()
            executed += 1
            if self._check_other_breakpoints(snapshot):
                print(f"Breakpoint hit at PC: {snapshot.state.pc:#05x}")
                break

        self._running = False

    def _step_or_stop(self) -> Snapshot:
        try:
            return self.step_instruction()
        except Chip8Error:
            self._running = False
            raise

    def stop(self) -> None:
        self._running = False
