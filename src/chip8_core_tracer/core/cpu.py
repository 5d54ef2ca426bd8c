# src/chip8_core_tracer/core/cpu.py
"""
Core Layer (CHIP-8 CPU)

このモジュールは、CPUの状態管理と命令サイクル（フェッチ→デコード→実行）の駆動を提供します。
具体的な命令の振る舞いはInstruction Layerに移譲されます。
"""
import random
from typing import Dict, List, Optional, Tuple

from chip8_core_tracer import disassembler
from chip8_core_tracer.common.errors import Chip8Error
from chip8_core_tracer.common.types import RegisterInfo, RegisterLayoutInfo
from chip8_core_tracer.core.snapshot import Metadata, Operation, Snapshot
from chip8_core_tracer.core.state import Chip8CpuState, REGISTER_COUNT, VF, register_map
from chip8_core_tracer.instructions import decode_opcode, execute_instruction
from chip8_core_tracer.instructions.base import Peripherals, FONT_ADDRESS
from chip8_core_tracer.transport.keypad import Keypad
from chip8_core_tracer.transport.memory import AccessType, Memory

# @intent:responsibility CHIP-8 CPUのエミュレーションロジック（フェッチ、デコード、実行）を提供します。
class Chip8Cpu:
    """
    CHIP-8 CPUをエミュレートするクラス。
    レジスタ、スタック、タイマー、フレームバッファを所有し、Memoryから命令を読み出して実行します。
    エラーは型付き例外（Chip8Error）として呼び出し元に伝播し、CPU自身は握りつぶしません。
    """
    # @intent:responsibility CPUの状態とメモリ・周辺機器への参照を初期化します。
    # @intent:pre-condition `memory`は有効なMemoryオブジェクトである必要があります。
    def __init__(self, memory: Memory, keypad: Optional[Keypad] = None,
                 rng: Optional[random.Random] = None, font_address: int = FONT_ADDRESS):
        self._memory = memory
        self._peripherals = Peripherals(
            keypad=keypad if keypad is not None else Keypad(),
            rng=rng if rng is not None else random.Random(),
            font_address=font_address,
        )
        self._state: Chip8CpuState = self._create_initial_state()
        self._cycle_count: int = 0
        # @intent:rationale Stateオブジェクトの直接操作を避けるため、protectedな命名規則を採用。
        #                  外部からのアクセスは`get_state()`メソッドを介して行う。

    def _create_initial_state(self) -> Chip8CpuState:
        return Chip8CpuState()

    # @intent:responsibility CPUをリセットし、初期状態に戻します。メモリは変更しません。
    def reset(self) -> None:
        self._state = self._create_initial_state()
        self._cycle_count = 0

    def get_state(self) -> Chip8CpuState:
        return self._state

    def get_memory(self) -> Memory:
        return self._memory

    @property
    def keypad(self) -> Keypad:
        return self._peripherals.keypad

    @property
    def cycle_count(self) -> int:
        return self._cycle_count

    # @intent:responsibility 以前の状態（のコピー）を現在の状態として復元します。
    def restore_state(self, state: Chip8CpuState) -> None:
        self._state = state.copy()

    # @intent:responsibility PCの位置から2バイトをビッグエンディアンで読み出し、命令ワードを返します。
    def _fetch(self) -> int:
        pc = self._state.pc
        return (self._memory.read(pc) << 8) | self._memory.read(pc + 1)

    def _decode(self, word: int) -> Operation:
        return decode_opcode(word)

    # @intent:responsibility 命令実行前にPCを命令長分進めます。
    def _update_pc(self, operation: Operation) -> None:
        self._state.pc = (self._state.pc + operation.length) & 0xFFFF

    def _execute(self, operation: Operation) -> None:
        execute_instruction(operation, self._state, self._memory, self._peripherals)

    # @intent:responsibility CPUを1命令サイクル進め、その結果のスナップショットを返します。
    # @intent:flow ログクリア -> フェッチ -> デコード -> PC更新 -> 実行 -> スナップショット生成 の順序で処理を行います。
    def step(self) -> Snapshot:
        """
        CPUを1命令サイクル進め、その時点でのCPUの状態とメモリアクセスを含むSnapshotを返します。
        デコードや実行でエラーが発生した場合は、PC・レジスタ・メモリをその命令のフェッチ前の状態に戻してから
        Chip8Error を送出します。失敗した命令は履歴に残らず、同じ命令を再度ステップすると同じエラーになります。
        """
        # 1. 前処理: 前サイクルまでの残存ログを破棄
        self._memory.get_and_clear_activity_log()
        initial_pc = self._state.pc

        # 2. フェッチ & デコード
        word = self._fetch()
        operation = self._decode(word)

        # 3. PC更新 (ジャンプ/スキップ/キー待ちは実行側でさらに調整する) & 実行
        saved_state = self._state.copy()
        try:
            self._update_pc(operation)
            self._execute(operation)
        except Chip8Error:
            self._rollback(saved_state)
            raise

        # 4. 後処理 & Snapshot生成
        return self._create_snapshot(initial_pc, operation)

    # @intent:responsibility 実行途中で失敗した命令の影響（PC・レジスタ・メモリ書き込み）を全て取り消します。
    # @intent:post-condition CPUとメモリは失敗した命令のフェッチ前と同じ状態になり、アクセスログは空になります。
    def _rollback(self, saved_state: Chip8CpuState) -> None:
        for access in reversed(self._memory.get_and_clear_activity_log()):
            if access.access_type == AccessType.WRITE and access.previous_data is not None:
                self._memory.load(access.address, access.previous_data)
        self._state.overwrite_with(saved_state)

    def _create_snapshot(self, initial_pc: int, operation: Operation) -> Snapshot:
        memory_activity = self._memory.get_and_clear_activity_log()
        self._cycle_count += operation.cycle_count
        return Snapshot(
            state=self._state.copy(),
            operation=operation,
            metadata=Metadata(
                cycle_count=self._cycle_count,
                symbol_info=f"{initial_pc:03X}: {operation.to_assembly()}",
            ),
            memory_activity=memory_activity,
        )

    # @intent:responsibility 60Hzのタイマー駆動から呼ばれ、DTとSTを1ずつ減算します。
    def tick_timers(self) -> None:
        if self._state.dt > 0:
            self._state.dt -= 1
        if self._state.st > 0:
            self._state.st -= 1

    # @intent:responsibility サウンドを鳴らすべき状態かどうかを返します（オーディオ提供者用）。
    @property
    def sound_active(self) -> bool:
        return self._state.st > 0

    # @intent:responsibility UI表示用に、現在のレジスタ値を辞書形式で提供します。
    def get_register_map(self) -> Dict[str, int]:
        return register_map(self._state)

    # @intent:responsibility UIのレジスタ表示レイアウト（グループ化）を定義します。
    def get_register_layout(self) -> List[RegisterLayoutInfo]:
        return [
            RegisterLayoutInfo("General", [RegisterInfo(f"V{index:X}", 8) for index in range(REGISTER_COUNT)]),
            RegisterLayoutInfo("Index/Pointers", [
                RegisterInfo("I", 16), RegisterInfo("PC", 16), RegisterInfo("SP", 8)
            ]),
            RegisterLayoutInfo("Timers", [
                RegisterInfo("DT", 8), RegisterInfo("ST", 8)
            ]),
        ]

    # @intent:responsibility UI表示用に、現在のフラグ状態を辞書形式で提供します。
    def get_flag_state(self) -> Dict[str, bool]:
        s = self._state
        return {
            "VF": s.v[VF] != 0, "KEY": s.waiting_for_key, "SND": s.st > 0
        }

    # @intent:responsibility 指定範囲のメモリを逆アセンブルします。
    def disassemble(self, start_addr: int, length: int) -> List[Tuple[int, str, str]]:
        return disassembler.disassemble(self._memory, start_addr, length)
