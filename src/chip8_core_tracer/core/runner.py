# src/chip8_core_tracer/core/runner.py
"""
フレーム単位の実行ドライバ。

1フレーム（既定で1/60秒）ごとに指定サイクル数の命令を実行し、その後タイマーを1回減算します。
壁時計との同期（いつ run_frame を呼ぶか）は呼び出し側（UIのタイマーなど）の責務です。
"""
from typing import List

from chip8_core_tracer.core.cpu import Chip8Cpu
from chip8_core_tracer.core.snapshot import Snapshot

DEFAULT_CYCLES_PER_FRAME = 10

# @intent:responsibility 命令実行とタイマー減算を同一スレッド上で交互に行います。
# @intent:rationale タイマー減算と命令実行が同じステップ列で行われるため、ロックは不要です。
class FrameRunner:
    def __init__(self, cpu: Chip8Cpu, cycles_per_frame: int = DEFAULT_CYCLES_PER_FRAME):
        if cycles_per_frame <= 0:
            raise ValueError("cycles_per_frame must be a positive integer.")
        self._cpu = cpu
        self._cycles_per_frame = cycles_per_frame
        self._frame_count = 0

    @property
    def frame_count(self) -> int:
        return self._frame_count

    @property
    def cycles_per_frame(self) -> int:
        return self._cycles_per_frame

    # @intent:responsibility 1フレーム分の命令を実行し、タイマーを1回減算します。
    # @intent:post-condition 実行中に Chip8Error が発生した場合はタイマーを減算せずにそのまま送出します。
    def run_frame(self) -> List[Snapshot]:
        snapshots = [self._cpu.step() for _ in range(self._cycles_per_frame)]
        self._cpu.tick_timers()
        self._frame_count += 1
        return snapshots
