# tests/core/test_runner.py
"""
chip8_core_tracer.core.runnerモジュールの単体テスト。
"""
import pytest

from chip8_core_tracer.common.errors import InvalidInstructionError
from chip8_core_tracer.core.cpu import Chip8Cpu
from chip8_core_tracer.core.runner import FrameRunner
from chip8_core_tracer.loader.loader import RomLoader
from chip8_core_tracer.transport.memory import Memory

def make_cpu(program: bytes) -> Chip8Cpu:
    memory = Memory()
    RomLoader().load_bytes(program, memory)
    return Chip8Cpu(memory)

# @intent:test_case 1フレームで指定サイクル数の命令を実行し、タイマーを1回だけ減算することを確認します。
def test_run_frame_steps_then_ticks():
    # ADD V0, $01 / JP $200
    cpu = make_cpu(bytes([0x70, 0x01, 0x12, 0x00]))
    cpu.get_state().dt = 5
    runner = FrameRunner(cpu, cycles_per_frame=4)

    snapshots = runner.run_frame()
    assert len(snapshots) == 4
    assert cpu.get_state().v[0] == 2
    assert cpu.get_state().dt == 4
    assert runner.frame_count == 1

def test_error_skips_timer_tick():
    cpu = make_cpu(bytes([0x80, 0x08]))
    cpu.get_state().dt = 5
    runner = FrameRunner(cpu, cycles_per_frame=10)
    with pytest.raises(InvalidInstructionError):
        runner.run_frame()
    assert cpu.get_state().dt == 5
    assert runner.frame_count == 0

@pytest.mark.parametrize("cycles", [0, -1])
def test_invalid_cycles(cycles):
    with pytest.raises(ValueError):
        FrameRunner(make_cpu(b""), cycles_per_frame=cycles)
