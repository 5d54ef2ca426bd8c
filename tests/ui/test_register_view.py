# tests/ui/test_register_view.py
"""
RegisterView / StackView / CodeView の表示ロジックを検証するテスト。
UIウィジェットですが、QApplicationがあればロジックのテストは可能です。
"""
import pytest

from chip8_core_tracer.core.cpu import Chip8Cpu
from chip8_core_tracer.loader.loader import RomLoader
from chip8_core_tracer.transport.memory import Memory
from chip8_core_tracer.ui.code_view import CodeView
from chip8_core_tracer.ui.register_view import RegisterView
from chip8_core_tracer.ui.stack_view import StackView

@pytest.fixture
def cpu():
    memory = Memory()
    # 0x200: LD V3, $7F / CALL $206 / 0x204: JP $204 / 0x206: CALL $20A / 0x20A: JP $20A
    RomLoader().load_bytes(bytes([0x63, 0x7F, 0x22, 0x06, 0x12, 0x04, 0x22, 0x0A, 0x00, 0x00, 0x12, 0x0A]), memory)
    return Chip8Cpu(memory)

def test_register_view_updates(qapp, cpu):
    view = RegisterView()
    view.set_cpu(cpu)
    assert view.get_register_text("V3") == "0x00"
    assert view.get_register_text("PC") == "0x0200"

    cpu.step()
    view.update_registers()
    assert view.get_register_text("V3") == "0x7F"
    assert view.get_register_text("PC") == "0x0202"

# @intent:test_case スタックの有効部分だけが新しい順に表示されることを確認します。
def test_stack_view_shows_newest_first(qapp, cpu):
    view = StackView()
    for _ in range(3):
        cpu.step()
    view.update_stack(cpu.get_state())
    assert view.table.rowCount() == 2
    assert view.table.item(0, 1).text() == "0x208"
    assert view.table.item(1, 1).text() == "0x204"

def test_code_view_highlights_pc(qapp, cpu):
    view = CodeView()
    view.set_cpu(cpu)
    view.update_code(0x204)
    assert view.disassembled_data[0] == (0x200, "63 7F", "LD V3, $7F")
    assert view.table.rowCount() == len(view.disassembled_data)
    assert view.table.item(2, 2).text() == "JP $204"
