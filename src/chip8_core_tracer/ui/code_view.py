# src/chip8_core_tracer/ui/code_view.py
"""
現在のPC周辺の逆アセンブル結果を表示するウィジェット。
"""
from PySide6.QtGui import QColor
from PySide6.QtWidgets import QWidget, QVBoxLayout, QTableWidget, QTableWidgetItem, QHeaderView

from chip8_core_tracer.core.cpu import Chip8Cpu
from chip8_core_tracer.transport.memory import PROGRAM_START
from chip8_core_tracer.ui.theme import COLOR_HIGHLIGHT

VISIBLE_WORDS = 32

# @intent:responsibility PCを含む範囲を逆アセンブルし、現在の命令行をハイライトします。
class CodeView(QWidget):
    def __init__(self, parent=None):
        super().__init__(parent)
        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)

        self.table = QTableWidget(0, 3)
        self.table.setHorizontalHeaderLabels(["Address", "Bytes", "Instruction"])
        self.table.verticalHeader().setVisible(False)
        self.table.horizontalHeader().setSectionResizeMode(QHeaderView.Stretch)
        self.table.setEditTriggers(QTableWidget.NoEditTriggers)
        layout.addWidget(self.table)

        self._cpu = None
        self.disassembled_data = []

    def set_cpu(self, cpu: Chip8Cpu) -> None:
        self._cpu = cpu

    # @intent:responsibility PCの少し手前から VISIBLE_WORDS 命令分を表示します。
    def update_code(self, pc: int) -> None:
        if not self._cpu:
            return
        # 命令は2バイト境界に揃えて表示する
        start_addr = max(PROGRAM_START, pc - 8) & ~1
        self.disassembled_data = self._cpu.disassemble(start_addr, VISIBLE_WORDS * 2)

        self.table.setRowCount(len(self.disassembled_data))
        for row, (addr, hex_bytes, mnemonic) in enumerate(self.disassembled_data):
            cells = [f"0x{addr:03X}", hex_bytes, mnemonic]
            for col, text in enumerate(cells):
                item = QTableWidgetItem(text)
                if addr == pc:
                    item.setBackground(QColor(COLOR_HIGHLIGHT))
                self.table.setItem(row, col, item)
            if addr == pc:
                self.table.scrollToItem(self.table.item(row, 0))
