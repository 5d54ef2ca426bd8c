# src/chip8_core_tracer/ui/stack_view.py
"""
コールスタックを表示するウィジェット。
"""
from PySide6.QtWidgets import QWidget, QVBoxLayout, QTableWidget, QTableWidgetItem, QHeaderView

from chip8_core_tracer.core.state import Chip8CpuState, STACK_CAPACITY

# @intent:responsibility CPUのコールスタック（戻りアドレス）を一覧表示します。
class StackView(QWidget):
    def __init__(self, parent=None):
        super().__init__(parent)
        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)

        self.table = QTableWidget(STACK_CAPACITY, 2)
        self.table.setHorizontalHeaderLabels(["Level", "Return"])
        self.table.verticalHeader().setVisible(False)
        self.table.horizontalHeader().setSectionResizeMode(QHeaderView.Stretch)
        self.table.setEditTriggers(QTableWidget.NoEditTriggers)
        layout.addWidget(self.table)

    # @intent:responsibility スタックの有効な部分（sp 未満）だけを表示します。最上段が最新の戻りアドレスです。
    def update_stack(self, state: Chip8CpuState) -> None:
        self.table.clearContents()
        self.table.setRowCount(state.sp)
        for row, level in enumerate(reversed(range(state.sp))):
            self.table.setItem(row, 0, QTableWidgetItem(str(level)))
            self.table.setItem(row, 1, QTableWidgetItem(f"0x{state.stack[level]:03X}"))
