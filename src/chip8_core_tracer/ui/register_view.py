# src/chip8_core_tracer/ui/register_view.py
"""
レジスタ表示ウィジェット。
Chip8Cpu.get_register_layout() のグループごとに、名前と16進値のペアを格子状に並べます。
"""
from typing import Dict, Optional
from PySide6.QtCore import Qt
from PySide6.QtWidgets import QWidget, QVBoxLayout, QGridLayout, QLabel, QGroupBox

from chip8_core_tracer.core.cpu import Chip8Cpu
from chip8_core_tracer.ui.theme import get_monospace_font_family, COLOR_VALUE

PAIRS_PER_ROW = 4  # V0-VF は 4x4 の格子になる

# @intent:responsibility CPUのレジスタ値を一覧表示し、直前の更新から変化した値を強調します。
class RegisterView(QWidget):
    def __init__(self, parent=None):
        super().__init__(parent)
        self._root = QVBoxLayout(self)
        self._root.setContentsMargins(4, 4, 4, 4)
        self._value_style = f"font-family: '{get_monospace_font_family()}', monospace; color: {COLOR_VALUE};"
        self._changed_style = self._value_style + " font-weight: bold;"
        self._cells: Dict[str, QLabel] = {}
        self._digits: Dict[str, int] = {}
        self._last_values: Dict[str, int] = {}
        self._cpu: Optional[Chip8Cpu] = None

    def set_cpu(self, cpu: Chip8Cpu) -> None:
        self._cpu = cpu
        self._rebuild()
        self.update_registers()

    def _rebuild(self) -> None:
        while self._root.count():
            widget = self._root.takeAt(0).widget()
            if widget is not None:
                widget.deleteLater()
        self._cells = {}
        self._digits = {}
        self._last_values = {}

        for group in self._cpu.get_register_layout():
            box = QGroupBox(group.group_name)
            grid = QGridLayout(box)
            grid.setHorizontalSpacing(8)
            grid.setVerticalSpacing(2)
            for index, info in enumerate(group.registers):
                row, pair = divmod(index, PAIRS_PER_ROW)
                digits = info.width // 4
                value_label = QLabel("0x" + "0" * digits)
                value_label.setStyleSheet(self._value_style)
                value_label.setAlignment(Qt.AlignRight | Qt.AlignVCenter)
                grid.addWidget(QLabel(info.name), row, pair * 2)
                grid.addWidget(value_label, row, pair * 2 + 1)
                self._cells[info.name] = value_label
                self._digits[info.name] = digits
            self._root.addWidget(box)

        self._root.addStretch()

    # @intent:responsibility 現在のレジスタ値でラベルを書き換えます。
    def update_registers(self) -> None:
        if self._cpu is None:
            return
        values = self._cpu.get_register_map()
        for name, label in self._cells.items():
            value = values[name]
            label.setText(f"0x{value:0{self._digits[name]}X}")
            changed = name in self._last_values and self._last_values[name] != value
            label.setStyleSheet(self._changed_style if changed else self._value_style)
        self._last_values = values

    def get_register_text(self, name: str) -> str:
        return self._cells[name].text()
