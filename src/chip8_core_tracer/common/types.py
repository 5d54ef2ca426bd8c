# src/chip8_core_tracer/common/types.py
"""
UI向けのレジスタ表示記述子。
ビューは Chip8Cpu.get_register_layout() が返すこれらの記述だけを頼りにフィールドを並べます。
"""
from typing import List, NamedTuple

# @intent:data_structure 表示するレジスタ1つ分（名前と16進桁数の元になるビット幅）。
class RegisterInfo(NamedTuple):
    name: str   # get_register_map() のキー
    width: int  # 8 or 16

# @intent:data_structure 1つのグループボックスにまとめて表示するレジスタ群。
class RegisterLayoutInfo(NamedTuple):
    group_name: str
    registers: List[RegisterInfo]
