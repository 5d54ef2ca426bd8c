# src/chip8_core_tracer/core/snapshot.py
"""
実行状態の不変スナップショット

このモジュールは、デコードされた命令と、CPUとメモリの状態を記録した不変のデータ構造を定義します。
UIへの情報提供と、デバッグ時の状態記録に用いる責務を負います。
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from chip8_core_tracer.core.state import Chip8CpuState
from chip8_core_tracer.transport.memory import MemoryAccess


# @intent:responsibility CHIP-8の35種類の命令を識別するタグを定義します。
class Instruction(Enum):
    SYSTEM_CALL = "SYSTEM_CALL"                                    # 0nnn
    CLEAR_DISPLAY = "CLEAR_DISPLAY"                                # 00E0
    RETURN = "RETURN"                                              # 00EE
    JUMP = "JUMP"                                                  # 1nnn
    CALL = "CALL"                                                  # 2nnn
    SKIP_IF_EQUAL = "SKIP_IF_EQUAL"                                # 3xkk
    SKIP_IF_NOT_EQUAL = "SKIP_IF_NOT_EQUAL"                        # 4xkk
    SKIP_IF_REGISTERS_EQUAL = "SKIP_IF_REGISTERS_EQUAL"            # 5xy0
    SET_REGISTER = "SET_REGISTER"                                  # 6xkk
    ADD = "ADD"                                                    # 7xkk
    COPY_REGISTER = "COPY_REGISTER"                                # 8xy0
    OR = "OR"                                                      # 8xy1
    AND = "AND"                                                    # 8xy2
    XOR = "XOR"                                                    # 8xy3
    ADD_REGISTERS = "ADD_REGISTERS"                                # 8xy4
    SUBTRACT = "SUBTRACT"                                          # 8xy5
    SHIFT_RIGHT = "SHIFT_RIGHT"                                    # 8xy6
    REVERSE_SUBTRACT = "REVERSE_SUBTRACT"                          # 8xy7
    SHIFT_LEFT = "SHIFT_LEFT"                                      # 8xyE
    SKIP_IF_REGISTERS_NOT_EQUAL = "SKIP_IF_REGISTERS_NOT_EQUAL"    # 9xy0
    SET_I = "SET_I"                                                # Annn
    JUMP_PLUS_V0 = "JUMP_PLUS_V0"                                  # Bnnn
    RANDOM_BYTE = "RANDOM_BYTE"                                    # Cxkk
    DRAW = "DRAW"                                                  # Dxyn
    SKIP_IF_KEY_PRESSED = "SKIP_IF_KEY_PRESSED"                    # Ex9E
    SKIP_IF_KEY_NOT_PRESSED = "SKIP_IF_KEY_NOT_PRESSED"            # ExA1
    SET_REGISTER_TO_DELAY_TIMER = "SET_REGISTER_TO_DELAY_TIMER"    # Fx07
    STORE_INPUT = "STORE_INPUT"                                    # Fx0A
    SET_DELAY_TIMER = "SET_DELAY_TIMER"                            # Fx15
    SET_SOUND_TIMER = "SET_SOUND_TIMER"                            # Fx18
    ADD_TO_I = "ADD_TO_I"                                          # Fx1E
    SET_I_TO_SPRITE_LOCATION = "SET_I_TO_SPRITE_LOCATION"          # Fx29
    STORE_BINARY_CODED_DECIMAL = "STORE_BINARY_CODED_DECIMAL"      # Fx33
    STORE_REGISTERS = "STORE_REGISTERS"                            # Fx55
    LOAD_REGISTERS = "LOAD_REGISTERS"                              # Fx65


# @intent:responsibility デコードされた命令の詳細を記録します。
@dataclass(frozen=True) # 不変データ構造
class Operation:
    """
    デコードされた命令（タグ、オペランド、ニーモニック）を記録するデータクラス。
    オペランドは命令が必要とするものだけが設定され、それ以外は0のままです。
    """
    kind: Instruction
    opcode: int # 生の16bit命令ワード
    mnemonic: str # 例: "JP"
    operands: List[str] = field(default_factory=list) # 例: ["$234"]
    x: int = 0
    y: int = 0
    n: int = 0
    kk: int = 0
    nnn: int = 0
    cycle_count: int = 1
    length: int = 2 # 命令のバイト長

    @property
    def opcode_hex(self) -> str:
        return f"{self.opcode:04X}"

    # @intent:responsibility 表示用のアセンブリ表記を返します。
    def to_assembly(self) -> str:
        if self.operands:
            return f"{self.mnemonic} " + ", ".join(self.operands)
        return self.mnemonic

# @intent:responsibility 実行に関するメタデータを記録します。
@dataclass(frozen=True) # 不変データ構造
class Metadata:
    cycle_count: int
    symbol_info: Optional[str] = None # 例: "DRW V0, V1, 5"

# @intent:responsibility ある一時点におけるCPUとメモリアクセスの完全な状態を不変に記録します。
@dataclass(frozen=True) # 不変データ構造
class Snapshot:
    """
    ある一時点における、CPUの状態とそのサイクルのメモリアクセスを記録した不変のデータ構造。
    stateはCPU本体と共有しない独立したコピーです。
    """
    state: Chip8CpuState
    operation: Operation
    metadata: Metadata
    memory_activity: List[MemoryAccess] = field(default_factory=list)
