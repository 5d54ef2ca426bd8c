# src/chip8_core_tracer/instructions/__init__.py
"""
CHIP-8命令セット実装パッケージ。
"""
from chip8_core_tracer.common.errors import InvalidInstructionError
from chip8_core_tracer.core.snapshot import Operation
from chip8_core_tracer.core.state import Chip8CpuState
from chip8_core_tracer.transport.memory import Memory
from .base import Peripherals, split_nibbles
from .maps import (
    PRIMARY_DECODE_MAP, SYSTEM_DECODE_MAP, ALU_DECODE_MAP,
    KEY_DECODE_MAP, MISC_DECODE_MAP, EXECUTE_MAP,
)

# @intent:responsibility 16bit命令ワードをデコードし、Operationを返します。
# @intent:rationale 副作用のない純粋関数とし、CPUと逆アセンブラの両方から利用します。
def decode_opcode(word: int) -> Operation:
    """
    16bitワードを4つのニブルに分割し、ニブルパターンに一致する命令のOperationを返します。
    どのパターンにも一致しない場合は InvalidInstructionError を発生させます。
    """
    if not 0 <= word <= 0xFFFF:
        raise ValueError(f"Instruction word {word} is not a 16-bit value.")

    n0, _, _, n3 = split_nibbles(word)
    if n0 == 0x0:
        decoder = SYSTEM_DECODE_MAP.get(word, PRIMARY_DECODE_MAP.get(0x0))
    elif n0 == 0x8:
        decoder = ALU_DECODE_MAP.get(n3)
    elif n0 == 0xE:
        decoder = KEY_DECODE_MAP.get(word & 0xFF)
    elif n0 == 0xF:
        decoder = MISC_DECODE_MAP.get(word & 0xFF)
    elif n0 in (0x5, 0x9) and n3 != 0x0:
        decoder = None
    else:
        decoder = PRIMARY_DECODE_MAP.get(n0)

    if decoder is None:
        raise InvalidInstructionError(word)
    return decoder(word)

# @intent:responsibility デコードされた命令を実行し、CPUの状態（と必要に応じてメモリ）を変更します。
def execute_instruction(operation: Operation, state: Chip8CpuState, memory: Memory, peripherals: Peripherals) -> None:
    executor = EXECUTE_MAP[operation.kind]
    executor(state, memory, operation, peripherals)
