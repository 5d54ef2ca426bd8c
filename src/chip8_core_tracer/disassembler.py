# src/chip8_core_tracer/disassembler.py
"""
CHIP-8 Disassembler

メモリ上のバイナリデータを解析し、CHIP-8のアセンブリ言語（ニーモニック）に変換します。
Instruction Layerの純粋なデコーダを再利用し、Memory.peek を使うためアクセスログを汚しません。
"""
from typing import List, Tuple

from chip8_core_tracer.common.errors import InvalidInstructionError
from chip8_core_tracer.instructions import decode_opcode
from chip8_core_tracer.transport.memory import Memory, ADDRESS_MAX

# @intent:responsibility 単一の命令ワードを表示用の文字列に変換します。
def format_word(word: int) -> str:
    """
    デコードできないワードはデータとして "DW $XXXX" と表記します。
    """
    try:
        return decode_opcode(word).to_assembly()
    except InvalidInstructionError:
        return f"DW ${word:04X}"

# @intent:responsibility 指定されたメモリ範囲を逆アセンブルし、表示用データを生成します。
def disassemble(memory: Memory, start_addr: int, length: int) -> List[Tuple[int, str, str]]:
    """
    指定された範囲のメモリを2バイト単位で逆アセンブルします。

    Returns:
        List of (address, hex_bytes, mnemonic) tuples.
    """
    result = []
    current_addr = start_addr
    end_addr = start_addr + length

    while current_addr < end_addr:
        # メモリ境界チェック (ワードの2バイト目まで読めること)
        if current_addr + 1 > ADDRESS_MAX:
            break

        high = memory.peek(current_addr)
        low = memory.peek(current_addr + 1)
        word = (high << 8) | low

        result.append((current_addr, f"{high:02X} {low:02X}", format_word(word)))
        current_addr += 2

    return result
