# src/chip8_core_tracer/common/errors.py
"""
例外定義モジュール。

エミュレーションコアが検出するエラーを型付きの例外として定義します。
コアはこれらを送出するだけで、停止・リセット・通知の判断は呼び出し元（UIやデバッガ）が行います。
"""
from enum import Enum


# @intent:responsibility 全てのCHIP-8関連エラーの基底クラスです。
class Chip8Error(Exception):
    """CHIP-8エミュレーション中に発生するエラーの基底クラス。"""


# @intent:responsibility 不正なアドレスアクセスの種類を定義します。
class AddressErrorKind(Enum):
    RESERVED = "RESERVED"          # 0x000-0x1FF (インタプリタ領域)
    OUT_OF_RANGE = "OUT_OF_RANGE"  # 0xFFF を超えるアドレス


# @intent:responsibility メモリアクセス違反を報告します。
class InvalidAddressError(Chip8Error):
    """
    予約領域または範囲外のアドレスへのアクセスを表す例外。
    """
    def __init__(self, address: int, kind: AddressErrorKind):
        self.address = address
        self.kind = kind
        if kind == AddressErrorKind.RESERVED:
            detail = "is reserved for the interpreter"
        else:
            detail = "is out of range"
        super().__init__(f"Address {address:#05x} {detail}.")


# @intent:responsibility デコードできない命令ワードを報告します。
class InvalidInstructionError(Chip8Error):
    """
    どのニブルパターンにも一致しない命令ワードを表す例外。
    """
    def __init__(self, word: int):
        self.word = word
        super().__init__(f"Invalid instruction {word:#06x}.")


class StackError(Chip8Error):
    """コールスタックの異常（オーバーフロー/アンダーフロー）の基底クラス。"""


class StackOverflowError(StackError):
    def __init__(self, address: int, capacity: int):
        self.address = address
        super().__init__(f"Stack overflow: CALL {address:#05x} with {capacity} return addresses already pushed.")


class StackUnderflowError(StackError):
    def __init__(self):
        super().__init__("Stack underflow: RET with an empty call stack.")


# @intent:responsibility プログラム領域に収まらないROMを報告します。
class RomTooLargeError(Chip8Error):
    def __init__(self, size: int, limit: int):
        self.size = size
        self.limit = limit
        super().__init__(f"ROM is {size} bytes; the program area holds at most {limit} bytes.")
