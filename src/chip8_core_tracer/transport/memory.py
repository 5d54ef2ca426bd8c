# src/chip8_core_tracer/transport/memory.py
"""
Transport Layer (メモリ)

このモジュールは、CHIP-8の4KBアドレス空間を抽象化し、
範囲・権限チェック付きの読み書きアクセスを提供する責務を負います。
"""
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional

from chip8_core_tracer.common.errors import AddressErrorKind, InvalidAddressError

MEMORY_SIZE = 0x1000
PROGRAM_START = 0x200  # 0x000-0x1FF はインタプリタ（フォント等）の予約領域
ADDRESS_MAX = 0xFFF

# @intent:responsibility メモリアクセスを記録するためのタイプを定義します。
class AccessType(Enum):
    READ = "READ"
    WRITE = "WRITE"

# @intent:responsibility 個々のメモリアクセス操作を記録します。
@dataclass(frozen=True) # 不変データ構造
class MemoryAccess:
    """
    メモリ上で行われた単一のアクセス（読み込みまたは書き込み）を記録するデータクラス。
    """
    address: int
    data: int # 8bit value
    access_type: AccessType
    previous_data: Optional[int] = None # WRITE時の書き込み前の値（ステップバック用）

# @intent:responsibility 範囲・権限チェック付きのバイトストレージを提供します。
# @intent:rationale 全てのアクセスを記録し、Snapshotに含めることでシステムの観測可能性を高めます。
class Memory:
    """
    CHIP-8の4096バイトのアドレス空間。
    0x000-0x1FF は予約領域で、プログラムからの読み書きは InvalidAddressError(RESERVED) になります。
    0xFFF を超えるアドレスは InvalidAddressError(OUT_OF_RANGE) になります。
    """
    def __init__(self):
        self._memory = bytearray(MEMORY_SIZE)
        self._activity_log: List[MemoryAccess] = []

    # @intent:responsibility 全てのバイトを0にリセットします。
    def wipe(self) -> None:
        """
        全バイトを0で初期化します。プログラムとフォントを含む全データが失われます。
        """
        self._memory = bytearray(MEMORY_SIZE)
        self._activity_log = []

    # @intent:responsibility アドレスの範囲と権限を検証します。
    # @intent:post-condition 不正なアドレスの場合、InvalidAddressErrorを発生させます。
    def _check_address(self, address: int, allow_reserved: bool = False) -> None:
        if address < 0 or address > ADDRESS_MAX:
            raise InvalidAddressError(address, AddressErrorKind.OUT_OF_RANGE)
        if address < PROGRAM_START and not allow_reserved:
            raise InvalidAddressError(address, AddressErrorKind.RESERVED)

    # @intent:responsibility 指定されたアドレスから8bitのデータを読み出します。
    # @intent:pre-condition アドレスはプログラム領域 (0x200-0xFFF) 内である必要があります。
    def read(self, address: int, allow_reserved: bool = False) -> int:
        """
        指定されたアドレスから8bitのデータを読み出します。アクセスはログに記録されます。
        `allow_reserved` はインタプリタ自身による読み出し（スプライト取得）用で、
        予約領域のフォントグリフを参照するために使用します。
        """
        self._check_address(address, allow_reserved)
        data = self._memory[address]
        self._activity_log.append(MemoryAccess(address, data, AccessType.READ))
        return data

    # @intent:responsibility 指定されたアドレスに8bitのデータを書き込みます。
    # @intent:pre-condition アドレスはプログラム領域内であり、データは8bit値である必要があります。
    def write(self, address: int, data: int) -> None:
        self._check_address(address)
        if not 0 <= data <= 0xFF:
            raise ValueError(f"Data {data} is not an 8-bit value.")
        previous = self._memory[address]
        self._memory[address] = data
        self._activity_log.append(MemoryAccess(address, data, AccessType.WRITE, previous))

    # @intent:responsibility ログを記録せずに指定されたアドレスからデータを読み出します。
    def peek(self, address: int) -> int:
        """
        指定されたアドレスから8bitのデータを読み出します（ログ記録なし、予約領域も可）。
        UIや逆アセンブラなどのインスペクタ用。
        """
        self._check_address(address, allow_reserved=True)
        return self._memory[address]

    # @intent:responsibility ローダーとフォント提供者のためのバックドア書き込みです。
    def load(self, address: int, data: int) -> None:
        """
        予約領域を含む全アドレスに書き込みます（ログ記録なし）。
        通常の実行中の書き込みではなく、プログラム/フォントの初期化とステップバックで使用します。
        """
        self._check_address(address, allow_reserved=True)
        if not 0 <= data <= 0xFF:
            raise ValueError(f"Data {data} is not an 8-bit value.")
        self._memory[address] = data

    # @intent:responsibility 記録されたアクセスログを取得し、クリアします。
    def get_and_clear_activity_log(self) -> List[MemoryAccess]:
        log = self._activity_log
        self._activity_log = []
        return log

    def get_size(self) -> int:
        return MEMORY_SIZE
