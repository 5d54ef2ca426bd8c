# src/chip8_core_tracer/transport/keypad.py
"""
Transport Layer (キーパッド)

16キーの16進キーパッドの押下状態を保持します。
UIなどの入力バックエンドが状態を書き込み、CPUがそれを参照します。
"""
from typing import Optional, List

KEY_COUNT = 16

# @intent:responsibility 16キーの押下状態を管理します。
class Keypad:
    """
    CHIP-8の16キー (0x0-0xF) の押下状態を保持するデバイス。
    """
    def __init__(self):
        self._pressed: List[bool] = [False] * KEY_COUNT

    # @intent:pre-condition keyは0-15の整数である必要があります。
    def _check_key(self, key: int) -> None:
        if not 0 <= key < KEY_COUNT:
            raise ValueError(f"Key {key} is not a valid keypad index (0-15).")

    def press(self, key: int) -> None:
        self._check_key(key)
        self._pressed[key] = True

    def release(self, key: int) -> None:
        self._check_key(key)
        self._pressed[key] = False

    def release_all(self) -> None:
        self._pressed = [False] * KEY_COUNT

    # @intent:responsibility 指定されたキーが押下されているかを返します。
    def is_pressed(self, key: int) -> bool:
        self._check_key(key)
        return self._pressed[key]

    # @intent:responsibility 押下中のキーのうち最小のインデックスを返します。
    # @intent:return 何も押されていなければNone。
    def first_pressed(self) -> Optional[int]:
        for key, pressed in enumerate(self._pressed):
            if pressed:
                return key
        return None

    def get_pressed_keys(self) -> List[int]:
        return [key for key, pressed in enumerate(self._pressed) if pressed]
