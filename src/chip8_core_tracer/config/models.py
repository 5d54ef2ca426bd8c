from dataclasses import dataclass, field
from typing import Dict, Optional

from chip8_core_tracer.instructions.base import FONT_ADDRESS

# @intent:constant 一般的な 1234/QWER/ASDF/ZXCV 配列から CHIP-8 キーパッドへの対応。
DEFAULT_KEY_MAP: Dict[str, int] = {
    "1": 0x1, "2": 0x2, "3": 0x3, "4": 0xC,
    "Q": 0x4, "W": 0x5, "E": 0x6, "R": 0xD,
    "A": 0x7, "S": 0x8, "D": 0x9, "F": 0xE,
    "Z": 0xA, "X": 0x0, "C": 0xB, "V": 0xF,
}

@dataclass
class SystemConfig:
    rom: Optional[str] = None
    cycles_per_frame: int = 10
    timer_hz: int = 60
    font_address: int = FONT_ADDRESS
    random_seed: Optional[int] = None
    display_scale: int = 10
    key_map: Dict[str, int] = field(default_factory=lambda: dict(DEFAULT_KEY_MAP))
