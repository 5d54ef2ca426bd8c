import random
from typing import Tuple

from chip8_core_tracer.core.cpu import Chip8Cpu
from chip8_core_tracer.loader.loader import RomLoader, FontLoader
from chip8_core_tracer.transport.keypad import Keypad
from chip8_core_tracer.transport.memory import Memory
from .models import SystemConfig

# @intent:responsibility システム構成（Config）に基づいて、Memory、Keypad、CPUを生成・接続し、フォントとROMをロードします。
class SystemBuilder:
    def build_system(self, config: SystemConfig) -> Tuple[Chip8Cpu, Memory, Keypad]:
        memory = Memory()
        keypad = Keypad()

        FontLoader().load_font(memory, config.font_address)
        if config.rom:
            RomLoader().load_rom(config.rom, memory)

        rng = random.Random(config.random_seed) if config.random_seed is not None else random.Random()
        cpu = Chip8Cpu(memory, keypad=keypad, rng=rng, font_address=config.font_address)
        return cpu, memory, keypad
