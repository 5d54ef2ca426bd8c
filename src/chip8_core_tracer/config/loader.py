import yaml
from pathlib import Path
from typing import Any, Dict, Union
from .models import SystemConfig, DEFAULT_KEY_MAP

class ConfigLoader:
    def load_from_file(self, path: Union[str, Path]) -> SystemConfig:
        with open(path, 'r') as f:
            data = yaml.safe_load(f) or {}
        config = self._parse_config(data)
        # ROMパスは設定ファイルからの相対パスとして解決する
        if config.rom and not Path(config.rom).is_absolute():
            config.rom = str(Path(path).parent / config.rom)
        return config

    def _parse_config(self, data: Dict[str, Any]) -> SystemConfig:
        defaults = SystemConfig()

        key_map = dict(DEFAULT_KEY_MAP)
        if "key_map" in data:
            key_map = {}
            for name, index in (data.get("key_map") or {}).items():
                key = self._parse_int(index)
                if not 0 <= key <= 0xF:
                    raise ValueError(f"Key map entry '{name}' must be a keypad index 0-15, got {key}")
                key_map[str(name)] = key

        seed = data.get("random_seed")
        config = SystemConfig(
            rom=data.get("rom"),
            cycles_per_frame=self._parse_int(data.get("cycles_per_frame", defaults.cycles_per_frame)),
            timer_hz=self._parse_int(data.get("timer_hz", defaults.timer_hz)),
            font_address=self._parse_int(data.get("font_address", defaults.font_address)),
            random_seed=self._parse_int(seed) if seed is not None else None,
            display_scale=self._parse_int(data.get("display_scale", defaults.display_scale)),
            key_map=key_map,
        )

        if config.cycles_per_frame <= 0:
            raise ValueError("cycles_per_frame must be positive")
        if config.timer_hz <= 0:
            raise ValueError("timer_hz must be positive")
        if config.display_scale <= 0:
            raise ValueError("display_scale must be positive")
        return config

    def _parse_int(self, value: Any) -> int:
        if isinstance(value, bool):
            raise ValueError(f"Invalid integer format: {value}")
        if isinstance(value, int):
            return value
        if isinstance(value, str):
            if value.lower().startswith("0x"):
                return int(value, 16)
            return int(value)
        raise ValueError(f"Invalid integer format: {value}")
