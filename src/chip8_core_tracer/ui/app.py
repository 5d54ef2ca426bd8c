# src/chip8_core_tracer/ui/app.py
"""
PySide6アプリケーションのエントリポイント。
コマンドライン引数（ROMファイルまたはYAML設定ファイル）を解釈し、メインウィンドウを起動します。
"""
import sys
from pathlib import Path
from typing import List, Optional

from PySide6.QtWidgets import QApplication

from chip8_core_tracer.config.loader import ConfigLoader
from chip8_core_tracer.config.models import SystemConfig
from .main_window import MainWindow

# @intent:utility_function 起動引数から SystemConfig を構築します。.yaml/.yml は設定ファイル、それ以外はROMとして扱います。
def config_from_args(args: List[str]) -> Optional[SystemConfig]:
    if not args:
        return None
    path = Path(args[0])
    if path.suffix.lower() in (".yaml", ".yml"):
        return ConfigLoader().load_from_file(path)
    return SystemConfig(rom=str(path))

# @intent:responsibility アプリケーションを起動し、メインウィンドウを表示します。
def main():
    """
    アプリケーションのメイン関数。
    """
    app = QApplication(sys.argv)
    main_win = MainWindow(config_from_args(sys.argv[1:]))
    main_win.show()
    sys.exit(app.exec())

if __name__ == '__main__':
    main()
