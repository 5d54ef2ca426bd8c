# src/chip8_core_tracer/ui/theme.py
"""
UIテーマ管理モジュール。

ダークテーマのパレットと、クロスプラットフォームで利用可能な等幅フォントの選択を提供します。
"""
from PySide6.QtGui import QColor, QFontDatabase, QPalette
from PySide6.QtWidgets import QApplication

# --- 色定義 ---
COLOR_PIXEL_ON = "#33FF66"
COLOR_PIXEL_OFF = "#101010"
COLOR_VALUE = "#FFD700"
COLOR_HIGHLIGHT = "#2A82DA"

# @intent:responsibility 現在のシステムで利用可能な最適な等幅フォントファミリー名を返します。
def get_monospace_font_family() -> str:
    """
    優先順位: Consolas -> Menlo -> DejaVu Sans Mono -> Qtのシステム等幅フォント
    """
    available_families = QFontDatabase.families()
    for font in ("Consolas", "Menlo", "DejaVu Sans Mono"):
        if font in available_families:
            return font
    return QFontDatabase.systemFont(QFontDatabase.FixedFont).family()

# @intent:responsibility アプリケーション全体にダークテーマのパレットを適用します。
def apply_dark_palette() -> None:
    palette = QPalette()
    palette.setColor(QPalette.Window, QColor(29, 29, 29))
    palette.setColor(QPalette.WindowText, QColor(224, 224, 224))
    palette.setColor(QPalette.Base, QColor(30, 30, 30))
    palette.setColor(QPalette.AlternateBase, QColor(53, 53, 53))
    palette.setColor(QPalette.Text, QColor(224, 224, 224))
    palette.setColor(QPalette.Button, QColor(53, 53, 53))
    palette.setColor(QPalette.ButtonText, QColor(224, 224, 224))
    palette.setColor(QPalette.Highlight, QColor(COLOR_HIGHLIGHT))
    palette.setColor(QPalette.HighlightedText, QColor(0, 0, 0))
    QApplication.setPalette(palette)
