# src/chip8_core_tracer/ui/main_window.py
"""
メインウィンドウの実装。
アプリケーションの主要なUIコンポーネントを保持し、エミュレーションの実行ループとキー入力を管理します。
"""
import warnings
from typing import Dict, Optional

import yaml
from PySide6.QtCore import Qt, QTimer, Slot
from PySide6.QtGui import QAction, QKeyEvent
from PySide6.QtWidgets import (
    QMainWindow, QDockWidget, QTabWidget, QToolBar, QLabel, QFileDialog, QMessageBox,
    QWidget, QVBoxLayout,
)

from chip8_core_tracer.common.errors import Chip8Error
from chip8_core_tracer.config.builder import SystemBuilder
from chip8_core_tracer.config.loader import ConfigLoader
from chip8_core_tracer.config.models import SystemConfig
from chip8_core_tracer.core.runner import FrameRunner
from chip8_core_tracer.debugger.debugger import Debugger
from chip8_core_tracer.loader.loader import RomLoader, FontLoader
from .code_view import CodeView
from .display_view import DisplayView
from .register_view import RegisterView
from .stack_view import StackView
from .theme import apply_dark_palette, get_monospace_font_family

# @intent:utility_function 設定ファイルのキー名（"Q", "1" など）をQtのキーコードからキーパッド番号への辞書に変換します。
def build_qt_key_map(key_map: Dict[str, int]) -> Dict[int, int]:
    qt_map: Dict[int, int] = {}
    for name, index in key_map.items():
        qt_key = getattr(Qt.Key, f"Key_{name.upper()}", None)
        if qt_key is None:
            warnings.warn(f"Unknown key name '{name}' in key map; ignored.")
            continue
        qt_map[qt_key.value if hasattr(qt_key, "value") else int(qt_key)] = index
    return qt_map

# @intent:responsibility アプリケーションのメインウィンドウを定義し、UIの主要なコンポーネントを組み立てます。
class MainWindow(QMainWindow):
    """
    アプリケーションのメインウィンドウクラス。
    QTimer で 1/timer_hz 秒ごとに FrameRunner.run_frame() を呼び出し、表示を更新します。
    """
    def __init__(self, config: Optional[SystemConfig] = None, parent=None):
        super().__init__(parent)
        self.setWindowTitle("CHIP-8 Core Tracer")
        self.setDockNestingEnabled(True)

        self._config = config if config is not None else SystemConfig()
        self._frame_timer = QTimer(self)
        self._frame_timer.timeout.connect(self._run_frame)
        self._halted = False

        apply_dark_palette()
        self.setStyleSheet(f"QWidget {{ font-family: '{get_monospace_font_family()}', monospace; }}")
        self._create_central_widget()
        self._create_status_inspector()
        self._create_toolbar()
        self._create_menus()
        self._setup_backend(self._config)

    # @intent:responsibility Configに基づいてCPU・メモリ・キーパッドを構築し、各ビューに接続します。
    def _setup_backend(self, config: SystemConfig):
        self._config = config
        self.cpu, self.memory, self.keypad = SystemBuilder().build_system(config)
        self.debugger = Debugger(self.cpu)
        self.runner = FrameRunner(self.cpu, config.cycles_per_frame)
        self._qt_key_map = build_qt_key_map(config.key_map)
        self._frame_timer.setInterval(max(1, round(1000 / config.timer_hz)))

        self.display_view.set_scale(config.display_scale)
        self.register_view.set_cpu(self.cpu)
        self.code_view.set_cpu(self.cpu)
        self._halted = False
        self._refresh_views()
        self._update_ui_state(False)

    def _create_central_widget(self):
        central = QWidget()
        layout = QVBoxLayout(central)
        self.display_view = DisplayView(self._config.display_scale)
        layout.addWidget(self.display_view)
        self.status_label = QLabel("Ready")
        self.status_label.setAlignment(Qt.AlignCenter)
        layout.addWidget(self.status_label)
        self.setCentralWidget(central)

    # @intent:responsibility レジスタ・スタック・逆アセンブルの各ビューを右側のドックにタブでまとめます。
    def _create_status_inspector(self):
        self.register_view = RegisterView()
        self.stack_view = StackView()
        self.code_view = CodeView()
        tabs = QTabWidget()
        for view, title in ((self.register_view, "Registers"), (self.stack_view, "Stack"), (self.code_view, "Code")):
            tabs.addTab(view, title)

        dock = QDockWidget("Machine State", self)
        dock.setAllowedAreas(Qt.LeftDockWidgetArea | Qt.RightDockWidgetArea)
        dock.setWidget(tabs)
        self.addDockWidget(Qt.RightDockWidgetArea, dock)

    def _make_action(self, text: str, slot, shortcut: Optional[str] = None) -> QAction:
        action = QAction(text, self)
        if shortcut:
            action.setShortcut(shortcut)
        action.triggered.connect(slot)
        return action

    # @intent:responsibility Run / Stop / Step / Reset のツールバーを作成します。
    def _create_toolbar(self):
        self.run_action = self._make_action("Run", self._start, "F5")
        self.stop_action = self._make_action("Stop", self._stop, "Shift+F5")
        self.step_action = self._make_action("Step", self._step, "F10")
        self.reset_action = self._make_action("Reset", self._reset)

        toolbar = QToolBar("Execution", self)
        toolbar.setMovable(False)
        toolbar.addActions([self.run_action, self.stop_action, self.step_action, self.reset_action])
        self.addToolBar(toolbar)

    def _create_menus(self):
        self.load_rom_action = self._make_action("Load ROM...", self._load_rom_dialog, "Ctrl+O")
        self.load_config_action = self._make_action("Load Config...", self._load_config_dialog)
        file_menu = self.menuBar().addMenu("File")
        file_menu.addActions([self.load_rom_action, self.load_config_action])

    # @intent:responsibility 実行状態に応じてUIコンポーネントの有効/無効を切り替えます。
    # @intent:post-condition 致命的エラーで停止した後は、Reset または再ロードまで Run / Step を無効のままにします。
    def _update_ui_state(self, is_running: bool):
        for action in (self.run_action, self.step_action):
            action.setEnabled(not is_running and not self._halted)
        for action in (self.load_rom_action, self.load_config_action):
            action.setEnabled(not is_running)
        self.stop_action.setEnabled(is_running)

    def is_halted(self) -> bool:
        return self._halted

    def is_running(self) -> bool:
        return self._frame_timer.isActive()

    @Slot()
    def _start(self):
        if self._halted:
            return
        self._update_ui_state(True)
        self.status_label.setText("Running...")
        self._frame_timer.start()

    @Slot()
    def _stop(self):
        self._frame_timer.stop()
        self._update_ui_state(False)
        self.status_label.setText("Stopped")
        self._refresh_views()

    @Slot()
    def _step(self):
        if self._halted:
            return
        try:
            snapshot = self.debugger.step_instruction()
        except Chip8Error as e:
            self._report_error(e)
            return
        self.status_label.setText(snapshot.metadata.symbol_info or "")
        self._refresh_views()

    @Slot()
    def _reset(self):
        self.cpu.reset()
        self.keypad.release_all()
        self.debugger = Debugger(self.cpu)
        self._halted = False
        self._update_ui_state(False)
        self.status_label.setText("Reset")
        self._refresh_views()

    # @intent:responsibility 1フレーム分の命令を実行し、表示を更新します。エラー時は実行を停止します。
    @Slot()
    def _run_frame(self):
        try:
            self.runner.run_frame()
        except Chip8Error as e:
            self._report_error(e)
            return
        state = self.cpu.get_state()
        self.display_view.update_framebuffer(state.framebuffer)
        self.register_view.update_registers()
        if self.cpu.sound_active:
            self.status_label.setText("Running... (sound)")
        else:
            self.status_label.setText("Running...")

    def _report_error(self, error: Chip8Error):
        self._frame_timer.stop()
        self._halted = True
        self._update_ui_state(False)
        self._refresh_views()
        self.status_label.setText(f"Halted: {error}")
        self._show_error("Emulation Error", str(error))

    def _show_error(self, title: str, message: str):
        QMessageBox.critical(self, title, message)

    def _refresh_views(self):
        state = self.cpu.get_state()
        self.display_view.update_framebuffer(state.framebuffer)
        self.register_view.update_registers()
        self.stack_view.update_stack(state)
        self.code_view.update_code(state.pc)

    # @intent:responsibility 現在のメモリを初期化し、フォントとROMをロードし直してCPUをリセットします。
    def load_rom(self, file_name: str):
        self.memory.wipe()
        FontLoader().load_font(self.memory, self._config.font_address)
        size = RomLoader().load_rom(file_name, self.memory)
        self._config.rom = file_name
        self._reset()
        self.status_label.setText(f"Loaded {size} bytes from {file_name}")

    @Slot()
    def _load_rom_dialog(self):
        file_name, _ = QFileDialog.getOpenFileName(self, "Open CHIP-8 ROM", "", "CHIP-8 ROMs (*.ch8 *.c8);;All Files (*)")
        if file_name:
            try:
                self.load_rom(file_name)
            except (OSError, Chip8Error) as e:
                self._show_error("Error", f"Failed to load ROM: {e}")

    @Slot()
    def _load_config_dialog(self):
        file_name, _ = QFileDialog.getOpenFileName(self, "Open Config", "", "YAML Files (*.yaml *.yml);;All Files (*)")
        if file_name:
            try:
                self._setup_backend(ConfigLoader().load_from_file(file_name))
                self.status_label.setText(f"Loaded config {file_name}")
            except (OSError, ValueError, yaml.YAMLError, Chip8Error) as e:
                self._show_error("Error", f"Failed to load config: {e}")

    # @intent:responsibility 物理キーの押下/解放をキーパッドの状態に反映します。
    def keyPressEvent(self, event: QKeyEvent):
        index = self._qt_key_map.get(event.key())
        if index is None or event.isAutoRepeat():
            super().keyPressEvent(event)
            return
        self.keypad.press(index)

    def keyReleaseEvent(self, event: QKeyEvent):
        index = self._qt_key_map.get(event.key())
        if index is None or event.isAutoRepeat():
            super().keyReleaseEvent(event)
            return
        self.keypad.release(index)

    def closeEvent(self, event):
        self._frame_timer.stop()
        event.accept()
