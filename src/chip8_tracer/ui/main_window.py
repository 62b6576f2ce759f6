# src/chip8_tracer/ui/main_window.py
"""
メインウィンドウの実装。
画面表示とレジスタ表示を保持し、QTimerでインタプリタを一定周期で駆動します。
"""
from typing import Optional

from PySide6.QtWidgets import QMainWindow, QApplication, QDockWidget, QToolBar
from PySide6.QtGui import QPalette, QColor, QAction, QKeyEvent
from PySide6.QtCore import Qt, QTimer, Slot

from chip8_tracer.arch.chip8.cpu import Chip8Interpreter
from chip8_tracer.config.models import SystemConfig
from chip8_tracer.core.errors import EmulationError
from chip8_tracer.debugger.debugger import Debugger
from .display_view import DisplayView
from .register_view import RegisterView
from .fonts import get_monospace_font_family

# @intent:responsibility アプリケーションのメインウィンドウを定義し、UIの主要なコンポーネントを組み立てます。
class MainWindow(QMainWindow):
    """
    アプリケーションのメインウィンドウクラス。
    連続実行中はタイマー刻みごとにcycles_per_frame命令を実行し、
    停止中はデバッガ経由でステップ実行・ステップバックを行います。
    """
    def __init__(self, cpu: Chip8Interpreter, config: Optional[SystemConfig] = None, parent=None):
        super(MainWindow, self).__init__(parent)
        self.setWindowTitle("CHIP-8 Core Tracer")
        self._cpu = cpu
        self._config = config or SystemConfig()
        self.debugger = Debugger(self._cpu)

        self._timer = QTimer(self)
        self._timer.setInterval(max(1, round(1000 / self._config.frame_rate)))
        self._timer.timeout.connect(self._on_frame)

        self._set_dark_theme()
        self.display_view = DisplayView(self)
        self.setCentralWidget(self.display_view)
        self._create_status_inspector()
        self._create_toolbar()

        self._refresh_views()
        self._update_ui_state(False)
        self.statusBar().showMessage("Ready")

    def get_interpreter(self) -> Chip8Interpreter:
        return self._cpu

    def is_running(self) -> bool:
        return self._timer.isActive()

    # @intent:responsibility 実行制御用のツールバーを作成します。
    def _create_toolbar(self):
        toolbar = QToolBar("Main Toolbar")
        self.addToolBar(toolbar)

        self.run_action = QAction("Run", self)
        self.run_action.triggered.connect(self.start)
        toolbar.addAction(self.run_action)

        self.stop_action = QAction("Stop", self)
        self.stop_action.triggered.connect(self.stop)
        toolbar.addAction(self.stop_action)

        self.step_action = QAction("Step", self)
        self.step_action.triggered.connect(self._step_debugger)
        toolbar.addAction(self.step_action)

        self.step_back_action = QAction("Step Back", self)
        self.step_back_action.triggered.connect(self._step_back_debugger)
        toolbar.addAction(self.step_back_action)

    # @intent:responsibility 右側のレジスタ表示ドックを作成します。
    def _create_status_inspector(self):
        status_dock = QDockWidget("Registers", self)
        status_dock.setAllowedAreas(Qt.RightDockWidgetArea)
        self.register_view = RegisterView()
        self.register_view.set_cpu(self._cpu)
        status_dock.setWidget(self.register_view)
        self.addDockWidget(Qt.RightDockWidgetArea, status_dock)

    def _update_ui_state(self, is_running: bool):
        self.run_action.setEnabled(not is_running)
        self.step_action.setEnabled(not is_running)
        self.step_back_action.setEnabled(not is_running)
        self.stop_action.setEnabled(is_running)

    def _refresh_views(self):
        self.display_view.update_display(self._cpu.get_framebuffer().snapshot())
        self.register_view.update_registers()

    # @intent:responsibility タイマーによる連続実行を開始します。
    @Slot()
    def start(self):
        self._update_ui_state(True)
        self.statusBar().showMessage("Running...")
        self._timer.start()

    # @intent:responsibility 連続実行を停止し、以降のステップバックの起点を現在状態に置き直します。
    @Slot()
    def stop(self):
        self._timer.stop()
        # タイマー実行中の命令は履歴に残らないため、デバッガを作り直す
        self.debugger = Debugger(self._cpu)
        self._update_ui_state(False)
        self._refresh_views()

    # @intent:responsibility 1フレーム分（cycles_per_frame命令）を実行し、表示を更新します。
    @Slot()
    def _on_frame(self):
        try:
            for _ in range(self._config.cycles_per_frame):
                self._cpu.step()
        except EmulationError as e:
            self.stop()
            self.statusBar().showMessage(f"Execution halted: {e}")
            return
        self._refresh_views()

    @Slot()
    def _step_debugger(self):
        try:
            snapshot = self.debugger.step_instruction()
        except EmulationError as e:
            self.statusBar().showMessage(f"Execution halted: {e}")
            return
        self._refresh_views()
        self.statusBar().showMessage(f"{snapshot.metadata.symbol_info}")

    @Slot()
    def _step_back_debugger(self):
        snapshot = self.debugger.step_back()
        self._refresh_views()
        if snapshot is None:
            self.statusBar().showMessage("Reached start of history.")
        else:
            self.statusBar().showMessage(f"PC: {snapshot.state.pc:#06x}")

    def keyPressEvent(self, event: QKeyEvent):
        if event.key() == Qt.Key_Escape:
            self.close()
            return
        super().keyPressEvent(event)

    def closeEvent(self, event):
        self._timer.stop()
        event.accept()

    # @intent:responsibility アプリケーションにダークテーマを適用します。
    def _set_dark_theme(self):
        dark_palette = QPalette()
        dark_palette.setColor(QPalette.Window, QColor(29, 29, 29))
        dark_palette.setColor(QPalette.WindowText, QColor(224, 224, 224))
        dark_palette.setColor(QPalette.Base, QColor(30, 30, 30))
        dark_palette.setColor(QPalette.Text, QColor(224, 224, 224))
        dark_palette.setColor(QPalette.Button, QColor(53, 53, 53))
        dark_palette.setColor(QPalette.ButtonText, QColor(224, 224, 224))
        dark_palette.setColor(QPalette.Highlight, QColor(42, 130, 218))
        QApplication.setPalette(dark_palette)

        font_family = get_monospace_font_family()
        self.setStyleSheet(f"""
            QWidget {{ font-family: '{font_family}', monospace; font-size: 10pt; }}
            QMainWindow, QToolBar {{ background-color: #1D1D1D; border: none; }}
            QDockWidget::title {{ text-align: left; background: #101010; padding: 4px; font-weight: bold; }}
        """)
