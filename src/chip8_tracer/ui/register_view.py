"""
CPUのレジスタを表示する汎用ウィジェット。
AbstractCpuのレイアウト定義を利用して動的にUIを構築します。
"""
from typing import Dict, Optional
from PySide6.QtWidgets import QWidget, QVBoxLayout, QGridLayout, QLabel, QGroupBox
from PySide6.QtCore import Qt

from chip8_tracer.core.cpu import AbstractCpu
from chip8_tracer.ui.fonts import get_monospace_font_family

# 1行に並べるレジスタ数（V0-VFを4x4で表示するため）
COLUMNS = 4

# @intent:responsibility CPUのレジスタ値を表示する汎用UIウィジェットを提供します。
class RegisterView(QWidget):
    """
    CPUのレジスタ状態を表示するウィジェット。
    set_cpu()で渡されたCPUのget_register_layout()に基づいてラベルを生成します。
    """
    def __init__(self, parent=None):
        super().__init__(parent)
        self.setStyleSheet("background-color: #121212; color: #BBBBBB;")

        self._layout = QVBoxLayout(self)
        self._layout.setContentsMargins(5, 5, 5, 5)

        self._font_family = get_monospace_font_family()
        self._register_labels: Dict[str, QLabel] = {}
        self._register_widths: Dict[str, int] = {}
        self._cpu: Optional[AbstractCpu] = None

    # @intent:responsibility 表示対象のCPUを設定し、UIレイアウトを構築します。
    def set_cpu(self, cpu: AbstractCpu) -> None:
        self._cpu = cpu
        self._setup_ui()
        self.update_registers()

    def _setup_ui(self):
        # 既存のウィジェットをクリア
        while self._layout.count():
            item = self._layout.takeAt(0)
            if item.widget():
                item.widget().deleteLater()
        self._register_labels.clear()
        self._register_widths.clear()

        for group in self._cpu.get_register_layout():
            group_box = QGroupBox(group.group_name)
            group_box.setStyleSheet("QGroupBox { font-weight: bold; color: #EEE; } QGroupBox::title { color: #00AAAA; }")
            grid = QGridLayout(group_box)
            grid.setContentsMargins(10, 15, 10, 10)
            grid.setSpacing(5)

            for i, reg in enumerate(group.registers):
                hex_width = (reg.width + 3) // 4 # 16bit -> 4chars, 8bit -> 2chars
                self._register_widths[reg.name] = hex_width

                label_name = QLabel(f"{reg.name}:")
                label_name.setStyleSheet("font-weight: bold; color: #BBBBBB;")
                label_value = QLabel(f"0x{'0' * hex_width}")
                label_value.setStyleSheet(f"font-family: '{self._font_family}', monospace; color: #FFD700;")
                label_value.setAlignment(Qt.AlignRight)

                row, col = divmod(i, COLUMNS)
                grid.addWidget(label_name, row, col * 2)
                grid.addWidget(label_value, row, col * 2 + 1)
                self._register_labels[reg.name] = label_value

            self._layout.addWidget(group_box)

        self._layout.addStretch()

    # @intent:responsibility 現在のCPU状態を取得し、レジスタの表示値を更新します。
    def update_registers(self):
        if not self._cpu:
            return

        for name, value in self._cpu.get_register_map().items():
            if name in self._register_labels:
                width = self._register_widths[name]
                self._register_labels[name].setText(f"0x{value:0{width}X}")

    # @intent:responsibility 指定レジスタの表示文字列を返します（未表示ならNone）。
    def get_register_text(self, name: str) -> Optional[str]:
        label = self._register_labels.get(name)
        return label.text() if label else None
