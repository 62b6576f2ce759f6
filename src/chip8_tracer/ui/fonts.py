"""
UIフォント管理モジュール。

レジスタ表示やステータス表示で使用する等幅フォントを選択します。
"""
from PySide6.QtGui import QFontDatabase

# 優先順位順の候補。いずれも無い場合はQtのシステム等幅フォントを使用する。
PREFERRED_MONOSPACE_FONTS = ["Consolas", "Menlo", "DejaVu Sans Mono", "Courier New"]

# @intent:responsibility 現在のシステムで利用可能な最適な等幅フォントファミリー名を返します。
def get_monospace_font_family() -> str:
    available_families = set(QFontDatabase.families())
    for font in PREFERRED_MONOSPACE_FONTS:
        if font in available_families:
            return font
    return QFontDatabase.systemFont(QFontDatabase.FixedFont).family()
