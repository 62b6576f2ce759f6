# src/chip8_tracer/ui/app.py
"""
Qtアプリケーションのエントリポイント。
ROMとシステム構成を読み込み、メインウィンドウを起動します。
"""
import argparse
import sys
from typing import List, Optional

from PySide6.QtWidgets import QApplication

from chip8_tracer.config.builder import SystemBuilder
from chip8_tracer.config.loader import ConfigLoader
from chip8_tracer.config.models import SystemConfig
from .main_window import MainWindow

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="chip8-tracer", description="CHIP-8 interpreter with tracing front-end")
    parser.add_argument("rom", help="path to a raw CHIP-8 program image")
    parser.add_argument("--config", help="YAML system configuration file")
    return parser

# @intent:responsibility コマンドライン引数からシステム構成を組み立てます。ROM引数は構成ファイルのprogramより優先されます。
def load_system_config(args: argparse.Namespace) -> SystemConfig:
    config = ConfigLoader().load_from_file(args.config) if args.config else SystemConfig()
    config.program = args.rom
    return config

# @intent:responsibility アプリケーションを起動し、メインウィンドウを表示します。
def main(argv: Optional[List[str]] = None):
    args = build_parser().parse_args(argv)
    config = load_system_config(args)
    cpu, _ = SystemBuilder().build_system(config)

    app = QApplication(sys.argv)
    main_win = MainWindow(cpu, config)
    main_win.show()
    main_win.start()
    sys.exit(app.exec())

if __name__ == '__main__':
    main()
