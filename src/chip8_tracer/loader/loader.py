# chip8_tracer/loader/loader.py
"""
コードローダーモジュール。
ヘッダを持たない生のCHIP-8プログラムイメージ（.ch8）のロードをサポートします。
"""
from chip8_tracer.arch.chip8.cpu import Chip8Interpreter

class RomLoader:
    """
    ROMファイルを読み込み、インタプリタのプログラム領域へロードするローダー。
    """
    def load_rom(self, file_path: str) -> bytes:
        with open(file_path, 'rb') as f:
            data = f.read()
        if not data:
            raise ValueError(f"ROM file is empty: {file_path}")
        return data

    # @intent:responsibility ROMファイルを読み込んでロードし、切り捨てたバイト数を返します。
    def load_into(self, file_path: str, cpu: Chip8Interpreter) -> int:
        return cpu.load(self.load_rom(file_path))
