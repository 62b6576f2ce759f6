# src/chip8_tracer/arch/chip8/framebuffer.py
"""
CHIP-8 モノクロフレームバッファ。

64x32 の二値画素を行優先で保持します。座標は常に幅・高さで剰余を取り、
範囲外アクセスは発生しません。
"""
from typing import List

from chip8_tracer.common.types import PixelGrid

DISPLAY_WIDTH = 64
DISPLAY_HEIGHT = 32

# @intent:responsibility スプライト描画の対象となる画素グリッドを管理します。
class Framebuffer:
    """
    CHIP-8の画面を表す二値画素のグリッド。
    インタプリタが排他的に所有し、DxynとCLS命令によってのみ変更されます。
    """
    def __init__(self, width: int = DISPLAY_WIDTH, height: int = DISPLAY_HEIGHT):
        if width <= 0 or height <= 0:
            raise ValueError("Framebuffer dimensions must be positive.")
        self._width = width
        self._height = height
        self._pixels: List[List[bool]] = [[False] * width for _ in range(height)]

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    # @intent:responsibility 全画素を消灯します。
    def clear(self) -> None:
        for row in self._pixels:
            for x in range(self._width):
                row[x] = False

    # @intent:responsibility 指定画素にbitをXORし、XOR前の画素値を返します。
    # @intent:rationale 戻り値は呼び出し側（Dxyn）が衝突判定に使用します。
    def toggle(self, x: int, y: int, bit: int) -> bool:
        row = self._pixels[y % self._height]
        col = x % self._width
        previous = row[col]
        row[col] = previous ^ bool(bit & 1)
        return previous

    def get_pixel(self, x: int, y: int) -> bool:
        return self._pixels[y % self._height][x % self._width]

    def set_pixel(self, x: int, y: int, value: bool) -> None:
        self._pixels[y % self._height][x % self._width] = bool(value)

    # @intent:responsibility 点灯している画素数を返します。
    def count_lit(self) -> int:
        return sum(sum(row) for row in self._pixels)

    # @intent:responsibility 描画用の読み取り専用ビューを返します。
    # @intent:post-condition 戻り値はタプルのため、以降の描画によって変化しません。
    def snapshot(self) -> PixelGrid:
        return tuple(tuple(row) for row in self._pixels)

    # @intent:responsibility snapshot()で取得したビューを書き戻します（デバッガの巻き戻し用）。
    def restore(self, pixels: PixelGrid) -> None:
        if len(pixels) != self._height or any(len(row) != self._width for row in pixels):
            raise ValueError(
                f"Pixel grid does not match framebuffer size {self._width}x{self._height}."
            )
        self._pixels = [list(row) for row in pixels]
