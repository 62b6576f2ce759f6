"""
フレームバッファをRGBAピクセル列へ変換するレンダラ。

Qtに依存しないため、任意の描画先（QImage、画像ファイル等）から利用できます。
"""
from typing import Tuple, Union

from chip8_tracer.arch.chip8.framebuffer import Framebuffer
from chip8_tracer.common.types import PixelGrid

Color = Tuple[int, int, int, int]

ON_COLOR: Color = (0xFF, 0xFF, 0xFF, 0xFF)
OFF_COLOR: Color = (0x00, 0x00, 0x00, 0x00)

# @intent:responsibility 画素グリッドを行優先のRGBAバイト列に変換します。
def render_rgba(
    source: Union[Framebuffer, PixelGrid],
    on_color: Color = ON_COLOR,
    off_color: Color = OFF_COLOR,
) -> bytes:
    """
    点灯画素をon_color、消灯画素をoff_colorとして、幅x高さx4バイトのRGBA列を返します。
    """
    pixels = source.snapshot() if isinstance(source, Framebuffer) else source
    on = bytes(on_color)
    off = bytes(off_color)
    return b"".join(on if pixel else off for row in pixels for pixel in row)
