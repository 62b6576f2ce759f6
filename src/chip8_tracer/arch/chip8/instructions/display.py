# src/chip8_tracer/arch/chip8/instructions/display.py
"""
画面命令 (00E0, Dxyn) の実装。
"""
from .base import Chip8Operation, ExecutionContext, check_memory_range

SPRITE_WIDTH = 8

# --- 00E0 CLS ---
def execute_cls(ctx: ExecutionContext, op: Chip8Operation) -> None:
    ctx.framebuffer.clear()

# --- Dxyn DRW Vx, Vy, n ---
# @intent:responsibility Iから始まるn行のスプライトを(Vx, Vy)にXOR描画し、衝突をVFに報告します。
# @intent:rationale 座標レジスタは描画前に読み出しておく。x/yにVFを指定しても
#                  衝突フラグの書き込みが座標計算に影響しない。
def execute_drw(ctx: ExecutionContext, op: Chip8Operation) -> None:
    state = ctx.state
    fb = ctx.framebuffer
    check_memory_range(op, state.index, op.n)

    origin_x = state.registers[op.x]
    origin_y = state.registers[op.y]
    collision = 0
    for row in range(op.n):
        sprite_byte = ctx.bus.read(state.index + row)
        for col in range(SPRITE_WIDTH):
            bit = (sprite_byte >> (7 - col)) & 1
            was_on = fb.toggle(origin_x + col, origin_y + row, bit)
            collision |= bit & int(was_on)
    state.vf = collision
