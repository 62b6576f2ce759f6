# src/chip8_tracer/arch/chip8/instructions/load.py
"""
ロード/ストア命令の実装（レジスタ間転送、即値ロード、メモリブロック転送）。
"""
from .base import Chip8Operation, ExecutionContext, check_memory_range

# --- 6xnn LD Vx, byte ---
def execute_ld_vx_nn(ctx: ExecutionContext, op: Chip8Operation) -> None:
    ctx.state.registers[op.x] = op.nn

# --- 7xnn ADD Vx, byte ---
# @intent:responsibility 8ビットで桁あふれさせて加算します。VFは変更しません。
def execute_add_vx_nn(ctx: ExecutionContext, op: Chip8Operation) -> None:
    registers = ctx.state.registers
    registers[op.x] = (registers[op.x] + op.nn) & 0xFF

# --- 8xy0 LD Vx, Vy ---
def execute_ld_vx_vy(ctx: ExecutionContext, op: Chip8Operation) -> None:
    registers = ctx.state.registers
    registers[op.x] = registers[op.y]

# --- Annn LD I, addr ---
def execute_ld_i(ctx: ExecutionContext, op: Chip8Operation) -> None:
    ctx.state.index = op.nnn

# --- Fx15 LD DT, Vx ---
def execute_ld_dt_vx(ctx: ExecutionContext, op: Chip8Operation) -> None:
    ctx.state.delay_timer = ctx.state.registers[op.x]

# --- Fx33 LD B, Vx ---
# @intent:responsibility Vxの10進表記の各桁（百、十、一）を I, I+1, I+2 に格納します。
def execute_ld_b_vx(ctx: ExecutionContext, op: Chip8Operation) -> None:
    base = ctx.state.index
    check_memory_range(op, base, 3)
    value = ctx.state.registers[op.x]
    ctx.bus.write(base, value // 100)
    ctx.bus.write(base + 1, (value % 100) // 10)
    ctx.bus.write(base + 2, value % 10)

# --- Fx55 LD [I], Vx ---
# @intent:responsibility V0..Vx を I から始まるメモリへ格納します。Iは変更しません。
def execute_ld_mem_vx(ctx: ExecutionContext, op: Chip8Operation) -> None:
    base = ctx.state.index
    check_memory_range(op, base, op.x + 1)
    for offset in range(op.x + 1):
        ctx.bus.write(base + offset, ctx.state.registers[offset])

# --- Fx65 LD Vx, [I] ---
# @intent:responsibility I から始まるメモリを V0..Vx へ読み込みます。Iは変更しません。
def execute_ld_vx_mem(ctx: ExecutionContext, op: Chip8Operation) -> None:
    base = ctx.state.index
    check_memory_range(op, base, op.x + 1)
    for offset in range(op.x + 1):
        ctx.state.registers[offset] = ctx.bus.read(base + offset)
