# src/chip8_tracer/arch/chip8/instructions/control.py
"""
分岐・サブルーチン・スキップ命令の実装。

実行時点でPCは既に次の命令（命令アドレス+2）を指しています。
"""
from chip8_tracer.core.errors import StackOverflowError, StackUnderflowError
from chip8_tracer.arch.chip8.state import STACK_DEPTH
from .base import Chip8Operation, ExecutionContext, skip_next

# --- 00EE RET ---
# @intent:responsibility サブルーチンから復帰します。スタックが空の場合は何も変更せずにエラーとします。
def execute_ret(ctx: ExecutionContext, op: Chip8Operation) -> None:
    state = ctx.state
    if state.sp == 0:
        raise StackUnderflowError(op.address)
    state.sp -= 1
    state.pc = state.stack[state.sp]

# --- 1nnn JP addr ---
def execute_jp(ctx: ExecutionContext, op: Chip8Operation) -> None:
    ctx.state.pc = op.nnn

# --- 2nnn CALL addr ---
# @intent:responsibility 戻りアドレス(命令アドレス+2)をpushしてサブルーチンへ分岐します。
def execute_call(ctx: ExecutionContext, op: Chip8Operation) -> None:
    state = ctx.state
    if state.sp >= STACK_DEPTH:
        raise StackOverflowError(op.address, state.sp)
    state.stack[state.sp] = state.pc
    state.sp += 1
    state.pc = op.nnn

# --- 3xnn SE Vx, byte ---
def execute_se_vx_nn(ctx: ExecutionContext, op: Chip8Operation) -> None:
    if ctx.state.registers[op.x] == op.nn:
        skip_next(ctx.state)

# --- 4xnn SNE Vx, byte ---
def execute_sne_vx_nn(ctx: ExecutionContext, op: Chip8Operation) -> None:
    if ctx.state.registers[op.x] != op.nn:
        skip_next(ctx.state)

# --- 5xy0 SE Vx, Vy ---
def execute_se_vx_vy(ctx: ExecutionContext, op: Chip8Operation) -> None:
    registers = ctx.state.registers
    if registers[op.x] == registers[op.y]:
        skip_next(ctx.state)

# --- 9xy0 SNE Vx, Vy ---
def execute_sne_vx_vy(ctx: ExecutionContext, op: Chip8Operation) -> None:
    registers = ctx.state.registers
    if registers[op.x] != registers[op.y]:
        skip_next(ctx.state)

# --- Bnnn JP V0, addr ---
def execute_jp_v0(ctx: ExecutionContext, op: Chip8Operation) -> None:
    ctx.state.pc = (ctx.state.registers[0] + op.nnn) & 0xFFFF
