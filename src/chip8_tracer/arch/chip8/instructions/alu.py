# src/chip8_tracer/arch/chip8/instructions/alu.py
"""
算術論理演算命令 (8xyN) の実装。

フラグを生成する命令は、オペランドを全て読み出してからVxを書き込み、
最後にVFへフラグを書き込みます。x == 0xF の場合、VFに残るのはフラグです。
"""
from .base import Chip8Operation, ExecutionContext

# @intent:utility_function 8ビット加算の結果とキャリーを返します。
def add8(v1: int, v2: int):
    total = v1 + v2
    return total & 0xFF, 1 if total > 0xFF else 0

# @intent:utility_function 8ビット減算の結果と「ボローなし」フラグを返します。
def sub8(v1: int, v2: int):
    return (v1 - v2) & 0xFF, 1 if v1 >= v2 else 0

# --- 8xy1 OR Vx, Vy ---
def execute_or(ctx: ExecutionContext, op: Chip8Operation) -> None:
    registers = ctx.state.registers
    registers[op.x] |= registers[op.y]

# --- 8xy2 AND Vx, Vy ---
def execute_and(ctx: ExecutionContext, op: Chip8Operation) -> None:
    registers = ctx.state.registers
    registers[op.x] &= registers[op.y]

# --- 8xy3 XOR Vx, Vy ---
def execute_xor(ctx: ExecutionContext, op: Chip8Operation) -> None:
    registers = ctx.state.registers
    registers[op.x] ^= registers[op.y]

# --- 8xy4 ADD Vx, Vy ---
def execute_add_vx_vy(ctx: ExecutionContext, op: Chip8Operation) -> None:
    state = ctx.state
    result, carry = add8(state.registers[op.x], state.registers[op.y])
    state.registers[op.x] = result
    state.vf = carry

# --- 8xy5 SUB Vx, Vy ---
# @intent:compatibility 既定では和 Vx+Vy を格納し、その桁あふれをVFとする（既存ROM互換の挙動）。
#                      quirks.sum_carry_subtract=False で通常の減算 Vx-Vy（VF=ボローなし）になる。
def execute_sub(ctx: ExecutionContext, op: Chip8Operation) -> None:
    state = ctx.state
    vx, vy = state.registers[op.x], state.registers[op.y]
    if ctx.quirks.sum_carry_subtract:
        result, flag = add8(vx, vy)
    else:
        result, flag = sub8(vx, vy)
    state.registers[op.x] = result
    state.vf = flag

# --- 8xy6 SHR Vx ---
# @intent:compatibility 既定ではVFにVxの下位ニブル（最下位ビットではない）を格納する。
def execute_shr(ctx: ExecutionContext, op: Chip8Operation) -> None:
    state = ctx.state
    vx = state.registers[op.x]
    flag = vx & 0x0F if ctx.quirks.shift_flag_low_nibble else vx & 0x01
    state.registers[op.x] = vx >> 1
    state.vf = flag

# --- 8xy7 SUBN Vx, Vy ---
# @intent:compatibility 8xy5と同じく、既定では和 Vy+Vx とその桁あふれを使用する。
def execute_subn(ctx: ExecutionContext, op: Chip8Operation) -> None:
    state = ctx.state
    vx, vy = state.registers[op.x], state.registers[op.y]
    if ctx.quirks.sum_carry_subtract:
        result, flag = add8(vy, vx)
    else:
        result, flag = sub8(vy, vx)
    state.registers[op.x] = result
    state.vf = flag

# --- 8xyE SHL Vx ---
def execute_shl(ctx: ExecutionContext, op: Chip8Operation) -> None:
    state = ctx.state
    vx = state.registers[op.x]
    state.registers[op.x] = (vx << 1) & 0xFF
    state.vf = vx >> 7
