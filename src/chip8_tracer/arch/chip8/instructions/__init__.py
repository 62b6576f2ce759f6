# src/chip8_tracer/arch/chip8/instructions/__init__.py
"""
CHIP-8命令セット実装パッケージ。
"""
from typing import Optional

from chip8_tracer.core.errors import UnimplementedOpcodeError
from .base import Chip8Operation, ExecutionContext, OpcodePattern, INSTRUCTION_LENGTH, split_nibbles
from .maps import DECODE_MAP, EXECUTE_MAP, SYNTAX_MAP

# @intent:responsibility 命令語に一致する命令種別を返します。一致しなければNone。
def match_pattern(opcode: int) -> Optional[OpcodePattern]:
    for mask, match, pattern in DECODE_MAP.get((opcode >> 12) & 0xF, []):
        if opcode & mask == match:
            return pattern
    return None

# @intent:responsibility CHIP-8の命令語をデコードします。
# @intent:post-condition どの規則にも一致しない命令語はUnimplementedOpcodeErrorとなり、効果を推測しません。
def decode_opcode(opcode: int, address: int) -> Chip8Operation:
    """
    16ビットの命令語を分解し、命令種別とオペランドを持つChip8Operationを返します。
    """
    pattern = match_pattern(opcode)
    if pattern is None:
        raise UnimplementedOpcodeError(opcode, address)

    _, x, y, n = split_nibbles(opcode)
    nn = opcode & 0x00FF
    nnn = opcode & 0x0FFF
    mnemonic, syntax = SYNTAX_MAP[pattern]
    operands = [fmt.format(x=x, y=y, n=n, nn=nn, nnn=nnn) for fmt in syntax]

    return Chip8Operation(
        opcode_hex=f"{opcode:04X}",
        mnemonic=mnemonic,
        operands=operands,
        operand_bytes=[opcode >> 8, opcode & 0xFF],
        cycle_count=1,
        length=INSTRUCTION_LENGTH,
        pattern=pattern,
        address=address,
        x=x,
        y=y,
        n=n,
        nn=nn,
        nnn=nnn,
    )

# @intent:responsibility デコードされたCHIP-8命令を実行します。
def execute_instruction(ctx: ExecutionContext, operation: Chip8Operation) -> None:
    """
    デコードされたCHIP-8命令を実行し、CPUの状態・メモリ・画面を変更します。
    """
    EXECUTE_MAP[operation.pattern](ctx, operation)
