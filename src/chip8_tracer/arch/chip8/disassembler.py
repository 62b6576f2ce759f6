# src/chip8_tracer/arch/chip8/disassembler.py
"""
CHIP-8 Disassembler

メモリ上のバイナリデータを解析し、CHIP-8のニーモニックに変換します。
Instruction Layerのデコードロジックを再利用し、バスへのアクセスはpeek（ログなし）で行います。
"""
from typing import List

from chip8_tracer.common.types import DisassemblyLine
from chip8_tracer.core.errors import UnimplementedOpcodeError
from chip8_tracer.transport.bus import Bus
from chip8_tracer.arch.chip8.instructions import decode_opcode, INSTRUCTION_LENGTH

# @intent:responsibility 指定されたメモリ範囲を逆アセンブルし、表示用データを生成します。
def disassemble(bus: Bus, start_addr: int, length: int) -> List[DisassemblyLine]:
    """
    指定された範囲のメモリを2バイト単位で逆アセンブルします。
    未定義の命令語はデータとして "DW $xxxx" と表示します。

    Returns:
        List of (address, hex_bytes, mnemonic) tuples.
    """
    result = []
    current_addr = start_addr
    end_addr = start_addr + length

    while current_addr < end_addr:
        # メモリ境界チェック
        if not (bus.is_mapped(current_addr) and bus.is_mapped(current_addr + 1)):
            break

        hi = bus.peek(current_addr)
        lo = bus.peek(current_addr + 1)
        opcode = (hi << 8) | lo
        try:
            mnemonic_str = decode_opcode(opcode, current_addr).to_text()
        except UnimplementedOpcodeError:
            mnemonic_str = f"DW ${opcode:04X}"

        result.append((current_addr, f"{hi:02X} {lo:02X}", mnemonic_str))
        current_addr += INSTRUCTION_LENGTH

    return result
