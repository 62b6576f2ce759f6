# src/chip8_tracer/arch/chip8/instructions/base.py
"""
CHIP-8命令実装用の共通定義とユーティリティ。
"""
from dataclasses import dataclass
from enum import Enum

from chip8_tracer.core.snapshot import Operation
from chip8_tracer.core.errors import MemoryAccessError
from chip8_tracer.transport.bus import Bus
from chip8_tracer.config.models import QuirkConfig
from chip8_tracer.arch.chip8.state import Chip8State, MEMORY_SIZE
from chip8_tracer.arch.chip8.framebuffer import Framebuffer

INSTRUCTION_LENGTH = 2

# @intent:responsibility デコード結果となる命令の種別（タグ）を定義します。値は命令語のパターン表記です。
class OpcodePattern(Enum):
    CLS = "00E0"
    RET = "00EE"
    JP = "1NNN"
    CALL = "2NNN"
    SE_VX_NN = "3XNN"
    SNE_VX_NN = "4XNN"
    SE_VX_VY = "5XY0"
    LD_VX_NN = "6XNN"
    ADD_VX_NN = "7XNN"
    LD_VX_VY = "8XY0"
    OR = "8XY1"
    AND = "8XY2"
    XOR = "8XY3"
    ADD_VX_VY = "8XY4"
    SUB = "8XY5"
    SHR = "8XY6"
    SUBN = "8XY7"
    SHL = "8XYE"
    SNE_VX_VY = "9XY0"
    LD_I = "ANNN"
    JP_V0 = "BNNN"
    DRW = "DXYN"
    LD_DT_VX = "FX15"
    LD_B_VX = "FX33"
    LD_MEM_VX = "FX55"
    LD_VX_MEM = "FX65"

# @intent:responsibility デコード済みのCHIP-8命令。共通オペランド形式を全て保持します。
@dataclass(frozen=True)
class Chip8Operation(Operation):
    """
    Operationに命令種別と分解済みのオペランド（x, y, n, nn, nnn）を加えたもの。
    addressは命令の先頭アドレスで、エラー報告に使用します。
    """
    pattern: OpcodePattern = OpcodePattern.CLS
    address: int = 0
    x: int = 0
    y: int = 0
    n: int = 0
    nn: int = 0
    nnn: int = 0

# @intent:responsibility 命令実行時に参照・変更される資源をまとめます。
@dataclass
class ExecutionContext:
    state: Chip8State
    bus: Bus
    framebuffer: Framebuffer
    quirks: QuirkConfig

# @intent:utility_function 命令語を4つのニブルに分解します。
def split_nibbles(opcode: int):
    return (opcode >> 12) & 0xF, (opcode >> 8) & 0xF, (opcode >> 4) & 0xF, opcode & 0xF

# @intent:utility_function バスから16ビットワードをビッグエンディアン形式で読み込みます。
def read_word(bus: Bus, addr: int) -> int:
    """Big-endian 16-bit read."""
    return (bus.read(addr) << 8) | bus.read(addr + 1)

# @intent:utility_function Iレジスタ相対のアクセス範囲がアドレス空間内であることを検証します。
# @intent:rationale 書き込みを始める前に検証し、途中までの書き込みが残らないようにする。
def check_memory_range(op: Chip8Operation, start: int, count: int) -> None:
    if count > 0 and (start < 0 or start + count > MEMORY_SIZE):
        raise MemoryAccessError(op.address, start, count)

# @intent:utility_function 次の命令をスキップします（PCは既に次の命令を指している）。
def skip_next(state: Chip8State) -> None:
    state.pc = (state.pc + INSTRUCTION_LENGTH) & 0xFFFF
