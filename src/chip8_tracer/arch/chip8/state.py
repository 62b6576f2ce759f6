# src/chip8_tracer/arch/chip8/state.py
"""
CHIP-8 インタプリタ固有の状態定義。
"""
from dataclasses import dataclass, field
from typing import List

from chip8_tracer.common.types import RegisterMap
from chip8_tracer.core.state import CpuState

# @intent:constant CHIP-8のアドレス空間と各資源のサイズを定義します。
MEMORY_SIZE = 0x1000
PROGRAM_START = 0x200
REGISTER_COUNT = 16
STACK_DEPTH = 16
FLAG_REGISTER = 0xF

# @intent:responsibility CHIP-8の全てのレジスタ（V0-VF, I, PC, SP, DT）とコールスタックを保持します。
@dataclass
class Chip8State(CpuState):
    """
    CHIP-8 インタプリタのレジスタ状態を保持するデータクラス。
    spは次にpushされるスタックスロットの番号で、常に 0..STACK_DEPTH の範囲にあります。
    """
    pc: int = PROGRAM_START
    index: int = 0x000    # Index Register I
    registers: List[int] = field(default_factory=lambda: [0] * REGISTER_COUNT)  # V0-VF
    stack: List[int] = field(default_factory=lambda: [0] * STACK_DEPTH)
    delay_timer: int = 0

    # @intent:accessor VFレジスタ（キャリー/ボロー/衝突フラグ）へのアクセスを提供します。
    @property
    def vf(self) -> int:
        return self.registers[FLAG_REGISTER]

    @vf.setter
    def vf(self, value: int) -> None:
        self.registers[FLAG_REGISTER] = value & 0xFF

    # @intent:responsibility 現在コールスタックに積まれている戻りアドレスを古い順に返します。
    def active_stack(self) -> List[int]:
        return self.stack[:self.sp]

    def as_register_map(self) -> RegisterMap:
        reg_map = {f"V{i:X}": value for i, value in enumerate(self.registers)}
        reg_map.update({"I": self.index, "PC": self.pc, "SP": self.sp, "DT": self.delay_timer})
        return reg_map
