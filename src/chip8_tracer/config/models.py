from dataclasses import dataclass, field
from typing import List, Optional

@dataclass
class MemoryRegion:
    start: int
    end: int
    type: str = "RAM"  # CHIP-8はフォント領域も書き込み可能なためRAMのみ
    label: str = ""

@dataclass
class QuirkConfig:
    # 8xy5/8xy7 で和とその桁あふれを使用する（既存ROM互換）。Falseで通常の減算。
    sum_carry_subtract: bool = True
    # 8xy6 でVFに下位ニブルを格納する（既存ROM互換）。Falseで最下位ビット。
    shift_flag_low_nibble: bool = True
    # step() ごとにディレイタイマーを1減算する。Falseの場合はホストがtick_timers()を呼ぶ。
    couple_delay_timer: bool = True

@dataclass
class CpuInitialState:
    pc: int = 0x200
    index: int = 0x000
    delay_timer: int = 0
    registers: dict = field(default_factory=dict)  # 例: {"V0": 0x12}

def default_memory_map() -> List[MemoryRegion]:
    return [
        MemoryRegion(0x000, 0x1FF, "RAM", "Interpreter/Font"),
        MemoryRegion(0x200, 0xFFF, "RAM", "Program"),
    ]

@dataclass
class SystemConfig:
    architecture: str = "CHIP8"
    memory_map: List[MemoryRegion] = field(default_factory=default_memory_map)
    initial_state: CpuInitialState = field(default_factory=CpuInitialState)
    quirks: QuirkConfig = field(default_factory=QuirkConfig)
    program: Optional[str] = None  # ロードするROMファイルのパス
    frame_rate: int = 60           # フロントエンドの更新頻度 (Hz)
    cycles_per_frame: int = 10     # 1フレームあたりのstep()回数
