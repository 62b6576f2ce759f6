# src/chip8_tracer/arch/chip8/cpu.py
"""
CHIP-8 インタプリタ（フェッチ・デコード・実行エンジン）の中心モジュール。
"""
from typing import Dict, List, Optional

from chip8_tracer.common.types import DisassemblyLine, PixelGrid, RegisterInfo, RegisterLayoutInfo, RegisterMap
from chip8_tracer.config.models import QuirkConfig
from chip8_tracer.core.cpu import AbstractCpu
from chip8_tracer.core.errors import InvalidProgramCounterError, warn_truncated
from chip8_tracer.core.snapshot import Operation
from chip8_tracer.transport.bus import Bus, RAM
from chip8_tracer.arch.chip8.font import FONT_SET, FONT_START
from chip8_tracer.arch.chip8.framebuffer import Framebuffer
from chip8_tracer.arch.chip8.state import Chip8State, MEMORY_SIZE, PROGRAM_START, REGISTER_COUNT
from chip8_tracer.arch.chip8.instructions import ExecutionContext, decode_opcode, execute_instruction
from chip8_tracer.arch.chip8.instructions.base import read_word
from chip8_tracer.arch.chip8 import disassembler

# @intent:utility_function CHIP-8標準の4KB RAMを0x000-0xFFFにマップしたバスを生成します。
def create_default_bus() -> Bus:
    bus = Bus()
    bus.register_device(0x000, MEMORY_SIZE - 1, RAM(MEMORY_SIZE))
    return bus

# @intent:pre-condition 0x000からMEMORY_SIZE-1までの全アドレスがバスにマップされていることを検証します。
def check_address_space(bus: Bus) -> None:
    for address in range(MEMORY_SIZE):
        if not bus.is_mapped(address):
            raise ValueError(
                f"Memory map must cover 0x000-0x{MEMORY_SIZE - 1:03X}; address 0x{address:03X} is not mapped"
            )

# @intent:responsibility CHIP-8の具体的なエミュレーションロジック（フェッチ、デコード、実行）を提供します。
class Chip8Interpreter(AbstractCpu):
    """
    CHIP-8 仮想マシンをエミュレートするクラス。

    メモリ（バス経由）、レジスタ、PC、コールスタック、Iレジスタ、ディレイタイマー、
    フレームバッファを排他的に所有します。ホストはload()でプログラムを一度ロードし、
    以降step()を繰り返し呼び出します。
    """
    def __init__(self, bus: Optional[Bus] = None, quirks: Optional[QuirkConfig] = None):
        self._framebuffer = Framebuffer()
        self._quirks = quirks or QuirkConfig()
        bus = bus if bus is not None else create_default_bus()
        check_address_space(bus)
        super().__init__(bus)
        self._load_font()

    # @intent:responsibility CHIP-8の初期状態を生成します。
    def _create_initial_state(self) -> Chip8State:
        return Chip8State()

    def _load_font(self) -> None:
        for offset, value in enumerate(FONT_SET):
            self._bus.load(FONT_START + offset, value)

    # @intent:responsibility レジスタ・スタック・タイマー・画面を初期化します。プログラム領域は保持します。
    def reset(self) -> None:
        super().reset()
        self._framebuffer.clear()
        self._load_font()

    def get_state(self) -> Chip8State:
        return self._state

    def get_quirks(self) -> QuirkConfig:
        return self._quirks

    # @intent:responsibility 描画先の読み取り用にフレームバッファを返します。
    def get_framebuffer(self) -> Framebuffer:
        return self._framebuffer

    def capture_display(self) -> PixelGrid:
        return self._framebuffer.snapshot()

    def restore_display(self, pixels: PixelGrid) -> None:
        self._framebuffer.restore(pixels)

    # @intent:responsibility プログラムイメージを0x200以降にコピーします。
    # @intent:post-condition アドレス空間を超えた分は切り捨て、その数を返します（エラーにはしない）。
    #                       PCとレジスタは変更しません。
    def load(self, data: bytes) -> int:
        """
        プログラムイメージをメモリの0x200番地からロードし、切り捨てたバイト数を返します。
        切り捨てが発生した場合はProgramTruncatedWarningを発行します。
        """
        capacity = MEMORY_SIZE - PROGRAM_START
        image = bytes(data)
        for offset, value in enumerate(image[:capacity]):
            self._bus.load(PROGRAM_START + offset, value)
        dropped = max(0, len(image) - capacity)
        if dropped:
            warn_truncated(dropped, len(image))
        return dropped

    # @intent:responsibility ディレイタイマーを1減算します（0では停止）。
    # @intent:rationale 命令実行とは独立した60Hzのタイマー駆動を行うホストのために公開する。
    def tick_timers(self) -> None:
        if self._state.delay_timer > 0:
            self._state.delay_timer -= 1

    def _begin_cycle(self) -> None:
        if self._quirks.couple_delay_timer:
            self.tick_timers()

    # @intent:responsibility PCが指すビッグエンディアンの命令語をフェッチします。
    # @intent:pre-condition PCはプログラム領域(0x200-0xFFE)内である必要があります。
    def _fetch(self) -> int:
        pc = self._state.pc
        if not PROGRAM_START <= pc <= MEMORY_SIZE - 2:
            raise InvalidProgramCounterError(pc)
        return read_word(self._bus, pc)

    def _decode(self, opcode: int) -> Operation:
        return decode_opcode(opcode, self._state.pc)

    def _execute(self, operation: Operation) -> None:
        ctx = ExecutionContext(
            state=self._state, bus=self._bus, framebuffer=self._framebuffer, quirks=self._quirks
        )
        execute_instruction(ctx, operation)

    # @intent:responsibility UI表示用に、現在のレジスタ値を辞書形式で提供します。
    def get_register_map(self) -> RegisterMap:
        return self._state.as_register_map()

    # @intent:responsibility UIのレジスタ表示レイアウト（グループ化）を定義します。
    def get_register_layout(self) -> List[RegisterLayoutInfo]:
        return [
            RegisterLayoutInfo("General", [RegisterInfo(f"V{i:X}", 8) for i in range(REGISTER_COUNT)]),
            RegisterLayoutInfo("Index/Pointers", [
                RegisterInfo("I", 16), RegisterInfo("PC", 16), RegisterInfo("SP", 8)
            ]),
            RegisterLayoutInfo("Timers", [RegisterInfo("DT", 8)]),
        ]

    # @intent:responsibility CHIP-8には独立したフラグレジスタがないため、VFの値をフラグとして提供します。
    def get_flag_state(self) -> Dict[str, bool]:
        return {"VF": self._state.vf != 0}

    # @intent:responsibility 指定範囲のメモリを逆アセンブルします。
    def disassemble(self, start_addr: int, length: int) -> List[DisassemblyLine]:
        return disassembler.disassemble(self._bus, start_addr, length)
