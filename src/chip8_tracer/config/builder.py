import warnings
from typing import Tuple
from chip8_tracer.transport.bus import Bus, RAM
from chip8_tracer.arch.chip8.cpu import Chip8Interpreter
from chip8_tracer.arch.chip8.state import REGISTER_COUNT
from chip8_tracer.loader.loader import RomLoader
from .models import SystemConfig, CpuInitialState

SUPPORTED_ARCHITECTURES = ("CHIP8", "CHIP-8")

# @intent:responsibility システム構成（Config）に基づいて、Bus、Device、インタプリタを生成・接続し、初期状態を適用します。
class SystemBuilder:
    def build_system(self, config: SystemConfig) -> Tuple[Chip8Interpreter, Bus]:
        if config.architecture.upper() not in SUPPORTED_ARCHITECTURES:
            raise ValueError(f"Unsupported architecture: {config.architecture}")

        bus = Bus()
        for region in config.memory_map:
            size = region.end - region.start + 1
            if region.type != "RAM":
                warnings.warn(
                    f"Unknown device type '{region.type}' for range {region.start:03X}-{region.end:03X}, defaulting to RAM"
                )
            bus.register_device(region.start, region.end, RAM(size))

        cpu = Chip8Interpreter(bus, quirks=config.quirks)

        # 初期状態の適用
        self.apply_initial_state(cpu, config.initial_state)

        if config.program:
            RomLoader().load_into(config.program, cpu)

        return cpu, bus

    # @intent:responsibility Configで定義された初期状態をインタプリタに適用します。
    def apply_initial_state(self, cpu: Chip8Interpreter, config_state: CpuInitialState) -> None:
        """
        インタプリタをリセットし、Configから指定された初期値を適用します。
        レジスタ名は "V0".."VF" を受け付けます。
        """
        cpu.reset()
        state = cpu.get_state()
        state.pc = config_state.pc & 0xFFFF
        state.index = config_state.index & 0xFFFF
        state.delay_timer = config_state.delay_timer & 0xFF
        for reg_name, value in config_state.registers.items():
            name = reg_name.upper()
            if len(name) != 2 or name[0] != "V":
                raise ValueError(f"Unknown register in initial state: {reg_name}")
            number = int(name[1], 16)
            if number >= REGISTER_COUNT:
                raise ValueError(f"Unknown register in initial state: {reg_name}")
            state.registers[number] = value & 0xFF
