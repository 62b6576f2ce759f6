import os
import yaml
from typing import Dict, Any
from .models import SystemConfig, MemoryRegion, CpuInitialState, QuirkConfig, default_memory_map

class ConfigLoader:
    def load_from_file(self, path: str) -> SystemConfig:
        with open(path, 'r') as f:
            data = yaml.safe_load(f) or {}
        config = self._parse_config(data)
        # プログラムの相対パスは設定ファイルの位置を基準に解決する
        if config.program and not os.path.isabs(config.program):
            config.program = os.path.join(os.path.dirname(os.path.abspath(path)), config.program)
        return config

    def load_from_string(self, text: str) -> SystemConfig:
        return self._parse_config(yaml.safe_load(text) or {})

    def _parse_config(self, data: Dict[str, Any]) -> SystemConfig:
        if not isinstance(data, dict):
            raise ValueError("System config must be a mapping.")
        arch = data.get("architecture", "CHIP8")

        # Parse Memory Map
        memory_map = []
        for region_data in data.get("memory_map", []):
            memory_map.append(MemoryRegion(
                start=self._parse_int(region_data.get("start")),
                end=self._parse_int(region_data.get("end")),
                type=region_data.get("type", "RAM"),
                label=region_data.get("label", ""),
            ))

        # Parse Initial State
        initial_state_data = data.get("initial_state", {})
        initial_state = CpuInitialState(
            pc=self._parse_int(initial_state_data.get("pc", 0x200)),
            index=self._parse_int(initial_state_data.get("index", 0)),
            delay_timer=self._parse_int(initial_state_data.get("delay_timer", 0)),
            registers={
                str(name).upper(): self._parse_int(value)
                for name, value in initial_state_data.get("registers", {}).items()
            },
        )

        # Parse Quirks
        quirks_data = data.get("quirks", {})
        defaults = QuirkConfig()
        quirks = QuirkConfig(
            sum_carry_subtract=bool(quirks_data.get("sum_carry_subtract", defaults.sum_carry_subtract)),
            shift_flag_low_nibble=bool(quirks_data.get("shift_flag_low_nibble", defaults.shift_flag_low_nibble)),
            couple_delay_timer=bool(quirks_data.get("couple_delay_timer", defaults.couple_delay_timer)),
        )

        return SystemConfig(
            architecture=arch,
            memory_map=memory_map or default_memory_map(),
            initial_state=initial_state,
            quirks=quirks,
            program=data.get("program"),
            frame_rate=self._parse_int(data.get("frame_rate", 60)),
            cycles_per_frame=self._parse_int(data.get("cycles_per_frame", 10)),
        )

    def _parse_int(self, value: Any) -> int:
        if isinstance(value, bool):
            raise ValueError(f"Invalid integer format: {value}")
        if isinstance(value, int):
            return value
        if isinstance(value, str):
            if value.lower().startswith("0x"):
                return int(value, 16)
            return int(value)
        raise ValueError(f"Invalid integer format: {value}")
