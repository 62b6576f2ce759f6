# chip8_tracer/debugger/debugger.py
"""
デバッガモジュール。

コアエンジンの実行を制御し、ユーザーが指定した条件（ブレークポイント）や
致命的な実行時エラーで実行を中断させる責務を負います。
"""
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional
import time

from chip8_tracer.core.cpu import AbstractCpu
from chip8_tracer.core.errors import EmulationError
from chip8_tracer.core.snapshot import Snapshot
from chip8_tracer.core.state import CpuState
from chip8_tracer.transport.bus import BusAccessType

# @intent:responsibility ブレークポイントの条件タイプを定義します。
class BreakpointConditionType(Enum):
    PC_MATCH = "PC_MATCH"               # プログラムカウンタが特定のアドレスに一致
    MEMORY_READ = "MEMORY_READ"         # 特定のアドレスが読み込まれた
    MEMORY_WRITE = "MEMORY_WRITE"       # 特定のアドレスに書き込まれた
    REGISTER_VALUE = "REGISTER_VALUE"   # 特定のレジスタが特定の値になった
    REGISTER_CHANGE = "REGISTER_CHANGE" # 特定のレジスタの値が変化した

# @intent:responsibility ブレークポイントをトリガーする条件を定義します。
@dataclass(frozen=True)
class BreakpointCondition:
    """
    ブレークポイントがヒットするための条件を定義するデータクラス。
    register_nameは "V0".."VF", "I", "PC", "SP", "DT" のいずれかです。
    """
    condition_type: BreakpointConditionType
    value: Optional[int] = None           # PC_MATCH, REGISTER_VALUEで使用
    address: Optional[int] = None         # MEMORY_READ, MEMORY_WRITEで使用
    register_name: Optional[str] = None   # REGISTER_VALUE, REGISTER_CHANGEで使用
    enabled: bool = True                  # 有効/無効状態

# @intent:responsibility コアエンジンの実行制御とブレークポイント管理を行います。
class Debugger:
    """
    CPUの実行を制御し、ブレークポイントの管理を行うクラス。
    """
    def __init__(self, cpu: AbstractCpu):
        self._cpu = cpu
        self._breakpoints: List[BreakpointCondition] = []
        self._running: bool = False
        self._previous_state: CpuState = self._cpu.get_state().copy()
        self._last_snapshot: Optional[Snapshot] = None
        self._last_error: Optional[EmulationError] = None
        # @intent:responsibility 実行履歴を保持し、タイムトラベルデバッグをサポートします。
        self._history: List[Snapshot] = []
        # @intent:responsibility 履歴が尽きた時に戻るための初期状態を保持します。
        self._initial_state: CpuState = self._cpu.get_state().copy()
        self._initial_display = self._cpu.capture_display()

    def add_breakpoint(self, condition: BreakpointCondition) -> None:
        if condition not in self._breakpoints:
            self._breakpoints.append(condition)

    def update_breakpoint(self, old_condition: BreakpointCondition, new_condition: BreakpointCondition) -> None:
        if old_condition in self._breakpoints:
            idx = self._breakpoints.index(old_condition)
            self._breakpoints[idx] = new_condition

    def remove_breakpoint(self, condition: BreakpointCondition) -> None:
        if condition in self._breakpoints:
            self._breakpoints.remove(condition)

    def get_breakpoints(self) -> List[BreakpointCondition]:
        return list(self._breakpoints)

    def get_history(self) -> List[Snapshot]:
        return list(self._history)

    def get_last_snapshot(self) -> Optional[Snapshot]:
        return self._last_snapshot

    # @intent:responsibility 実行を停止させた直近のエミュレーションエラーを返します。
    def get_last_error(self) -> Optional[EmulationError]:
        return self._last_error

    def is_running(self) -> bool:
        return self._running

    @staticmethod
    def _register_value(state: CpuState, name: str) -> Optional[int]:
        return state.as_register_map().get(name.upper())

    def _check_pc_breakpoint(self, pc: int) -> bool:
        for bp in self._breakpoints:
            if bp.enabled and bp.condition_type == BreakpointConditionType.PC_MATCH and bp.value == pc:
                return True
        return False

    def _check_other_breakpoints(self, snapshot: Snapshot) -> bool:
        """
        Snapshotに基づいてPC_MATCH以外のブレークポイントをチェックします。
        """
        current_state = snapshot.state

        for bp in self._breakpoints:
            if not bp.enabled:
                continue

            if bp.condition_type == BreakpointConditionType.MEMORY_READ:
                if bp.address in snapshot.addresses(BusAccessType.READ):
                    return True
            elif bp.condition_type == BreakpointConditionType.MEMORY_WRITE:
                if bp.address in snapshot.addresses(BusAccessType.WRITE):
                    return True
            elif bp.condition_type == BreakpointConditionType.REGISTER_VALUE:
                if bp.register_name:
                    current = self._register_value(current_state, bp.register_name)
                    if current is not None and current == bp.value:
                        return True
            elif bp.condition_type == BreakpointConditionType.REGISTER_CHANGE:
                if bp.register_name:
                    current = self._register_value(current_state, bp.register_name)
                    previous = self._register_value(self._previous_state, bp.register_name)
                    if current is not None and current != previous:
                        return True
        return False

    # @intent:responsibility CPUを1命令分実行し、その結果のSnapshotを返します。
    # @intent:post-condition EmulationErrorは呼び出し側へそのまま伝播します（CPU状態はロールバック済み）。
    def step_instruction(self) -> Snapshot:
        self._previous_state = self._cpu.get_state().copy()
        snapshot = self._cpu.step()
        self._last_snapshot = snapshot
        self._history.append(snapshot)
        return snapshot

    def step_back(self) -> Optional[Snapshot]:
        """
        実行履歴を1つ戻り、CPU・メモリ・画面の状態を復元します。
        """
        if not self._history:
            return None

        snapshot_to_revert = self._history.pop()

        # バスアクティビティを逆順にスキャンし、書き込み操作があれば元に戻す
        bus = self._cpu.get_bus()
        for access in reversed(snapshot_to_revert.bus_activity):
            if access.access_type == BusAccessType.WRITE and access.previous_data is not None:
                bus.load(access.address, access.previous_data)

        if self._history:
            previous_snapshot = self._history[-1]
            self._cpu.restore_state(previous_snapshot.state)
            if previous_snapshot.framebuffer is not None:
                self._cpu.restore_display(previous_snapshot.framebuffer)
            self._last_snapshot = previous_snapshot
            return previous_snapshot

        # 履歴が尽きた場合は初期状態に復元
        self._cpu.restore_state(self._initial_state)
        if self._initial_display is not None:
            self._cpu.restore_display(self._initial_display)
        self._last_snapshot = None
        return None

    # @intent:responsibility ブレークポイント、エラー、またはstop()まで連続実行します。
    def run(self, max_steps: Optional[int] = None) -> None:
        """
        CPUの実行を継続します。max_stepsを指定した場合、その命令数で停止します。
        """
        self._running = True
        self._last_error = None
        steps = 0

        # 現在のPCにブレークポイントがある場合、まず1命令進めてから判定を始める
        if self._check_pc_breakpoint(self._cpu.get_state().pc):
            if not self._guarded_step():
                return
            steps += 1

        while self._running:
            time.sleep(0)

            if max_steps is not None and steps >= max_steps:
                self._running = False
                return

            current_pc = self._cpu.get_state().pc
            if self._check_pc_breakpoint(current_pc):
                self._running = False
                print(f"Breakpoint hit at PC: {current_pc:#06x}")
                return

            if not self._guarded_step():
                return
            steps += 1

            if self._check_other_breakpoints(self._last_snapshot):
                self._running = False
                print(f"Breakpoint hit at PC: {self._last_snapshot.state.pc:#06x}")

    def _guarded_step(self) -> bool:
        try:
            self.step_instruction()
        except EmulationError as e:
            self._last_error = e
            self._running = False
            print(f"Execution halted: {e}")
            return False
        return True

    def run_back(self) -> None:
        """
        CPUの実行を逆方向（過去）へ連続的に戻します。
        """
        self._running = True

        while self._running:
            time.sleep(0)

            snapshot = self.step_back()
            if snapshot is None:
                self._running = False
                print("Reached start of history.")
                return

            current_pc = snapshot.state.pc
            if self._check_pc_breakpoint(current_pc):
                self._running = False
                print(f"Reverse Breakpoint hit at PC: {current_pc:#06x}")
                return

            if self._check_other_breakpoints(snapshot):
                self._running = False
                print(f"Reverse Breakpoint hit at PC: {snapshot.state.pc:#06x}")

    def stop(self) -> None:
        self._running = False
