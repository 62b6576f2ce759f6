# tests/debugger/test_debugger.py
"""
chip8_tracer.debugger.debuggerモジュールの単体テスト。
Debuggerの実行制御、ブレークポイント管理、タイムトラベル（step_back）を検証します。
"""
import pytest
from unittest.mock import patch

from chip8_tracer.arch.chip8.cpu import Chip8Interpreter
from chip8_tracer.core.errors import StackUnderflowError
from chip8_tracer.transport.bus import BusAccessType
from chip8_tracer.debugger.debugger import Debugger, BreakpointCondition, BreakpointConditionType

# @intent:test_suite デバッガのブレークポイントと実行制御機能の検証。

def program(*words):
    return b"".join(word.to_bytes(2, "big") for word in words)

class TestDebugger:
    """
    Debuggerの単体テスト。
    """
    @pytest.fixture
    def setup_debugger(self):
        cpu = Chip8Interpreter()
        debugger = Debugger(cpu)
        return debugger, cpu, cpu.get_bus()

    # @intent:test_case_add_remove_breakpoint ブレークポイントの追加・更新・削除が正しく行われることを検証します。
    def test_add_update_remove_breakpoint(self, setup_debugger):
        debugger, _, _ = setup_debugger
        bp1 = BreakpointCondition(BreakpointConditionType.PC_MATCH, value=0x300)
        bp2 = BreakpointCondition(BreakpointConditionType.MEMORY_WRITE, address=0x400)

        debugger.add_breakpoint(bp1)
        debugger.add_breakpoint(bp2)
        debugger.add_breakpoint(bp1) # 重複追加は無視される
        assert debugger.get_breakpoints() == [bp1, bp2]

        bp3 = BreakpointCondition(BreakpointConditionType.PC_MATCH, value=0x300, enabled=False)
        debugger.update_breakpoint(bp1, bp3)
        assert debugger.get_breakpoints() == [bp3, bp2]

        debugger.remove_breakpoint(bp3)
        debugger.remove_breakpoint(bp3) # 存在しないブレークポイントの削除はエラーにならない
        assert debugger.get_breakpoints() == [bp2]

    def test_step_instruction_records_history(self, setup_debugger):
        debugger, cpu, _ = setup_debugger
        cpu.load(program(0x6001, 0x6102))
        first = debugger.step_instruction()
        second = debugger.step_instruction()
        assert debugger.get_history() == [first, second]
        assert debugger.get_last_snapshot() is second
        assert second.state.pc == 0x204

    # @intent:test_case_step_error step_instructionではEmulationErrorが呼び出し側へ伝播することを検証します。
    def test_step_instruction_propagates_error(self, setup_debugger):
        debugger, cpu, _ = setup_debugger
        cpu.load(program(0x00EE))
        with pytest.raises(StackUnderflowError):
            debugger.step_instruction()
        assert debugger.get_history() == []

    # @intent:test_case_pc_match_breakpoint PC_MATCHブレークポイントで停止することを検証します。
    def test_run_until_pc_breakpoint(self, setup_debugger):
        debugger, cpu, _ = setup_debugger
        cpu.load(program(0x6001, 0x6102, 0x6203, 0x1206))
        debugger.add_breakpoint(BreakpointCondition(BreakpointConditionType.PC_MATCH, value=0x204))

        with patch('builtins.print') as mock_print:
            debugger.run()

        assert not debugger.is_running()
        assert cpu.get_state().pc == 0x204
        assert cpu.get_state().registers[2] == 0
        mock_print.assert_called_with("Breakpoint hit at PC: 0x0204")

    def test_run_resumes_from_breakpoint_address(self, setup_debugger):
        debugger, cpu, _ = setup_debugger
        cpu.load(program(0x1200))
        debugger.add_breakpoint(BreakpointCondition(BreakpointConditionType.PC_MATCH, value=0x200))
        with patch('builtins.print'):
            debugger.run()
        # 現在のPCのブレークポイントは一度実行してから判定する
        assert len(debugger.get_history()) == 1

    # @intent:test_case_memory_write_breakpoint MEMORY_WRITEブレークポイントがFx55の書き込みでヒットすることを検証します。
    def test_memory_write_breakpoint(self, setup_debugger):
        debugger, cpu, _ = setup_debugger
        cpu.load(program(0xA300, 0x6007, 0xF055, 0x1206))
        debugger.add_breakpoint(BreakpointCondition(BreakpointConditionType.MEMORY_WRITE, address=0x300))

        with patch('builtins.print') as mock_print:
            debugger.run()

        snapshot = debugger.get_last_snapshot()
        assert 0x300 in snapshot.addresses(BusAccessType.WRITE)
        assert snapshot.state.pc == 0x206
        mock_print.assert_called_with("Breakpoint hit at PC: 0x0206")

    def test_memory_read_breakpoint(self, setup_debugger):
        debugger, cpu, bus = setup_debugger
        bus.load(0x301, 0xDE)
        cpu.load(program(0xA300, 0xF165, 0x1204))
        debugger.add_breakpoint(BreakpointCondition(BreakpointConditionType.MEMORY_READ, address=0x301))

        with patch('builtins.print'):
            debugger.run()

        assert cpu.get_state().pc == 0x204
        assert cpu.get_state().registers[1] == 0xDE

    # @intent:test_case_register_value_breakpoint REGISTER_VALUEブレークポイント（レジスタ名は大文字小文字を問わない）を検証します。
    def test_register_value_breakpoint(self, setup_debugger):
        debugger, cpu, _ = setup_debugger
        cpu.load(program(0x6354))
        debugger.add_breakpoint(
            BreakpointCondition(BreakpointConditionType.REGISTER_VALUE, register_name="v3", value=0x54)
        )
        snapshot = debugger.step_instruction()
        assert debugger._check_other_breakpoints(snapshot)

    def test_register_change_breakpoint(self, setup_debugger):
        debugger, cpu, _ = setup_debugger
        cpu.load(program(0x6001, 0x6102, 0xA123, 0x1206))
        debugger.add_breakpoint(BreakpointCondition(BreakpointConditionType.REGISTER_CHANGE, register_name="I"))

        with patch('builtins.print'):
            debugger.run()

        assert cpu.get_state().index == 0x123
        assert cpu.get_state().pc == 0x206

    def test_disabled_breakpoint_is_ignored(self, setup_debugger):
        debugger, cpu, _ = setup_debugger
        cpu.load(program(0x1200))
        debugger.add_breakpoint(BreakpointCondition(BreakpointConditionType.PC_MATCH, value=0x200, enabled=False))
        debugger.run(max_steps=3)
        assert len(debugger.get_history()) == 3

    # @intent:test_case_max_steps run(max_steps)が指定命令数で停止することを検証します。
    def test_run_max_steps(self, setup_debugger):
        debugger, cpu, _ = setup_debugger
        cpu.load(program(0x1200))
        debugger.run(max_steps=5)
        assert not debugger.is_running()
        assert len(debugger.get_history()) == 5

    # @intent:test_case_run_error 実行時エラーで連続実行が停止し、エラーが保持されることを検証します。
    def test_run_halts_on_error(self, setup_debugger):
        debugger, cpu, _ = setup_debugger
        cpu.load(program(0x6001, 0x00EE))

        with patch('builtins.print') as mock_print:
            debugger.run()

        error = debugger.get_last_error()
        assert isinstance(error, StackUnderflowError)
        assert error.address == 0x202
        assert cpu.get_state().pc == 0x202
        assert not debugger.is_running()
        mock_print.assert_called_with(f"Execution halted: {error}")

    def test_run_until_stop(self, setup_debugger):
        debugger, cpu, _ = setup_debugger
        cpu.load(program(0x1200))
        with patch.object(debugger, 'step_instruction', side_effect=lambda: debugger.stop()) as mock_step:
            debugger.run()
        assert mock_step.call_count == 1
        assert not debugger.is_running()

class TestStepBack:
    """
    step_back / run_back のテスト。
    """
    @pytest.fixture
    def stepped(self):
        cpu = Chip8Interpreter()
        cpu.load(program(0xA300, 0x6007, 0xF055, 0xA000, 0xD005))
        debugger = Debugger(cpu)
        for _ in range(5):
            debugger.step_instruction()
        return debugger, cpu

    # @intent:test_case_step_back 画面・メモリ・レジスタが1命令前の状態に戻ることを検証します。
    def test_step_back_restores_display_and_memory(self, stepped):
        debugger, cpu = stepped
        bus = cpu.get_bus()
        assert cpu.get_framebuffer().count_lit() == 14
        assert bus.peek(0x300) == 0x07

        snapshot = debugger.step_back() # DRWを取り消す
        assert snapshot.state.pc == 0x208
        assert cpu.get_state().pc == 0x208
        assert cpu.get_framebuffer().count_lit() == 0

        debugger.step_back() # LD I, $000
        debugger.step_back() # LD [I], V0 を取り消す
        assert bus.peek(0x300) == 0x00
        assert cpu.get_state().index == 0x300

    def test_step_back_to_start(self, stepped):
        debugger, cpu = stepped
        state_ref = cpu.get_state()
        for _ in range(4):
            assert debugger.step_back() is not None
        assert debugger.step_back() is None
        assert debugger.step_back() is None
        assert state_ref.pc == 0x200
        assert state_ref.registers[0] == 0
        assert debugger.get_last_snapshot() is None

    def test_run_back_stops_at_breakpoint(self, stepped):
        debugger, cpu = stepped
        debugger.add_breakpoint(BreakpointCondition(BreakpointConditionType.PC_MATCH, value=0x204))
        with patch('builtins.print') as mock_print:
            debugger.run_back()
        assert cpu.get_state().pc == 0x204
        mock_print.assert_called_with("Reverse Breakpoint hit at PC: 0x0204")

    def test_run_back_to_start(self, stepped):
        debugger, cpu = stepped
        with patch('builtins.print') as mock_print:
            debugger.run_back()
        assert cpu.get_state().pc == 0x200
        mock_print.assert_called_with("Reached start of history.")
