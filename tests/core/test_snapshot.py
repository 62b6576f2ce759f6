# tests/core/test_snapshot.py
"""
chip8_tracer.core.snapshotモジュールの単体テスト。
"""
import pytest
from chip8_tracer.core.state import CpuState
from chip8_tracer.core.snapshot import (
    BusAccessType,
    BusAccess,
    Operation,
    Metadata,
    Snapshot,
)

# @intent:test_suite CPU・バス・画面の状態を記録する不変スナップショットの検証。

class TestOperation:
    """
    Operationデータクラスの単体テスト。
    """
    def test_operation_defaults(self):
        op = Operation(opcode_hex="00E0", mnemonic="CLS")
        assert op.operands == []
        assert op.operand_bytes == []
        assert op.length == 1

    # @intent:test_case_to_text オペランドの有無に応じた表示文字列を検証します。
    def test_to_text(self):
        assert Operation(opcode_hex="00E0", mnemonic="CLS").to_text() == "CLS"
        op = Operation(opcode_hex="D015", mnemonic="DRW", operands=["V0", "V1", "5"])
        assert op.to_text() == "DRW V0, V1, 5"

    def test_operation_immutability(self):
        op = Operation(opcode_hex="00E0", mnemonic="CLS")
        with pytest.raises(AttributeError):
            op.mnemonic = "RET"

class TestSnapshot:
    """
    Snapshotデータクラスの単体テスト。
    """
    @pytest.fixture
    def snapshot(self):
        return Snapshot(
            state=CpuState(pc=0x202),
            operation=Operation(opcode_hex="F055", mnemonic="LD", operands=["[I]", "V0"]),
            metadata=Metadata(cycle_count=1, symbol_info="LD [I], V0"),
            bus_activity=[
                BusAccess(0x200, 0xF0, BusAccessType.READ),
                BusAccess(0x201, 0x55, BusAccessType.READ),
                BusAccess(0x300, 0x07, BusAccessType.WRITE, previous_data=0x00),
            ],
            framebuffer=((False, True),),
        )

    # @intent:test_case_addresses アクセス種別ごとのアドレス抽出を検証します。
    def test_addresses(self, snapshot):
        assert snapshot.addresses(BusAccessType.READ) == [0x200, 0x201]
        assert snapshot.addresses(BusAccessType.WRITE) == [0x300]

    def test_snapshot_immutability(self, snapshot):
        with pytest.raises(AttributeError):
            snapshot.state = CpuState()

    def test_framebuffer_defaults_to_none(self):
        snap = Snapshot(state=CpuState(), operation=Operation("00E0", "CLS"), metadata=Metadata(0))
        assert snap.framebuffer is None
        assert snap.bus_activity == []
