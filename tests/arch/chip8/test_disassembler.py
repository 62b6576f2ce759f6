# tests/arch/chip8/test_disassembler.py
"""
chip8_tracer.arch.chip8.disassemblerモジュールの単体テスト。
"""
import pytest
from chip8_tracer.arch.chip8.cpu import create_default_bus
from chip8_tracer.arch.chip8.disassembler import disassemble
from chip8_tracer.transport.bus import Bus, RAM

# @intent:test_suite メモリ上の命令語がニーモニックへ変換されることを検証します。

@pytest.fixture
def bus():
    bus = create_default_bus()
    for offset, value in enumerate([0x00, 0xE0, 0x6A, 0x0F, 0xF2, 0x65, 0xFF, 0xFF, 0xD1, 0x2F]):
        bus.load(0x200 + offset, value)
    return bus

def test_disassemble_program(bus):
    assert disassemble(bus, 0x200, 10) == [
        (0x200, "00 E0", "CLS"),
        (0x202, "6A 0F", "LD VA, #$0F"),
        (0x204, "F2 65", "LD V2, [I]"),
        (0x206, "FF FF", "DW $FFFF"),
        (0x208, "D1 2F", "DRW V1, V2, 15"),
    ]

# @intent:test_case_no_side_effects 逆アセンブルはバスアクティビティログに残らないことを検証します。
def test_disassemble_does_not_log(bus):
    disassemble(bus, 0x200, 4)
    assert bus.get_and_clear_activity_log() == []

def test_disassemble_stops_at_unmapped_memory():
    bus = Bus()
    bus.register_device(0x000, 0x002, RAM(3))
    bus.load(0x000, 0x12)
    bus.load(0x001, 0x34)
    assert disassemble(bus, 0x000, 4) == [(0x000, "12 34", "JP $234")]

@pytest.mark.parametrize("word, text", [
    (0x00EE, "RET"),
    (0x2ABC, "CALL $ABC"),
    (0x3105, "SE V1, #$05"),
    (0x5120, "SE V1, V2"),
    (0x8346, "SHR V3"),
    (0xB123, "JP V0, $123"),
    (0xF515, "LD DT, V5"),
    (0xF633, "LD B, V6"),
    (0xF755, "LD [I], V7"),
])
def test_mnemonics(word, text):
    bus = create_default_bus()
    bus.load(0x200, word >> 8)
    bus.load(0x201, word & 0xFF)
    assert disassemble(bus, 0x200, 2)[0][2] == text
