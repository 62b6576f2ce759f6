import unittest
from chip8_tracer.arch.chip8.cpu import Chip8Interpreter
from chip8_tracer.config.models import QuirkConfig

def program(*words):
    return b"".join(word.to_bytes(2, "big") for word in words)

class TestChip8AluInstructions(unittest.TestCase):
    def setUp(self):
        self.cpu = Chip8Interpreter()
        self.state = self.cpu.get_state()

    def _execute(self, opcode):
        self.cpu.load(program(opcode))
        self.state.pc = 0x200
        return self.cpu.step()

    def test_or_and_xor(self):
        self.state.registers[1] = 0b1100
        self.state.registers[2] = 0b1010
        self._execute(0x8121) # OR V1, V2
        self.assertEqual(self.state.registers[1], 0b1110)

        self.state.registers[1] = 0b1100
        self._execute(0x8122) # AND V1, V2
        self.assertEqual(self.state.registers[1], 0b1000)

        self.state.registers[1] = 0b1100
        self._execute(0x8123) # XOR V1, V2
        self.assertEqual(self.state.registers[1], 0b0110)

    def test_add_with_carry(self):
        self.state.registers[0] = 0xFF
        self.state.registers[1] = 0x02
        self._execute(0x8014)
        self.assertEqual(self.state.registers[0], 0x01)
        self.assertEqual(self.state.vf, 1)

    def test_add_without_carry(self):
        self.state.registers[0] = 0x10
        self.state.registers[1] = 0x20
        self.state.vf = 1
        self._execute(0x8014)
        self.assertEqual(self.state.registers[0], 0x30)
        self.assertEqual(self.state.vf, 0)

    def test_add_into_vf_keeps_flag(self):
        # x == F の場合、VFに残るのは和ではなくキャリー
        self.state.vf = 0xF0
        self.state.registers[1] = 0x20
        self._execute(0x8F14)
        self.assertEqual(self.state.vf, 1)

    def test_sub_uses_sum_by_default(self):
        self.state.registers[0] = 0x10
        self.state.registers[1] = 0x05
        self._execute(0x8015)
        self.assertEqual(self.state.registers[0], 0x15)
        self.assertEqual(self.state.vf, 0)

        self.state.registers[0] = 0xF0
        self.state.registers[1] = 0x20
        self._execute(0x8015)
        self.assertEqual(self.state.registers[0], 0x10)
        self.assertEqual(self.state.vf, 1)

    def test_subn_uses_sum_by_default(self):
        self.state.registers[0] = 0x80
        self.state.registers[1] = 0x90
        self._execute(0x8017)
        self.assertEqual(self.state.registers[0], 0x10)
        self.assertEqual(self.state.vf, 1)

    def test_shr_low_nibble_flag(self):
        self.state.registers[0] = 0x1F
        self._execute(0x8006)
        self.assertEqual(self.state.registers[0], 0x0F)
        self.assertEqual(self.state.vf, 0x0F)

    def test_shl(self):
        self.state.registers[3] = 0x81
        self._execute(0x830E)
        self.assertEqual(self.state.registers[3], 0x02)
        self.assertEqual(self.state.vf, 1)

        self.state.registers[3] = 0x40
        self._execute(0x830E)
        self.assertEqual(self.state.registers[3], 0x80)
        self.assertEqual(self.state.vf, 0)

class TestChip8AluQuirks(unittest.TestCase):
    def setUp(self):
        quirks = QuirkConfig(sum_carry_subtract=False, shift_flag_low_nibble=False)
        self.cpu = Chip8Interpreter(quirks=quirks)
        self.state = self.cpu.get_state()

    def _execute(self, opcode):
        self.cpu.load(program(opcode))
        self.state.pc = 0x200
        self.cpu.step()

    def test_conventional_sub(self):
        self.state.registers[0] = 0x10
        self.state.registers[1] = 0x05
        self._execute(0x8015)
        self.assertEqual(self.state.registers[0], 0x0B)
        self.assertEqual(self.state.vf, 1) # ボローなし

        self.state.registers[0] = 0x05
        self.state.registers[1] = 0x10
        self._execute(0x8015)
        self.assertEqual(self.state.registers[0], 0xF5)
        self.assertEqual(self.state.vf, 0)

    def test_conventional_subn(self):
        self.state.registers[0] = 0x05
        self.state.registers[1] = 0x10
        self._execute(0x8017)
        self.assertEqual(self.state.registers[0], 0x0B)
        self.assertEqual(self.state.vf, 1)

    def test_shr_low_bit_flag(self):
        self.state.registers[0] = 0x1F
        self._execute(0x8006)
        self.assertEqual(self.state.registers[0], 0x0F)
        self.assertEqual(self.state.vf, 1)

if __name__ == '__main__':
    unittest.main()
