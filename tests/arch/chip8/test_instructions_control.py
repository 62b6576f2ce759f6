import unittest
from chip8_tracer.arch.chip8.cpu import Chip8Interpreter
from chip8_tracer.arch.chip8.state import STACK_DEPTH
from chip8_tracer.core.errors import StackOverflowError, StackUnderflowError

def program(*words):
    return b"".join(word.to_bytes(2, "big") for word in words)

class TestChip8ControlInstructions(unittest.TestCase):
    def setUp(self):
        self.cpu = Chip8Interpreter()
        self.state = self.cpu.get_state()

    def _execute(self, opcode, pc=0x200):
        self.cpu.get_bus().load(pc, opcode >> 8)
        self.cpu.get_bus().load(pc + 1, opcode & 0xFF)
        self.state.pc = pc
        return self.cpu.step()

    def test_jp(self):
        self._execute(0x1ABC)
        self.assertEqual(self.state.pc, 0xABC)

    def test_call_and_ret(self):
        self._execute(0x2400, pc=0x300)
        self.assertEqual(self.state.pc, 0x400)
        self.assertEqual(self.state.sp, 1)
        self.assertEqual(self.state.active_stack(), [0x302])

        self._execute(0x00EE, pc=0x400)
        self.assertEqual(self.state.pc, 0x302)
        self.assertEqual(self.state.sp, 0)

    def test_nested_calls_return_in_order(self):
        self.cpu.load(program(0x2300))          # 0x200: CALL $300
        self.cpu.get_bus().load(0x300, 0x24)    # 0x300: CALL $400
        self.cpu.get_bus().load(0x301, 0x00)
        self.cpu.get_bus().load(0x400, 0x00)    # 0x400: RET
        self.cpu.get_bus().load(0x401, 0xEE)
        self.cpu.get_bus().load(0x302, 0x00)    # 0x302: RET
        self.cpu.get_bus().load(0x303, 0xEE)

        for _ in range(4):
            self.cpu.step()
        self.assertEqual(self.state.pc, 0x202)
        self.assertEqual(self.state.sp, 0)

    def test_call_overflow(self):
        self.state.sp = STACK_DEPTH
        before = self.state.copy()
        with self.assertRaises(StackOverflowError) as ctx:
            self._execute(0x2300)
        self.assertEqual(ctx.exception.address, 0x200)
        self.assertEqual(self.state, before)

    def test_sixteen_calls_fit(self):
        # 0x200: CALL $200 を16回実行してもスタックは溢れない
        self.cpu.load(program(0x2200))
        for _ in range(STACK_DEPTH):
            self.cpu.step()
        self.assertEqual(self.state.sp, STACK_DEPTH)
        with self.assertRaises(StackOverflowError):
            self.cpu.step()

    def test_ret_underflow_leaves_state_unchanged(self):
        self.state.registers[3] = 0x42
        self.state.delay_timer = 5
        before = self.state.copy()
        with self.assertRaises(StackUnderflowError):
            self._execute(0x00EE)
        # ディレイタイマーの減算も含めて巻き戻される
        self.assertEqual(self.state, before)

    def test_se_vx_nn(self):
        self.state.registers[2] = 0x33
        self._execute(0x3233)
        self.assertEqual(self.state.pc, 0x204)
        self._execute(0x3234)
        self.assertEqual(self.state.pc, 0x202)

    def test_sne_vx_nn(self):
        self.state.registers[2] = 0x33
        self._execute(0x4234)
        self.assertEqual(self.state.pc, 0x204)
        self._execute(0x4233)
        self.assertEqual(self.state.pc, 0x202)

    def test_se_and_sne_vx_vy(self):
        self.state.registers[1] = 7
        self.state.registers[2] = 7
        self._execute(0x5120)
        self.assertEqual(self.state.pc, 0x204)
        self._execute(0x9120)
        self.assertEqual(self.state.pc, 0x202)

        self.state.registers[2] = 8
        self._execute(0x5120)
        self.assertEqual(self.state.pc, 0x202)
        self._execute(0x9120)
        self.assertEqual(self.state.pc, 0x204)

    def test_jp_v0(self):
        self.state.registers[0] = 0x10
        self._execute(0xB300)
        self.assertEqual(self.state.pc, 0x310)

if __name__ == '__main__':
    unittest.main()
