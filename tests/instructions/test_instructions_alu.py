# tests/instructions/test_instructions_alu.py
"""
算術論理演算命令（6xkk, 7xkk, 8xy_, Cxkk）の単体テスト。
"""
import random
import unittest

from chip8_core_tracer.core.cpu import Chip8Cpu
from chip8_core_tracer.transport.memory import Memory

# @intent:test_suite ALU命令の演算結果とVFフラグの振る舞いを検証します。
class TestChip8AluInstructions(unittest.TestCase):
    def setUp(self):
        self.memory = Memory()
        self.cpu = Chip8Cpu(self.memory, rng=random.Random(1234))
        self.state = self.cpu.get_state()

    def _execute(self, word):
        pc = self.state.pc
        self.memory.write(pc, word >> 8)
        self.memory.write(pc + 1, word & 0xFF)
        return self.cpu.step()

    def test_ld_imm(self):
        # LD VA, $42
        self._execute(0x6A42)
        self.assertEqual(self.state.v[0xA], 0x42)
        self.assertEqual(self.state.pc, 0x202)

    # @intent:test_case 即値加算は8bitで折り返し、VFを変更しないことを確認します。
    def test_add_imm_wraps_without_flag(self):
        self.state.v[0] = 0xFF
        self.state.vf = 0x05
        # ADD V0, $01
        self._execute(0x7001)
        self.assertEqual(self.state.v[0], 0x00)
        self.assertEqual(self.state.vf, 0x05)

    def test_copy_register(self):
        self.state.v[1] = 0x99
        # LD V0, V1
        self._execute(0x8010)
        self.assertEqual(self.state.v[0], 0x99)
        self.assertEqual(self.state.v[1], 0x99)

    def test_bitwise_operations(self):
        self.state.v[0] = 0b1100
        self.state.v[1] = 0b1010
        self._execute(0x8011)  # OR V0, V1
        self.assertEqual(self.state.v[0], 0b1110)

        self.state.v[0] = 0b1100
        self._execute(0x8012)  # AND V0, V1
        self.assertEqual(self.state.v[0], 0b1000)

        self.state.v[0] = 0b1100
        self._execute(0x8013)  # XOR V0, V1
        self.assertEqual(self.state.v[0], 0b0110)

    # @intent:test_case 加算の桁あふれでVF=1、あふれなしでVF=0になることを確認します。
    def test_add_registers_carry(self):
        self.state.v[0] = 0xFF
        self.state.v[1] = 0x01
        self._execute(0x8014)
        self.assertEqual(self.state.v[0], 0x00)
        self.assertEqual(self.state.vf, 1)

        self.state.v[0] = 0x01
        self.state.v[1] = 0x01
        self._execute(0x8014)
        self.assertEqual(self.state.v[0], 0x02)
        self.assertEqual(self.state.vf, 0)

    def test_add_registers_into_vf_keeps_flag(self):
        self.state.vf = 0x10
        self.state.v[1] = 0x01
        # ADD VF, V1 -> 結果0x11の後にキャリー0が上書きする
        self._execute(0x8F14)
        self.assertEqual(self.state.vf, 0)

    def test_subtract(self):
        self.state.v[0] = 5
        self.state.v[1] = 3
        self._execute(0x8015)
        self.assertEqual(self.state.v[0], 2)
        self.assertEqual(self.state.vf, 1)

        self.state.v[0] = 3
        self.state.v[1] = 5
        self._execute(0x8015)
        self.assertEqual(self.state.v[0], 254)
        self.assertEqual(self.state.vf, 0)

    def test_subtract_equal_operands_clears_flag(self):
        self.state.v[2] = 7
        self.state.v[3] = 7
        self._execute(0x8235)
        self.assertEqual(self.state.v[2], 0)
        self.assertEqual(self.state.vf, 0)

    # @intent:test_case x=F の場合、フラグを先に設定するため演算結果がVFに残ることを確認します。
    def test_subtract_into_vf_keeps_result(self):
        self.state.vf = 5
        self.state.v[1] = 3
        self._execute(0x8F15)
        self.assertEqual(self.state.vf, 2)

    def test_shift_right(self):
        self.state.v[0] = 0x05
        self._execute(0x8006)
        self.assertEqual(self.state.v[0], 0x02)
        self.assertEqual(self.state.vf, 1)

        self.state.v[0] = 0x04
        self._execute(0x8006)
        self.assertEqual(self.state.v[0], 0x02)
        self.assertEqual(self.state.vf, 0)

    def test_shift_ignores_y(self):
        self.state.v[0] = 0x02
        self.state.v[5] = 0xFF
        self._execute(0x8056)
        self.assertEqual(self.state.v[0], 0x01)
        self.assertEqual(self.state.v[5], 0xFF)

    def test_reverse_subtract(self):
        self.state.v[0] = 3
        self.state.v[1] = 5
        self._execute(0x8017)
        self.assertEqual(self.state.v[0], 2)
        self.assertEqual(self.state.vf, 1)

        self.state.v[0] = 5
        self.state.v[1] = 3
        self._execute(0x8017)
        self.assertEqual(self.state.v[0], 254)
        self.assertEqual(self.state.vf, 0)

    def test_shift_left(self):
        self.state.v[0] = 0x81
        self._execute(0x800E)
        self.assertEqual(self.state.v[0], 0x02)
        self.assertEqual(self.state.vf, 1)

        self.state.v[0] = 0x40
        self._execute(0x800E)
        self.assertEqual(self.state.v[0], 0x80)
        self.assertEqual(self.state.vf, 0)

    # @intent:test_case 注入した乱数源の値がkkでマスクされることを確認します。
    def test_random_byte_uses_injected_source(self):
        expected = random.Random(1234).randint(0, 0xFF) & 0x0F
        # RND V3, $0F
        self._execute(0xC30F)
        self.assertEqual(self.state.v[3], expected)

    def test_random_byte_zero_mask(self):
        self._execute(0xC300)
        self.assertEqual(self.state.v[3], 0)

if __name__ == '__main__':
    unittest.main()
