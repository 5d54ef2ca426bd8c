# tests/instructions/test_instructions_load.py
"""
ロード/ストア命令（Annn, Fx__）の単体テスト。
"""
import unittest

from chip8_core_tracer.common.errors import InvalidAddressError, AddressErrorKind
from chip8_core_tracer.core.cpu import Chip8Cpu
from chip8_core_tracer.instructions.base import FONT_ADDRESS
from chip8_core_tracer.loader.loader import FontLoader
from chip8_core_tracer.transport.memory import Memory, AccessType

class TestChip8LoadInstructions(unittest.TestCase):
    def setUp(self):
        self.memory = Memory()
        FontLoader().load_font(self.memory)
        self.cpu = Chip8Cpu(self.memory)
        self.state = self.cpu.get_state()

    def _execute(self, word):
        pc = self.state.pc
        self.memory.write(pc, word >> 8)
        self.memory.write(pc + 1, word & 0xFF)
        return self.cpu.step()

    def test_set_i(self):
        self._execute(0xA123)
        self.assertEqual(self.state.i, 0x123)

    def test_timers(self):
        self.state.v[2] = 30
        self._execute(0xF215)  # LD DT, V2
        self._execute(0xF218)  # LD ST, V2
        self.assertEqual(self.state.dt, 30)
        self.assertEqual(self.state.st, 30)

        self.cpu.tick_timers()
        self._execute(0xF307)  # LD V3, DT
        self.assertEqual(self.state.v[3], 29)

    def test_add_to_i_does_not_touch_vf(self):
        self.state.i = 0xFFF
        self.state.v[1] = 0x02
        self.state.vf = 0x07
        self._execute(0xF11E)
        self.assertEqual(self.state.i, 0x1001)
        self.assertEqual(self.state.vf, 0x07)

    def test_add_to_i_wraps_at_16_bits(self):
        self.state.i = 0xFFFF
        self.state.v[1] = 0x01
        self._execute(0xF11E)
        self.assertEqual(self.state.i, 0x0000)

    # @intent:test_case フォントグリフのアドレスが下位4bitで決まることを確認します。
    def test_sprite_location(self):
        self.state.v[4] = 0x0A
        self._execute(0xF429)
        self.assertEqual(self.state.i, FONT_ADDRESS + 0x0A * 5)

        self.state.v[4] = 0x1F
        self._execute(0xF429)
        self.assertEqual(self.state.i, FONT_ADDRESS + 0x0F * 5)

    def test_store_bcd(self):
        self.state.v[5] = 157
        self.state.i = 0x300
        snapshot = self._execute(0xF533)
        self.assertEqual([self.memory.peek(0x300 + k) for k in range(3)], [1, 5, 7])
        writes = [a for a in snapshot.memory_activity if a.access_type == AccessType.WRITE]
        self.assertEqual([a.address for a in writes], [0x300, 0x301, 0x302])

    def test_store_bcd_into_reserved_area_fails(self):
        self.state.v[5] = 42
        self.state.i = 0x1FE
        with self.assertRaises(InvalidAddressError) as ctx:
            self._execute(0xF533)
        self.assertEqual(ctx.exception.kind, AddressErrorKind.RESERVED)

    # @intent:test_case V0..Vx の一括保存/読み込みでIが変化しないことを確認します。
    def test_store_and_load_registers(self):
        for index in range(4):
            self.state.v[index] = 0x10 + index
        self.state.i = 0x400
        self._execute(0xF355)
        self.assertEqual([self.memory.peek(0x400 + k) for k in range(5)], [0x10, 0x11, 0x12, 0x13, 0x00])
        self.assertEqual(self.state.i, 0x400)

        self.state.v = [0] * 16
        self._execute(0xF265)
        self.assertEqual(self.state.v[:4], [0x10, 0x11, 0x12, 0])
        self.assertEqual(self.state.i, 0x400)

    def test_load_registers_out_of_range(self):
        self.state.i = 0xFFF
        with self.assertRaises(InvalidAddressError) as ctx:
            self._execute(0xF165)
        self.assertEqual(ctx.exception.kind, AddressErrorKind.OUT_OF_RANGE)

if __name__ == '__main__':
    unittest.main()
