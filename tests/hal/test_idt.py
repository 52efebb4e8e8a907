# dtview: Hardware Descriptor Table Viewer
# Copyright (c) 2016-2026, dtview developers
#
# This program is free software; you can redistribute it and/or
# modify it under the terms of the GNU General Public License
# as published by the Free Software Foundation; Version 2.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program; if not, write to the Free Software
# Foundation, Inc., 51 Franklin Street, Fifth Floor, Boston, MA  02110-1301, USA.
#

import unittest
from unittest.mock import MagicMock, Mock

from tests.software import mock_helper
from dtview.hal import idt
from dtview.hal.idt import IDT, Layout
from dtview.library.exceptions import CorruptTableError, NotFoundError
from dtview.library.structs import TableHandle, render


class TestIdtDecode(unittest.TestCase):

    def test_detect_layout(self):
        self.assertIs(idt.detect_layout('x86_64'), Layout.WIDE)
        self.assertIs(idt.detect_layout('AMD64'), Layout.WIDE)
        self.assertIs(idt.detect_layout('i686'), Layout.NARROW)
        self.assertIs(idt.detect_layout(''), Layout.NARROW)

    def test_wide_offset_is_reassembled(self):
        table = mock_helper.wide_gate(0x123456789ABCDEF0, 0x33, 0xE, 2, True, ist=5)
        gate = idt.decode_gate(table, 0, Layout.WIDE)
        self.assertEqual(gate.offset, 0x123456789ABCDEF0)
        self.assertEqual(gate.segment_selector, 0x33)
        self.assertEqual(gate.dpl, 2)
        self.assertTrue(gate.present)
        self.assertEqual(gate.ist, 5)
        self.assertEqual(gate.type_name, 'interrupt')

    def test_narrow_offset_is_reassembled(self):
        table = mock_helper.narrow_gate(0xC1001234, 0x60, 0xF, 3, False)
        gate = idt.decode_gate(table, 0, Layout.NARROW)
        self.assertEqual(gate.offset, 0xC1001234)
        self.assertIsNone(gate.raw_high)
        self.assertIsNone(gate.ist)
        self.assertEqual(gate.type_name, 'trap')
        self.assertFalse(gate.present)

    def test_type_names(self):
        for gate_type, name in [(0x5, 'task'), (0xE, 'interrupt'), (0xF, 'trap'), (0xC, 'other')]:
            gate = idt.decode_gate(mock_helper.narrow_gate(0, 0, gate_type, 0, True), 0, Layout.NARROW)
            self.assertEqual(gate.type_name, name)

    def test_system_bit_in_narrow_gate(self):
        gate = idt.decode_gate(mock_helper.narrow_gate(0xC1001234, 0x60, 0x1E, 0, True), 0, Layout.NARROW)
        self.assertEqual(gate.type, 0xE)
        self.assertEqual(gate.type_name, 'interrupt')

    def test_system_bit_in_wide_gate(self):
        gate = idt.decode_gate(mock_helper.wide_gate(0xFFFFFFFF8E401000, 0x10, 0x1E, 0, True), 0, Layout.WIDE)
        self.assertEqual(gate.type, 0x1E)
        self.assertEqual(gate.type_name, 'other')

    def test_walk_count(self):
        table = b''.join(mock_helper.wide_gate(i * 0x10, 0x10, 0xE, 0, True) for i in range(4))
        gates = list(idt.walk(table, TableHandle(0, len(table), len(table) // Layout.WIDE.stride), Layout.WIDE))
        self.assertEqual([g.index for g in gates], [0, 1, 2, 3])
        self.assertEqual([g.offset for g in gates], [0x0, 0x10, 0x20, 0x30])

    def test_walk_short_table(self):
        table = mock_helper.wide_gate(0, 0x10, 0xE, 0, True)
        with self.assertRaises(CorruptTableError):
            list(idt.walk(table, TableHandle(0, 32, 2), Layout.WIDE))


class TestHalIdt(unittest.TestCase):

    def _idt(self, helper, layout=None):
        mock_machine = MagicMock()
        mock_machine.helper = helper
        return IDT(mock_machine, layout)

    def test_hal_idt_init(self):
        self.assertIs(self._idt(mock_helper.TestHelper()).layout, Layout.WIDE)
        self.assertIs(self._idt(mock_helper.TestHelper(), Layout.NARROW).layout, Layout.NARROW)

    def test_hal_idt_locate(self):
        helper = mock_helper.IDTHelper()
        helper.images = {0x1000: b'\x00' * 0x1000}
        handle, table = self._idt(helper).locate(0)
        self.assertEqual(handle, TableHandle(0xFFFFFE0000000000, 0x1000, 256))
        self.assertEqual(len(table), 0x1000)

    def test_hal_idt_locate_narrow_count(self):
        helper = mock_helper.IDTHelper()
        helper.images = {0x1000: b'\x00' * 0x800}
        helper.IDTR = (0x7FF, 0xC0000000, 0x1000)
        handle, _ = self._idt(helper, Layout.NARROW).locate(0)
        self.assertEqual(handle.entry_count, 256)

    def test_hal_idt_not_found(self):
        helper = Mock(spec=mock_helper.TestHelper)
        helper.os_machine = 'x86_64'
        helper.get_descriptor_table.return_value = None
        with self.assertRaises(NotFoundError):
            self._idt(helper).report(0)

    def test_hal_idt_report(self):
        helper = mock_helper.IDTHelper()
        helper.IDTR = (31, 0xFFFFFE0000000000, 0x1000)
        helper.images = {0x1000: mock_helper.wide_gate(0xFFFFFFFF8E401000, 0x10, 0xE, 0, True) +
                         mock_helper.wide_gate(0xFFFFFFFF8E402000, 0x10, 0xF, 3, False)}
        report = self._idt(helper).report(0)
        self.assertEqual(report[0], 'IDT    Size: 32 bytes / 2 entries    Virt address: 0xFFFFFE0000000000')
        self.assertEqual(report[2], idt.IDT_WIDE_HEADER)
        self.assertTrue(report[3].endswith('interrupt 0   + 0   0010 FFFFFFFF8E401000'))
        self.assertTrue(report[4].endswith('trap      3   - 0   0010 FFFFFFFF8E402000'))
        self.assertEqual(render(report), render(self._idt(helper).report(0)))


if __name__ == '__main__':
    unittest.main()
