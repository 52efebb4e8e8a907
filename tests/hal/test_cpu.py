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
from unittest.mock import Mock, MagicMock
from dtview.hal.cpu import CPU, DESCRIPTOR_TABLE_CODE_IDTR
from dtview.library.exceptions import NotFoundError, UnimplementedAPIError


class TestHalCpu(unittest.TestCase):

    def test_hal_cpu_init(self):
        mock_machine = MagicMock()
        cpu = CPU(mock_machine)
        self.assertIsInstance(cpu, CPU)
        self.assertIs(cpu.helper, mock_machine.helper)

    def test_hal_cpu_thread_count(self):
        mock_self = Mock()
        mock_self.helper.get_threads_count.return_value = 8
        self.assertEqual(CPU.get_cpu_thread_count(mock_self), 8)

    def test_hal_cpu_thread_count_unimplemented(self):
        mock_self = Mock()
        mock_self.helper.get_threads_count.side_effect = UnimplementedAPIError('get_threads_count')
        self.assertEqual(CPU.get_cpu_thread_count(mock_self), 1)

    def test_hal_cpu_thread_count_zero(self):
        mock_self = Mock()
        mock_self.helper.get_threads_count.return_value = 0
        self.assertEqual(CPU.get_cpu_thread_count(mock_self), 1)

    def test_hal_cpu_desc_table_cmd(self):
        mock_self = Mock()
        mock_self.helper.get_descriptor_table.return_value = (0xFFF, 0xFFFFFE0000000000, 0x1000)
        CPU.get_Desc_Table_Register(mock_self, 3, DESCRIPTOR_TABLE_CODE_IDTR)
        mock_self.helper.get_descriptor_table.assert_called_with(3, DESCRIPTOR_TABLE_CODE_IDTR)

    def test_hal_cpu_desc_table_none(self):
        mock_self = Mock()
        mock_self.helper.get_descriptor_table.return_value = None
        with self.assertRaises(NotFoundError):
            CPU.get_Desc_Table_Register(mock_self, 0, DESCRIPTOR_TABLE_CODE_IDTR)

    def test_hal_cpu_desc_table_unimplemented(self):
        mock_self = Mock()
        mock_self.helper.get_descriptor_table.side_effect = UnimplementedAPIError('get_descriptor_table')
        with self.assertRaises(NotFoundError):
            CPU.get_Desc_Table_Register(mock_self, 0, DESCRIPTOR_TABLE_CODE_IDTR)

    def test_hal_cpu_get_idtr(self):
        mock_self = Mock()
        expected_result = (0x7FF, 0xFFFFFFFFFF528000, 0x2528000)
        mock_self.get_Desc_Table_Register.return_value = expected_result
        self.assertEqual(CPU.get_IDTR(mock_self, 1), expected_result)
        mock_self.get_Desc_Table_Register.assert_called_with(1, DESCRIPTOR_TABLE_CODE_IDTR)


if __name__ == '__main__':
    unittest.main()
