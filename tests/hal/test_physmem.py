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
from dtview.hal.physmem import Memory
from dtview.library.exceptions import NotFoundError


class TestHalPhysmem(unittest.TestCase):

    def test_hal_physmem_init(self):
        mock_machine = MagicMock()
        mem = Memory(mock_machine)
        self.assertIs(mem.helper, mock_machine.helper)

    def test_hal_physmem_read(self):
        mock_self = Mock()
        mock_self.logger.HAL = False
        mock_self.helper.read_phys_mem.return_value = b'_MP_\x00\xfc\x09\x00'
        self.assertEqual(Memory.read_physical_mem(mock_self, 0xF5A30, 8), b'_MP_\x00\xfc\x09\x00')
        mock_self.helper.read_phys_mem.assert_called_with(0xF5A30, 8)

    def test_hal_physmem_read_short(self):
        mock_self = Mock()
        mock_self.helper.read_phys_mem.return_value = b'\x00' * 4
        with self.assertRaises(NotFoundError):
            Memory.read_physical_mem(mock_self, 0x9FC00, 16)

    def test_hal_physmem_read_too_long(self):
        mock_self = Mock()
        mock_self.helper.read_phys_mem.return_value = b'_MP_' * 16
        with self.assertRaises(NotFoundError):
            Memory.read_physical_mem(mock_self, 0x9FC00, 16)

    def test_hal_physmem_read_none(self):
        mock_self = Mock()
        mock_self.helper.read_phys_mem.return_value = None
        with self.assertRaises(NotFoundError):
            Memory.read_physical_mem(mock_self, 0x9FC00, 16)


if __name__ == '__main__':
    unittest.main()
