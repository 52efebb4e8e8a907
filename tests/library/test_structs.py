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
from dtview.library import structs
from dtview.library.exceptions import CorruptTableError


class TestStructs(unittest.TestCase):

    def setUp(self):
        self.buf = bytes(range(16))

    def test_read_field(self):
        self.assertEqual(structs.read_field(self.buf, 0, 1), 0x00)
        self.assertEqual(structs.read_field(self.buf, 4, 2), 0x0504)
        self.assertEqual(structs.read_field(self.buf, 4, 4), 0x07060504)
        self.assertEqual(structs.read_field(self.buf, 8, 8), 0x0F0E0D0C0B0A0908)

    def test_read_field_out_of_range(self):
        with self.assertRaises(CorruptTableError):
            structs.read_field(self.buf, 14, 4)

    def test_read_bytes(self):
        self.assertEqual(structs.read_bytes(self.buf, 12, 4), b'\x0c\x0d\x0e\x0f')
        with self.assertRaises(CorruptTableError):
            structs.read_bytes(self.buf, 12, 5)

    def test_check_range_negative(self):
        with self.assertRaises(CorruptTableError):
            structs.check_range(self.buf, -1, 2)

    def test_checksum8(self):
        self.assertEqual(structs.checksum8(self.buf), 0x78)
        self.assertEqual(structs.checksum8(b'\x80\x80'), 0)

    def test_hex_rows(self):
        rows = structs.hex_rows(self.buf[:10], 4, 0x2C)
        self.assertEqual(rows, ['0x02C: 00 01 02 03', '0x030: 04 05 06 07', '0x034: 08 09'])

    def test_render(self):
        self.assertEqual(structs.render(['a', '', 'b']), 'a\n\nb\n')

    def test_table_handle(self):
        handle = structs.TableHandle(0x9FC00, 0x48, 2)
        self.assertEqual(str(handle), 'Table @ 0x000000000009FC00: 0x48 bytes, 2 entries')


if __name__ == '__main__':
    unittest.main()
