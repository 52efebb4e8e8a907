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

from tests.software import mock_helper, util
from dtview.command import ExitCode


class MPHelper(mock_helper.MemoryImageHelper):
    IMAGES = mock_helper.mp_images([
        mock_helper.mp_processor_entry(0, flags=0x3),
        mock_helper.mp_processor_entry(2),
        mock_helper.mp_bus_entry(0),
        mock_helper.mp_ioapic_entry(2),
        mock_helper.mp_int_entry(3, 1, 1),
    ])


class TestMPDtviewUtil(util.TestDtviewUtil):
    """Test the mp command exposed by dtview_util."""

    def test_mp(self):
        self._dtview_util("mp", MPHelper)
        self.assertIn(b"MP Floating Pointer Structure:", self.log)
        self.assertIn(b"0x000: 5F 4D 50 5F", self.log)
        self.assertIn(b"0x004: 00 FC 09 00", self.log)
        self.assertIn(b"MP Configuration Table Header:", self.log)
        self.assertIn(b"0x000: 50 43 4D 50", self.log)
        self.assertIn(b"Base MP Configuration Table:", self.log)
        self.assertIn(b"0x02C: 00 00 14 03 EA 06 09 00 FF FB EB BF 00 00 00 00 00 00 00 00", self.log)
        self.assertIn(b"0x040: 00 02 14 01", self.log)
        self.assertIn(b"0x054: 01 00 50 43 49 20 20 20", self.log)
        self.assertIn(b"0x05C: 02 02 20 01 00 00 C0 FE", self.log)
        self.assertIn(b"0x064: 03 00 00 00 00 01 FF 01", self.log)
        self.assertNotIn(b"WARNING", self.log)

    def test_mp_decode(self):
        self._dtview_util("mp --decode", MPHelper)
        self._assertLogValue("Configuration Table", "0x0009FC00")
        self._assertLogValue("Entry Count", "5")
        self.assertIn(b"0x02C: Processor: Local APIC ID 0x00, Version 0x14, enabled, BSP", self.log)
        self.assertIn(b"0x05C: I/O APIC", self.log)

    def test_mp_not_found(self):
        self._dtview_util("mp", mock_helper.MemoryImageHelper, ExitCode.ERROR)
        self.assertIn(b"Signature _MP_ not found", self.log)
        self.assertNotIn(b"MP Floating Pointer Structure:", self.log)

    def test_mp_corrupt_table(self):

        class OverrunHelper(mock_helper.MemoryImageHelper):
            IMAGES = mock_helper.mp_images([mock_helper.mp_bus_entry(0)], table_length=48)

        self._dtview_util("mp", OverrunHelper, ExitCode.ERROR)
        self.assertIn(b"overruns", self.log)
        self.assertNotIn(b"Base MP Configuration Table:", self.log)


if __name__ == '__main__':
    unittest.main()
