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

# To execute: python -m unittest tests.helpers.test_replayhelper

import unittest
from os.path import dirname, join
import dtview.helper.replay.replayhelper as rph
from dtview.library.exceptions import OsHelperError

REPLAY_FILE = join(dirname(__file__), "replaytest.json")


class ReplayHelperTest(unittest.TestCase):
    def setUp(self):
        unittest.TestCase.setUp(self)
        self.replayhelper = rph.ReplayHelper(REPLAY_FILE)
        self.assertTrue(self.replayhelper.create())
        self.assertTrue(self.replayhelper.start())

    def tearDown(self):
        unittest.TestCase.tearDown(self)
        self.assertTrue(self.replayhelper.stop())
        self.assertTrue(self.replayhelper.delete())

    def test_get_thread_count(self):
        self.assertEqual(self.replayhelper.get_threads_count(), 2)

    def test_get_descriptor_table(self):
        idtr = self.replayhelper.get_descriptor_table(0, 0)
        self.assertEqual(idtr, (0xFFF, 0xFFFFFE0000000000, 0x1000))

    def test_get_descriptor_table_recorded_error(self):
        with self.assertRaises(OsHelperError):
            self.replayhelper.get_descriptor_table(1, 0)

    def test_read_phys_mem(self):
        self.assertEqual(self.replayhelper.read_phys_mem(0x1000, 0x2), b'\xd1\x99')

    def test_read_phys_mem_missing(self):
        self.assertEqual(self.replayhelper.read_phys_mem(0x2000, 0x2), b'')

    def test_ioapic_window(self):
        self.assertIsNone(self.replayhelper.map_io_space(0xFEC00000, 0x1000, 0))
        self.assertEqual(self.replayhelper.write_mmio_reg(0xFEC00000, 1, 1), 1)
        self.assertEqual(self.replayhelper.read_mmio_reg(0xFEC00010, 4), 0x00170020)
        self.assertIsNone(self.replayhelper.unmap_io_space(0xFEC00000, 0x1000))

    def test_entries_are_consumed(self):
        self.replayhelper.get_threads_count()
        with self.assertRaises(IndexError):
            self.replayhelper.get_threads_count()

    def test_machine(self):
        self.assertEqual(self.replayhelper.os_machine, "x86_64")


class ReplayHelperLoadTest(unittest.TestCase):

    def test_unreadable_file(self):
        replayhelper = rph.ReplayHelper(join(dirname(__file__), "__init__.py"))
        with self.assertRaises(OsHelperError):
            replayhelper.start()


if __name__ == '__main__':
    unittest.main()
