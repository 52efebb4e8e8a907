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

import os
import tempfile
import unittest

from tests.software import mock_helper

import dtview_util
from dtview import machine
from dtview.command import ExitCode


class TestDtviewUtil(unittest.TestCase):
    """Test the commands exposed by dtview_util.

    Each test may define its virtual helper and then call the _dtview_util
    method with the command line arguments.
    """

    def setUp(self):
        fileno, self.log_file = tempfile.mkstemp()
        os.close(fileno)
        machine._machine = None

    def tearDown(self):
        os.remove(self.log_file)
        machine._machine = None

    def _dtview_util(self, arg, helper_class=mock_helper.TestHelper, expected_exit=ExitCode.OK):
        """Run the dtview_util command with the arguments.

        Each test may setup a virtual helper to emulate the expected behaviour
        from the hardware. If no helper is provided, TestHelper will be used.
        It verifies the exit code of the command. self.log will be populated
        with the output.
        """
        args = ['-nl'] + arg.split()
        par = dtview_util.parse_args(args)
        util = dtview_util.DtviewUtil(par, args)
        self.helper = helper_class()
        util._helper = self.helper
        util.logger.VERBOSE = True
        util.logger.HAL = True
        util.logger.set_log_file(self.log_file)
        try:
            err_code = util.main()
        finally:
            util.logger.close()
            util.logger.VERBOSE = False
            util.logger.HAL = False
            util.logger.setlevel()
        with open(self.log_file, 'rb') as log:
            self.log = log.read()
        self.assertEqual(err_code, expected_exit)

    def _assertLogValue(self, name, value):
        """Shortcut to validate the output.

        Assert that at least one line exists within the log which matches the
        expression: name [:=] value.
        """
        exp = r'(^|\W){}\s*[:=]\s*{}($|\W)'.format(name, value)
        self.assertRegex(self.log, exp.encode())
