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

"""
Holds the helper used for hardware access and the loaded options
"""

import errno
import traceback

from dtview.helper.oshelper import helper as os_helper
from dtview.helper.basehelper import Helper
from dtview.library.options import Options
from dtview.library.exceptions import OsHelperError
from dtview.library.logger import logger


class Machine:

    def __init__(self):
        self.options = Options()
        self.logger = logger()
        self.helper = None
        self.os_helper = os_helper()

    @classmethod
    def basic_init_with_helper(cls, helper=None):
        _machine = cls()
        _machine.load_helper(helper)
        _machine.start_helper()
        return _machine

    def init(self, helper_name=None, start_helper: bool = True) -> None:
        self.load_helper(helper_name)
        if start_helper:
            self.start_helper()

    def load_helper(self, helper_name) -> None:
        if helper_name:
            if isinstance(helper_name, Helper):
                self.helper = helper_name
            else:
                self.helper = self.os_helper.get_helper(helper_name)
                if self.helper is None:
                    raise OsHelperError(f'Helper named {helper_name} not found in available helpers', 1)
        else:
            self.helper = self.os_helper.get_default_helper()

    def start_helper(self) -> None:
        try:
            if not self.helper.create():
                raise OsHelperError("failed to create OS helper", 1)
            if not self.helper.start():
                raise OsHelperError("failed to start OS helper", 1)
        except Exception as msg:
            self.logger.log_debug(traceback.format_exc())
            error_no = errno.ENXIO
            if hasattr(msg, 'errorcode'):
                error_no = msg.errorcode
            raise OsHelperError(f'Message: "{msg}"', error_no)

    def destroy_helper(self) -> None:
        if not self.helper.stop():
            self.logger.log_warning("failed to stop OS helper")
        else:
            if not self.helper.delete():
                self.logger.log_warning("failed to delete OS helper")


_machine = None


def machine() -> Machine:
    global _machine
    if _machine is None:
        _machine = Machine()
    return _machine
