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
Abstracts support for various OS/environments, wrapper around the helpers that access hardware
"""

import os
import importlib
import platform
import traceback
from typing import Any, List
from dtview.library.file import get_main_dir
from dtview.library.logger import logger
from dtview.helper.basehelper import Helper
from dtview.helper.nonehelper import NoneHelper


class OsHelper:
    def __init__(self):
        self.avail_helpers = {}
        self.load_helpers()
        self.helper = self.get_default_helper()
        self.os_system = self.helper.os_system
        self.os_release = self.helper.os_release
        self.os_version = self.helper.os_version
        self.os_machine = self.helper.os_machine

    def load_helpers(self) -> None:
        helper_dir = os.path.join(get_main_dir(), "dtview", "helper")
        helpers = [os.path.basename(f) for f in os.listdir(helper_dir)
                   if os.path.isdir(os.path.join(helper_dir, f)) and not os.path.basename(f).startswith("__")]

        for helper in helpers:
            helper_path = ''
            try:
                helper_path = f'dtview.helper.{helper}.{helper}helper'
                hlpr = importlib.import_module(helper_path)
                self.avail_helpers[f'{helper}helper'] = hlpr
            except ImportError:
                logger().log_debug(f"Unable to load helper: {helper}")

    def get_helper(self, name: str) -> Any:
        ret = None
        if name in self.avail_helpers:
            ret = self.avail_helpers[name].get_helper()
        return ret

    def get_available_helpers(self) -> List[str]:
        return sorted(self.avail_helpers.keys())

    def get_base_helper(self) -> Helper:
        return NoneHelper()

    def get_default_helper(self) -> Helper:
        ret = None
        if self.is_linux():
            ret = self.get_helper("linuxnativehelper")
        if ret is None:
            ret = self.get_base_helper()
        return ret

    def is_linux(self) -> bool:
        return 'linux' == platform.system().lower()


_helper = None


def helper() -> OsHelper:
    global _helper
    if _helper is None:
        try:
            _helper = OsHelper()
        except BaseException as msg:
            if logger().DEBUG:
                logger().log_error(str(msg))
                logger().log_bad(traceback.format_exc())
            raise
    return _helper
