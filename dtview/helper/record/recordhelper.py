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
Recording helper

Forwards every hardware access to a real helper and keeps the answers, keyed
by API name and argument tuple. The recording is written as JSON when the
helper is stopped and can be played back with the replay helper.
"""

from inspect import stack
from json import dumps, loads
import os
from typing import Any, Dict, List, Optional, Tuple
from datetime import datetime

from dtview.library.logger import logger
from dtview.library.defines import bytestostring
from dtview.helper.basehelper import Helper
from dtview.helper.oshelper import helper
from dtview.library.file import read_file, write_file

RECORD_DIR = os.path.join('dtview', 'helper', 'record')


def call_key(args: Tuple) -> str:
    return f"({','.join(str(i) for i in args)})"


class RecordHelper(Helper):
    def __init__(self, filename: str = '', subhelper: str = ''):
        super(RecordHelper, self).__init__()
        self.os_system = 'test_helper'
        self.os_release = '0'
        self.os_version = '0'
        self.name = 'RecordHelper'
        self.driver_created = False
        self._subhelper = helper().get_helper(subhelper) if subhelper else helper().get_default_helper()
        # IDT layout detection keys off the machine string of the recorded system
        self.os_machine = self._subhelper.os_machine
        logger().log_helper(f'[helper] Using subhelper: {self._subhelper.name}')
        if not filename:
            filename = os.path.join(RECORD_DIR, f'recording{datetime.now().strftime("%Y%m%d%H%M%S")}.json')
        self._filename = filename
        self._data: Dict[str, Dict[str, List[str]]] = {}

    def switch_subhelper(self, newhelper: Helper) -> None:
        if self.driver_loaded:
            self._subhelper.stop()
        if self.driver_created:
            self._subhelper.delete()
        self._subhelper = newhelper
        self.os_machine = newhelper.os_machine
        logger().log_helper(f'[helper] Switched subhelper to: {self._subhelper.name}')

    def _add_element(self, cmd: str, args: Tuple, ret: Any) -> None:
        if isinstance(ret, bytes):
            ret = bytestostring(ret)
        # newest first, replay pops from the end
        self._data.setdefault(cmd, {}).setdefault(call_key(args), []).insert(0, str(ret))

    def _save(self) -> None:
        write_file(self._filename, dumps(self._data, indent=2, separators=(',', ': ')))

    def _load(self) -> None:
        self._data = {}
        if not os.path.isfile(self._filename):
            return
        file_data = read_file(self._filename)
        if not file_data:
            return
        try:
            self._data = loads(file_data)
        except ValueError:
            logger().log_warning(f"Ignoring unreadable recording '{self._filename}'")

    def _call_subhelper(self, *args):
        api = stack()[1][3]
        try:
            ret = getattr(self._subhelper, api)(*args)
        except Exception as err:
            self._add_element(api, args, f'!! {type(err)}: {err}')
            raise
        self._add_element(api, args, ret)
        return ret

    def create(self) -> bool:
        self.driver_created = True
        return self._subhelper.create()

    def start(self) -> bool:
        self._load()
        self.driver_loaded = True
        return self._subhelper.start()

    def stop(self) -> bool:
        self._save()
        self.driver_loaded = False
        return self._subhelper.stop()

    def delete(self) -> bool:
        self.driver_created = False
        return self._subhelper.delete()

    def read_mmio_reg(self, phys_address: int, size: int) -> int:
        return self._call_subhelper(phys_address, size)

    def write_mmio_reg(self, phys_address: int, size: int, value: int) -> int:
        return self._call_subhelper(phys_address, size, value)

    def read_phys_mem(self, phys_address: int, length: int) -> bytes:
        return self._call_subhelper(phys_address, length)

    def map_io_space(self, phys_address: int, length: int, cache_type: int) -> None:
        return self._call_subhelper(phys_address, length, cache_type)

    def unmap_io_space(self, phys_address: int, length: int) -> None:
        return self._call_subhelper(phys_address, length)

    def get_descriptor_table(self, cpu_thread_id: int, desc_table_code: int) -> Optional[Tuple[int, int, int]]:
        return self._call_subhelper(cpu_thread_id, desc_table_code)

    def get_threads_count(self) -> int:
        return self._call_subhelper()


def get_helper():
    return RecordHelper()
