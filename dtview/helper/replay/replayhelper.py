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
Replay helper

Answers every hardware access from a JSON recording made by the record
helper. Each recorded answer is used once, in the order it was recorded.
Recorded exceptions are raised again.
"""

from ast import literal_eval
from json import loads
import os
from errno import EACCES, EFAULT
from glob import glob
import re
from importlib import import_module
from typing import Any, Optional, Tuple
from dtview.library.defines import stringtobytes
from dtview.library.exceptions import OsHelperError
from dtview.library.file import read_file
from dtview.library.logger import logger
from dtview.helper.basehelper import Helper
from dtview.helper.record.recordhelper import RECORD_DIR, call_key

RECORDED_EXCEPTION = re.compile(r"^!! <class '(.*)'>: (.*)")


class ReplayHelper(Helper):

    def __init__(self, filepath: str = '', machine: str = 'x86_64'):
        super(ReplayHelper, self).__init__()
        self.os_system = 'test_helper'
        self.os_release = '0'
        self.os_version = '0'
        self.os_machine = machine
        self.name = 'ReplayHelper'
        self.driver_loaded = True
        if not (filepath and os.path.isfile(filepath)):
            recordings = glob(os.path.join(RECORD_DIR, '*.json'))
            if not recordings:
                raise FileNotFoundError('Cannot find a recorded file to load')
            filepath = max(recordings, key=os.path.getctime)
        self.config_file = filepath
        self._data = {}

    def create(self) -> bool:
        return True

    def start(self) -> bool:
        self._load()
        return True

    def stop(self) -> bool:
        return True

    def delete(self) -> bool:
        return True

    def _get_element(self, cmd: str, args: Tuple) -> Optional[str]:
        key = call_key(args)
        answers = self._data.get(cmd, {}).get(key)
        if answers is None:
            logger().log_error(f'Missing entry for {cmd} {key}')
            return None
        if not answers:
            logger().log_error(f'Ran out of entries for {cmd} {key}')
            raise IndexError(f'pop from empty list: {cmd} {key}')
        element = answers.pop()
        recorded = RECORDED_EXCEPTION.match(element)
        if recorded:
            # builtin exception classes are recorded without a module path
            module_name, _, class_name = recorded[1].rpartition('.')
            raise getattr(import_module(module_name or 'builtins'), class_name)(recorded[2])
        return element

    def _get_element_eval(self, cmd: str, args: Tuple) -> Optional[Any]:
        element = self._get_element(cmd, args)
        if element is None:
            return None
        try:
            return literal_eval(element)
        except (ValueError, SyntaxError):
            return stringtobytes(element)

    def _load(self) -> None:
        file_data = read_file(self.config_file)
        if not file_data:
            raise OsHelperError(f'Unable to open JSON File: {self.config_file}', EACCES)
        try:
            self._data = loads(file_data)
        except ValueError:
            raise OsHelperError(f'Unable to load JSON File: {self.config_file}', EFAULT)

    def read_mmio_reg(self, phys_address: int, size: int) -> int:
        return self._get_element_eval('read_mmio_reg', (phys_address, size))

    def write_mmio_reg(self, phys_address: int, size: int, value: int) -> int:
        return self._get_element_eval('write_mmio_reg', (phys_address, size, value))

    def read_phys_mem(self, phys_address: int, length: int) -> bytes:
        element = self._get_element('read_phys_mem', (phys_address, length))
        if element is None:
            return b''
        return stringtobytes(element)

    def map_io_space(self, phys_address: int, length: int, cache_type: int) -> None:
        return self._get_element_eval('map_io_space', (phys_address, length, cache_type))

    def unmap_io_space(self, phys_address: int, length: int) -> None:
        return self._get_element_eval('unmap_io_space', (phys_address, length))

    def get_descriptor_table(self, cpu_thread_id: int, desc_table_code: int) -> Optional[Tuple[int, int, int]]:
        return self._get_element_eval('get_descriptor_table', (cpu_thread_id, desc_table_code))

    def get_threads_count(self) -> int:
        return self._get_element_eval('get_threads_count', ())


def get_helper():
    return ReplayHelper()
