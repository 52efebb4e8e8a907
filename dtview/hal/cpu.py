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
CPU descriptor table registers

usage:
    >>> get_IDTR( 0 )
    >>> get_Desc_Table_Register( 0, DESCRIPTOR_TABLE_CODE_IDTR )
"""

from typing import Tuple
from dtview.hal import hal_base
from dtview.library.exceptions import NotFoundError, UnimplementedAPIError

DESCRIPTOR_TABLE_CODE_IDTR = 0


class CPU(hal_base.HALBase):
    def __init__(self, machine):
        super(CPU, self).__init__(machine)
        self.helper = machine.helper

    def get_cpu_thread_count(self) -> int:
        try:
            thread_count = self.helper.get_threads_count()
        except UnimplementedAPIError:
            thread_count = 1
        if not thread_count:
            thread_count = 1
        self.logger.log_hal(f'[cpu] # of logical CPUs: {thread_count:d}')
        return thread_count

    def get_Desc_Table_Register(self, cpu_thread_id: int, code: int) -> Tuple[int, int, int]:
        try:
            desc_table = self.helper.get_descriptor_table(cpu_thread_id, code)
        except UnimplementedAPIError as err:
            raise NotFoundError(f'Descriptor table register is not readable with {self.helper.name}: {err}')
        if desc_table is None:
            self.logger.log_hal(f'[cpu] Unable to locate CPU Descriptor Table: Descriptor table code = {code:d}')
            raise NotFoundError(f'Unable to read descriptor table register {code:d} on CPU thread {cpu_thread_id:d}')
        return desc_table

    def get_IDTR(self, cpu_thread_id: int) -> Tuple[int, int, int]:
        (limit, base, pa) = self.get_Desc_Table_Register(cpu_thread_id, DESCRIPTOR_TABLE_CODE_IDTR)
        self.logger.log_hal(f'[cpu{cpu_thread_id:d}] IDTR Limit = 0x{limit:04X}, Base = 0x{base:016X}, Physical Address = 0x{pa:016X}')
        return (limit, base, pa)
