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

from typing import Optional, Tuple
from dtview.library.exceptions import UnimplementedAPIError
from dtview.helper.basehelper import Helper

# Placeholder helper used when no hardware access is available


class NoneHelper(Helper):

    def __init__(self):
        self.driver_loaded = False
        self.os_system = 'nonehelper'
        self.os_release = '0.0'
        self.os_version = '0.0'
        self.os_machine = 'base'
        self.name = 'NoneHelper'

    def create(self) -> bool:
        raise UnimplementedAPIError('NoneHelper')

    def start(self) -> bool:
        raise UnimplementedAPIError('NoneHelper')

    def stop(self) -> bool:
        raise UnimplementedAPIError('NoneHelper')

    def delete(self) -> bool:
        raise UnimplementedAPIError('NoneHelper')

    def read_mmio_reg(self, phys_address: int, size: int) -> int:
        raise UnimplementedAPIError('NoneHelper')

    def write_mmio_reg(self, phys_address: int, size: int, value: int) -> int:
        raise UnimplementedAPIError('NoneHelper')

    def read_phys_mem(self, phys_address: int, length: int) -> bytes:
        raise UnimplementedAPIError('NoneHelper')

    def map_io_space(self, phys_address: int, length: int, cache_type: int) -> None:
        raise UnimplementedAPIError('NoneHelper')

    def unmap_io_space(self, phys_address: int, length: int) -> None:
        raise UnimplementedAPIError('NoneHelper')

    def get_descriptor_table(self, cpu_thread_id: int, desc_table_code: int) -> Optional[Tuple[int, int, int]]:
        raise UnimplementedAPIError('NoneHelper')

    def get_threads_count(self) -> int:
        raise UnimplementedAPIError('NoneHelper')
