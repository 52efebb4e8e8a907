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
Access to physical memory

usage:
    >>> read_physical_mem( 0xf0000, 0x100 )
    >>> map_io_space( 0xfec00000, 0x1000, UNCACHED )
"""

from dtview.hal.hal_base import HALBase
from dtview.library.exceptions import NotFoundError
from dtview.library.logger import print_buffer_bytes

CACHE_TYPE_UNCACHED = 0


class Memory(HALBase):
    def __init__(self, machine):
        super(Memory, self).__init__(machine)
        self.helper = machine.helper

    # Reading physical memory

    def read_physical_mem(self, phys_address: int, length: int) -> bytes:
        self.logger.log_hal(f'[mem] 0x{phys_address:016X}, len = 0x{length:X}')
        buf = self.helper.read_phys_mem(phys_address, length)
        if buf is None or len(buf) != length:
            raise NotFoundError(f'Unable to read 0x{length:X} bytes of physical memory at 0x{phys_address:016X}')
        if self.logger.HAL:
            print_buffer_bytes(buf)
        return buf

    # Map physical address range into the process

    def map_io_space(self, pa: int, length: int, cache_type: int = CACHE_TYPE_UNCACHED) -> None:
        self.helper.map_io_space(pa, length, cache_type)
        self.logger.log_hal(f'[mem] Mapped: PA = 0x{pa:016X}, len = 0x{length:X}')

    def unmap_io_space(self, pa: int, length: int) -> None:
        self.helper.unmap_io_space(pa, length)
        self.logger.log_hal(f'[mem] Unmapped: PA = 0x{pa:016X}')
