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
Native Linux helper

Physical memory and MMIO windows are reached through /dev/mem. Register
windows are mmap'ed page-aligned and accessed with a single load or store of
the register width.
"""

import mmap
import multiprocessing
import os
import platform
import resource
import struct
from typing import List, Optional, Tuple

from dtview.library.exceptions import OsHelperError, UnimplementedAPIError
from dtview.library.structs import SIZE2FORMAT
from dtview.helper.basehelper import Helper
from dtview.library.logger import logger


class MemoryMapping(mmap.mmap):
    """mmap of /dev/mem that remembers the physical range it covers."""

    def __init__(self, fileno, length, flags, prot, offset):
        self.start = offset
        self.end = offset + length
        super().__init__()

    def covers(self, base: int, size: int) -> bool:
        return self.start <= base and base + size <= self.end


class LinuxNativeHelper(Helper):

    DEV_MEM = '/dev/mem'

    def __init__(self):
        super(LinuxNativeHelper, self).__init__()
        self.os_system = platform.system()
        self.os_release = platform.release()
        self.os_version = platform.version()
        self.os_machine = platform.machine()
        self.name = 'LinuxNativeHelper'
        self.dev_mem = None
        self.mappings: List[MemoryMapping] = []

###############################################################################################
# Driver/service management functions
###############################################################################################

    def create(self) -> bool:
        logger().log_debug('[helper] Linux Helper created')
        return True

    def start(self) -> bool:
        logger().log_debug('[helper] Linux Helper started/loaded')
        return True

    def stop(self) -> bool:
        self.close()
        logger().log_debug('[helper] Linux Helper stopped/unloaded')
        return True

    def delete(self) -> bool:
        logger().log_debug('[helper] Linux Helper deleted')
        return True

    def open_dev_mem(self) -> int:
        """Returns the /dev/mem descriptor, opening it on first use."""
        if self.dev_mem is None:
            try:
                self.dev_mem = os.open(self.DEV_MEM, os.O_RDWR)
            except OSError as err:
                raise OsHelperError(f'Unable to open {self.DEV_MEM}: {err.strerror}.\n'
                                    'Reading hardware tables requires root privileges.', err.errno)
        return self.dev_mem

    def close(self) -> None:
        while self.mappings:
            self.mappings.pop().close()
        if self.dev_mem is not None:
            os.close(self.dev_mem)
            self.dev_mem = None

###############################################################################################
# Actual API functions to access HW resources
###############################################################################################

    def memory_mapping(self, base: int, size: int) -> Optional[MemoryMapping]:
        """Returns the mapping that fully covers [base, base + size), if any."""
        return next((region for region in self.mappings if region.covers(base, size)), None)

    def _register(self, phys_address: int, size: int) -> Tuple[memoryview, int]:
        region = self.memory_mapping(phys_address, size)
        if region is None:
            self.map_io_space(phys_address, size, 0)
            region = self.memory_mapping(phys_address, size)
        return memoryview(region), phys_address - region.start

    def read_mmio_reg(self, phys_address: int, size: int) -> int:
        view, offset = self._register(phys_address, size)
        if size == 1:
            return view[offset]
        if offset % size:
            return struct.unpack(f'<{SIZE2FORMAT[size]}', view[offset:offset + size])[0]
        return view.cast(SIZE2FORMAT[size])[offset // size]

    def write_mmio_reg(self, phys_address: int, size: int, value: int) -> int:
        view, offset = self._register(phys_address, size)
        if size == 1:
            view[offset] = value
        elif offset % size:
            view[offset:offset + size] = struct.pack(f'<{SIZE2FORMAT[size]}', value)
        else:
            view.cast(SIZE2FORMAT[size])[offset // size] = value
        return size

    def map_io_space(self, phys_address: int, length: int, cache_type: int) -> None:
        if self.memory_mapping(phys_address, length) is not None:
            return
        dev_mem = self.open_dev_mem()
        page_size = resource.getpagesize()
        start = phys_address - (phys_address % page_size)
        mapped_length = max(phys_address + length - start, page_size)
        logger().log_helper(f'[helper] Mapping 0x{start:X}, len = 0x{mapped_length:X}')
        self.mappings.append(MemoryMapping(dev_mem, mapped_length, mmap.MAP_SHARED,
                                           mmap.PROT_READ | mmap.PROT_WRITE, offset=start))

    def unmap_io_space(self, phys_address: int, length: int) -> None:
        region = self.memory_mapping(phys_address, length)
        if region is not None:
            logger().log_helper(f'[helper] Unmapping 0x{region.start:X}')
            self.mappings.remove(region)
            region.close()

    def read_phys_mem(self, phys_address: int, length: int) -> bytes:
        return os.pread(self.open_dev_mem(), length, phys_address)

    # The IDTR is only reachable from a kernel driver
    def get_descriptor_table(self, cpu_thread_id: int, desc_table_code: int) -> Optional[Tuple[int, int, int]]:
        raise UnimplementedAPIError('get_descriptor_table')

    def get_threads_count(self) -> int:
        return multiprocessing.cpu_count()


def get_helper():
    return LinuxNativeHelper()
