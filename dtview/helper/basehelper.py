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

from abc import ABC, abstractmethod
from typing import Optional, Tuple

# Base class for the helpers


class Helper(ABC):

    @abstractmethod
    def __init__(self):
        self.driver_loaded = False
        self.os_system = 'basehelper'
        self.os_release = '0.0'
        self.os_version = '0.0'
        self.os_machine = 'base'
        self.name = 'Helper'

    @abstractmethod
    def create(self) -> bool:
        pass

    @abstractmethod
    def start(self) -> bool:
        pass

    @abstractmethod
    def stop(self) -> bool:
        pass

    @abstractmethod
    def delete(self) -> bool:
        pass

    #################################################################################################
    # Actual OS helper functionality accessible to HAL components

    #
    # read/write mmio
    #
    @abstractmethod
    def read_mmio_reg(self, phys_address: int, size: int) -> int:
        pass

    @abstractmethod
    def write_mmio_reg(self, phys_address: int, size: int, value: int) -> int:
        pass

    #
    # physical_address is 64 bit integer
    #
    @abstractmethod
    def read_phys_mem(self, phys_address: int, length: int) -> bytes:
        pass

    @abstractmethod
    def map_io_space(self, phys_address: int, length: int, cache_type: int) -> None:
        pass

    @abstractmethod
    def unmap_io_space(self, phys_address: int, length: int) -> None:
        pass

    #
    # Read a descriptor table register (IDTR) on a specific CPU thread
    #
    @abstractmethod
    def get_descriptor_table(self, cpu_thread_id: int, desc_table_code: int) -> Optional[Tuple[int, int, int]]:
        pass

    #
    # Logical CPU count
    #
    @abstractmethod
    def get_threads_count(self) -> int:
        pass
