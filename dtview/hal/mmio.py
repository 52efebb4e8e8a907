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
Access to MMIO (Memory Mapped IO) registers

usage:
    >>> read_MMIO_reg(base, 0x10, 4)
    >>> write_MMIO_reg(base, 0x0, 0x01, 1)
"""

from dtview.hal import hal_base


class MMIO(hal_base.HALBase):

    def __init__(self, machine):
        super(MMIO, self).__init__(machine)
        self.helper = machine.helper

    #
    # Read MMIO register as an offset off of MMIO range base address
    #
    def read_MMIO_reg(self, base: int, offset: int, size: int = 4) -> int:
        reg_value = self.helper.read_mmio_reg(base + offset, size)
        self.logger.log_hal(f'[mmio] 0x{base:08X} + 0x{offset:08X} = 0x{reg_value:08X}')
        return reg_value

    def read_MMIO_reg_dword(self, base: int, offset: int) -> int:
        return self.read_MMIO_reg(base, offset, 4)

    #
    # Write MMIO register as an offset off of MMIO range base address
    #
    def write_MMIO_reg(self, base: int, offset: int, value: int, size: int = 4) -> int:
        self.logger.log_hal(f'[mmio] write 0x{base:08X} + 0x{offset:08X} = 0x{value:08X}')
        return self.helper.write_mmio_reg(base + offset, size, value)

    def write_MMIO_reg_byte(self, base: int, offset: int, value: int) -> int:
        return self.write_MMIO_reg(base, offset, value, 1)
