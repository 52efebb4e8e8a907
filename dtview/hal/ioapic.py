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
I/O APIC redirection table decoder

The I/O APIC exposes its registers through an index/data window:

    +0x00  IOREGSEL  (index, 8-bit)
    +0x10  IOWIN     (data, 32-bit)
    +0x40  EOI

usage:
    >>> with IOAPICWindow(machine(), 0xFEC00000) as window:
    >>>     info = read_info(window)
    >>>     entries = list(walk(window, info))
    >>> IOAPIC(machine()).report(0xFEC00000)
"""

from collections import namedtuple
from typing import Generator, List, Optional, Tuple

from dtview.hal.hal_base import HALBase
from dtview.hal.mmio import MMIO
from dtview.hal.physmem import Memory, CACHE_TYPE_UNCACHED
from dtview.library.bits import get_bits, has_reserved_bits, is_set, bit
from dtview.library.exceptions import InvalidRegisterContentsError

IOAPIC_DEFAULT_BASE = 0xFEC00000
IOAPIC_WINDOW_SIZE = 0x1000

IOAPIC_INDEX_OFFSET = 0x00
IOAPIC_DATA_OFFSET = 0x10
IOAPIC_EOI_OFFSET = 0x40

IOAPIC_REG_ID = 0x00
IOAPIC_REG_VER = 0x01
IOAPIC_REG_REDTBL = 0x10

IOAPIC_REG_ID_MASK_ID = 0x0F000000
IOAPIC_REG_VER_MASK_VER = 0x000000FF
IOAPIC_REG_VER_MASK_MAX_ENTRIES = 0x00FF0000

ENTRIES_PER_LINE = 3

DELIVERY_MODES = {
    0: 'Fixed',
    1: 'LowPri',
    2: 'SMI',
    4: 'NMI',
    5: 'INIT',
    7: 'ExtINT'
}


class IOAPICInfo(namedtuple('IOAPICInfo', 'base id version max_entries')):
    __slots__ = ()

    def __str__(self) -> str:
        return f'IO-APIC @ 0x{self.base:08X}: ID {self.id:X}, Version 0x{self.version:02X}, {self.max_entries + 1:d} pins'


class RedirectionEntry(namedtuple('RedirectionEntry', 'pin raw_low raw_high')):
    __slots__ = ()

    @property
    def vector(self) -> int:
        return get_bits(self.raw_low, 0, 8)

    @property
    def delivery_mode(self) -> int:
        return get_bits(self.raw_low, 8, 3)

    @property
    def logical(self) -> bool:
        return is_set(self.raw_low, bit(11))

    @property
    def pending(self) -> bool:
        return is_set(self.raw_low, bit(12))

    @property
    def active_low(self) -> bool:
        return is_set(self.raw_low, bit(13))

    @property
    def remote_irr(self) -> bool:
        return is_set(self.raw_low, bit(14))

    @property
    def level_triggered(self) -> bool:
        return is_set(self.raw_low, bit(15))

    @property
    def masked(self) -> bool:
        return is_set(self.raw_low, bit(16))

    @property
    def destination(self) -> int:
        return get_bits(self.raw_high, 24, 8)

    def __str__(self) -> str:
        return f'{self.pin:03d}: {self.raw_high:08X}{self.raw_low:08X}'


class IOAPICWindow:
    """Uncached mapping of one I/O APIC register window.

    The mapping is released on exit, including when setup fails.
    """

    def __init__(self, machine, base: int):
        self.base = base
        self.mem = Memory(machine)
        self.mmio = MMIO(machine)

    def __enter__(self) -> 'IOAPICWindow':
        self.mem.map_io_space(self.base, IOAPIC_WINDOW_SIZE, CACHE_TYPE_UNCACHED)
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        self.mem.unmap_io_space(self.base, IOAPIC_WINDOW_SIZE)

    def read_register(self, reg: int) -> int:
        self.mmio.write_MMIO_reg_byte(self.base, IOAPIC_INDEX_OFFSET, reg)
        return self.mmio.read_MMIO_reg_dword(self.base, IOAPIC_DATA_OFFSET)


def read_info(window: IOAPICWindow) -> IOAPICInfo:
    reg_id = window.read_register(IOAPIC_REG_ID)
    reg_ver = window.read_register(IOAPIC_REG_VER)

    # Reserved bits set means there is no I/O APIC at this base
    if has_reserved_bits(reg_id, IOAPIC_REG_ID_MASK_ID):
        raise InvalidRegisterContentsError(f'Bad data in IO-APIC ID register: {reg_id:X}. Probably wrong IO-APIC base address 0x{window.base:X}.')
    if has_reserved_bits(reg_ver, IOAPIC_REG_VER_MASK_VER | IOAPIC_REG_VER_MASK_MAX_ENTRIES):
        raise InvalidRegisterContentsError(f'Bad data in IO-APIC VER register: {reg_ver:X}. Probably wrong IO-APIC base address 0x{window.base:X}.')

    return IOAPICInfo(window.base, get_bits(reg_id, 24, 4), get_bits(reg_ver, 0, 8), get_bits(reg_ver, 16, 8))


def walk(window: IOAPICWindow, info: IOAPICInfo) -> Generator[RedirectionEntry, None, None]:
    for pin in range(info.max_entries + 1):
        raw_low = window.read_register(IOAPIC_REG_REDTBL + 2 * pin)
        raw_high = window.read_register(IOAPIC_REG_REDTBL + 2 * pin + 1)
        yield RedirectionEntry(pin, raw_low, raw_high)


def format_summary(info: IOAPICInfo) -> str:
    return f'IO-APIC    ID {info.id:X}    Version: {info.version:02X}    Max entries: {info.max_entries + 1:d}'


def format_entries(entries: List[RedirectionEntry]) -> List[str]:
    lines = []
    for start in range(0, len(entries), ENTRIES_PER_LINE):
        lines.append('    '.join(str(entry) for entry in entries[start:start + ENTRIES_PER_LINE]))
    return lines


def format_decoded(entries: List[RedirectionEntry]) -> List[str]:
    lines = ['PIN  VECT DELIV  DEST    STATUS  POL  IRR TRIG  MASK DST']
    for e in entries:
        lines.append(f'{e.pin:03d}  {e.vector:02X}   {DELIVERY_MODES.get(e.delivery_mode, "Rsvd"):<6} '
                     f'{"logical" if e.logical else "phys":<7} {"pending" if e.pending else "idle":<7} '
                     f'{"low" if e.active_low else "high":<4} {e.remote_irr:d}   {"level" if e.level_triggered else "edge":<5} '
                     f'{"yes" if e.masked else "no":<4} {e.destination:02X}')
    return lines


class IOAPIC(HALBase):

    def __init__(self, machine):
        super(IOAPIC, self).__init__(machine)

    def configured_bases(self, primary: Optional[int] = None, secondary: Optional[int] = None) -> List[int]:
        """Base addresses to decode: arguments override cmd_options.ini."""
        if primary is None:
            primary = self.machine.options.get_address('IOAPIC', 'primary_base', IOAPIC_DEFAULT_BASE)
        if secondary is None:
            secondary = self.machine.options.get_address('IOAPIC', 'secondary_base')
        bases = [primary]
        if secondary:
            bases.append(secondary)
        return bases

    def read_entries(self, base: int) -> Tuple[IOAPICInfo, List[RedirectionEntry]]:
        with IOAPICWindow(self.machine, base) as window:
            info = read_info(window)
            self.logger.log_hal(f'[ioapic] {info}')
            entries = list(walk(window, info))
        return info, entries

    def report(self, base: int = IOAPIC_DEFAULT_BASE, decode: bool = False) -> List[str]:
        info, entries = self.read_entries(base)
        lines = [format_summary(info), '']
        lines.extend(format_entries(entries))
        if decode:
            lines.append('')
            lines.extend(format_decoded(entries))
        return lines
