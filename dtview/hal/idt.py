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
Interrupt Descriptor Table (IDT) decoder

The table is located through the IDTR of a CPU thread and walked as an array
of gate descriptors. Gate width depends on the layout of the running kernel:
16 bytes on 64-bit (WIDE) and 8 bytes on 32-bit (NARROW).

usage:
    >>> idt = IDT(machine())
    >>> handle, table = idt.locate(0)
    >>> for gate in walk(table, handle, idt.layout): print(gate)
    >>> idt.report(0)
"""

from collections import namedtuple
from enum import Enum
from typing import Generator, List, Optional, Tuple

from dtview.hal.hal_base import HALBase
from dtview.hal.cpu import CPU
from dtview.hal.physmem import Memory
from dtview.library.bits import get_bits
from dtview.library.structs import TableHandle, read_field, check_range

GATE_TASK = 0x5
GATE_INTERRUPT = 0xE
GATE_TRAP = 0xF

GATE_TYPE_NAMES = {
    GATE_INTERRUPT: 'interrupt',
    GATE_TRAP: 'trap',
    GATE_TASK: 'task'
}

IDT_WIDE_HEADER = '      HEX                              TYPE      DPL P IST SEGM OFFSET'
IDT_NARROW_HEADER = '      HEX              TYPE      DPL P SEGM OFFSET'


class Layout(Enum):
    WIDE = 16
    NARROW = 8

    @property
    def stride(self) -> int:
        return self.value


def detect_layout(os_machine: str) -> Layout:
    """64-bit machines (x86_64, AMD64, ...) use 16-byte gates."""
    if os_machine and os_machine.lower().endswith('64'):
        return Layout.WIDE
    return Layout.NARROW


class GateDescriptor(namedtuple('GateDescriptor', 'index raw_low raw_high offset segment_selector type dpl present ist')):
    __slots__ = ()

    @property
    def type_name(self) -> str:
        return GATE_TYPE_NAMES.get(self.type, 'other')

    def __str__(self) -> str:
        ist = '' if self.ist is None else f', IST: {self.ist:d}'
        return f'Gate 0x{self.index:02X}: {self.type_name} {self.segment_selector:04X}:{self.offset:X}, DPL: {self.dpl:d}, P: {self.present:d}{ist}'


def decode_gate(table: bytes, index: int, layout: Layout) -> GateDescriptor:
    pos = index * layout.stride
    check_range(table, pos, layout.stride)
    raw_low = read_field(table, pos, 8)
    selector = get_bits(raw_low, 16, 16)
    # 64-bit gates carry type and S as one 5-bit field; 32-bit gates keep S separate
    gate_type = get_bits(raw_low, 40, 5 if layout is Layout.WIDE else 4)
    dpl = get_bits(raw_low, 45, 2)
    present = bool(get_bits(raw_low, 47, 1))
    if layout is Layout.WIDE:
        raw_high = read_field(table, pos + 8, 8)
        offset = (get_bits(raw_high, 0, 32) << 32) | (get_bits(raw_low, 48, 16) << 16) | get_bits(raw_low, 0, 16)
        ist = get_bits(raw_low, 32, 3)
    else:
        raw_high = None
        offset = (get_bits(raw_low, 48, 16) << 16) | get_bits(raw_low, 0, 16)
        ist = None
    return GateDescriptor(index, raw_low, raw_high, offset, selector, gate_type, dpl, present, ist)


def walk(table: bytes, handle: TableHandle, layout: Layout) -> Generator[GateDescriptor, None, None]:
    for index in range(handle.entry_count):
        yield decode_gate(table, index, layout)


def format_summary(handle: TableHandle) -> str:
    return f'IDT    Size: {handle.size_bytes:d} bytes / {handle.entry_count:d} entries    Virt address: 0x{handle.base_address:X}'


def format_gate(gate: GateDescriptor, layout: Layout) -> str:
    present = '+' if gate.present else '-'
    if layout is Layout.WIDE:
        return (f'0x{gate.index:02X}: {gate.raw_high:016X}{gate.raw_low:016X} {gate.type_name:<9} {gate.dpl:X}   '
                f'{present} {gate.ist:X}   {gate.segment_selector:04X} {gate.offset:016X}')
    return (f'0x{gate.index:02X}: {gate.raw_low:016X} {gate.type_name:<9} {gate.dpl:X}   '
            f'{present} {gate.segment_selector:04X} {gate.offset:08X}')


class IDT(HALBase):

    def __init__(self, machine, layout: Optional[Layout] = None):
        super(IDT, self).__init__(machine)
        self.cpu = CPU(machine)
        self.mem = Memory(machine)
        self.layout = layout if layout is not None else detect_layout(machine.helper.os_machine)

    def locate(self, cpu_thread_id: int = 0) -> Tuple[TableHandle, bytes]:
        (limit, base, pa) = self.cpu.get_IDTR(cpu_thread_id)
        size = limit + 1
        handle = TableHandle(base, size, size // self.layout.stride)
        self.logger.log_hal(f'[idt] {handle} ({self.layout.name} layout)')
        table = self.mem.read_physical_mem(pa, size)
        return handle, table

    def report(self, cpu_thread_id: int = 0) -> List[str]:
        handle, table = self.locate(cpu_thread_id)
        lines = [format_summary(handle), '']
        lines.append(IDT_WIDE_HEADER if self.layout is Layout.WIDE else IDT_NARROW_HEADER)
        lines.extend(format_gate(gate, self.layout) for gate in walk(table, handle, self.layout))
        return lines
