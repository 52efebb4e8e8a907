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
Intel MultiProcessor Specification 1.4 configuration table decoder

The MP Floating Pointer Structure is found by scanning the BIOS ROM area
(0xF0000 - 0xFFFFF) on 16-byte boundaries for "_MP_". It points at the MP
Configuration Table ("PCMP"): a 44-byte header followed by variable length
entries (20 bytes for processor entries, 8 bytes for all others).

usage:
    >>> scan_for_signature(rom, b'_MP_', 0xF0000)
    >>> mp = MPTable(machine())
    >>> snapshot = mp.locate()
    >>> for entry in walk(snapshot.table, snapshot.handle): print(entry)
    >>> mp.report()
"""

import struct
from collections import namedtuple
from typing import Generator, List

from dtview.hal.hal_base import HALBase
from dtview.hal.physmem import Memory
from dtview.library.bits import is_set, bit
from dtview.library.defines import bytestostring
from dtview.library.exceptions import NotFoundError, InvalidSignatureError, CorruptTableError
from dtview.library.structs import TableHandle, read_field, read_bytes, check_range, checksum8, hex_rows

SCAN_LOW_LIMIT = 0xF0000
SCAN_SIZE = 0x10000
SCAN_STRIDE = 16

MPFP_SIGNATURE = b'_MP_'
MPCT_SIGNATURE = b'PCMP'

MPFP_FMT = '<4sIBBB5B'
MPFP_SIZE = struct.calcsize(MPFP_FMT)
MPCT_HEADER_FMT = '<4sHBB8s12sIHHIHBB'
MPCT_HEADER_SIZE = struct.calcsize(MPCT_HEADER_FMT)
MPCT_PROCESSOR_FMT = '<BBBBII8s'

MPCT_ENTRY_TYPE_PROCESSOR = 0
MPCT_ENTRY_BYTES_PROCESSOR = 20
MPCT_ENTRY_BYTES_DEFAULT = 8

MPCT_ENTRY_TYPE_NAMES = {
    0: 'Processor',
    1: 'Bus',
    2: 'I/O APIC',
    3: 'I/O Interrupt Assignment',
    4: 'Local Interrupt Assignment'
}

HEX_ROW_WIDTH = 4


class MPFloatingPointer(namedtuple('MPFloatingPointer', 'Signature PhysAddr Length SpecRev Checksum Feature1 Feature2 Feature3 Feature4 Feature5')):
    __slots__ = ()

    def __str__(self) -> str:
        return f"""
MP Floating Pointer Structure:
  Signature                 : {bytestostring(self.Signature)}
  Configuration Table       : 0x{self.PhysAddr:08X}
  Length                    : {self.Length:d} x 16 bytes
  Specification Revision    : 1.{self.SpecRev:d}
  Checksum                  : 0x{self.Checksum:02X}
  Feature Bytes             : 0x{self.Feature1:02X}, 0x{self.Feature2:02X}, 0x{self.Feature3:02X}, 0x{self.Feature4:02X}, 0x{self.Feature5:02X}
  IMCR Present              : {is_set(self.Feature2, bit(7))}
"""


class MPConfigHeader(namedtuple('MPConfigHeader', 'Signature BaseTableLength SpecRev Checksum OemId ProductId OemTablePtr OemTableSize \
        EntryCount LocalApicAddr ExtTableLength ExtTableChecksum Reserved')):
    __slots__ = ()

    def __str__(self) -> str:
        return f"""
MP Configuration Table Header:
  Signature                 : {bytestostring(self.Signature)}
  Base Table Length         : 0x{self.BaseTableLength:04X}
  Specification Revision    : 1.{self.SpecRev:d}
  Checksum                  : 0x{self.Checksum:02X}
  OEM ID                    : {bytestostring(self.OemId).strip()}
  Product ID                : {bytestostring(self.ProductId).strip()}
  OEM Table Pointer         : 0x{self.OemTablePtr:08X}
  OEM Table Size            : 0x{self.OemTableSize:04X}
  Entry Count               : {self.EntryCount:d}
  Local APIC Address        : 0x{self.LocalApicAddr:08X}
  Extended Table Length     : 0x{self.ExtTableLength:04X}
  Extended Table Checksum   : 0x{self.ExtTableChecksum:02X}
"""


class MPConfigEntry(namedtuple('MPConfigEntry', 'offset type raw')):
    __slots__ = ()

    @property
    def type_name(self) -> str:
        return MPCT_ENTRY_TYPE_NAMES.get(self.type, f'Unknown ({self.type:d})')

    def __str__(self) -> str:
        return f'0x{self.offset:03X}: {" ".join(f"{b:02X}" for b in self.raw)}'


class MPProcessorEntry(namedtuple('MPProcessorEntry', 'Type LocalApicId LocalApicVersion CpuFlags CpuSignature FeatureFlags Reserved')):
    __slots__ = ()

    @property
    def enabled(self) -> bool:
        return is_set(self.CpuFlags, bit(0))

    @property
    def bootstrap(self) -> bool:
        return is_set(self.CpuFlags, bit(1))

    def __str__(self) -> str:
        return (f'Processor: Local APIC ID 0x{self.LocalApicId:02X}, Version 0x{self.LocalApicVersion:02X}, '
                f'{"enabled" if self.enabled else "disabled"}{", BSP" if self.bootstrap else ""}, '
                f'Signature 0x{self.CpuSignature:08X}, Features 0x{self.FeatureFlags:08X}')


MPSnapshot = namedtuple('MPSnapshot', 'handle floating_pointer floating_pointer_raw header table')


def scan_for_signature(buffer: bytes, signature: bytes, base: int, stride: int = SCAN_STRIDE) -> int:
    """Returns the address of the first stride-aligned occurrence of signature."""
    for pos in range(0, len(buffer) - len(signature) + 1, stride):
        if buffer[pos:pos + len(signature)] == signature:
            return base + pos
    raise NotFoundError(f'Signature {bytestostring(signature)} not found in [0x{base:X}, 0x{base + len(buffer):X})')


def parse_floating_pointer(buf: bytes) -> MPFloatingPointer:
    check_range(buf, 0, MPFP_SIZE)
    return MPFloatingPointer(*struct.unpack_from(MPFP_FMT, buf))


def parse_header(buf: bytes) -> MPConfigHeader:
    check_range(buf, 0, MPCT_HEADER_SIZE)
    header = MPConfigHeader(*struct.unpack_from(MPCT_HEADER_FMT, buf))
    if header.Signature != MPCT_SIGNATURE:
        raise InvalidSignatureError(f'MP Configuration Table signature {header.Signature!r} doesn\'t match "PCMP"')
    return header


def parse_processor_entry(entry: MPConfigEntry) -> MPProcessorEntry:
    return MPProcessorEntry(*struct.unpack_from(MPCT_PROCESSOR_FMT, entry.raw))


def entry_length(entry_type: int) -> int:
    if entry_type == MPCT_ENTRY_TYPE_PROCESSOR:
        return MPCT_ENTRY_BYTES_PROCESSOR
    return MPCT_ENTRY_BYTES_DEFAULT


def walk(table: bytes, handle: TableHandle) -> Generator[MPConfigEntry, None, None]:
    end = handle.size_bytes
    if end < MPCT_HEADER_SIZE:
        raise CorruptTableError(f'Base table length 0x{end:X} is smaller than the 0x{MPCT_HEADER_SIZE:X} byte header')
    pos = MPCT_HEADER_SIZE
    while pos < end:
        entry_type = read_field(table, pos, 1)
        length = entry_length(entry_type)
        if pos + length > end:
            raise CorruptTableError(f'MP entry at 0x{pos:03X} ({length:d} bytes) overruns the 0x{end:X} byte base table')
        yield MPConfigEntry(pos, entry_type, read_bytes(table, pos, length))
        pos += length


class MPTable(HALBase):

    def __init__(self, machine):
        super(MPTable, self).__init__(machine)
        self.mem = Memory(machine)

    def find_floating_pointer(self) -> int:
        rom = self.mem.read_physical_mem(SCAN_LOW_LIMIT, SCAN_SIZE)
        pa = scan_for_signature(rom, MPFP_SIGNATURE, SCAN_LOW_LIMIT)
        self.logger.log_hal(f'[mp] MP Floating Pointer Structure physical address: 0x{pa:08X}')
        return pa

    def locate(self) -> MPSnapshot:
        fp_pa = self.find_floating_pointer()
        fp_raw = self.mem.read_physical_mem(fp_pa, MPFP_SIZE)
        fp = parse_floating_pointer(fp_raw)
        if checksum8(fp_raw) != 0:
            self.logger.log_warning(f'MP Floating Pointer Structure checksum is invalid (0x{checksum8(fp_raw):02X})')
        if fp.PhysAddr == 0:
            raise InvalidSignatureError(f'MP Floating Pointer Structure has no configuration table (default configuration {fp.Feature1:d})')

        header = parse_header(self.mem.read_physical_mem(fp.PhysAddr, MPCT_HEADER_SIZE))
        self.logger.log_hal(f'[mp] MP Configuration Table Header physical address: 0x{fp.PhysAddr:08X}')
        self.logger.log_hal(f'[mp] Base MP Configuration Table size: {header.BaseTableLength:d} bytes')

        size = max(header.BaseTableLength, MPCT_HEADER_SIZE)
        table = self.mem.read_physical_mem(fp.PhysAddr, size)
        if checksum8(table[:header.BaseTableLength]) != 0:
            self.logger.log_warning(f'Base MP Configuration Table checksum is invalid (0x{checksum8(table[:header.BaseTableLength]):02X})')
        handle = TableHandle(fp.PhysAddr, header.BaseTableLength, header.EntryCount)
        return MPSnapshot(handle, fp, fp_raw, header, table)

    def report(self, decode: bool = False) -> List[str]:
        snapshot = self.locate()
        entries = list(walk(snapshot.table, snapshot.handle))
        if len(entries) != snapshot.handle.entry_count:
            self.logger.log_warning(f'MP header declares {snapshot.handle.entry_count:d} entries, found {len(entries):d}')

        lines = ['MP Floating Pointer Structure:', '']
        lines.extend(hex_rows(snapshot.floating_pointer_raw, HEX_ROW_WIDTH))
        lines.extend(['', 'MP Configuration Table Header:', ''])
        lines.extend(hex_rows(snapshot.table[:MPCT_HEADER_SIZE], HEX_ROW_WIDTH))
        lines.extend(['', 'Base MP Configuration Table:', ''])
        lines.extend(str(entry) for entry in entries)
        if decode:
            lines.extend(str(snapshot.floating_pointer).splitlines())
            lines.extend(str(snapshot.header).splitlines())
            lines.append('')
            for entry in entries:
                if entry.type == MPCT_ENTRY_TYPE_PROCESSOR:
                    lines.append(f'0x{entry.offset:03X}: {parse_processor_entry(entry)}')
                else:
                    lines.append(f'0x{entry.offset:03X}: {entry.type_name}')
        return lines
