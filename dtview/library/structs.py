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
Bounded accessors over raw table bytes and the table handle shared by all decoders

usage:
    >>> read_field(buf, 4, 2)
    >>> read_bytes(buf, 0x2C, 20)
    >>> hex_rows(buf[:16], 4)
    >>> render(report_lines)
"""

import struct
from collections import namedtuple
from typing import Dict, List

from dtview.library.exceptions import CorruptTableError

SIZE2FORMAT: Dict[int, str] = {
    1: 'B',
    2: 'H',
    4: 'I',
    8: 'Q'
}


class TableHandle(namedtuple('TableHandle', 'base_address size_bytes entry_count')):
    __slots__ = ()

    def __str__(self) -> str:
        return f'Table @ 0x{self.base_address:016X}: 0x{self.size_bytes:X} bytes, {self.entry_count:d} entries'


def check_range(buf: bytes, offset: int, length: int) -> None:
    if offset < 0 or length < 0 or offset + length > len(buf):
        raise CorruptTableError(f'Access [0x{offset:X}, 0x{offset + length:X}) is outside of the 0x{len(buf):X} byte table')


def read_field(buf: bytes, offset: int, size: int) -> int:
    """Reads a little-endian unsigned field of 1, 2, 4 or 8 bytes at offset."""
    check_range(buf, offset, size)
    return struct.unpack_from(f'<{SIZE2FORMAT[size]}', buf, offset)[0]


def read_bytes(buf: bytes, offset: int, length: int) -> bytes:
    check_range(buf, offset, length)
    return bytes(buf[offset:offset + length])


def checksum8(buf: bytes) -> int:
    return sum(buf) & 0xFF


def hex_rows(buf: bytes, width: int = 4, start: int = 0) -> List[str]:
    """Splits buf into rows of 'width' bytes prefixed with their offset."""
    rows = []
    for pos in range(0, len(buf), width):
        row = ' '.join(f'{b:02X}' for b in buf[pos:pos + width])
        rows.append(f'0x{start + pos:03X}: {row}')
    return rows


def render(lines: List[str]) -> str:
    """Joins report lines into the text handed to the output sink."""
    return '\n'.join(lines) + '\n'
