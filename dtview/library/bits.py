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
Bit-field extraction primitives

usage:
    >>> get_bits(0x0F000000, 24, 4)
    >>> make_mask(8, 16)
    >>> has_reserved_bits(value, make_mask(4, 24))
"""

from typing import Optional


def make_mask(size: int, mask_start: Optional[int] = 0) -> int:
    mask = (1 << size) - 1
    mask <<= mask_start
    return mask


def bit(bit_num: int) -> int:
    return int(1 << bit_num)


def is_set(val: int, bit_mask: int) -> bool:
    return bool(val & bit_mask != 0)


def get_bits(value: int, start: int, nbits: int) -> int:
    ret = value >> start
    ret &= (1 << nbits) - 1
    return ret


def has_reserved_bits(value: int, defined_mask: int) -> bool:
    """True if any bit outside of defined_mask is set in value."""
    return (value & ~defined_mask) != 0
