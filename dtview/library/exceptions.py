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


# ================================================
# Descriptor table decoding
# ================================================

class DescriptorTableError(RuntimeError):
    """Base class for failures that abort a table open."""
    pass


class NotFoundError(DescriptorTableError):
    """Raised when a table cannot be located (scan exhausted, register unavailable)."""
    pass


class InvalidSignatureError(DescriptorTableError):
    """Raised when a located structure does not carry the expected signature."""
    pass


class InvalidRegisterContentsError(DescriptorTableError):
    """Raised when reserved bits are set in a device identification register."""
    pass


class CorruptTableError(DescriptorTableError):
    """Raised when walking a table would read past its declared bounds."""
    pass


# Config
class CSConfigError(RuntimeError):
    pass


# ================================================
# OS Helper
# ================================================

class OsHelperError(RuntimeError):
    def __init__(self, msg: str, errorcode: int = 0) -> None:
        super(OsHelperError, self).__init__(msg)
        self.errorcode = errorcode


class UnimplementedAPIError(OsHelperError):
    def __init__(self, api_name: str) -> None:
        super(UnimplementedAPIError, self).__init__(f"'{api_name}' is not implemented", 0)
