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
The ioapic command prints the redirection table of the primary and (when
configured) secondary I/O APIC.

>>> dtview_util ioapic [--base <address>] [--secondary <address>] [--decode]

Base addresses default to [IOAPIC] primary_base/secondary_base in cmd_options.ini.

Examples:

>>> dtview_util ioapic
>>> dtview_util ioapic --decode
>>> dtview_util ioapic --base 0xFEC00000 --secondary 0xFEC01000
"""

from argparse import ArgumentParser

from dtview.command import BaseCommand, toLoad, ExitCode
from dtview.hal.ioapic import IOAPIC
from dtview.library.exceptions import DescriptorTableError
from dtview.library.structs import render


class IOAPICCommand(BaseCommand):

    def requirements(self) -> toLoad:
        return toLoad.Driver

    def parse_arguments(self) -> None:
        parser = ArgumentParser(prog='dtview_util ioapic', usage=__doc__)
        parser.add_argument('--base', dest='_base', type=lambda x: int(x, 0), default=None, help='Primary I/O APIC base address')
        parser.add_argument('--secondary', dest='_secondary', type=lambda x: int(x, 0), default=None, help='Secondary I/O APIC base address')
        parser.add_argument('--decode', dest='_decode', action='store_true', help='Decode redirection entry fields')
        parser.set_defaults(func=self.ioapic_dump)
        parser.parse_args(self.argv, namespace=self)

    def ioapic_dump(self) -> None:
        ioapic = IOAPIC(self.machine)
        bases = ioapic.configured_bases(self._base, self._secondary)
        self.logger.log_verbose(f'[dtview] I/O APIC bases: {", ".join(f"0x{base:08X}" for base in bases)}')
        for index, base in enumerate(bases):
            self.logger.log(f'[dtview] I/O APIC {index:d} at 0x{base:08X}')
            # each I/O APIC is an independent table; a bad base does not hide the other
            try:
                self.logger.log(render(ioapic.report(base, self._decode)))
            except DescriptorTableError as err:
                self.logger.log_error(str(err))
                self.ExitCode = ExitCode.ERROR


commands = {'ioapic': IOAPICCommand}
