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
The mp command locates and prints the MultiProcessor Configuration Table.

>>> dtview_util mp [--decode]

Examples:

>>> dtview_util mp
>>> dtview_util mp --decode
"""

from argparse import ArgumentParser

from dtview.command import BaseCommand, toLoad
from dtview.hal.mptable import MPTable
from dtview.library.structs import render


class MPCommand(BaseCommand):

    def requirements(self) -> toLoad:
        return toLoad.Driver

    def parse_arguments(self) -> None:
        parser = ArgumentParser(prog='dtview_util mp', usage=__doc__)
        parser.add_argument('--decode', dest='_decode', action='store_true', help='Decode the structures field by field')
        parser.set_defaults(func=self.mp_dump)
        parser.parse_args(self.argv, namespace=self)

    def mp_dump(self) -> None:
        self.logger.log('[dtview] Searching for the MP Floating Pointer Structure')
        self.logger.log(render(MPTable(self.machine).report(self._decode)))


commands = {'mp': MPCommand}
