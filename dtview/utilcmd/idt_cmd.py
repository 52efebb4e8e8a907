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
The idt command prints the Interrupt Descriptor Table of a CPU thread.

>>> dtview_util idt [cpu_id] [--layout wide|narrow] [--all]

Examples:

>>> dtview_util idt
>>> dtview_util idt 1
>>> dtview_util idt --all
>>> dtview_util idt 0 --layout narrow
"""

from argparse import ArgumentParser

from dtview.command import BaseCommand, toLoad
from dtview.hal.cpu import CPU
from dtview.hal.idt import IDT, Layout
from dtview.library.structs import render


class IDTCommand(BaseCommand):

    def requirements(self) -> toLoad:
        return toLoad.Driver

    def parse_arguments(self) -> None:
        default_thread = int(self.machine.options.get_section_data('IDT', 'default_thread', '0'), 0)
        parser = ArgumentParser(prog='dtview_util idt', usage=__doc__)
        parser.add_argument('_thread', metavar='thread', type=lambda x: int(x, 0), nargs='?', default=default_thread, help='CPU thread')
        parser.add_argument('--layout', dest='_layout', choices=['wide', 'narrow'], default=None, help='Gate descriptor layout (detected by default)')
        parser.add_argument('--all', dest='_all', action='store_true', help='Dump the IDT of every CPU thread')
        parser.set_defaults(func=self.idt_dump)
        parser.parse_args(self.argv, namespace=self)

    def idt_dump(self) -> None:
        layout = Layout[self._layout.upper()] if self._layout else None
        idt = IDT(self.machine, layout)
        self.logger.log_verbose(f'[dtview] IDT gate layout: {idt.layout.name.lower()}')
        if self._all:
            threads = range(CPU(self.machine).get_cpu_thread_count())
        else:
            threads = [self._thread]
        for thread in threads:
            self.logger.log(f'[dtview] Dumping IDT of CPU thread {thread:d}')
            self.logger.log(render(idt.report(thread)))


commands = {'idt': IDTCommand}
