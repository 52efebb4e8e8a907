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

import os
import configparser
from typing import Any, Optional
from dtview.library.file import get_main_dir
from dtview.library.exceptions import CSConfigError


class NoDefault():
    pass


class Options(object):

    def __init__(self, options_name: Optional[str] = None):
        if options_name is None:
            options_path = os.path.join(get_main_dir(), 'dtview', 'options')
            if not os.path.isdir(options_path):
                raise CSConfigError(f'Unable to locate configuration options: {options_path}')
            options_name = os.path.join(options_path, 'cmd_options.ini')
        self.config = configparser.ConfigParser()
        with open(options_name) as options_file:
            self.config.read_file(options_file)

    def get_section_data(self, section: str, key: str, default: Any = NoDefault) -> str:
        try:
            ret_data = self.config.get(section, key)
        except (configparser.NoSectionError, configparser.NoOptionError) as e:
            if default is NoDefault:
                raise e
            return default
        return ret_data

    def get_address(self, section: str, key: str, default: Optional[int] = None) -> Optional[int]:
        """Returns an address-valued option; an empty value means 'not set'."""
        raw = self.get_section_data(section, key, '').strip()
        if not raw:
            return default
        try:
            return int(raw, 0)
        except ValueError:
            raise CSConfigError(f'Option [{section}] {key} is not a valid address: {raw}')
