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
Logging functions

All output, reports included, goes through the DTVIEW_LOGGER logger. Custom
levels sit between DEBUG and INFO so that -v, --hal and -d can be turned on
independently.

usage:
    >>> logger().log_hal('[mem] 0x000F0000, len = 0x10000')
    >>> logger().set_log_file('ioapic.log')
"""
import logging
import platform
import string
import sys
import os
from time import strftime
from typing import Optional
from enum import Enum

dir_path = os.path.dirname(os.path.realpath(__file__))
BASE_PATH = os.path.join(dir_path, os.pardir, os.pardir)
LOGGER_NAME = 'DTVIEW_LOGGER'


class level(Enum):
    DEBUG = 10
    HELPER = 11
    HAL = 12
    VERBOSE = 13
    INFO = 20
    BAD = 22
    WARNING = 30
    ERROR = 40
    CRITICAL = 50


PREFIXES = {
    level.DEBUG.value: '[*] [DEBUG] ',
    level.HELPER.value: '[*] [HELPER] ',
    level.HAL.value: '[*] [HAL] ',
    level.VERBOSE.value: '[*] [VERBOSE] ',
    level.BAD.value: '[-] ',
    level.WARNING.value: 'WARNING: ',
    level.ERROR.value: 'ERROR: ',
}

LEVEL_COLORS = {
    level.DEBUG.value: 'BLUE',
    level.HELPER.value: 'GREY',
    level.HAL.value: 'GREY',
    level.VERBOSE.value: 'GREY',
    level.BAD.value: 'RED',
    level.WARNING.value: 'YELLOW',
    level.ERROR.value: 'RED',
    level.CRITICAL.value: 'PURPLE',
}


class dtviewFilter(logging.Filter):
    """Tags each record with the prefix of its level."""

    def filter(self, record):
        record.additional = PREFIXES.get(record.levelno, '')
        return True


class dtviewLogFormatter(logging.Formatter):
    """Plain formatter for log files; the color argument is dropped."""

    def format(self, record):
        record.args = tuple()
        return super().format(record)


class dtviewStreamFormatter(logging.Formatter):
    try:
        is_atty = sys.stdout.isatty()
    except AttributeError:
        is_atty = False
    # No colors when NO_COLOR is set (https://no-color.org/) or output is redirected
    if is_atty and os.getenv('NO_COLOR') is None and platform.system().lower() == 'linux':
        colors = {
            'GREY': '\033[90m',
            'RED': '\033[91m',
            'GREEN': '\033[92m',
            'YELLOW': '\033[93m',
            'BLUE': '\033[94m',
            'PURPLE': '\033[95m',
            'CYAN': '\033[96m',
            'WHITE': '\033[97m',
            'END': '\033[0m'}
    else:
        colors = {}

    def format(self, record):
        color = LEVEL_COLORS.get(record.levelno, 'WHITE')
        if record.args and record.args[0] in self.colors:
            color = record.args[0]
        record.args = tuple()
        text = super().format(record)
        if color in self.colors:
            return f'{self.colors[color]}{text}{self.colors["END"]}'
        return text


class Logger:
    """Class for logging to console and text file."""

    VERBOSE: bool = False
    HAL: bool = False
    DEBUG: bool = False

    LOG_TO_FILE: bool = False
    LOG_FILE_NAME: str = ''

    def __init__(self):
        self.logfile = None
        self.LOG_PATH = os.path.join(BASE_PATH, 'logs')
        self.logstream = logging.StreamHandler(sys.stdout)
        self.logstream.setFormatter(dtviewStreamFormatter('%(additional)s%(message)s'))
        self.logFormatter = dtviewLogFormatter('%(additional)s%(message)s')
        self.dtviewLogger = logging.getLogger(LOGGER_NAME)
        self.dtviewLogger.setLevel(logging.INFO)
        self.dtviewLogger.propagate = False
        if not self.dtviewLogger.handlers:
            self.dtviewLogger.addHandler(self.logstream)
        if not self.dtviewLogger.filters:
            self.dtviewLogger.addFilter(dtviewFilter(LOGGER_NAME))
        for custom in (level.HELPER, level.HAL, level.VERBOSE, level.BAD):
            logging.addLevelName(custom.value, custom.name)

    def log(self, text: str, level: level = level.INFO, color: Optional[str] = None) -> None:
        """Sends plain text to logging."""
        self.dtviewLogger.log(level.value, text, color)

    def log_verbose(self, text: str) -> None:
        self.log(text, level.VERBOSE)

    def log_hal(self, text: str) -> None:
        """Logs a hardware access (shown with --hal)"""
        self.log(text, level.HAL)

    def log_helper(self, text: str) -> None:
        self.log(text, level.HELPER)

    def log_debug(self, text: str) -> None:
        self.log(text, level.DEBUG)

    def log_error(self, text: str) -> None:
        self.log(text, level.ERROR)

    def log_warning(self, text: str) -> None:
        self.log(text, level.WARNING)

    def log_bad(self, text: str) -> None:
        self.log(text, level.BAD)

    def set_log_level(self, verbose: bool, hal: bool, debug: bool, vverbose: bool) -> None:
        self.VERBOSE = self.VERBOSE or verbose or vverbose
        self.HAL = self.HAL or hal or vverbose
        self.DEBUG = self.DEBUG or debug or vverbose
        self.setlevel()

    def setlevel(self) -> None:
        if self.DEBUG:
            self.dtviewLogger.setLevel(level.DEBUG.value)
        elif self.HAL:
            self.dtviewLogger.setLevel(level.HAL.value)
        elif self.VERBOSE:
            self.dtviewLogger.setLevel(level.VERBOSE.value)
        else:
            self.dtviewLogger.setLevel(level.INFO.value)

    def create_logs_folder(self) -> bool:
        try:
            os.makedirs(self.LOG_PATH, exist_ok=True)
        except OSError:
            print('Unable to create logs folder')
            return False
        return True

    def set_autolog_file(self) -> None:
        """Copies the output to logs/<timestamp>.log."""
        if not self.create_logs_folder():
            print('Unable to autolog')
            return
        file_handler = logging.FileHandler(os.path.join(self.LOG_PATH, f'{strftime("%a%b%d%y-%H%M%S")}.log'))
        file_handler.setFormatter(self.logFormatter)
        self.dtviewLogger.addHandler(file_handler)

    def set_log_file(self, name: str, tologpath: bool = True) -> None:
        """Redirects the output to a log file; an empty name goes back to the console."""
        self.disable()
        if not name or not self.create_logs_folder():
            return
        self.LOG_FILE_NAME = os.path.join(self.LOG_PATH, name) if tologpath else name
        try:
            self.logfile = logging.FileHandler(filename=self.LOG_FILE_NAME, mode='a')
        except OSError:
            print(f'WARNING: Could not open log file: {self.LOG_FILE_NAME}')
            return
        self.logfile.setFormatter(self.logFormatter)
        self.dtviewLogger.addHandler(self.logfile)
        self.dtviewLogger.removeHandler(self.logstream)
        self.LOG_TO_FILE = True

    def close(self) -> None:
        """Closes the log file and restores console output."""
        if self.logfile is None:
            return
        self.dtviewLogger.removeHandler(self.logfile)
        self.logfile.close()
        self.logfile = None
        self.dtviewLogger.addHandler(self.logstream)

    def disable(self) -> None:
        self.LOG_TO_FILE = False
        self.LOG_FILE_NAME = ''
        self.close()


_logger = Logger()


def logger() -> Logger:
    """Returns a Logger instance."""
    return _logger


##################################################################################
# Hex dump functions
##################################################################################

def dump_buffer_bytes(arr, length=8):
    """Dumps the buffer (bytes, bytearray) with ASCII"""
    output = []
    for pos in range(0, len(arr), length):
        chunk = arr[pos:pos + length]
        hex_part = ''.join(f'{c:02X} ' for c in chunk).ljust(length * 3)
        ascii_part = ''.join(chr(c) if chr(c) in string.printable and chr(c) not in string.whitespace else ' ' for c in chunk)
        output.append(f'{hex_part}| {ascii_part}')
    return '\n'.join(output)


def print_buffer_bytes(arr, length=16):
    """Prints the buffer (bytes, bytearray) with ASCII"""
    logger().log(dump_buffer_bytes(arr, length))
