#!/usr/bin/env python3
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
Setup module to install dtview package via setuptools
"""

import os
from setuptools import setup, find_packages


def long_description():
    return open('README').read()


def version():
    return open(os.path.join('dtview', 'VERSION')).read().strip()


package_data = {
    # Include any configuration file.
    '': ['*.ini'],
    'dtview': ['*VERSION*', 'options/*.ini'],
}
install_requires = []

setup(
    name='dtview',
    version=version(),
    description='dtview: Hardware Descriptor Table Viewer',
    author='dtview developers',
    license='GNU General Public License v2 (GPLv2)',
    platforms=['any'],
    long_description=long_description(),

    classifiers=[
        'Development Status :: 4 - Beta',
        'Environment :: Console',
        'License :: OSI Approved :: GNU General Public License v2 (GPLv2)',
        'Natural Language :: English',
        'Operating System :: POSIX :: Linux',
        'Programming Language :: Python :: 3',
        'Topic :: System :: Hardware'
    ],

    packages=find_packages(exclude=['tests.*', 'tests']),
    package_data=package_data,
    install_requires=install_requires,

    py_modules=['dtview_util'],
    entry_points={
        'console_scripts': [
            'dtview_util=dtview_util:main',
        ],
    },
    test_suite='tests',
)
