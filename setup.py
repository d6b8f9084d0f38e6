#!/usr/bin/env python

# SPDX-FileCopyrightText: 2021 Rose Davidson <rose@metaclassical.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later

# -*- encoding: utf-8 -*-

from setuptools import find_packages
from setuptools import setup

setup(
    name="brailler",
    version="0.0.0",
    license="GPL-3.0-or-later",
    description="Type six-dot Braille cells as simultaneous key chords",
    long_description="An input method that turns six-key chords into Unicode Braille pattern characters.",
    author="Rose Davidson",
    author_email="rose@metaclassical.com",
    packages=find_packages("src"),
    package_dir={"": "src"},
    include_package_data=True,
    zip_safe=False,
    classifiers=[
        # complete classifier list: http://pypi.python.org/pypi?%3Aaction=list_classifiers
        "Development Status :: 3 - Alpha",
        "Intended Audience :: End Users/Desktop",
        "License :: OSI Approved :: GNU General Public License v3 or later (GPLv3+)",
        "Operating System :: POSIX",
        "Programming Language :: Python",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3 :: Only",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: Implementation :: CPython",
        "Topic :: Adaptive Technologies",
        "Topic :: Text Editors",
    ],
    python_requires=">=3.10",
    install_requires=[
        "cattrs>=22.1.0",
        "msgspec",
        "trio>=0.22.0",
        "trio-util>=0.7.0",
    ],
    tests_require=["pytest>=6.2.4", "pytest-trio>=0.8.0"],
    extras_require={
        "test": ["pytest>=6.2.4", "pytest-trio>=0.8.0"],
    },
    entry_points={
        "console_scripts": [
            "brailler = brailler.app:main",
        ],
    },
)
