#!/usr/bin/env python3

"""
This file is part of PNRA.

PNRA is free software: you can redistribute it and/or modify
it under the terms of the GNU General Public License as published by
the Free Software Foundation, either version 3 of the License, or
(at your option) any later version.

PNRA is distributed in the hope that it will be useful,
but WITHOUT ANY WARRANTY; without even the implied warranty of
MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
GNU General Public License for more details.

You should have received a copy of the GNU General Public License
along with PNRA. If not, see <https://www.gnu.org/licenses/>.
"""

from setuptools import find_namespace_packages, setup


setup(
    name="PNRA",
    version="1.0.0",
    description="PNRA - explicit reachability analysis of Petri nets",
    license="GPLv3",
    packages=find_namespace_packages(include=["pnra", "pnra.*"]),
    python_requires=">=3.9",
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        "console_scripts": ["pnra=pnra.pnra:main"],
    },
)
