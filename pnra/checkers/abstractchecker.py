"""
Abstract Checker.

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

from __future__ import annotations

__license__ = "GPLv3"
__version__ = "1.0.0"

from abc import ABC, abstractmethod

from pnra.ptio.analysis import ReachabilityAnalysis


class AbstractChecker(ABC):
    """ Abstract Checker.
    """

    @abstractmethod
    def explore(self) -> ReachabilityAnalysis:
        """ Explorer.
        """
        pass
