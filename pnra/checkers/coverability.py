"""
Coverability Graph Method

Reachability graph with acceleration of the strictly increasing places to ω,
so that the exploration terminates on unbounded nets.

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

from logging import debug
from typing import Optional

from pnra.checkers.reachability import Reachability
from pnra.ptio.analysis import ReachabilityAnalysis, format_marking_id
from pnra.ptio.ptnet import OMEGA, UNLIMITED, Marking, PetriNet
from pnra.ptio.verdict import UNBOUNDED, Boundedness


class Coverability(Reachability):
    """ Coverability graph method.

    Note
    ----
    Each successor is compared with the markings on its discovery path
    (not with the whole graph), the result is not a minimal coverability set.
    Places with a capacity are never accelerated.

    Attributes
    ----------
    ptnet : PetriNet
        Analyzed Petri net.
    markings : list of Marking
        Discovered markings indexed by ids.
    parents : list of int
        Id of the marking from which each marking has been discovered (None for the initial one).
    """

    method: str = "COVERABILITY"

    def __init__(self, ptnet: PetriNet) -> None:
        """ Initializer.

        Parameters
        ----------
        ptnet : PetriNet
            Analyzed Petri net.
        """
        super().__init__(ptnet)

        self.markings: list[Marking] = []
        self.parents: list[Optional[int]] = []

    def explore(self) -> ReachabilityAnalysis:
        """ Build the coverability graph in breadth-first order.
        """
        self.markings, self.parents = [], []
        return super().explore()

    def discover(self, marking_id: int, marking: Marking, parent_id: Optional[int]) -> None:
        """ Record the discovery path.
        """
        self.markings.append(marking)
        self.parents.append(parent_id)

    def accelerate(self, source_id: int, marking: Marking, boundedness: Boundedness) -> Marking:
        """ Set to ω the uncapped places growing since a covered ancestor.

        Parameters
        ----------
        source_id : int
            Id of the marking the successor is reached from.
        marking : Marking
            Successor (not stored yet).
        boundedness : Boundedness
            Place bounds to update.

        Returns
        -------
        Marking
            Accelerated successor.
        """
        ancestor_id: Optional[int] = source_id

        while ancestor_id is not None:
            ancestor = self.markings[ancestor_id]

            if ancestor != marking and ancestor.covered_by(marking):
                growing_places = [place_id for place_id, tokens in marking.tokens.items() if tokens != OMEGA and tokens > ancestor.get(place_id) and self.ptnet.capacity(place_id) == UNLIMITED]

                for place_id in growing_places:
                    marking.set(place_id, OMEGA)
                    boundedness.update(place_id, UNBOUNDED)

                if growing_places:
                    debug("[{}] Acceleration from {}:{}".format(self.method, format_marking_id(ancestor_id), marking))

            ancestor_id = self.parents[ancestor_id]

        return marking
