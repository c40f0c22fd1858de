"""
Reachability Analysis Module

Reachability graph and derived verification properties.

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

from typing import NamedTuple

from pnra.ptio.ptnet import Marking, PetriNet, format_tokens
from pnra.ptio.verdict import Bound, Boundedness, DeadlockInterpretation, Live, Liveness


def format_marking_id(marking_id: int) -> str:
    """ Marking id to textual format (`M000`, `M001`, ...).
    """
    return "M{:03}".format(marking_id)


class Continuation(NamedTuple):
    """ Edge of the reachability graph: a fired transition and the reached marking.
    """
    transition_id: int
    marking_id: int

    def __str__(self) -> str:
        return "T{}->{}".format(self.transition_id, format_marking_id(self.marking_id))


class ReachabilityAnalysis:
    """ Reachability analysis.

    Attributes
    ----------
    ptnet : PetriNet
        Analyzed Petri net (read-only).
    rows : list of tuple of int, Marking, list of Continuation
        Discovered markings with their ids and outgoing edges, in discovery order.
    place_bounds : Boundedness
        Maximum number of tokens observed on each place.
    transition_liveness : Liveness
        Liveness class of each transition.
    """

    def __init__(self, ptnet: PetriNet) -> None:
        """ Initializer.

        Parameters
        ----------
        ptnet : PetriNet
            Analyzed Petri net.
        """
        self.ptnet: PetriNet = ptnet

        self.rows: list[tuple[int, Marking, list[Continuation]]] = []

        self.place_bounds: Boundedness = Boundedness(ptnet)
        self.transition_liveness: Liveness = Liveness(ptnet)

    def __str__(self) -> str:
        """ Analysis to textual format.

        Returns
        -------
        str
            Report format.
        """
        text = ''.join("T{} ... {}\n".format(transition.id, transition.name) for transition in self.ptnet.transitions)
        text += "\n"

        # Header
        text += "{:<7}".format("M")
        text += ''.join("{:<5}".format("P{}".format(place.id)) for place in self.ptnet.places)
        text += "Transitions\n"

        # Reachability graph
        for marking_id, marking, continuations in self.rows:
            text += "{:<7}".format(format_marking_id(marking_id))
            text += ''.join("{:<5}".format(format_tokens(marking.get(place.id))) for place in self.ptnet.places)
            text += ', '.join(map(str, continuations)) + "\n"
        text += "\n"

        # Interpretation
        text += "Interpretation\n"
        for marking_id, interpretation in self.deadlocks():
            text += "{}: {}\n".format(format_marking_id(marking_id), interpretation)
        text += "Boundedness: {}\n".format(self.boundedness())
        text += "Safe: {}\n".format(str(self.is_safe()).lower())
        text += "Live: {}\n".format(str(self.is_live()).lower())
        text += "Quasi-Live: {}\n".format(str(self.is_quasi_live()).lower())
        text += "Liveness: {}\n".format(self.transition_liveness)
        text += "Loops: {}\n".format(', '.join(map(format_marking_id, self.loops())))
        text += "Sound: {}\n".format(str(self.is_sound()).lower())

        return text

    def deadlocks(self) -> list[tuple[int, DeadlockInterpretation]]:
        """ Markings without continuation and their interpretation.

        Returns
        -------
        list of tuple of int, DeadlockInterpretation
            Dead markings, in discovery order.
        """
        deadlocks = []

        for marking_id, marking, continuations in self.rows:
            if continuations:
                continue

            marked_places = [(place_id, tokens) for place_id, tokens in marking.tokens.items() if tokens > 0]

            # A single token on a place that no transition consumes
            if len(marked_places) == 1 and marked_places[0][1] == 1 and not self.ptnet.has_outgoing_arcs(marked_places[0][0]):
                deadlocks.append((marking_id, DeadlockInterpretation.FINAL))
            else:
                deadlocks.append((marking_id, DeadlockInterpretation.DEADLOCK))

        return deadlocks

    def boundedness(self) -> Bound:
        """ Maximum bound over all the places.
        """
        return max(self.place_bounds.bounds, default=Bound(0))

    def is_safe(self) -> bool:
        """ Check if every place is 1-bounded.
        """
        return all(bound == Bound(1) for bound in self.place_bounds.bounds)

    def is_live(self) -> bool:
        """ Check if every transition is L4-live.
        """
        return all(live == Live.L4 for live in self.transition_liveness.lives)

    def is_quasi_live(self) -> bool:
        """ Check if the net is not live but at least one transition is L4-live.
        """
        return not self.is_live() and any(live == Live.L4 for live in self.transition_liveness.lives)

    def loops(self) -> list[int]:
        """ Markings from which a path back to themselves exists.

        Note
        ----
        Loop detection is not supported yet, no marking is reported.
        """
        return []

    def is_sound(self) -> bool:
        """ Check if every transition fired at least once
            and every place held a token at some point.
        """
        return all(live != Live.L0 for live in self.transition_liveness.lives) \
            and all(bound > Bound(0) for bound in self.place_bounds.bounds)
