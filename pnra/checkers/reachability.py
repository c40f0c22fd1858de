"""
Reachability Graph Method

Breadth-first exploration of the reachable markings.

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

from collections import deque
from logging import info
from typing import Callable, Optional, Union

from pnra.checkers.abstractchecker import AbstractChecker
from pnra.ptio.analysis import Continuation, ReachabilityAnalysis
from pnra.ptio.ptnet import Arc, ArcKind, Marking, PetriNet, TransitionIO
from pnra.ptio.verdict import Bound, Boundedness, Live, Liveness

CapacityFn = Callable[[int], Union[int, float]]
WeightFn = Callable[[Arc], int]


class Markings:
    """ Discovered markings and their ids.

    Attributes
    ----------
    markings : dict of Marking: int
        Ids of the markings, in discovery order.
    """

    def __init__(self) -> None:
        self.markings: dict[Marking, int] = {}

    def __len__(self) -> int:
        return len(self.markings)

    def remember(self, marking: Marking) -> int:
        """ Store a new marking.

        Parameters
        ----------
        marking : Marking
            Marking not seen before.

        Returns
        -------
        int
            Id of the marking (number of markings previously stored).
        """
        marking_id = len(self.markings)
        self.markings[marking] = marking_id
        return marking_id

    def look_up(self, marking: Marking) -> Optional[int]:
        """ Id of a marking, None if not seen before.
        """
        return self.markings.get(marking)


def fire(transition: TransitionIO, marking: Marking, capacity: CapacityFn, weight: WeightFn, boundedness: Boundedness, liveness: Liveness) -> Optional[Marking]:
    """ Fire a transition from a marking.

    Note
    ----
    The marking is left untouched, and the accumulators are
    updated only if the transition fires.

    Parameters
    ----------
    transition : TransitionIO
        Input and output places of the transition.
    marking : Marking
        Starting marking.
    capacity : function
        Capacity of a place.
    weight : function
        Weight of an arc.
    boundedness : Boundedness
        Place bounds to update.
    liveness : Liveness
        Transition liveness to update.

    Returns
    -------
    Marking, optional
        Reached marking, None if the transition is disabled.
    """
    successor = marking.copy()

    # Consume tokens from the input places
    for place_id in transition.inputs:
        tokens = successor.get(place_id) - weight(Arc(ArcKind.PLACE_TRANSITION, place_id, transition.id))
        if tokens < 0:
            return None
        successor.set(place_id, tokens)

    # Produce tokens in the output places, within their capacity
    for place_id in transition.outputs:
        output_weight = weight(Arc(ArcKind.TRANSITION_PLACE, transition.id, place_id))
        max_current_tokens = capacity(place_id) - output_weight
        tokens = successor.get(place_id)
        if max_current_tokens < 0 or tokens > max_current_tokens:
            return None
        successor.set(place_id, tokens + output_weight)

    for place_id in transition.outputs:
        boundedness.update(place_id, Bound.of(successor.get(place_id)))
    liveness.update(transition.id, Live.L1)

    return successor


def fire_transitions(transitions_io: list[TransitionIO], marking: Marking, capacity: CapacityFn, weight: WeightFn, boundedness: Boundedness, liveness: Liveness) -> list[tuple[int, Marking]]:
    """ Fire all the enabled transitions from a marking.

    Returns
    -------
    list of tuple of int, Marking
        Fired transition ids and reached markings, in transition order.
    """
    successors = []

    for transition in transitions_io:
        successor = fire(transition, marking, capacity, weight, boundedness, liveness)
        if successor is not None:
            successors.append((transition.id, successor))

    return successors


class Reachability(AbstractChecker):
    """ Reachability graph method.

    Note
    ----
    The exploration terminates only if the set of reachable markings is finite.

    Attributes
    ----------
    ptnet : PetriNet
        Analyzed Petri net.
    """

    method: str = "REACHABILITY"

    def __init__(self, ptnet: PetriNet) -> None:
        """ Initializer.

        Parameters
        ----------
        ptnet : PetriNet
            Analyzed Petri net.
        """
        self.ptnet: PetriNet = ptnet

    def explore(self) -> ReachabilityAnalysis:
        """ Build the reachability graph in breadth-first order.

        Returns
        -------
        ReachabilityAnalysis
            Reachability graph, place bounds and transition liveness.
        """
        info("[{}] RUNNING".format(self.method))

        analysis = ReachabilityAnalysis(self.ptnet)
        boundedness, liveness = analysis.place_bounds, analysis.transition_liveness

        markings = Markings()
        transitions_io = self.ptnet.transition_io()
        capacity, weight = self.ptnet.capacity, self.ptnet.weight

        initial_marking = self.ptnet.initial_marking
        initial_marking_id = markings.remember(initial_marking)
        self.discover(initial_marking_id, initial_marking, None)

        # Work queue of (id, marking, pending successors)
        queue = deque([(initial_marking_id, initial_marking, fire_transitions(transitions_io, initial_marking, capacity, weight, boundedness, liveness))])

        while queue:
            source_id, source, successors = queue.popleft()

            continuations = []
            for transition_id, successor in successors:
                successor = self.accelerate(source_id, successor, boundedness)

                successor_id = markings.look_up(successor)
                if successor_id is None:
                    successor_id = markings.remember(successor)
                    self.discover(successor_id, successor, source_id)
                    queue.append((successor_id, successor, fire_transitions(transitions_io, successor, capacity, weight, boundedness, liveness)))

                continuations.append(Continuation(transition_id, successor_id))

            analysis.rows.append((source_id, source, continuations))

        info("[{}] {} markings explored".format(self.method, len(markings)))

        return analysis

    def discover(self, marking_id: int, marking: Marking, parent_id: Optional[int]) -> None:
        """ Hook called on each newly discovered marking.
        """
        pass

    def accelerate(self, source_id: int, marking: Marking, boundedness: Boundedness) -> Marking:
        """ Hook to abstract a successor before its look-up.
        """
        return marking
