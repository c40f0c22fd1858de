"""
Verdict Module

Boundedness and liveness classifications,
and their accumulators along the exploration.

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

from enum import Enum, IntEnum
from functools import total_ordering
from typing import Optional, Union

from pnra.ptio.ptnet import OMEGA, PetriNet


@total_ordering
class Bound:
    """ Maximum number of tokens observed on a place.

    Note
    ----
    Bounded(a) < Bounded(b) iff a < b,
    and any bounded value is lower than Unbounded.

    Attributes
    ----------
    tokens : int, optional
        Bound, None if unbounded.
    """

    def __init__(self, tokens: Optional[int] = None) -> None:
        """ Initializer.

        Parameters
        ----------
        tokens : int, optional
            Bound, None if unbounded.
        """
        self.tokens: Optional[int] = tokens

    @classmethod
    def of(cls, tokens: Union[int, float]) -> Bound:
        """ Bound corresponding to a number of tokens (possibly OMEGA).
        """
        return cls(None if tokens == OMEGA else tokens)

    def is_bounded(self) -> bool:
        return self.tokens is not None

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Bound):
            return NotImplemented
        return self.tokens == other.tokens

    def __lt__(self, other: Bound) -> bool:
        if not isinstance(other, Bound):
            return NotImplemented
        if self.tokens is None:
            return False
        return other.tokens is None or self.tokens < other.tokens

    def __hash__(self) -> int:
        return hash(self.tokens)

    def __str__(self) -> str:
        """ Bound to textual format.
        """
        if self.tokens is None:
            return "Unbounded"
        return "{}-Bounded".format(self.tokens)

    def __repr__(self) -> str:
        return "Bound({})".format(self.tokens)


UNBOUNDED = Bound()


class Live(IntEnum):
    """ Liveness classes of a transition.

        Note
        ----
        L0 -> never fires
        L1 -> fires at least once
        L2 -> fires a finite but non-deterministic number of times
        L3 -> fires a non-deterministically finite or infinite number of times
        L4 -> fires a deterministically infinite number of times
    """
    L0 = 0
    L1 = 1
    L2 = 2
    L3 = 3
    L4 = 4

    def __str__(self) -> str:
        return self.name


class DeadlockInterpretation(Enum):
    """ Interpretation of a marking without successor.

        Note
        ----
        FINAL -> a single token on a place without outgoing arc (desired)
        DEADLOCK -> any other dead marking (undesired)
    """
    FINAL = 'final'
    DEADLOCK = 'deadlock'

    def __str__(self) -> str:
        return self.value


class Boundedness:
    """ Running maximum of the tokens observed on each place.

    Attributes
    ----------
    bounds : list of Bound
        Bounds indexed by place ids.
    """

    def __init__(self, ptnet: PetriNet) -> None:
        """ Initializer, from the initial marking of the net.

        Parameters
        ----------
        ptnet : PetriNet
            Analyzed Petri net.
        """
        self.bounds: list[Bound] = [Bound(0) for _ in ptnet.places]

        for place_id, tokens in ptnet.initial_marking.tokens.items():
            self.bounds[place_id] = Bound.of(tokens)

    def update(self, place_id: int, bound: Bound) -> None:
        """ Update the bound of a place if greater.

        Raises
        ------
        IndexError
            Unknown place id.
        """
        if not 0 <= place_id < len(self.bounds):
            raise IndexError("Unknown place id: {}".format(place_id))

        self.bounds[place_id] = max(self.bounds[place_id], bound)


class Liveness:
    """ Running liveness class of each transition.

    Attributes
    ----------
    lives : list of Live
        Liveness classes indexed by transition ids.
    """

    def __init__(self, ptnet: PetriNet) -> None:
        self.lives: list[Live] = [Live.L0 for _ in ptnet.transitions]

    def __str__(self) -> str:
        """ Liveness to textual format.

        Returns
        -------
        str
            `L0 (T1, T2); L1 (T0); ...` format.
        """
        classes: dict[Live, list[str]] = {live: [] for live in Live}

        for transition_id, live in enumerate(self.lives):
            classes[live].append("T{}".format(transition_id))

        return '; '.join("{} ({})".format(live, ', '.join(transitions)) for live, transitions in classes.items())

    def update(self, transition_id: int, live: Live) -> None:
        """ Update the liveness class of a transition if greater.

        Raises
        ------
        IndexError
            Unknown transition id.
        """
        if not 0 <= transition_id < len(self.lives):
            raise IndexError("Unknown transition id: {}".format(transition_id))

        self.lives[transition_id] = max(self.lives[transition_id], live)
