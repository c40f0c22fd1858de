"""
Boundedness and liveness tests.
"""

import pytest

from pnra.ptio.ptnet import OMEGA, PetriNet
from pnra.ptio.verdict import UNBOUNDED, Bound, Boundedness, DeadlockInterpretation, Live, Liveness


def test_bound_ordering():
    assert Bound(1) < Bound(2)
    assert Bound(1000) < UNBOUNDED
    assert not UNBOUNDED < Bound(3)
    assert max(Bound(2), UNBOUNDED, Bound(7)) == UNBOUNDED
    assert max(Bound(2), Bound(7)) == Bound(7)
    assert Bound(0) < Bound(1)


def test_bound_of_omega_is_unbounded():
    assert Bound.of(OMEGA) == UNBOUNDED
    assert Bound.of(3) == Bound(3)
    assert not UNBOUNDED.is_bounded()


def test_bound_str():
    assert str(Bound(3)) == "3-Bounded"
    assert str(UNBOUNDED) == "Unbounded"


def test_live_ordering_and_str():
    assert Live.L0 < Live.L1 < Live.L2 < Live.L3 < Live.L4
    assert str(Live.L3) == "L3"
    assert str(DeadlockInterpretation.FINAL) == "final"
    assert str(DeadlockInterpretation.DEADLOCK) == "deadlock"


def test_boundedness_starts_from_initial_marking(sequence_net):
    boundedness = Boundedness(sequence_net)
    assert boundedness.bounds == [Bound(1), Bound(0)]


def test_boundedness_is_monotone(sequence_net):
    boundedness = Boundedness(sequence_net)
    boundedness.update(1, Bound(3))
    boundedness.update(1, Bound(2))
    assert boundedness.bounds[1] == Bound(3)
    boundedness.update(1, UNBOUNDED)
    boundedness.update(1, Bound(10))
    assert boundedness.bounds[1] == UNBOUNDED


def test_boundedness_unknown_place_fails(sequence_net):
    boundedness = Boundedness(sequence_net)
    with pytest.raises(IndexError):
        boundedness.update(2, Bound(1))
    with pytest.raises(IndexError):
        boundedness.update(-1, Bound(1))


def test_liveness_is_monotone(cycle_net):
    liveness = Liveness(cycle_net)
    assert liveness.lives == [Live.L0, Live.L0]
    liveness.update(0, Live.L4)
    liveness.update(0, Live.L1)
    assert liveness.lives[0] == Live.L4
    with pytest.raises(IndexError):
        liveness.update(2, Live.L1)


def test_liveness_str_lists_every_class():
    ptnet = PetriNet()
    for name in ("t0", "t1", "t2"):
        ptnet.add_transition(name)
    liveness = Liveness(ptnet)
    liveness.update(0, Live.L1)
    liveness.update(2, Live.L1)
    assert str(liveness) == "L0 (T1); L1 (T0, T2); L2 (); L3 (); L4 ()"
