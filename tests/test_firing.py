"""
Firing rule tests.
"""

from pnra.checkers.reachability import fire, fire_transitions
from pnra.ptio.ptnet import Marking, PetriNet
from pnra.ptio.verdict import Bound, Boundedness, Live, Liveness


def fire_first(ptnet: PetriNet, marking: Marking):
    boundedness, liveness = Boundedness(ptnet), Liveness(ptnet)
    successor = fire(ptnet.transition_io()[0], marking, ptnet.capacity, ptnet.weight, boundedness, liveness)
    return successor, boundedness, liveness


def test_enabled_transition_moves_tokens(sequence_net):
    marking = sequence_net.initial_marking
    successor, boundedness, liveness = fire_first(sequence_net, marking)

    assert successor == Marking({1: 1})
    assert marking == Marking({0: 1})
    assert boundedness.bounds == [Bound(1), Bound(1)]
    assert liveness.lives == [Live.L1]


def test_insufficient_tokens_disables():
    ptnet = PetriNet()
    p0, p1 = ptnet.add_place("p0", 1), ptnet.add_place("p1")
    t0 = ptnet.add_transition("t0")
    ptnet.add_arc(p0, t0, 2)
    ptnet.add_arc(t0, p1)

    successor, boundedness, liveness = fire_first(ptnet, ptnet.initial_marking)

    assert successor is None
    assert liveness.lives == [Live.L0]


def test_capacity_disables_without_side_effect():
    ptnet = PetriNet()
    p0, p1, p2 = ptnet.add_place("p0", 1), ptnet.add_place("p1"), ptnet.add_place("p2", capacity=0)
    t0 = ptnet.add_transition("t0")
    ptnet.add_arc(p0, t0)
    ptnet.add_arc(t0, p1)
    ptnet.add_arc(t0, p2)
    marking = ptnet.initial_marking

    successor, boundedness, liveness = fire_first(ptnet, marking)

    assert successor is None
    assert marking == Marking({0: 1})
    assert boundedness.bounds == [Bound(1), Bound(0), Bound(0)]
    assert liveness.lives == [Live.L0]


def test_capacity_is_checked_against_current_tokens():
    ptnet = PetriNet()
    p0, p1 = ptnet.add_place("p0", 2), ptnet.add_place("p1", capacity=2)
    t0 = ptnet.add_transition("t0")
    ptnet.add_arc(p0, t0)
    ptnet.add_arc(t0, p1, 2)

    successor, _, _ = fire_first(ptnet, ptnet.initial_marking)
    assert successor == Marking({0: 1, 1: 2})

    successor, _, _ = fire_first(ptnet, successor)
    assert successor is None


def test_self_loop_within_capacity():
    ptnet = PetriNet()
    p0 = ptnet.add_place("p0", 1, capacity=1)
    t0 = ptnet.add_transition("t0")
    ptnet.add_arc(p0, t0)
    ptnet.add_arc(t0, p0)

    successor, _, liveness = fire_first(ptnet, ptnet.initial_marking)

    assert successor == Marking({0: 1})
    assert liveness.lives == [Live.L1]


def test_unconnected_places_are_conserved():
    ptnet = PetriNet()
    p0, p1 = ptnet.add_place("p0", 1), ptnet.add_place("p1")
    ptnet.add_place("p2", 5)
    t0 = ptnet.add_transition("t0")
    ptnet.add_arc(p0, t0)
    ptnet.add_arc(t0, p1)

    successor, _, _ = fire_first(ptnet, ptnet.initial_marking)

    assert successor.get(2) == 5


def test_fire_transitions_skips_disabled(dead_transition_net):
    ptnet = dead_transition_net
    boundedness, liveness = Boundedness(ptnet), Liveness(ptnet)

    successors = fire_transitions(ptnet.transition_io(), ptnet.initial_marking, ptnet.capacity, ptnet.weight, boundedness, liveness)

    assert successors == [(0, Marking({1: 1}))]
    assert liveness.lives == [Live.L1, Live.L0]
