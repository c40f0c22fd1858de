"""
Shared Petri nets for the test suite.
"""

import pytest

from pnra.ptio.ptnet import PetriNet


@pytest.fixture
def sequence_net() -> PetriNet:
    """ p0 (1) -> t0 -> p1
    """
    ptnet = PetriNet()
    p0, p1 = ptnet.add_place("p0", 1), ptnet.add_place("p1")
    t0 = ptnet.add_transition("t0")
    ptnet.add_arc(p0, t0)
    ptnet.add_arc(t0, p1)
    return ptnet


@pytest.fixture
def fork_net() -> PetriNet:
    """ p0 (1) -> t0 -> p1, p2
    """
    ptnet = PetriNet()
    p0, p1, p2 = ptnet.add_place("p0", 1), ptnet.add_place("p1"), ptnet.add_place("p2")
    t0 = ptnet.add_transition("t0")
    ptnet.add_arc(p0, t0)
    ptnet.add_arc(t0, p1)
    ptnet.add_arc(t0, p2)
    return ptnet


@pytest.fixture
def cycle_net() -> PetriNet:
    """ p0 (1) -> t0 -> p1 -> t1 -> p0
    """
    ptnet = PetriNet()
    p0, p1 = ptnet.add_place("p0", 1), ptnet.add_place("p1")
    t0, t1 = ptnet.add_transition("t0"), ptnet.add_transition("t1")
    ptnet.add_arc(p0, t0)
    ptnet.add_arc(t0, p1)
    ptnet.add_arc(p1, t1)
    ptnet.add_arc(t1, p0)
    return ptnet


@pytest.fixture
def concurrent_net() -> PetriNet:
    """ p0 (1) -> t0 -> p2 and p1 (1) -> t1 -> p3
    """
    ptnet = PetriNet()
    p0, p1 = ptnet.add_place("p0", 1), ptnet.add_place("p1", 1)
    p2, p3 = ptnet.add_place("p2"), ptnet.add_place("p3")
    t0, t1 = ptnet.add_transition("t0"), ptnet.add_transition("t1")
    ptnet.add_arc(p0, t0)
    ptnet.add_arc(t0, p2)
    ptnet.add_arc(p1, t1)
    ptnet.add_arc(t1, p3)
    return ptnet


@pytest.fixture
def dead_transition_net() -> PetriNet:
    """ p0 (1) -> t0 -> p1 and p2 (0) -> t1 -> p0
    """
    ptnet = PetriNet()
    p0, p1, p2 = ptnet.add_place("p0", 1), ptnet.add_place("p1"), ptnet.add_place("p2")
    t0, t1 = ptnet.add_transition("t0"), ptnet.add_transition("t1")
    ptnet.add_arc(p0, t0)
    ptnet.add_arc(t0, p1)
    ptnet.add_arc(p2, t1)
    ptnet.add_arc(t1, p0)
    return ptnet


@pytest.fixture
def source_net() -> PetriNet:
    """ t0 -> p0 (unbounded)
    """
    ptnet = PetriNet()
    p0 = ptnet.add_place("p0")
    t0 = ptnet.add_transition("t0")
    ptnet.add_arc(t0, p0)
    return ptnet


@pytest.fixture
def pump_net() -> PetriNet:
    """ p0 (1) -> t0 -> p0, p1 (p1 unbounded)
    """
    ptnet = PetriNet()
    p0, p1 = ptnet.add_place("p0", 1), ptnet.add_place("p1")
    t0 = ptnet.add_transition("t0")
    ptnet.add_arc(p0, t0)
    ptnet.add_arc(t0, p0)
    ptnet.add_arc(t0, p1)
    return ptnet
