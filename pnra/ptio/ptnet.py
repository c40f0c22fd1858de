"""
Petri Net Module

Input file formats: .net and .pnml
Standard: http://projects.laas.fr/tina//manuals/formats.html

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

from enum import Enum
from math import inf
from re import split
from sys import exit
from typing import NamedTuple, Optional, Union
from xml.etree.ElementTree import parse

MULTIPLIER_TO_INT = {
    'K': 1000,
    'M': 1000000,
    'G': 1000000000,
    'T': 1000000000000,
    'P': 1000000000000000,
    'E': 1000000000000000000
}

PNML_NAMESPACE = "{http://www.pnml.org/version-2009/grammar/pnml}"

DEFAULT_WEIGHT = 1

# No capacity on a place
UNLIMITED = inf

# Token count of a place abstracted as unbounded (coverability)
OMEGA = inf


def format_tokens(tokens: Union[int, float]) -> str:
    """ Token count to textual format.

    Parameters
    ----------
    tokens : int
        Number of tokens (possibly OMEGA).

    Returns
    -------
    str
        Debugging format.
    """
    return 'ω' if tokens == OMEGA else str(tokens)


class ArcKind(Enum):
    """ Direction of an arc.
    """
    PLACE_TRANSITION = 1
    TRANSITION_PLACE = 2


class Arc(NamedTuple):
    """ Arc.

    Attributes
    ----------
    kind : ArcKind
        Direction of the arc.
    source : int
        Identifier of the source (place or transition).
    target : int
        Identifier of the target (transition or place).
    """
    kind: ArcKind
    source: int
    target: int


class TransitionIO(NamedTuple):
    """ Input and output places of a transition, in arc order.
    """
    id: int
    inputs: list[int]
    outputs: list[int]


class PetriNet:
    """ Petri net.

    Attributes
    ----------
    id : str
        Identifier.
    filename : str, optional
        Petri net filename.
    places : list of Place
        Finite set of places (identified by their index).
    transitions : list of Transition
        Finite set of transitions (identified by their index).
    arcs : list of Arc
        Arcs, in insertion order.
    weights : dict of Arc: int
        Weights of the arcs.
    capacities : dict of int: int
        Capacities of the places.
    places_by_name : dict of str: Place
        Places identified by names.
    transitions_by_name : dict of str: Transition
        Transitions identified by names.
    """

    def __init__(self, filename: Optional[str] = None) -> None:
        """ Initializer.

        Parameters
        ----------
        filename : str, optional
            Petri net filename (.net or .pnml format).
        """
        self.id: str = ""
        self.filename: Optional[str] = filename

        self.places: list[Place] = []
        self.transitions: list[Transition] = []

        self.arcs: list[Arc] = []
        self.weights: dict[Arc, int] = {}
        self.capacities: dict[int, int] = {}

        self.places_by_name: dict[str, Place] = {}
        self.transitions_by_name: dict[str, Transition] = {}

        if filename is not None:
            if filename.lower().endswith('.pnml'):
                self.parse_pnml(filename)
            else:
                self.parse_net(filename)

    def __str__(self) -> str:
        """ Petri net to .net format.

        Note
        ----
        Capacities have no .net syntax and are not exported.

        Returns
        -------
        str
            .net format.
        """
        text = "net {}\n".format(self.id)
        text += ''.join(map(str, self.places))
        text += ''.join(map(str, self.transitions))

        return text

    @property
    def initial_marking(self) -> Marking:
        """ Initial marking (a fresh copy at each access).
        """
        return Marking({place.id: place.initial_marking for place in self.places})

    def add_place(self, name: str, initial_marking: int = 0, capacity: Optional[int] = None) -> Place:
        """ Add a place.

        Parameters
        ----------
        name : str
            Name of the place.
        initial_marking : int, optional
            Initial number of tokens.
        capacity : int, optional
            Maximum number of tokens (unlimited by default).

        Returns
        -------
        Place
            The new place.

        Raises
        ------
        ValueError
            Duplicate name or negative marking.
        """
        if name in self.places_by_name:
            raise ValueError("Duplicate place: {}".format(name))
        if initial_marking < 0:
            raise ValueError("Negative initial marking for place {}".format(name))

        place = Place(len(self.places), name, initial_marking)
        self.places.append(place)
        self.places_by_name[name] = place

        if capacity is not None:
            self.set_capacity(place.id, capacity)

        return place

    def add_transition(self, name: str) -> Transition:
        """ Add a transition.

        Parameters
        ----------
        name : str
            Name of the transition.

        Returns
        -------
        Transition
            The new transition.

        Raises
        ------
        ValueError
            Duplicate name.
        """
        if name in self.transitions_by_name:
            raise ValueError("Duplicate transition: {}".format(name))

        transition = Transition(len(self.transitions), name, self)
        self.transitions.append(transition)
        self.transitions_by_name[name] = transition

        return transition

    def add_arc(self, source: Union[Place, Transition], target: Union[Place, Transition], weight: int = DEFAULT_WEIGHT) -> Arc:
        """ Add an arc (weights of duplicated arcs are summed).

        Parameters
        ----------
        source : Place or Transition
            Source of the arc.
        target : Transition or Place
            Target of the arc.
        weight : int, optional
            Weight of the arc.

        Returns
        -------
        Arc
            The arc.

        Raises
        ------
        ValueError
            Arc not connecting a place and a transition of the net, or non-positive weight.
        """
        if isinstance(source, Place) and isinstance(target, Transition):
            arc = Arc(ArcKind.PLACE_TRANSITION, source.id, target.id)
            place, transition = source, target
        elif isinstance(source, Transition) and isinstance(target, Place):
            arc = Arc(ArcKind.TRANSITION_PLACE, source.id, target.id)
            place, transition = target, source
        else:
            raise ValueError("An arc must connect a place and a transition")

        if place.id >= len(self.places) or self.places[place.id] is not place:
            raise ValueError("Unknown place: {}".format(place.name))
        if transition.id >= len(self.transitions) or self.transitions[transition.id] is not transition:
            raise ValueError("Unknown transition: {}".format(transition.name))
        if weight <= 0:
            raise ValueError("Non-positive weight on arc {} -> {}".format(source.name, target.name))

        if arc in self.weights:
            self.weights[arc] += weight
        else:
            self.arcs.append(arc)
            self.weights[arc] = weight

        return arc

    def set_capacity(self, place_id: int, capacity: int) -> None:
        """ Set the capacity of a place.

        Raises
        ------
        ValueError
            Unknown place or negative capacity.
        """
        if not 0 <= place_id < len(self.places):
            raise ValueError("Unknown place id: {}".format(place_id))
        if capacity < 0:
            raise ValueError("Negative capacity for place {}".format(self.places[place_id].name))

        self.capacities[place_id] = capacity

    def set_capacities(self, content: str) -> None:
        """ Set capacities from a comma separated list of `place=bound`.

        Parameters
        ----------
        content : str
            Capacities to parse.

        Raises
        ------
        ValueError
            Unknown place or malformed bound.
        """
        for item in content.split(','):
            if not item.strip():
                continue

            name, _, value = item.partition('=')
            name = name.strip()

            if name not in self.places_by_name:
                raise ValueError("Unknown place: {}".format(name))

            self.set_capacity(self.places_by_name[name].id, self.parse_value(value.strip()))

    def weight(self, arc: Arc) -> int:
        """ Weight of an arc (DEFAULT_WEIGHT if not specified).
        """
        return self.weights.get(arc, DEFAULT_WEIGHT)

    def capacity(self, place_id: int) -> Union[int, float]:
        """ Capacity of a place (UNLIMITED if not specified).
        """
        return self.capacities.get(place_id, UNLIMITED)

    def has_outgoing_arcs(self, place_id: int) -> bool:
        """ Check if a place is an input of some transition.
        """
        return any(arc.kind is ArcKind.PLACE_TRANSITION and arc.source == place_id for arc in self.arcs)

    def transition_io(self) -> list[TransitionIO]:
        """ Input and output places of each transition.

        Returns
        -------
        list of TransitionIO
            Indexed by transition id.
        """
        transitions_io = [TransitionIO(transition.id, [], []) for transition in self.transitions]

        for arc in self.arcs:
            if arc.kind is ArcKind.PLACE_TRANSITION:
                transitions_io[arc.target].inputs.append(arc.source)
            else:
                transitions_io[arc.source].outputs.append(arc.target)

        return transitions_io

    def incidence_matrix(self) -> list[list[int]]:
        """ Incidence matrix C[p][t] = W(t, p) - W(p, t).

        Returns
        -------
        list of list of int
            Rows indexed by place ids, columns by transition ids.
        """
        matrix = [[0] * len(self.transitions) for _ in self.places]

        for arc in self.arcs:
            if arc.kind is ArcKind.PLACE_TRANSITION:
                matrix[arc.source][arc.target] -= self.weight(arc)
            else:
                matrix[arc.target][arc.source] += self.weight(arc)

        return matrix

    def get_place(self, name: str) -> Place:
        """ Get a place by name, created if it does not exist.
        """
        place = self.places_by_name.get(name)
        if place is None:
            place = self.add_place(name)
        return place

    def get_transition(self, name: str) -> Transition:
        """ Get a transition by name, created if it does not exist.
        """
        transition = self.transitions_by_name.get(name)
        if transition is None:
            transition = self.add_transition(name)
        return transition

    def parse_net(self, filename: str) -> None:
        """ Petri net parser.

        Parameters
        ----------
        filename : str
            Petri net filename (.net format).

        Raises
        ------
        FileNotFoundError
            Petri net file not found.
        """
        try:
            with open(filename, 'r') as fp:
                for line in fp.readlines():

                    content = split(r'\s+', line.strip())

                    # Skip empty lines and get the first identifier
                    if not content or not content[0]:
                        continue
                    else:
                        element = content.pop(0)

                    # Net id
                    if element == "net" and content:
                        self.id = content[0].replace('{', '').replace('}', '')

                    # Transition arcs
                    if element == "tr":
                        self.parse_transition(content)

                    # Place
                    if element == "pl":
                        self.parse_place(content)
        except FileNotFoundError as e:
            exit(e)

    def parse_transition(self, content: list[str]) -> None:
        """ Transition parser.

        Parameters
        ----------
        content : list of string
            Content to parse (.net format).
        """
        transition = self.get_transition(content.pop(0).replace('{', '').replace('}', ''))

        # Skip label and time interval
        content = [arc for arc in self.parse_label(content) if arc[0] not in '[]']
        arrow = content.index("->")

        for arc in content[0:arrow]:
            place, weight = self.parse_arc(arc)
            self.add_arc(place, transition, weight)

        for arc in content[arrow + 1:]:
            place, weight = self.parse_arc(arc)
            self.add_arc(transition, place, weight)

    def parse_arc(self, content: str) -> tuple[Place, int]:
        """ Arc parser.

        Parameters
        ----------
        content : str
            Content to parse (.net format).

        Returns
        -------
        tuple of Place, int
            Connected place and weight of the arc.

        Raises
        ------
        ValueError
            Read, inhibitor or reset arc.
        """
        content = content.replace('{', '').replace('}', '')

        if '?' in content or '!' in content:
            raise ValueError("Unsupported arc: {}".format(content))

        if '*' in content:
            place_name, _, weight_str = content.partition('*')
            weight = self.parse_value(weight_str)
        else:
            place_name = content
            weight = DEFAULT_WEIGHT

        return self.get_place(place_name), weight

    def parse_place(self, content: list[str]) -> None:
        """ Place parser.

        Parameters
        ----------
        content : list of str
            Place to parse (.net format).
        """
        place = self.get_place(content.pop(0).replace('{', '').replace('}', ''))

        content = self.parse_label(content)

        if content and content[0].startswith('('):
            place.initial_marking = self.parse_value(content[0].replace('(', '').replace(')', ''))

    def parse_label(self, content: list[str]) -> list[str]:
        """ Label parser.

        Parameters
        ----------
        content : list of str
            Content to parse (.net format).

        Returns
        -------
        list of str
            Content without labels.
        """
        index = 0
        if content and content[index] == ':':
            label_skipped = content[index + 1][0] != '{'
            index = 2
            while not label_skipped:
                label_skipped = content[index][-1] == '}'
                index += 1
        return content[index:]

    def parse_value(self, content: str) -> int:
        """ Parse integer value.

        Parameters
        ----------
        content : str
            Content to parse (.net format).

        Returns
        -------
        int
            Corresponding integer value.

        Raises
        ------
        ValueError
            Incorrect integer value.
        """
        if content.isnumeric():
            return int(content)

        multiplier = content[-1:]

        if multiplier not in MULTIPLIER_TO_INT or not content[:-1].isnumeric():
            raise ValueError("Incorrect integer value: {}".format(content))

        return int(content[:-1]) * MULTIPLIER_TO_INT[multiplier]

    def parse_pnml(self, filename: str) -> None:
        """ Petri net parser (P/T nets only).

        Parameters
        ----------
        filename : str
            Petri net filename (.pnml format).

        Raises
        ------
        FileNotFoundError
            Petri net file not found.
        ValueError
            Non-normal arc.
        """
        xmlns = PNML_NAMESPACE

        try:
            tree = parse(filename)
        except FileNotFoundError as e:
            exit(e)
        root = tree.getroot()

        net_node = root.find(xmlns + 'net')
        if net_node is not None:
            self.id = net_node.attrib.get('id', "")

        for place_node in root.iter(xmlns + 'place'):
            place = self.add_place(place_node.attrib['id'])
            marking_text = place_node.find(xmlns + 'initialMarking/' + xmlns + 'text')
            if marking_text is not None and marking_text.text:
                place.initial_marking = self.parse_value(marking_text.text.strip())

        for transition_node in root.iter(xmlns + 'transition'):
            self.add_transition(transition_node.attrib['id'])

        for arc_node in root.iter(xmlns + 'arc'):
            arc_type = arc_node.find(xmlns + 'type')
            if arc_type is not None and arc_type.attrib.get('value', 'normal') != 'normal':
                raise ValueError("Unsupported arc: {}".format(arc_node.attrib['id']))

            source, target = arc_node.attrib['source'], arc_node.attrib['target']

            weight = DEFAULT_WEIGHT
            inscription_text = arc_node.find(xmlns + 'inscription/' + xmlns + 'text')
            if inscription_text is not None and inscription_text.text:
                weight = self.parse_value(inscription_text.text.strip())

            if source in self.places_by_name:
                self.add_arc(self.places_by_name[source], self.transitions_by_name[target], weight)
            else:
                self.add_arc(self.transitions_by_name[source], self.places_by_name[target], weight)


class Place:
    """ Place.

    Attributes
    ----------
    id : int
        Index in the net.
    name : str
        Name.
    initial_marking : int
        Initial marking of the place.
    """

    def __init__(self, place_id: int, name: str, initial_marking: int = 0) -> None:
        """ Initializer.

        Parameters
        ----------
        place_id : int
            Index in the net.
        name : str
            Name.
        initial_marking : int, optional
            Initial marking of the place.
        """
        self.id: int = place_id
        self.name: str = name
        self.initial_marking: int = initial_marking

    def __str__(self) -> str:
        """ Place to .net format.

        Returns
        -------
        str
            .net format.
        """
        if self.initial_marking:
            return "pl {} ({})\n".format(self.name, self.initial_marking)
        else:
            return ""


class Transition:
    """ Transition.

    Attributes
    ----------
    id : int
        Index in the net.
    name : str
        Name.
    ptnet: PetriNet
        Associated Petri net.
    """

    def __init__(self, transition_id: int, name: str, ptnet: PetriNet) -> None:
        """ Initializer.

        Parameters
        ----------
        transition_id : int
            Index in the net.
        name : str
            Name.
        ptnet : PetriNet
            Associated Petri net.
        """
        self.id: int = transition_id
        self.name: str = name
        self.ptnet: PetriNet = ptnet

    def __str__(self) -> str:
        """ Transition to textual format.

        Returns
        -------
        str
            .net format.
        """
        text = "tr {}".format(self.name)

        for arc in self.ptnet.arcs:
            if arc.kind is ArcKind.PLACE_TRANSITION and arc.target == self.id:
                text += ' ' + self.str_arc(self.ptnet.places[arc.source], self.ptnet.weight(arc))

        text += ' ->'

        for arc in self.ptnet.arcs:
            if arc.kind is ArcKind.TRANSITION_PLACE and arc.source == self.id:
                text += ' ' + self.str_arc(self.ptnet.places[arc.target], self.ptnet.weight(arc))

        text += '\n'
        return text

    def str_arc(self, place: Place, weight: int) -> str:
        """ Arc to textual format.

        Parameters
        ----------
        place : place
            Connected place.
        weight : int
            Weight of the arc.

        Returns
        -------
        str
            .net format.
        """
        text = place.name

        if weight > 1:
            text += '*' + str(weight)

        return text


class Marking:
    """ Marking.

    Note
    ----
    Places holding no token are not stored,
    so equal markings always have the same `tokens` content.

    Attributes
    ----------
    tokens : dict of int: int
        Number of tokens associated to the place ids.
    """

    def __init__(self, tokens: Optional[dict[int, int]] = None) -> None:
        """ Initializer.

        Parameters
        ----------
        tokens : dict of int: int, optional
            Number of tokens associated to the place ids.
        """
        self.tokens: dict[int, int] = {}

        if tokens is not None:
            for place_id, place_tokens in tokens.items():
                self.set(place_id, place_tokens)

    def __str__(self) -> str:
        """ Marking to textual format.

        Returns
        -------
        str
            Debugging format.
        """
        text = ""

        for place_id, tokens in sorted(self.tokens.items()):
            text += " P{}({})".format(place_id, format_tokens(tokens))

        if text == "":
            text = " empty marking"

        return text

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Marking):
            return NotImplemented
        return self.tokens == other.tokens

    def __hash__(self) -> int:
        return hash(frozenset(self.tokens.items()))

    def get(self, place_id: int) -> Union[int, float]:
        """ Number of tokens in a place (0 if not stored).
        """
        return self.tokens.get(place_id, 0)

    def set(self, place_id: int, tokens: Union[int, float]) -> None:
        """ Set the number of tokens in a place.

        Raises
        ------
        ValueError
            Negative number of tokens.
        """
        if tokens < 0:
            raise ValueError("Negative number of tokens in place P{}".format(place_id))

        if tokens == 0:
            self.tokens.pop(place_id, None)
        else:
            self.tokens[place_id] = tokens

    def copy(self) -> Marking:
        """ Copy of the marking.
        """
        marking = Marking()
        marking.tokens = dict(self.tokens)
        return marking

    def covered_by(self, other: Marking) -> bool:
        """ Check if each marked place of `self` has at least as many tokens in `other`.

        Parameters
        ----------
        other : Marking
            Covering candidate.

        Returns
        -------
        bool
            Covering status.
        """
        return all(other.get(place_id) >= tokens for place_id, tokens in self.tokens.items())
