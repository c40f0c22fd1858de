#!/usr/bin/env python3

"""
PNRA: Petri Net Reachability Analysis

Explicit exploration of the state space of a Petri net,
with boundedness, liveness, deadlock and soundness verdicts.

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

__license__ = "GPLv3"
__version__ = "1.0.0"

import argparse
import logging as log
import sys
import time
from typing import Optional

from pnra.checkers.coverability import Coverability
from pnra.checkers.reachability import Reachability
from pnra.exec.runner import Runner
from pnra.ptio.ptnet import PetriNet


def main(argv: Optional[list[str]] = None) -> None:
    """ Main function.

    Parameters
    ----------
    argv : list of str, optional
        Command-line arguments (`sys.argv` by default).
    """
    # Start time
    start_time = time.time()

    # Arguments parser
    parser = argparse.ArgumentParser(
        description='PNRA: Petri Net Reachability Analysis')

    parser.add_argument('--version',
                        action='version',
                        version='%(prog)s {}'.format(__version__),
                        help="show the version number and exit")

    parser.add_argument('-v', '--verbose',
                        action='store_true',
                        help="increase output verbosity")

    parser.add_argument('-n', '--net',
                        metavar='ptnet',
                        type=str,
                        required=True,
                        help='path to Petri Net (.net or .pnml format)')

    parser.add_argument('--capacities',
                        action='store',
                        dest='capacities',
                        type=str,
                        help='place capacities (comma separated list of place=bound)')

    parser.add_argument('--coverability',
                        action='store_true',
                        help="accelerate unbounded places to ω (terminates on unbounded nets)")

    parser.add_argument('--timeout',
                        action='store',
                        dest='timeout',
                        type=float,
                        help='a limit on execution time (none by default)')

    parser.add_argument('--show-incidence-matrix',
                        action='store_true',
                        help="show the incidence matrix")

    parser.add_argument('--show-time',
                        action='store_true',
                        help="show the execution time")

    results = parser.parse_args(argv)

    # Set the verbose level
    if results.verbose:
        log.basicConfig(format="%(message)s", level=log.DEBUG)
    else:
        log.basicConfig(format="%(message)s")

    # Read the input Petri net
    ptnet = PetriNet(results.net)

    # Set the capacities if '--capacities' enabled
    if results.capacities is not None:
        try:
            ptnet.set_capacities(results.capacities)
        except ValueError as e:
            parser.error(str(e))

    # Show the incidence matrix
    if results.show_incidence_matrix:
        print("# Incidence Matrix")
        for place, row in zip(ptnet.places, ptnet.incidence_matrix()):
            print("# P{} {}".format(place.id, ' '.join(map(str, row))))

    # Select the method
    if results.coverability:
        checker = Coverability(ptnet)
    else:
        checker = Reachability(ptnet)

    # Run in a worker process only if a time limit is given
    if results.timeout is None:
        analysis = checker.explore()
    else:
        analysis = Runner(checker).run(results.timeout)

    if analysis is None:
        print("TIMEOUT")
        sys.exit(1)

    print(analysis, end='')

    # Show computation time
    if results.show_time:
        print("# Time: {}".format(time.time() - start_time))


if __name__ == '__main__':
    main()
    sys.exit(0)
