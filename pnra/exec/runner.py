"""
Runner to Manage a Time-Limited Exploration

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

from logging import info, warning
from multiprocessing import Process, Queue
from queue import Empty
from time import time
from typing import Optional

from pnra.checkers.abstractchecker import AbstractChecker
from pnra.ptio.analysis import ReachabilityAnalysis

POLLING_INTERVAL = 0.1


class Runner:
    """ Helper to run a checker in a worker process.

    Attributes
    ----------
    checker : AbstractChecker
        Checker to run.
    process : Process, optional
        Worker process.
    result : Queue of ReachabilityAnalysis
        Queue to get the analysis back.
    computation_time : float
        Computation time.
    """

    def __init__(self, checker: AbstractChecker) -> None:
        """ Initializer.

        Parameters
        ----------
        checker : AbstractChecker
            Checker to run.
        """
        self.checker: AbstractChecker = checker

        self.process: Optional[Process] = None
        self.result: Queue[ReachabilityAnalysis] = Queue()

        self.computation_time: float = 0

    def __getstate__(self):
        # Capture what is normally pickled
        state = self.__dict__.copy()

        # Remove unpicklable variable
        state['process'] = None
        return state

    def explore(self, result: Queue[ReachabilityAnalysis]) -> None:
        """ Worker: run the checker and share the analysis.
        """
        result.put(self.checker.explore())

    def run(self, timeout: Optional[float] = None) -> Optional[ReachabilityAnalysis]:
        """ Run the checker.

        Parameters
        ----------
        timeout : float, optional
            Time limit (none by default).

        Returns
        -------
        ReachabilityAnalysis, optional
            Analysis if the exploration completed in time, None otherwise.
        """
        self.process = Process(target=self.explore, args=(self.result,))
        self.process.start()

        return self.handle(timeout)

    def handle(self, timeout: Optional[float]) -> Optional[ReachabilityAnalysis]:
        """ Wait for the analysis.

        Parameters
        ----------
        timeout : float, optional
            Time limit.

        Returns
        -------
        ReachabilityAnalysis, optional
            Analysis if the exploration completed in time, None otherwise.
        """
        start_time = time()
        analysis = None

        # Get the analysis before joining, the worker blocks until the queue is drained
        while timeout is None or time() - start_time < timeout:
            try:
                analysis = self.result.get(timeout=POLLING_INTERVAL)
                break
            except Empty:
                if not self.process.is_alive() and self.result.empty():
                    warning("[RUNNER] Worker process exited without result")
                    break

        self.computation_time += time() - start_time

        if analysis is None:
            info("[RUNNER] TIMEOUT after {:.2f}s".format(self.computation_time))

        self.stop()

        return analysis

    def stop(self) -> None:
        """ Stop the worker process.
        """
        if self.process is None:
            return

        if self.process.is_alive():
            self.process.kill()
        self.process.join()
