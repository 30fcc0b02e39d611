# cutlist_solver/worker.py
# Run a solve on a background thread and talk to it only through a MessageChannel.
#
# Example (UI-style polling):
#   handle = solve_in_background(make_solver("greedy"), problem)
#   for msg in handle.channel:
#       if isinstance(msg, Progress): bar.set(msg.fraction)
#       elif isinstance(msg, Results): show(msg.unwrap())
#
# Cancellation is cooperative: handle.cancel() sets an Event that strategies
# check between part units, so the worker ends with SolveCancelledError.

from __future__ import annotations

import threading
from typing import Optional

from .errors import SolveError
from .messages import MessageChannel, Results
from .solver import Solver
from .types import Problem, Solution


class SolveHandle:
    def __init__(self, solver: Solver, problem: Problem) -> None:
        self.channel = MessageChannel()
        self.cancel_event = threading.Event()
        self._solution: Optional[Solution] = None
        self._error: Optional[BaseException] = None
        self._thread = threading.Thread(
            target=self._run,
            args=(solver, problem),
            name=f"cutlist-{solver.name}",
            daemon=True,
        )

    def _run(self, solver: Solver, problem: Problem) -> None:
        try:
            self._solution = solver.solve(problem, sink=self.channel, cancel_event=self.cancel_event)
        except SolveError as e:
            # already delivered as the final Results message
            self._error = e
        except Exception as e:
            # not a planning failure (closed channel, bug); still unblock readers
            self._error = e
            if not self.channel.closed:
                self.channel.send(Results(error=SolveError(f"Solver crashed: {e!r}")))

    def start(self) -> "SolveHandle":
        self._thread.start()
        return self

    def cancel(self) -> None:
        self.cancel_event.set()

    def is_running(self) -> bool:
        return self._thread.is_alive()

    def join(self, timeout: Optional[float] = None) -> bool:
        """Wait for the worker; True if it has finished."""
        self._thread.join(timeout)
        return not self._thread.is_alive()

    def result(self, timeout: Optional[float] = None) -> Solution:
        """Wait for the worker and return its Solution, or raise its error."""
        if not self.join(timeout):
            raise TimeoutError("Solver still running")
        if self._error is not None:
            raise self._error
        return self._solution


def solve_in_background(solver: Solver, problem: Problem) -> SolveHandle:
    """Start solving `problem` on a daemon thread and return its handle."""
    return SolveHandle(solver, problem).start()
