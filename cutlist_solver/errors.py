# cutlist_solver/errors.py
# Error taxonomy for solving.
#
# SolveError and subclasses are "expected" failures: they are returned to the
# caller (raised from Solver.solve) and delivered as the final Results message.
# ChannelClosedError is a wiring failure and is never converted into a result.

from __future__ import annotations

from typing import Optional


class SolveError(Exception):
    """A sub-problem could not be solved. Tagged with its material by the Solver."""

    def __init__(self, reason: str, material=None):
        super().__init__(reason)
        self.reason = reason
        self.material = material

    def __str__(self) -> str:
        if self.material is None:
            return self.reason
        return f"{self.material.name}: {self.reason}"


class InsufficientSupplyError(SolveError):
    """
    Greedy allocation found no eligible supply for a part.
    Not a proof of infeasibility: a different allocation order may succeed.
    """

    def __init__(self, reason: str, part=None, material=None):
        super().__init__(reason, material=material)
        self.part = part


class InfeasibleProblemError(SolveError):
    """Proven infeasible: no assignment of parts to supplies exists."""


class SolverLimitError(SolveError):
    """The solver gave up (time limit, pattern cap) without a feasible plan."""


class SolveCancelledError(SolveError):
    """The caller requested cancellation between part units."""


class ChannelClosedError(RuntimeError):
    """A message was sent on a channel that was already closed."""

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or "Channel closed")
