# cutlist_solver/messages.py
# Progress / result message protocol between a running solve and its observer.
#
# A "sink" is anything with send(message). The solver never waits on the
# observer: MessageChannel is an unbounded queue, so send() only fails if the
# channel was closed, and that failure is raised, not swallowed.

from __future__ import annotations

import queue
import threading
from dataclasses import dataclass
from typing import Callable, Iterator, Optional, Union

from .errors import ChannelClosedError, SolveCancelledError, SolveError
from .types import Solution


# ----------------------------
# Messages
# ----------------------------

def _check_fraction(value: float) -> float:
    v = float(value)
    if not (0.0 <= v <= 1.0):
        raise ValueError(f"Progress fraction must be within [0, 1], got {value}")
    return v


@dataclass(frozen=True)
class Progress:
    """Overall progress (materials completed)."""
    fraction: float

    def __post_init__(self):
        object.__setattr__(self, "fraction", _check_fraction(self.fraction))


@dataclass(frozen=True)
class SubProgress:
    """Progress within the material currently being solved."""
    fraction: float

    def __post_init__(self):
        object.__setattr__(self, "fraction", _check_fraction(self.fraction))


@dataclass(frozen=True)
class Results:
    """Final message of a solve: exactly one of solution / error is set."""
    solution: Optional[Solution] = None
    error: Optional[SolveError] = None

    def __post_init__(self):
        if (self.solution is None) == (self.error is None):
            raise ValueError("Results needs exactly one of solution or error")

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> Solution:
        if self.error is not None:
            raise self.error
        return self.solution


Message = Union[Progress, SubProgress, Results]


# ----------------------------
# Sinks
# ----------------------------

class MessageChannel:
    """
    Unbounded, thread-safe message queue.
    One producer (the solving thread), one or more consumers.
    """

    def __init__(self) -> None:
        self._queue: "queue.Queue[Message]" = queue.Queue()
        self._closed = threading.Event()

    @property
    def closed(self) -> bool:
        return self._closed.is_set()

    def close(self) -> None:
        self._closed.set()

    def send(self, message: Message) -> None:
        if self._closed.is_set():
            raise ChannelClosedError(f"Cannot send {type(message).__name__}: channel closed")
        self._queue.put_nowait(message)

    def receive(self, timeout: Optional[float] = None) -> Message:
        """Block until a message arrives. Raises queue.Empty on timeout."""
        return self._queue.get(timeout=timeout)

    def try_receive(self) -> Optional[Message]:
        try:
            return self._queue.get_nowait()
        except queue.Empty:
            return None

    def __iter__(self) -> Iterator[Message]:
        """Yield messages until (and including) the final Results."""
        while True:
            msg = self._queue.get()
            yield msg
            if isinstance(msg, Results):
                return


class CallbackSink:
    """Adapts a plain callable (e.g. a UI update hook) to the sink interface."""

    def __init__(self, callback: Callable[[Message], None]) -> None:
        self.callback = callback

    def send(self, message: Message) -> None:
        self.callback(message)


# ----------------------------
# Reporter handed to strategies
# ----------------------------

class ProgressReporter:
    """
    What a strategy sees of the outside world while solving one material:
    a place to send SubProgress and a cancellation check.
    """

    def __init__(self, sink=None, cancel_event: Optional[threading.Event] = None) -> None:
        self.sink = sink
        self.cancel_event = cancel_event

    def sub_progress(self, fraction: float) -> None:
        self.check_cancelled()
        if self.sink is not None:
            self.sink.send(SubProgress(min(1.0, fraction)))

    def check_cancelled(self) -> None:
        if self.cancel_event is not None and self.cancel_event.is_set():
            raise SolveCancelledError("Solve cancelled")


NULL_REPORTER = ProgressReporter()
