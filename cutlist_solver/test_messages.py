# cutlist_solver/test_messages.py
# Progress / Results protocol tests:
#   pytest cutlist_solver/test_messages.py

from __future__ import annotations

import threading

import pytest

from cutlist_solver.errors import ChannelClosedError, InsufficientSupplyError, SolveCancelledError
from cutlist_solver.messages import (
    CallbackSink,
    MessageChannel,
    Progress,
    ProgressReporter,
    Results,
    SubProgress,
)
from cutlist_solver.solver import make_solver
from cutlist_solver.types import Material, Part, SubProblem, Supply


def _two_materials():
    return {
        Material("pine"): SubProblem(supplies=(Supply("s", 8, "3"),), parts=(Part("a", 3, 2), Part("b", 2, 2))),
        Material("oak"): SubProblem(supplies=(Supply("t", 6, "5"),), parts=(Part("c", 4, 3),)),
    }


def _drain(channel: MessageChannel):
    out = []
    while True:
        msg = channel.try_receive()
        if msg is None:
            return out
        out.append(msg)


def test_message_values_are_checked() -> None:
    assert Progress(0.25).fraction == 0.25
    with pytest.raises(ValueError):
        Progress(1.5)
    with pytest.raises(ValueError):
        SubProgress(-0.1)
    with pytest.raises(ValueError):
        Results()


def test_channel_sequence_for_successful_solve() -> None:
    channel = MessageChannel()
    sol = make_solver("greedy").solve(_two_materials(), sink=channel)
    msgs = _drain(channel)

    # one SubProgress per part unit, Progress between materials, Results last
    kinds = [type(m).__name__ for m in msgs]
    assert kinds == ["SubProgress"] * 4 + ["Progress"] + ["SubProgress"] * 3 + ["Progress", "Results"]
    assert [m.fraction for m in msgs if isinstance(m, Progress)] == [0.5, 1.0]
    assert [m.fraction for m in msgs[:4]] == [0.25, 0.5, 0.75, 1.0]

    final = msgs[-1]
    assert final.ok
    assert final.unwrap() is sol


def test_progress_is_monotonic() -> None:
    channel = MessageChannel()
    make_solver("greedy").solve(_two_materials(), sink=channel)
    msgs = _drain(channel)

    overall = [m.fraction for m in msgs if isinstance(m, Progress)]
    assert overall == sorted(overall)

    # SubProgress restarts per material but never goes down within one
    current = []
    for m in msgs:
        if isinstance(m, SubProgress):
            current.append(m.fraction)
        else:
            assert current == sorted(current)
            current = []


def test_failure_is_last_message_and_raised() -> None:
    problem = _two_materials()
    problem[Material("steel")] = SubProblem(supplies=(Supply("u", 1),), parts=(Part("rail", 2),))
    channel = MessageChannel()

    with pytest.raises(InsufficientSupplyError) as ei:
        make_solver("greedy").solve(problem, sink=channel)

    msgs = _drain(channel)
    final = msgs[-1]
    assert isinstance(final, Results)
    assert not final.ok
    assert final.error is ei.value
    assert final.error.material == Material("steel")
    assert sum(isinstance(m, Results) for m in msgs) == 1
    with pytest.raises(InsufficientSupplyError):
        final.unwrap()


def test_closed_channel_is_fatal() -> None:
    channel = MessageChannel()
    channel.close()
    assert channel.closed
    with pytest.raises(ChannelClosedError):
        make_solver("greedy").solve(_two_materials(), sink=channel)


def test_callback_sink_sees_every_message() -> None:
    seen = []
    make_solver("greedy").solve(_two_materials(), sink=CallbackSink(seen.append))
    assert isinstance(seen[-1], Results)
    assert isinstance(seen[-2], Progress) and seen[-2].fraction == 1.0


def test_channel_iteration_stops_after_results() -> None:
    channel = MessageChannel()
    channel.send(SubProgress(0.5))
    channel.send(Progress(1.0))
    channel.send(Results(error=SolveCancelledError("stop")))
    channel.send(Progress(1.0))

    msgs = list(channel)
    assert len(msgs) == 3
    assert isinstance(channel.try_receive(), Progress)
    assert channel.try_receive() is None


def test_reporter_checks_cancellation() -> None:
    event = threading.Event()
    seen = []
    reporter = ProgressReporter(CallbackSink(seen.append), event)
    reporter.sub_progress(1.2)
    assert seen == [SubProgress(1.0)]

    event.set()
    with pytest.raises(SolveCancelledError):
        reporter.sub_progress(0.5)


def test_cancelled_solve_reports_error() -> None:
    event = threading.Event()
    event.set()
    channel = MessageChannel()
    with pytest.raises(SolveCancelledError):
        make_solver("greedy").solve(_two_materials(), sink=channel, cancel_event=event)
    msgs = _drain(channel)
    assert len(msgs) == 1
    assert isinstance(msgs[0].error, SolveCancelledError)
