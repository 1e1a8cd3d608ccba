# src/tests/test_frames.py
import pytest

from flappy_hen.game.frames import FrameScheduler


def test_requested_callback_runs_once():
    sched = FrameScheduler()
    calls = []
    h = sched.request_frame(lambda: calls.append(1))
    assert sched.is_pending(h)
    assert sched.run_frame() == 1
    assert calls == [1]
    assert not sched.is_pending(h)
    assert sched.run_frame() == 0
    assert calls == [1]


def test_cancelled_callback_never_runs():
    sched = FrameScheduler()
    calls = []
    h = sched.request_frame(lambda: calls.append(1))
    sched.cancel_frame(h)
    sched.cancel_frame(h)       # cancelling twice is harmless
    sched.cancel_frame(None)
    assert sched.run_frame() == 0
    assert calls == []


def test_rerequest_runs_next_frame():
    sched = FrameScheduler()
    calls = []

    def loop():
        calls.append(sched.frame_count)
        sched.request_frame(loop)

    sched.request_frame(loop)
    for _ in range(3):
        sched.run_frame()
    # one call per frame, never two in the same frame
    assert calls == [1, 2, 3]
    assert sched.pending_count == 1


def test_callback_can_cancel_a_later_one():
    sched = FrameScheduler()
    calls = []
    handles = {}
    handles["first"] = sched.request_frame(lambda: sched.cancel_frame(handles["second"]))
    handles["second"] = sched.request_frame(lambda: calls.append("second"))
    assert sched.run_frame() == 1
    assert calls == []


def test_non_callable_rejected():
    with pytest.raises(TypeError):
        FrameScheduler().request_frame(None)
