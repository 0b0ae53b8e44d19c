import pytest

from chicken_invaders.timing import DeferredCalls, FixedTimestep


def test_deferred_call_fires_once_when_due():
    calls = []
    timers = DeferredCalls()
    timers.call_later(100, 2000, calls.append, "done")

    assert timers.run_due(2099) == 0
    assert timers.run_due(2100) == 1
    assert calls == ["done"]
    assert timers.run_due(5000) == 0
    assert len(timers) == 0


def test_deferred_calls_run_in_due_order():
    calls = []
    timers = DeferredCalls()
    timers.call_later(0, 300, calls.append, "late")
    timers.call_later(0, 100, calls.append, "early")
    timers.call_later(0, 100, calls.append, "early-second")

    timers.run_due(1000)

    assert calls == ["early", "early-second", "late"]


def test_fixed_timestep_accumulates():
    clock = FixedTimestep(60)
    assert clock.steps(10) == 0
    assert clock.steps(10) == 1
    assert clock.steps(1000 / 60) == 1


def test_fixed_timestep_caps_catch_up():
    clock = FixedTimestep(60, max_steps=5)
    assert clock.steps(1000) == 5
    assert clock.steps(0) == 0


def test_fixed_timestep_rejects_bad_rate():
    with pytest.raises(ValueError):
        FixedTimestep(0)
