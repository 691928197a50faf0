"""
Unit tests for the debounce refresh timer
"""
import asyncio

import pytest

from coffee_finder.core.scheduler import RefreshTimer
from coffee_finder.core.validation import ValidationError


@pytest.mark.asyncio
async def test_timer_fires_once_after_delay():
    timer = RefreshTimer("test")
    fired = []

    timer.schedule(0.02, lambda: fired.append(True))
    assert timer.pending
    await asyncio.sleep(0.06)

    assert fired == [True]
    assert not timer.pending
    assert timer.deadline is None
    assert timer.fired_count == 1


@pytest.mark.asyncio
async def test_reschedule_replaces_pending_callback():
    timer = RefreshTimer("test")
    fired = []

    timer.schedule(0.02, lambda: fired.append("first"))
    timer.schedule(0.02, lambda: fired.append("second"))
    await asyncio.sleep(0.06)

    assert fired == ["second"]
    assert timer.fired_count == 1


@pytest.mark.asyncio
async def test_cancel_reports_whether_pending():
    timer = RefreshTimer("test")
    fired = []

    assert timer.cancel() is False
    timer.schedule(0.02, lambda: fired.append(True))
    assert timer.cancel() is True
    await asyncio.sleep(0.04)

    assert fired == []
    assert timer.fired_count == 0


@pytest.mark.asyncio
async def test_zero_delay_fires_on_next_iteration():
    timer = RefreshTimer("test")
    fired = []

    timer.schedule(0, lambda: fired.append(True))
    assert fired == []
    await asyncio.sleep(0.01)

    assert fired == [True]


@pytest.mark.asyncio
async def test_negative_delay_rejected():
    timer = RefreshTimer("test")

    with pytest.raises(ValidationError):
        timer.schedule(-1, lambda: None)
    assert not timer.pending


def test_schedule_requires_running_loop():
    timer = RefreshTimer("test")

    with pytest.raises(RuntimeError):
        timer.schedule(0.1, lambda: None)
