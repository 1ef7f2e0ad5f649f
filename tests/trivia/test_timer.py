"""Unit tests for src/trivia/timer.py"""

import asyncio
from unittest.mock import Mock

from src.trivia.timer import RoundTimer


def test_counts_down_per_tick() -> None:
    on_expire = Mock()
    timer = RoundTimer(duration_seconds=3, on_expire=on_expire, round_number=1)

    timer.tick()
    timer.tick()

    assert timer.remaining_seconds == 1
    assert timer.is_running
    on_expire.assert_not_called()


def test_fires_once_at_zero() -> None:
    on_expire = Mock()
    timer = RoundTimer(duration_seconds=2, on_expire=on_expire, round_number=4)

    for _ in range(5):
        timer.tick()

    on_expire.assert_called_once_with(4)
    assert timer.remaining_seconds == 0
    assert timer.has_fired
    assert not timer.is_running


def test_cancelled_timer_never_fires() -> None:
    on_expire = Mock()
    timer = RoundTimer(duration_seconds=1, on_expire=on_expire, round_number=1)

    timer.cancel()
    timer.tick()

    on_expire.assert_not_called()
    assert timer.remaining_seconds == 1


def test_start_time_from_clock() -> None:
    timer = RoundTimer(
        duration_seconds=60, on_expire=Mock(), round_number=1, clock=lambda: 1234.5
    )
    assert timer.started_at == 1234.5


def test_scheduled_timer_fires_on_the_event_loop() -> None:
    fired: list[int] = []

    async def scenario() -> RoundTimer:
        timer = RoundTimer(duration_seconds=3, on_expire=fired.append, round_number=2)
        task = timer.schedule(tick_seconds=0.001)
        await asyncio.wait_for(task, timeout=2)
        return timer

    timer = asyncio.run(scenario())

    assert fired == [2]
    assert timer.remaining_seconds == 0


def test_cancel_stops_the_scheduled_task() -> None:
    on_expire = Mock()

    async def scenario() -> asyncio.Task:
        timer = RoundTimer(duration_seconds=1, on_expire=on_expire, round_number=1)
        task = timer.schedule(tick_seconds=0.05)
        timer.cancel()
        await asyncio.sleep(0.1)
        return task

    task = asyncio.run(scenario())

    assert task.cancelled()
    on_expire.assert_not_called()


def test_schedule_twice_reuses_the_task() -> None:
    async def scenario() -> bool:
        timer = RoundTimer(duration_seconds=100, on_expire=Mock(), round_number=1)
        first = timer.schedule(tick_seconds=0.01)
        second = timer.schedule(tick_seconds=0.01)
        timer.cancel()
        return first is second

    assert asyncio.run(scenario())


def test_catch_up_follows_the_clock(clock) -> None:
    on_expire = Mock()
    timer = RoundTimer(
        duration_seconds=60, on_expire=on_expire, round_number=1, clock=clock
    )

    clock.advance(20.7)
    timer.catch_up()

    assert timer.remaining_seconds == 40
    on_expire.assert_not_called()


def test_catch_up_fires_once_when_time_ran_out(clock) -> None:
    on_expire = Mock()
    timer = RoundTimer(
        duration_seconds=60, on_expire=on_expire, round_number=2, clock=clock
    )

    clock.advance(500)
    timer.catch_up()
    timer.catch_up()
    timer.tick()

    on_expire.assert_called_once_with(2)
    assert timer.remaining_seconds == 0
    assert not timer.is_running


def test_catch_up_never_adds_time(clock) -> None:
    timer = RoundTimer(
        duration_seconds=60, on_expire=Mock(), round_number=1, clock=clock
    )
    for _ in range(10):
        timer.tick()

    timer.catch_up()

    assert timer.remaining_seconds == 50


def test_cancelled_timer_ignores_the_clock(clock) -> None:
    on_expire = Mock()
    timer = RoundTimer(
        duration_seconds=60, on_expire=on_expire, round_number=1, clock=clock
    )
    timer.cancel()

    clock.advance(500)
    timer.catch_up()

    on_expire.assert_not_called()
    assert timer.remaining_seconds == 60
