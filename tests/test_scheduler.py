"""Tests for the asyncio tick scheduler."""

import asyncio

import pytest

from spacewar.engine.map_generator import generate_map
from spacewar.engine.scheduler import TickScheduler
from spacewar.engine.tick_executor import TickExecutor


def make_scheduler(**kwargs):
    game = generate_map(5, star_count=20)
    return TickScheduler(TickExecutor(game), **kwargs)


def test_interval_follows_speed():
    scheduler = make_scheduler(base_tick_ms=1000, speed=4)

    assert scheduler.interval == pytest.approx(0.25)
    scheduler.set_speed(0.5)
    assert scheduler.interval == pytest.approx(2.0)
    assert scheduler.executor.speed == 0.5


@pytest.mark.parametrize("speed", [0, -1])
def test_invalid_speed(speed):
    with pytest.raises(ValueError, match="Invalid speed"):
        make_scheduler(speed=speed)


def test_tick_once_pushes_diff():
    received = []

    async def sink(diff):
        received.append(diff)

    scheduler = make_scheduler(sink=sink)
    diff = asyncio.run(scheduler.tick_once())

    assert received == [diff]
    assert diff[0]["tick"] == 1


def test_loop_ticks_until_stopped():
    async def run():
        scheduler = make_scheduler(base_tick_ms=10)
        scheduler.start()
        assert scheduler.running
        await asyncio.sleep(0.1)
        await scheduler.stop()
        return scheduler

    scheduler = asyncio.run(run())

    assert not scheduler.running
    assert scheduler.executor.game.tick > 0


def test_paused_loop_does_not_tick():
    async def run():
        scheduler = make_scheduler(base_tick_ms=10)
        scheduler.start()
        scheduler.pause()
        await asyncio.sleep(0.05)
        await scheduler.stop()
        return scheduler

    scheduler = asyncio.run(run())

    assert scheduler.executor.game.tick == 0


def test_failed_tick_stops_loop():
    async def sink(diff):
        raise RuntimeError("client gone")

    async def run():
        scheduler = make_scheduler(sink=sink, base_tick_ms=10)
        scheduler.start()
        await asyncio.sleep(0.1)
        running = scheduler.running
        await scheduler.stop()
        return scheduler, running

    scheduler, running = asyncio.run(run())

    assert not running
    assert scheduler.executor.game.tick == 1
