import asyncio
import logging

from argateway.tasks import TaskRunner


async def test_spawn_runs_in_background():
    runner = TaskRunner()
    done = []

    async def work():
        done.append(True)

    runner.spawn(work(), name="work")
    assert len(runner) == 1
    await runner.drain()
    assert done == [True]
    assert len(runner) == 0


async def test_failure_is_logged_not_raised(caplog):
    runner = TaskRunner()

    async def broken():
        raise OSError("disk full")

    with caplog.at_level(logging.ERROR, logger="argateway.tasks"):
        runner.spawn(broken(), name="write-through:abc")
        await runner.drain()

    assert "write-through:abc failed: disk full" in caplog.text
    assert len(runner) == 0


async def test_drain_waits_for_nested_spawns():
    runner = TaskRunner()
    order = []

    async def child():
        await asyncio.sleep(0)
        order.append("child")

    async def parent():
        order.append("parent")
        runner.spawn(child(), name="child")

    runner.spawn(parent(), name="parent")
    await runner.drain()
    assert order == ["parent", "child"]
