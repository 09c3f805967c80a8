"""Tests for the TaskManager lifecycle helper."""

from __future__ import annotations

import asyncio
import unittest

from pantry_sync.task_manager import TaskManager


class TaskManagerTests(unittest.IsolatedAsyncioTestCase):
    """Validate named replacement, error routing and shutdown."""

    async def test_spawn_anonymous_and_cancel_all(self) -> None:
        tm = TaskManager()
        cancelled: list[bool] = []

        async def _worker() -> None:
            try:
                await asyncio.sleep(9999)
            except asyncio.CancelledError:
                cancelled.append(True)
                raise

        task = tm.spawn(_worker())
        await asyncio.sleep(0)  # Let the task start.
        await tm.cancel_all()
        self.assertTrue(task.done())
        self.assertTrue(cancelled)
        self.assertEqual(tm.pending, [])

    async def test_named_spawn_replaces_pending_task(self) -> None:
        tm = TaskManager()

        async def _slow() -> str:
            await asyncio.sleep(9999)
            return "slow"

        async def _fast() -> str:
            return "fast"

        first = tm.spawn(_slow(), name="refresh")
        await asyncio.sleep(0)
        second = tm.spawn(_fast(), name="refresh")

        self.assertIn(second, tm.pending)
        await tm.wait_idle()
        self.assertTrue(first.cancelled())
        self.assertEqual(second.result(), "fast")
        self.assertEqual(tm.pending, [])

    async def test_errors_go_to_on_error(self) -> None:
        tm = TaskManager()
        errors: list[BaseException] = []

        async def _boom() -> None:
            raise ValueError("bad input")

        tm.spawn(_boom(), on_error=errors.append)
        await tm.wait_idle()
        await asyncio.sleep(0)  # Done callbacks run on the next loop step.

        self.assertEqual(len(errors), 1)
        self.assertIsInstance(errors[0], ValueError)

    async def test_errors_without_handler_are_logged(self) -> None:
        tm = TaskManager()

        async def _boom() -> None:
            raise RuntimeError("lost")

        with self.assertLogs("pantry_sync.task_manager", level="WARNING") as logs:
            tm.spawn(_boom(), name="doomed")
            await tm.wait_idle()
            await asyncio.sleep(0)

        self.assertTrue(any("task.failed" in line for line in logs.output))

    async def test_wait_idle_follows_tasks_spawned_while_waiting(self) -> None:
        tm = TaskManager()
        finished: list[str] = []

        async def _child() -> None:
            await asyncio.sleep(0)
            finished.append("child")

        async def _parent() -> None:
            await asyncio.sleep(0)
            tm.spawn(_child())
            finished.append("parent")

        tm.spawn(_parent())
        await tm.wait_idle()

        self.assertEqual(finished, ["parent", "child"])

    async def test_cancelled_task_does_not_report_error(self) -> None:
        tm = TaskManager()
        errors: list[BaseException] = []
        tm.spawn(asyncio.sleep(9999), name="x", on_error=errors.append)
        await asyncio.sleep(0)
        await tm.cancel_all()
        await asyncio.sleep(0)
        self.assertEqual(errors, [])


if __name__ == "__main__":
    unittest.main()
