import asyncio
import contextlib
import logging

import pytest

from genremap.api.app import _log_startup_failure


@pytest.mark.asyncio
async def test_startup_failure_is_logged(caplog) -> None:
    async def start():
        raise OSError("read-only file system")

    task = asyncio.create_task(start())
    await asyncio.wait([task])

    with caplog.at_level(logging.ERROR, logger="genremap.api.app"):
        _log_startup_failure(task)

    assert "Session startup failed: read-only file system" in caplog.text


@pytest.mark.asyncio
async def test_cancelled_startup_is_not_logged(caplog) -> None:
    task = asyncio.create_task(asyncio.sleep(60))
    await asyncio.sleep(0)
    task.cancel()
    with contextlib.suppress(asyncio.CancelledError):
        await task

    with caplog.at_level(logging.ERROR, logger="genremap.api.app"):
        _log_startup_failure(task)

    assert "Session startup failed" not in caplog.text
