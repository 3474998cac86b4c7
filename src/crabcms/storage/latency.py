"""Artificial latency, used to make local storage feel like a remote database."""

from __future__ import annotations

import asyncio

from pydantic import BaseModel


class LatencyProfile(BaseModel):
    """Per-operation delays in seconds.

    The numbers carry no meaning beyond the demo; ``none()`` disables
    them entirely and is what tests and the CLI use by default.
    """

    connect: float = 0.3
    read: float = 0.2
    write_post: float = 0.4
    delete_post: float = 0.3
    write_record: float = 0.2

    @classmethod
    def none(cls) -> LatencyProfile:
        return cls(connect=0, read=0, write_post=0, delete_post=0, write_record=0)


async def pause(seconds: float) -> None:
    if seconds > 0:
        await asyncio.sleep(seconds)
