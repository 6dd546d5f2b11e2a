"""Shared fixtures for retry tests."""

import pytest


class RecordingSleep:
    """Async stand-in for asyncio.sleep that records requested delays."""

    def __init__(self):
        self.delays: list[float] = []

    async def __call__(self, delay: float) -> None:
        self.delays.append(delay)


class StatusError(Exception):
    """Plain error carrying a numeric `status`, like an SDK API error."""

    def __init__(self, message: str, status: int):
        super().__init__(message)
        self.status = status


@pytest.fixture
def sleep():
    """Recording sleep so retry tests never actually wait."""
    return RecordingSleep()
