# conftest.py - shared fakes for store/resolver tests
import pytest

from driftpatch.conflict.store import InMemoryStore


class FlakyStore(InMemoryStore):
    """InMemoryStore that can be told to fail its next writes, and counts calls."""

    def __init__(self):
        super().__init__()
        self.write_errors = []  # raised by the next writes, in order
        self.write_calls = []   # (path, version_token) per attempt
        self.get_errors = []    # raised by the next reads, in order
        self.get_calls = 0

    async def write(self, path, content, version_token, ref, message):
        self.write_calls.append((path, version_token))
        if self.write_errors:
            raise self.write_errors.pop(0)
        return await super().write(path, content, version_token, ref, message)

    async def get_content(self, path, ref):
        self.get_calls += 1
        if self.get_errors:
            raise self.get_errors.pop(0)
        return await super().get_content(path, ref)


class FakeTimer:
    """Monotonic clock that only moves when something sleeps."""

    def __init__(self, start: float = 100.0):
        self.now = start
        self.sleeps = []

    def clock(self) -> float:
        return self.now

    async def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds


@pytest.fixture
def store():
    return FlakyStore()


@pytest.fixture
def timer():
    return FakeTimer()
