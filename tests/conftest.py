"""Shared fixtures for the CSRKey Cache tests."""
import pytest


class FakeTimer:
    """Manually advanced clock, in seconds."""
    def __init__(self, now: float = 1000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class RecordingCache:
    """Dict-backed cache recording every call it receives."""
    def __init__(self):
        self.data = {}
        self.calls = []

    def set(self, key, value, expire=None):
        self.calls.append(('set', key, value, expire))
        self.data[key] = value

    def get(self, key):
        self.calls.append(('get', key))
        return self.data.get(key)

    def has(self, key):
        self.calls.append(('has', key))
        return key in self.data

    def delete(self, key):
        self.calls.append(('delete', key))
        self.data.pop(key, None)

    def names(self):
        return [call[0] for call in self.calls]


class ScriptedRandom:
    """Random source replaying a list of byte strings, then a fallback."""
    def __init__(self, script, fallback=None):
        self.script = list(script)
        self.fallback = fallback
        self.calls = []

    def __call__(self, length: int) -> bytes:
        self.calls.append(length)
        if self.script:
            return self.script.pop(0)
        if self.fallback is None:
            raise AssertionError("random source exhausted")
        return self.fallback(length)


@pytest.fixture
def timer():
    return FakeTimer()


@pytest.fixture
def recorder():
    return RecordingCache()


@pytest.fixture
def scripted():
    """Factory of :class:`ScriptedRandom` sources."""
    return ScriptedRandom
