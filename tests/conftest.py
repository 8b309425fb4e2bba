"""Shared fixtures for tuner tests."""

import pytest


class FakeStream:
    """Stand-in for a sounddevice stream."""

    def __init__(self, **kwargs):
        self.kwargs = kwargs
        self.started = False
        self.stop_calls = 0
        self.close_calls = 0

    def start(self):
        self.started = True

    def stop(self):
        self.stop_calls += 1

    def close(self):
        self.close_calls += 1


class FakeTone:
    """Records reference tone requests."""

    def __init__(self):
        self.played: list[float] = []
        self.stop_calls = 0
        self.playing = False

    def play(self, frequency):
        self.played.append(frequency)
        self.playing = True

    def stop(self):
        self.stop_calls += 1
        self.playing = False


class MemoryStore:
    """Reference store kept in a dict."""

    def __init__(self):
        self.values = {}

    def load_reference_hz(self):
        return self.values.get("a4")

    def save_reference_hz(self, hz):
        self.values["a4"] = hz


@pytest.fixture
def streams():
    """Streams opened through the stream_factory fixture."""
    return []


@pytest.fixture
def stream_factory(streams):
    def factory(**kwargs):
        stream = FakeStream(**kwargs)
        streams.append(stream)
        return stream

    return factory


@pytest.fixture
def fake_tone():
    return FakeTone()


@pytest.fixture
def memory_store():
    return MemoryStore()
