from unittest.mock import MagicMock

import pytest

import multilog.setup
from multilog._backend import get_backend
from multilog.sinks import MemorySink


@pytest.fixture(autouse=True)
def reset_backend(monkeypatch):
    """Every test starts and ends with no loguru sinks."""
    monkeypatch.setattr(multilog.setup, '_console_id', None)
    get_backend().reset()
    yield
    get_backend().reset()


@pytest.fixture
def memory_sink():
    """MemorySink receiving every level."""
    sink = MemorySink()
    get_backend().add_sink(sink, level='DEBUG')
    return sink


@pytest.fixture
def make_backend():
    """Factory for mock backend loggers with a category."""
    def _make(*category):
        backend = MagicMock()
        backend.category = category or ('test',)
        return backend
    return _make
