"""Pytest configuration for the test suite."""

import sys
from pathlib import Path
from typing import Callable

import pytest

project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from db.key_value_store import InMemoryKeyValueStore
from models.entry_engine import EntryEngine
from models.frequency_model import FrequencyModel


class FakeClock:
    """Millisecond clock that only moves when told to."""

    def __init__(self, start_ms: float = 0.0) -> None:
        self.now_ms = start_ms

    def __call__(self) -> float:
        return self.now_ms

    def advance(self, ms: float) -> float:
        self.now_ms += ms
        return self.now_ms


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock(start_ms=1000.0)


@pytest.fixture
def store() -> InMemoryKeyValueStore:
    return InMemoryKeyValueStore()


@pytest.fixture
def model(store: InMemoryKeyValueStore) -> FrequencyModel:
    return FrequencyModel(store)


@pytest.fixture
def engine(model: FrequencyModel, clock: FakeClock) -> EntryEngine:
    return EntryEngine(model=model, clock=clock)


@pytest.fixture
def typist(engine: EntryEngine, clock: FakeClock) -> Callable[..., None]:
    """Submit text to the engine fixture one character at a time.

    The clock advances by step_ms before each character.
    """

    def _type(text: str, step_ms: float = 200.0) -> None:
        for char in text:
            clock.advance(step_ms)
            engine.submit_char(char)

    return _type
