"""
Pytest fixtures and configuration for Pocket Notes tests
"""
import datetime as dt
import itertools
import os
import sys

import pytest

# Modules live at the repository root
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from errors import PersistenceError  # noqa: E402
from local_storage import MemoryLocalStorage  # noqa: E402
from notes_store import NotesStore  # noqa: E402

FIXED_NOW = dt.datetime(2024, 6, 5, 17, 7, 30)


class FailingStorage(MemoryLocalStorage):
    """Memory storage whose writes fail, for persistence error paths"""

    def __init__(self, initial=None):
        super().__init__(initial)
        self.fail = True

    def save(self, key, blob):
        if self.fail:
            raise PersistenceError(f"disk full while saving '{key}'", key=key)
        super().save(key, blob)


@pytest.fixture
def storage():
    return MemoryLocalStorage()


@pytest.fixture
def counter_ids():
    counter = itertools.count(1)
    return lambda: f"id-{next(counter)}"


@pytest.fixture
def clock():
    return lambda: FIXED_NOW


@pytest.fixture
def store(storage, counter_ids, clock):
    return NotesStore(storage, id_factory=counter_ids, clock=clock)


@pytest.fixture
def failing_storage():
    return FailingStorage()


@pytest.fixture
def settings_home(tmp_path, monkeypatch):
    """Point settings_manager at an empty temporary directory"""
    home = tmp_path / "pocket-notes-home"
    monkeypatch.setenv("POCKET_NOTES_HOME", str(home))
    return home
