"""Pytest configuration to ensure the `src` package layout is importable.

This adds the `src/` directory to `sys.path` so tests can import the
`conquest` package without requiring an editable install in CI, and the
`tests/` directory so test modules can share the builders in
`builders.py`.
"""

import sys
from pathlib import Path

import pytest

TESTS_PATH = Path(__file__).resolve().parent
SRC_PATH = TESTS_PATH.parent / "src"
for path in (SRC_PATH, TESTS_PATH):
    if str(path) not in sys.path:
        sys.path.insert(0, str(path))

from conquest.notify import RecordingNotifier  # noqa: E402
from conquest.repository import InMemoryGameRepository  # noqa: E402
from conquest.topology import JsonTopologyLoader  # noqa: E402


@pytest.fixture
def repository() -> InMemoryGameRepository:
    return InMemoryGameRepository()


@pytest.fixture
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture(scope="session")
def topology() -> JsonTopologyLoader:
    return JsonTopologyLoader()
