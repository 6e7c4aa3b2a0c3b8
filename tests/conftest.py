import os
import sys

import pytest

# Ensure src is on path for test imports
ROOT = os.path.dirname(os.path.dirname(__file__))
SRC = os.path.join(ROOT, "src")
if SRC not in sys.path:
    sys.path.insert(0, SRC)

from polymacher.game import load_level, parse_level  # noqa: E402


@pytest.fixture
def make_level():
    """Factory for level records: make_level([x, y, color], [directives...])."""

    def _make(parent, data, name="TEST"):
        return parse_level({"name": name, "parent": list(parent), "data": list(data)})

    return _make


@pytest.fixture
def make_board(make_level):
    """Factory for a loaded 9x9 board with a walled border around an open 7x7 room."""

    def _make(parent, data=(), room=True):
        prefix = [["walls", 0, 0, 8, 8], ["clears", 1, 1, 7, 7]] if room else []
        return load_level(make_level(parent, prefix + list(data)))

    return _make
