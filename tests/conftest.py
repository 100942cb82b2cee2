import os
import sys

import pytest

# Ensure project root is on path
ROOT = os.path.dirname(os.path.dirname(__file__))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from config import Config
from models import RawArtist
from reconciler import SelectionReconciler
from services import SelectionStore


class FakeTransport:
    """Records every fetch and answers from a canned query -> artists table."""

    def __init__(self, responses=None):
        self.responses = responses or {}
        self.error = None
        self.calls = []

    def fetch(self, query):
        self.calls.append(query)
        if self.error is not None:
            raise self.error
        return [RawArtist(id=i, title=t) for i, t in self.responses.get(query, [])]


@pytest.fixture
def transport():
    return FakeTransport({
        "monet": [(1, "Claude Monet"), (2, "Monet Workshop"), (3, "After Monet")],
        "claude": [(1, "Claude Monet"), (5, "Claude Lorrain")],
        "lorrain": [(5, "Claude Lorrain")],
        "abc": [(7, "Abc Artist")],
    })


@pytest.fixture
def config():
    return Config(DEBOUNCE_SECONDS=0)


@pytest.fixture
def reconciler(transport, config):
    return SelectionReconciler(transport, SelectionStore(), config)
