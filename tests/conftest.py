"""Shared fixtures for the settings matcher tests."""

import threading

import pytest

from settings_matcher.config.models import MetricKind, Record
from settings_matcher.core.validator import METRIC_FUNCTIONS, StringValidator


class CountingFunction:
    """Metric stand-in that records every call it receives."""

    def __init__(self, value=0):
        self.value = value
        self.calls = []
        self._lock = threading.Lock()

    def __call__(self, left, right):
        with self._lock:
            self.calls.append((left, right))
        return self.value


@pytest.fixture
def unsettled():
    return Record(identifier="u1", name="applesauce", settings=())


@pytest.fixture
def settled_same():
    return Record(identifier="s1", name="applesauce", settings=("catA",))


@pytest.fixture
def settled_typo():
    return Record(identifier="s2", name="applesause", settings=("catB",))


@pytest.fixture
def mixed_records():
    return [
        Record("u1", "applesauce", ()),
        Record("u2", "orange juice", ()),
        Record("u3", "green tea", ()),
        Record("s1", "applesause", ("catA",)),
        Record("s2", "orange juic", ("catB", "catC")),
        Record("s3", "black coffee", ("catD",)),
        Record("s4", "green tee", ("catE",)),
    ]


@pytest.fixture
def counting_validator():
    """Validator whose functions are all counting stand-ins never passing at 0."""
    functions = {kind: CountingFunction(0) for kind in MetricKind}
    return StringValidator(functions)


@pytest.fixture
def library_validator():
    return StringValidator(dict(METRIC_FUNCTIONS))


@pytest.fixture
def make_counter():
    return CountingFunction
