"""
Shared fixtures.

RecordingBackend is a NumericBackend test double: it records every call,
tracks which matrix handles are still live and can inject a BackendFailure on
the N-th call of any operation.
"""

from collections import Counter
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

import numpy as np
import pandas as pd
import pytest

from xgbridge.backend import NumericBackend
from xgbridge.errors import BackendFailure, InvalidParameterError


@dataclass
class FakeMatrix:
    id: int
    values: np.ndarray
    missing: float
    fields: Dict[str, np.ndarray] = field(default_factory=dict)


@dataclass
class FakeSession:
    handles: List[FakeMatrix]
    params: List[tuple] = field(default_factory=list)
    iterations: List[int] = field(default_factory=list)
    configured: bool = False


class RecordingBackend(NumericBackend):

    def __init__(self, fail_on: Optional[Dict[str, int]] = None, reject_params=()):
        """
        Args:
            fail_on: operation name -> 1-based call number that raises BackendFailure
            reject_params: parameter names rejected by set_param
        """
        self.fail_on = dict(fail_on or {})
        self.reject_params = set(reject_params)
        self.calls: List[tuple] = []
        self.counts: Counter = Counter()
        self.live: set = set()
        self.freed: List[int] = []
        self.failures: List[BackendFailure] = []
        self.saved: Dict[str, Any] = {}
        self._next_id = 0

    @property
    def name(self) -> str:
        return "recording"

    def _record(self, op: str, *args) -> None:
        self.counts[op] += 1
        self.calls.append((op,) + args)
        if self.fail_on.get(op) == self.counts[op]:
            failure = BackendFailure(op, f"injected failure on call {self.counts[op]}",
                                     call_site="tests.conftest:RecordingBackend")
            self.failures.append(failure)
            raise failure

    def create_matrix(self, values, missing=float("nan")):
        self._record("create_matrix", values.shape)
        handle = FakeMatrix(id=self._next_id, values=values.copy(), missing=missing)
        self._next_id += 1
        self.live.add(handle.id)
        return handle

    def set_float_info(self, handle, field, values):
        self._record("set_float_info", handle.id, field)
        handle.fields[field] = np.array(values, copy=True)

    def free_matrix(self, handle):
        self._record("free_matrix", handle.id)
        assert handle.id in self.live, f"double free of matrix {handle.id}"
        self.live.remove(handle.id)
        self.freed.append(handle.id)

    def create_session(self, handles):
        self._record("create_session", tuple(h.id for h in handles))
        for h in handles:
            assert h.id in self.live, f"session over freed matrix {h.id}"
        return FakeSession(handles=list(handles))

    def set_param(self, session, name, value):
        self._record("set_param", name, value)
        if name in self.reject_params:
            raise InvalidParameterError(name, value, diagnostic="rejected by test backend")
        session.params.append((name, value))

    def update_one_iter(self, session, iteration, handle):
        self._record("update_one_iter", iteration, handle.id)
        assert handle.id in self.live, f"update on freed matrix {handle.id}"
        session.iterations.append(iteration)

    def configure_session(self, session):
        self._record("configure_session")
        for h in session.handles:
            assert h.id in self.live, f"session configured over freed matrix {h.id}"
        session.configured = True

    def predict(self, session, handle):
        self._record("predict", handle.id)
        return np.full(handle.values.shape[0], 0.5, dtype=np.float32)

    def save_model(self, session, path):
        self._record("save_model", path)
        self.saved[path] = session
        with open(path, "w") as f:
            f.write("recorded session")

    def load_model(self, path):
        self._record("load_model", path)
        return self.saved[path]


@pytest.fixture
def backend():
    """A fresh RecordingBackend with no injected failures"""
    return RecordingBackend()


@pytest.fixture
def make_backend():
    """Factory for RecordingBackend instances with injected failures"""
    return RecordingBackend


@pytest.fixture
def signal_frame():
    return pd.DataFrame({
        "var0": [1.0, 2.0, 3.0],
        "var1": [10.0, 20.0, 30.0],
        "var2": [100.0, 200.0, 300.0],
    })


@pytest.fixture
def background_frame():
    return pd.DataFrame({
        "var0": [-1.0, -2.0],
        "var1": [-10.0, -20.0],
        "var2": [-100.0, -200.0],
    })


@pytest.fixture
def tagged_frame():
    """Mixed events: 4 training rows then 3 testing rows"""
    return pd.DataFrame({
        "var0": [1.0, -1.0, 2.0, -2.0, 3.0, -3.0, 4.0],
        "var1": [0.1, 0.2, 0.3, 0.4, 0.5, 0.6, 0.7],
        "class": ["signal", "background", "background", "signal", "signal", "background", "background"],
        "split": ["training", "training", "training", "training", "testing", "testing", "testing"],
        "weight": [1.5, 2.5, 3.5, 4.5, 5.5, 6.5, 7.5],
    })
