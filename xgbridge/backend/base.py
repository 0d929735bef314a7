"""
Abstract interface to the native numeric backend.

The core only ever talks to the backend through this narrow surface: it hands
over a flat row-major buffer, attaches float fields, drives a boosting session
one round at a time and frees matrix handles. Every call either succeeds or
raises ``BackendFailure`` carrying the backend's diagnostic.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Sequence

import numpy as np

# Opaque handles, never inspected by the core
MatrixHandle = Any
SessionHandle = Any


class NumericBackend(ABC):
    """
    Abstract Base Class for boosting backends.

    Implementations wrap one native library. Handles returned from
    ``create_matrix`` must be passed back to ``free_matrix`` exactly once.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Short identifier used in logs."""
        pass

    @abstractmethod
    def create_matrix(self, values: np.ndarray, missing: float = float("nan")) -> MatrixHandle:
        """
        Create a matrix handle from a 2-dim, C-contiguous float32 buffer.

        Args:
            values: Row-major buffer of shape (n_rows, n_columns)
            missing: Value the backend treats as a missing entry

        Returns:
            Opaque matrix handle
        """
        pass

    @abstractmethod
    def set_float_info(self, handle: MatrixHandle, field: str, values: np.ndarray) -> None:
        """Attach a named float array (e.g. "label", "weight") to a matrix handle."""
        pass

    @abstractmethod
    def free_matrix(self, handle: MatrixHandle) -> None:
        """Release a matrix handle."""
        pass

    @abstractmethod
    def create_session(self, handles: Sequence[MatrixHandle]) -> SessionHandle:
        """Create a boosting session over one or more matrix handles."""
        pass

    @abstractmethod
    def set_param(self, session: SessionHandle, name: str, value: str) -> None:
        """Set one string-encoded parameter on a session."""
        pass

    @abstractmethod
    def update_one_iter(self, session: SessionHandle, iteration: int, handle: MatrixHandle) -> None:
        """Run one boosting round against ``handle``."""
        pass

    @abstractmethod
    def configure_session(self, session: SessionHandle) -> None:
        """
        Finalize a session's configuration against its cached matrices.

        Called once after the last update round, while every matrix the session
        was created over is still live. A session with zero rounds must still be
        usable for prediction and persistence afterwards.
        """
        pass

    # External collaborators: prediction and persistence of trained sessions

    @abstractmethod
    def predict(self, session: SessionHandle, handle: MatrixHandle) -> np.ndarray:
        pass

    @abstractmethod
    def save_model(self, session: SessionHandle, path: str) -> None:
        pass

    @abstractmethod
    def load_model(self, path: str) -> SessionHandle:
        pass
