"""
TrainingMatrix: the resource-owning container handed to the trainer.

It holds the dense row-major buffer, the label and weight vectors, the class
counts and the backend matrix handle created from them. The handle has a single
owner for its whole life: it is freed by ``release()`` (exactly once), by
leaving a ``with`` block, or as a last resort by a finalizer that reports the
leak.
"""
from __future__ import annotations

import weakref
from typing import List, Optional

import numpy as np

from xgbridge.backend import NumericBackend, default_backend
from xgbridge.errors import MatrixReleasedError, XGBridgeError
from xgbridge.util.logger import logger

LABEL_FIELD = "label"
WEIGHT_FIELD = "weight"


def _free_leaked(backend: NumericBackend, handle, description: str) -> None:
    logger.warning(f"{description} was garbage collected without release(); freeing its handle")
    try:
        backend.free_matrix(handle)
    except XGBridgeError as e:
        logger.error(f"Failed to free leaked {description}: {e}")


def _read_only(values: np.ndarray) -> np.ndarray:
    view = values.view()
    view.flags.writeable = False
    return view


class TrainingMatrix:
    """
    Dense training matrix plus its backend handle.

    Construction creates the backend handle and attaches the labels as the
    "label" field in one step; if attaching fails the new handle is freed
    before the BackendFailure propagates.

    Every accessor raises MatrixReleasedError once the matrix is released.

    Example:
        with build_matrix(source, ["var0", "var1"]) as matrix:
            booster = train(matrix, {"max_depth": 6}, n_iterations=100)
    """

    def __init__(
            self,
            values: np.ndarray,
            labels: np.ndarray,
            weights: np.ndarray,
            n_signal: int,
            n_background: int,
            variables: List[str],
            backend: Optional[NumericBackend] = None,
            missing: float = float("nan"),
            attach_weights: bool = False,
    ):
        values = np.ascontiguousarray(values, dtype=np.float32)
        labels = np.ascontiguousarray(labels, dtype=np.float32)
        weights = np.ascontiguousarray(weights, dtype=np.float32)

        n_rows = n_signal + n_background
        if values.ndim != 2 or values.shape != (n_rows, len(variables)):
            raise ValueError(
                f"Matrix shape {values.shape} does not match "
                f"({n_rows} rows, {len(variables)} variables)"
            )
        if labels.shape != (n_rows,) or weights.shape != (n_rows,):
            raise ValueError(
                f"Expected {n_rows} labels and weights, got {labels.shape[0]} and {weights.shape[0]}"
            )

        self.backend = backend or default_backend()
        self.n_signal = n_signal
        self.n_background = n_background
        self.variables = list(variables)
        self._values = values
        self._labels = labels
        self._weights = weights
        self._released = False

        handle = self.backend.create_matrix(values, missing=missing)
        try:
            self.backend.set_float_info(handle, LABEL_FIELD, labels)
            if attach_weights:
                self.backend.set_float_info(handle, WEIGHT_FIELD, weights)
        except BaseException:
            self.backend.free_matrix(handle)
            raise

        self._handle = handle
        self._finalizer = weakref.finalize(self, _free_leaked, self.backend, handle, repr(self))
        logger.debug(f"Created {self!r} on {self.backend.name}")

    # ==================== LIFECYCLE ====================

    @property
    def released(self) -> bool:
        return self._released

    def _check_live(self, what: str) -> None:
        if self._released:
            raise MatrixReleasedError(f"Cannot {what}: training matrix already released")

    def release(self) -> None:
        """
        Free the backend handle. May be called exactly once.

        Raises:
            MatrixReleasedError: the matrix was already released
            BackendFailure: the backend failed to free the handle (the matrix
                            still counts as released)
        """
        self._check_live("release")
        handle = self._handle
        self._released = True
        self._handle = None
        self._finalizer.detach()
        logger.debug(f"Releasing {self!r}")
        self.backend.free_matrix(handle)

    def __enter__(self) -> "TrainingMatrix":
        self._check_live("enter context")
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        if self._released:
            return
        if exc_type is None:
            self.release()
            return
        # keep the exception that is already propagating
        try:
            self.release()
        except XGBridgeError as e:
            logger.error(f"Failed to release {self!r} while handling {exc_type.__name__}: {e}")

    # ==================== ACCESSORS ====================

    @property
    def handle(self):
        """Opaque backend matrix handle, owned by this matrix."""
        self._check_live("access handle")
        return self._handle

    @property
    def values(self) -> np.ndarray:
        self._check_live("access values")
        return _read_only(self._values)

    @property
    def labels(self) -> np.ndarray:
        self._check_live("access labels")
        return _read_only(self._labels)

    @property
    def weights(self) -> np.ndarray:
        self._check_live("access weights")
        return _read_only(self._weights)

    @property
    def n_rows(self) -> int:
        return self.n_signal + self.n_background

    @property
    def n_columns(self) -> int:
        return len(self.variables)

    def __repr__(self) -> str:
        state = "released" if self._released else "live"
        return (
            f"TrainingMatrix(signal={self.n_signal}, background={self.n_background}, "
            f"variables={self.n_columns}, {state})"
        )
