"""
Sequential boosting trainer.

A training run is four steps against one TrainingMatrix, all on the backend
that owns the matrix handle:

1. create a boosting session over the matrix handle
2. apply every hyperparameter, in insertion order
3. run ``n_iterations`` update rounds, indices 0..n-1, one after another
4. finalize the session configuration while the matrix is still live

Later rounds build on the state left by earlier ones, so rounds are never
skipped, reordered or run in parallel. Backend failures propagate unchanged.
"""
from __future__ import annotations

import time
from typing import Any, Optional, Sequence

from xgbridge.backend import NumericBackend
from xgbridge.config import MatrixConfig
from xgbridge.data.builder import MatrixBuilder
from xgbridge.data.matrix import TrainingMatrix
from xgbridge.data.sources import Dataset, Split
from xgbridge.training.params import HyperparameterSet
from xgbridge.util.logger import logger


class Trainer:
    """
    Drives a backend session over a single TrainingMatrix.

    The trainer always uses the backend that created the matrix handle and
    never releases the matrix; its owner does (usually by leaving a ``with``
    block). The returned model handle belongs to the caller and stays usable
    after the matrix is released.
    """

    def train(self, matrix: TrainingMatrix, hyperparameters, n_iterations: int) -> Any:
        """
        Train a boosted model on ``matrix``.

        Args:
            matrix: Live training matrix (labels already attached)
            hyperparameters: HyperparameterSet, mapping or (name, value) pairs
            n_iterations: Number of update rounds (0 creates and configures the
                          session without updating it)

        Returns:
            Opaque trained-model handle (xgboost.Booster for XGBoostBackend)

        Raises:
            InvalidParameterError: a parameter was rejected
            BackendFailure: session creation or an update round failed
            MatrixReleasedError: ``matrix`` was already released
        """
        if n_iterations < 0:
            raise ValueError(f"n_iterations must be >= 0, got {n_iterations}")

        params = HyperparameterSet.coerce(hyperparameters)
        backend = matrix.backend
        handle = matrix.handle

        session = backend.create_session([handle])
        logger.info(f"Created boosting session on {backend.name} for {matrix!r}")

        for name, value in params:
            logger.debug(f"Setting {name}={value}")
            backend.set_param(session, name, value)

        start = time.perf_counter()
        for iteration in range(n_iterations):
            backend.update_one_iter(session, iteration, handle)

        backend.configure_session(session)

        elapsed = time.perf_counter() - start
        logger.info(f"Trained {n_iterations} rounds with {params!r} in {elapsed:.2f}s")
        return session


def train(matrix: TrainingMatrix, hyperparameters, n_iterations: int) -> Any:
    """Shortcut for ``Trainer().train(...)``."""
    return Trainer().train(matrix, hyperparameters, n_iterations)


def build_and_train(
        source: Dataset,
        variables: Optional[Sequence[str]],
        hyperparameters,
        n_iterations: int,
        signal_weight: Optional[float] = None,
        background_weight: Optional[float] = None,
        split=Split.TRAINING,
        backend: Optional[NumericBackend] = None,
        config: Optional[MatrixConfig] = None,
) -> Any:
    """
    Build a matrix from ``source``, train on it and release it.

    The matrix is released on every exit path, including failures raised by
    the trainer.
    """
    builder = MatrixBuilder(backend=backend, config=config)
    matrix = builder.build(
        source,
        variables,
        signal_weight=signal_weight,
        background_weight=background_weight,
        split=split,
    )
    with matrix:
        return Trainer().train(matrix, hyperparameters, n_iterations)
