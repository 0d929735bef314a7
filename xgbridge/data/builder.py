"""
Matrix builder: column sources in, TrainingMatrix out.

Row order depends on the source shape and is part of the contract:

- SplitSource: every signal row in table order, then every background row
- TaggedSource: the source's own (mixed) row order, restricted to one split
"""
from __future__ import annotations

from typing import List, Optional, Sequence

import numpy as np

from xgbridge.backend import NumericBackend
from xgbridge.config import MatrixConfig
from xgbridge.data.balance import balance_weights
from xgbridge.data.matrix import TrainingMatrix
from xgbridge.data.sources import Dataset, EventClass, Split, SplitSource, TaggedSource
from xgbridge.errors import ConversionError, UnknownVariableError
from xgbridge.util.logger import logger


class MatrixBuilder:
    """
    Converts a SplitSource or TaggedSource into a TrainingMatrix.

    The builder never mutates its source. All matrices it builds share one
    backend and one MatrixConfig.
    """

    def __init__(
            self,
            backend: Optional[NumericBackend] = None,
            config: Optional[MatrixConfig] = None,
    ):
        self.backend = backend
        self.config = config or MatrixConfig()

    def build(
            self,
            source: Dataset,
            variables: Optional[Sequence[str]] = None,
            signal_weight: Optional[float] = None,
            background_weight: Optional[float] = None,
            split=Split.TRAINING,
    ) -> TrainingMatrix:
        """
        Build a training matrix from ``source``.

        Args:
            source: SplitSource or TaggedSource
            variables: Ordered column names. None selects every variable of the source.
            signal_weight: Explicit signal weight, bypasses balancing for signal rows
            background_weight: Explicit background weight, bypasses balancing for background rows
            split: Partition to keep for a TaggedSource ("training" or "testing")

        Returns:
            A live TrainingMatrix owning its backend handle

        Raises:
            UnknownVariableError: a requested variable is not in the source schema
            UnsupportedSplitError: ``split`` is not training or testing
            EmptyClassError: balancing needed for a class with no rows
            BackendFailure: the backend failed to create the matrix or attach labels
        """
        if isinstance(source, SplitSource):
            return self._build_from_split(source, variables, signal_weight, background_weight)
        if isinstance(source, TaggedSource):
            return self._build_from_tagged(source, variables, signal_weight, background_weight, split)
        raise ConversionError(f"Unsupported source type: {type(source).__name__}")

    # ==================== SPLIT SOURCE ====================

    def _build_from_split(
            self,
            source: SplitSource,
            variables: Optional[Sequence[str]],
            signal_weight: Optional[float],
            background_weight: Optional[float],
    ) -> TrainingMatrix:
        variables = _resolve_variables(variables, source.signal.variables, source.background.variables)
        n_sig, n_bgd = source.n_signal, source.n_background
        logger.info(f"Building matrix from split source: {n_sig} signal + {n_bgd} background, {len(variables)} variables")

        values = np.empty((n_sig + n_bgd, len(variables)), dtype=np.float32)
        for j, var in enumerate(variables):
            # first n_sig rows are signal, the following n_bgd rows background
            values[:n_sig, j] = source.signal.column(var)
            values[n_sig:, j] = source.background.column(var)
            logger.debug(f"Filled column {j} ({var})")

        class_weights = balance_weights(n_sig, n_bgd, signal_weight, background_weight)

        labels = np.empty(n_sig + n_bgd, dtype=np.float32)
        labels[:n_sig] = EventClass.SIGNAL.label
        labels[n_sig:] = EventClass.BACKGROUND.label

        weights = np.empty(n_sig + n_bgd, dtype=np.float32)
        weights[:n_sig] = class_weights.signal
        weights[n_sig:] = class_weights.background

        return self._package(values, labels, weights, n_sig, n_bgd, variables)

    # ==================== TAGGED SOURCE ====================

    def _build_from_tagged(
            self,
            source: TaggedSource,
            variables: Optional[Sequence[str]],
            signal_weight: Optional[float],
            background_weight: Optional[float],
            split,
    ) -> TrainingMatrix:
        selection = source.select(split)
        variables = _resolve_variables(variables, source.variables)
        n_rows = len(selection)
        logger.info(
            f"Building matrix from tagged source ({selection.split.value}): "
            f"{selection.n_signal} signal + {selection.n_background} background, {len(variables)} variables"
        )

        # rows keep the source order, so signal and background stay mixed
        values = np.empty((n_rows, len(variables)), dtype=np.float32)
        for j, var in enumerate(variables):
            values[:, j] = source.table.column(var)[selection.positions]

        labels = np.array([c.label for c in selection.classes], dtype=np.float32)

        if selection.weights is not None:
            if signal_weight is not None or background_weight is not None:
                logger.warning("Tagged source carries per-event weights; explicit class weights ignored")
            weights = selection.weights.astype(np.float32)
        else:
            class_weights = balance_weights(
                selection.n_signal, selection.n_background, signal_weight, background_weight
            )
            weights = np.where(
                labels == EventClass.SIGNAL.label, class_weights.signal, class_weights.background
            ).astype(np.float32)

        return self._package(values, labels, weights, selection.n_signal, selection.n_background, variables)

    def _package(self, values, labels, weights, n_sig, n_bgd, variables) -> TrainingMatrix:
        return TrainingMatrix(
            values,
            labels,
            weights,
            n_signal=n_sig,
            n_background=n_bgd,
            variables=variables,
            backend=self.backend,
            missing=self.config.missing,
            attach_weights=self.config.attach_weights,
        )


def _resolve_variables(requested: Optional[Sequence[str]], schema: List[str], *other_schemas: List[str]) -> List[str]:
    """Validate requested variables against every schema; None means the first schema."""
    variables = list(schema) if requested is None else list(requested)
    if not variables:
        raise ConversionError("No variables requested")
    for var in variables:
        for names in (schema,) + other_schemas:
            if var not in names:
                raise UnknownVariableError(var, names)
    return variables


def build_matrix(
        source: Dataset,
        variables: Optional[Sequence[str]] = None,
        signal_weight: Optional[float] = None,
        background_weight: Optional[float] = None,
        split=Split.TRAINING,
        backend: Optional[NumericBackend] = None,
        config: Optional[MatrixConfig] = None,
) -> TrainingMatrix:
    """Shortcut for ``MatrixBuilder(backend, config).build(...)``."""
    return MatrixBuilder(backend=backend, config=config).build(
        source,
        variables,
        signal_weight=signal_weight,
        background_weight=background_weight,
        split=split,
    )
