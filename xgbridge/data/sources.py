"""
Column sources consumed by the matrix builder.

A dataset reaches the builder in one of two shapes:

- SplitSource: two same-schema tables, one pure signal and one pure background
- TaggedSource: one mixed table whose rows carry a class tag, a split tag
  (training/testing) and optionally their own weight

Both are read column by column through ColumnTable.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Sequence, Union

import numpy as np
import pandas as pd

from xgbridge.errors import UnknownClassError, UnknownVariableError, UnsupportedSplitError


class EventClass(Enum):
    """Binary event class. Signal is labelled 0.0, background 1.0."""
    SIGNAL = "signal"
    BACKGROUND = "background"

    @property
    def label(self) -> float:
        return 0.0 if self is EventClass.SIGNAL else 1.0

    @classmethod
    def parse(cls, value) -> "EventClass":
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            raise UnknownClassError(value) from None


class Split(Enum):
    """Partition selector for tagged sources."""
    TRAINING = "training"
    TESTING = "testing"

    @classmethod
    def parse(cls, value) -> "Split":
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            raise UnsupportedSplitError(value) from None


class ColumnTable:
    """
    Column-addressable table of numeric values backed by a DataFrame.

    Row order is the DataFrame's positional order and is the same for
    every column. Column labels are normalised to strings, so a frame built
    from a bare ndarray exposes its columns as "0", "1", ...
    """

    def __init__(self, frame: pd.DataFrame):
        if not all(isinstance(c, str) for c in frame.columns):
            frame = frame.rename(columns=str)
        self.frame = frame

    @classmethod
    def from_columns(cls, columns: Dict[str, Sequence[float]]) -> "ColumnTable":
        return cls(pd.DataFrame(columns))

    @property
    def variables(self) -> List[str]:
        return list(self.frame.columns)

    def has_column(self, name: str) -> bool:
        return name in self.frame.columns

    def column(self, name: str) -> np.ndarray:
        """Values of one column, one per row, in row order."""
        if name not in self.frame.columns:
            raise UnknownVariableError(name, self.variables)
        return self.frame[name].to_numpy(dtype=np.float32)

    def __len__(self) -> int:
        return len(self.frame)

    def __repr__(self) -> str:
        return f"ColumnTable(rows={len(self)}, variables={self.variables})"


def _tag_value(value):
    """Tag columns may hold enum members or their plain string values."""
    return value.value if isinstance(value, Enum) else value


def _as_table(value: Union[ColumnTable, pd.DataFrame]) -> ColumnTable:
    if isinstance(value, ColumnTable):
        return value
    return ColumnTable(value)


@dataclass
class SplitSource:
    """Two separate event collections sharing one variable schema."""
    signal: ColumnTable
    background: ColumnTable

    def __post_init__(self):
        self.signal = _as_table(self.signal)
        self.background = _as_table(self.background)

    @property
    def variables(self) -> List[str]:
        return self.signal.variables

    @property
    def n_signal(self) -> int:
        return len(self.signal)

    @property
    def n_background(self) -> int:
        return len(self.background)


@dataclass
class TaggedSelection:
    """Rows of a tagged source that belong to one split, in source order."""
    split: Split
    positions: np.ndarray
    classes: List[EventClass]
    weights: Optional[np.ndarray] = None

    @property
    def n_signal(self) -> int:
        return sum(1 for c in self.classes if c is EventClass.SIGNAL)

    @property
    def n_background(self) -> int:
        return len(self.classes) - self.n_signal

    def __len__(self) -> int:
        return len(self.positions)


@dataclass
class TaggedSource:
    """
    One mixed event collection with per-row class, split and weight tags.

    Attributes:
        table: All rows, feature columns plus tag columns
        variables: Declared feature variables in dataset order. Defaults to every
                   column that is not a tag column.
        class_column: Column holding "signal" / "background"
        split_column: Column holding "training" / "testing"
        weight_column: Column holding each event's original weight. When absent
                       from the table, the builder balances weights per class.
    """
    table: ColumnTable
    variables: List[str] = field(default_factory=list)
    class_column: str = "class"
    split_column: str = "split"
    weight_column: Optional[str] = "weight"

    def __post_init__(self):
        self.table = _as_table(self.table)
        for tag in (self.class_column, self.split_column):
            if not self.table.has_column(tag):
                raise UnknownVariableError(tag, self.table.variables)
        if not self.variables:
            tags = {self.class_column, self.split_column, self.weight_column}
            self.variables = [v for v in self.table.variables if v not in tags]

    @property
    def has_weights(self) -> bool:
        return self.weight_column is not None and self.table.has_column(self.weight_column)

    def select(self, split) -> TaggedSelection:
        """Return the rows tagged with ``split``, keeping their source order."""
        split = Split.parse(split)
        frame = self.table.frame
        tags = frame[self.split_column].map(_tag_value)
        positions = np.flatnonzero((tags == split.value).to_numpy())

        classes = [EventClass.parse(v) for v in frame[self.class_column].to_numpy()[positions]]

        weights = None
        if self.has_weights:
            weights = self.table.column(self.weight_column)[positions]

        return TaggedSelection(split=split, positions=positions, classes=classes, weights=weights)


Dataset = Union[SplitSource, TaggedSource]
