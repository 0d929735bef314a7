"""
Data marshaling from column sources into backend training matrices.

Key components:
- SplitSource / TaggedSource: the two accepted dataset shapes
- MatrixBuilder / build_matrix(): source -> TrainingMatrix
- balance_weights(): per-class weights from class counts
- TrainingMatrix: owner of the backend matrix handle
"""

from .sources import (
    ColumnTable,
    Dataset,
    EventClass,
    Split,
    SplitSource,
    TaggedSelection,
    TaggedSource,
)
from .balance import ClassWeights, balance_weights
from .matrix import TrainingMatrix
from .builder import MatrixBuilder, build_matrix

__all__ = [
    # Sources
    "ColumnTable",
    "Dataset",
    "EventClass",
    "Split",
    "SplitSource",
    "TaggedSelection",
    "TaggedSource",

    # Conversion
    "ClassWeights",
    "balance_weights",
    "TrainingMatrix",
    "MatrixBuilder",
    "build_matrix",
]
