"""
xgbridge: signal/background column sources to xgboost training matrices.
"""

from .errors import (
    XGBridgeError,
    ConversionError,
    UnknownVariableError,
    UnsupportedSplitError,
    UnknownClassError,
    EmptyClassError,
    TrainingError,
    InvalidParameterError,
    BackendFailure,
    MatrixReleasedError,
)
from .data import (
    ColumnTable,
    EventClass,
    Split,
    SplitSource,
    TaggedSource,
    ClassWeights,
    balance_weights,
    TrainingMatrix,
    MatrixBuilder,
    build_matrix,
)
from .training import HyperparameterSet, Trainer, train, build_and_train, predict

__version__ = "0.1.0"

__all__ = [
    "XGBridgeError", "ConversionError", "UnknownVariableError", "UnsupportedSplitError",
    "UnknownClassError", "EmptyClassError", "TrainingError", "InvalidParameterError",
    "BackendFailure", "MatrixReleasedError",
    "ColumnTable", "EventClass", "Split", "SplitSource", "TaggedSource",
    "ClassWeights", "balance_weights", "TrainingMatrix", "MatrixBuilder", "build_matrix",
    "HyperparameterSet", "Trainer", "train", "build_and_train", "predict",
]
