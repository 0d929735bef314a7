"""
Training module: ordered hyperparameters, the sequential trainer and prediction.
"""

from .params import HyperparameterSet, encode_value
from .trainer import Trainer, train, build_and_train
from .predict import predict

__all__ = ["HyperparameterSet", "encode_value", "Trainer", "train", "build_and_train", "predict"]
