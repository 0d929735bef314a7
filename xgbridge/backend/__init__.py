"""
Native numeric backends.

- NumericBackend: the narrow interface the core consumes
- XGBoostBackend: implementation over the xgboost package
- default_backend(): process-wide XGBoostBackend instance
"""

from .base import NumericBackend, MatrixHandle, SessionHandle
from .xgboost_backend import XGBoostBackend, native_call

_default = None


def default_backend() -> NumericBackend:
    """Return the shared XGBoostBackend, creating it on first use."""
    global _default
    if _default is None:
        _default = XGBoostBackend()
    return _default


__all__ = [
    "NumericBackend",
    "MatrixHandle",
    "SessionHandle",
    "XGBoostBackend",
    "native_call",
    "default_backend",
]
