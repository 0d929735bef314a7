"""
Exception hierarchy for matrix conversion and training.

Conversion errors abort a build call, training errors abort a train call.
Backend failures belong to both categories because the native library is
called from both paths, so ``except ConversionError`` around a build and
``except TrainingError`` around a train each see them.
"""
from typing import Optional


class XGBridgeError(Exception):
    """Base class for every error raised by xgbridge."""


class ConversionError(XGBridgeError):
    """A column source could not be turned into a training matrix."""


class UnknownVariableError(ConversionError):
    def __init__(self, variable: str, available: Optional[list] = None):
        self.variable = variable
        self.available = list(available) if available is not None else []
        message = f"Unknown variable '{variable}'"
        if self.available:
            message += f" (available: {', '.join(self.available)})"
        super().__init__(message)


class UnsupportedSplitError(ConversionError):
    def __init__(self, value):
        self.value = value
        super().__init__(
            f"Unexpected split '{value}' (must be either 'training' or 'testing')"
        )


class UnknownClassError(ConversionError):
    def __init__(self, value):
        self.value = value
        super().__init__(
            f"Unexpected class tag '{value}' (must be either 'signal' or 'background')"
        )


class EmptyClassError(ConversionError):
    """Raised instead of dividing by a zero class count while balancing."""

    def __init__(self, event_class: str):
        self.event_class = event_class
        super().__init__(
            f"Cannot balance weights: no {event_class} events and no explicit {event_class} weight"
        )


class TrainingError(XGBridgeError):
    """A boosting session could not be configured or updated."""


class InvalidParameterError(TrainingError):
    def __init__(self, name, value, diagnostic: str = ""):
        self.name = name
        self.value = value
        self.diagnostic = diagnostic
        message = f"Invalid hyperparameter {name!r}={value!r}"
        if diagnostic:
            message += f": {diagnostic}"
        super().__init__(message)


class BackendFailure(ConversionError, TrainingError):
    """
    A call into the native numeric backend reported an error.

    Attributes:
        operation: Name of the failing backend call (e.g. "XGDMatrixCreateFromMat")
        diagnostic: The backend's own error text
        call_site: "module:function" that issued the call
    """

    def __init__(self, operation: str, diagnostic: str, call_site: str = ""):
        self.operation = operation
        self.diagnostic = diagnostic
        self.call_site = call_site
        prefix = f"{call_site}: " if call_site else ""
        super().__init__(f"{prefix}error in {operation}: {diagnostic}")


class MatrixReleasedError(XGBridgeError, RuntimeError):
    """A training matrix was used, or released again, after release()."""
