from dataclasses import dataclass
from typing import Optional

from xgbridge.errors import EmptyClassError
from xgbridge.util.logger import logger


@dataclass(frozen=True)
class ClassWeights:
    """One scalar weight per class, applied to every row of that class."""
    signal: float
    background: float


def balance_weights(
        n_signal: int,
        n_background: int,
        signal_weight: Optional[float] = None,
        background_weight: Optional[float] = None,
) -> ClassWeights:
    """
    Derive per-class weights that offset the class imbalance.

    Unless given explicitly, each class is weighted by
    ``1 + n_other / n_own`` using real division. An explicit weight replaces
    the formula for its own class only.

    Raises:
        EmptyClassError: a class needs the formula but has no events
    """
    if signal_weight is None:
        if n_signal <= 0:
            raise EmptyClassError("signal")
        signal_weight = 1.0 + float(n_background) / float(n_signal)

    if background_weight is None:
        if n_background <= 0:
            raise EmptyClassError("background")
        background_weight = 1.0 + float(n_signal) / float(n_background)

    weights = ClassWeights(signal=float(signal_weight), background=float(background_weight))
    logger.debug(
        f"Class weights for {n_signal} signal / {n_background} background: "
        f"signal={weights.signal:.4f}, background={weights.background:.4f}"
    )
    return weights
