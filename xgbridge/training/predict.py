from typing import Any, Optional

import numpy as np

from xgbridge.backend import NumericBackend
from xgbridge.data.matrix import TrainingMatrix
from xgbridge.util.logger import logger


def predict(model: Any, matrix: TrainingMatrix, backend: Optional[NumericBackend] = None) -> np.ndarray:
    """
    Score every row of a live matrix with a trained model.

    Returns one backend output per row, in matrix row order.
    """
    backend = backend or matrix.backend
    scores = backend.predict(model, matrix.handle)
    logger.debug(f"Predicted {len(scores)} rows for {matrix!r}")
    return np.asarray(scores)
