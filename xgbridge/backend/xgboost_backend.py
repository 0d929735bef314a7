"""
NumericBackend implementation on top of the xgboost Python package.

Each method maps onto one call of xgboost's C API (named in the
``@native_call`` decorator) and converts ``XGBoostError`` into
``BackendFailure`` so callers see the operation and the library's message.
"""
from __future__ import annotations

import functools
from typing import Sequence

import numpy as np
import xgboost as xgb
from xgboost.core import XGBoostError

from xgbridge.backend.base import NumericBackend
from xgbridge.errors import BackendFailure, InvalidParameterError
from xgbridge.util.logger import logger


def native_call(operation: str):
    """Wrap a backend method so xgboost errors surface as BackendFailure."""

    def decorator(fn):
        call_site = f"{__name__}:{fn.__name__}"

        @functools.wraps(fn)
        def wrapper(*args, **kwargs):
            try:
                return fn(*args, **kwargs)
            except XGBoostError as e:
                logger.error(f"{call_site}: error in {operation}: {e}")
                raise BackendFailure(operation, str(e), call_site=call_site) from e

        return wrapper

    return decorator


class XGBoostBackend(NumericBackend):
    """Drives xgboost DMatrix / Booster objects one call at a time."""

    @property
    def name(self) -> str:
        return f"xgboost-{xgb.__version__}"

    @native_call("XGDMatrixCreateFromMat")
    def create_matrix(self, values: np.ndarray, missing: float = float("nan")) -> xgb.DMatrix:
        return xgb.DMatrix(values, missing=missing)

    @native_call("XGDMatrixSetFloatInfo")
    def set_float_info(self, handle: xgb.DMatrix, field: str, values: np.ndarray) -> None:
        handle.set_float_info(field, values)

    @native_call("XGDMatrixFree")
    def free_matrix(self, handle: xgb.DMatrix) -> None:
        # DMatrix.__del__ frees the native handle and drops the attribute,
        # so the later garbage-collector call is a no-op
        handle.__del__()

    @native_call("XGBoosterCreate")
    def create_session(self, handles: Sequence[xgb.DMatrix]) -> xgb.Booster:
        return xgb.Booster(cache=list(handles))

    def set_param(self, session: xgb.Booster, name: str, value: str) -> None:
        try:
            session.set_param(name, value)
        except XGBoostError as e:
            logger.error(f"XGBoosterSetParam rejected {name}={value}: {e}")
            raise InvalidParameterError(name, value, diagnostic=str(e)) from e

    @native_call("XGBoosterUpdateOneIter")
    def update_one_iter(self, session: xgb.Booster, iteration: int, handle: xgb.DMatrix) -> None:
        session.update(handle, iteration)

    @native_call("XGBoosterSaveJsonConfig")
    def configure_session(self, session: xgb.Booster) -> None:
        # the learner reads num_feature from its cached DMatrix on first
        # configuration; after zero rounds that has not happened yet
        session.save_config()

    @native_call("XGBoosterPredict")
    def predict(self, session: xgb.Booster, handle: xgb.DMatrix) -> np.ndarray:
        return session.predict(handle)

    @native_call("XGBoosterSaveModel")
    def save_model(self, session: xgb.Booster, path: str) -> None:
        session.save_model(path)

    @native_call("XGBoosterLoadModel")
    def load_model(self, path: str) -> xgb.Booster:
        booster = xgb.Booster()
        booster.load_model(path)
        return booster
