"""
Tests for xgbridge/training/params.py

Tests cover:
- HyperparameterSet ordering and string encoding
- Rejected names and values
"""

import numpy as np
import pytest

from xgbridge.errors import InvalidParameterError, TrainingError
from xgbridge.training.params import HyperparameterSet, encode_value


class TestEncodeValue:
    """Tests for encode_value()"""

    @pytest.mark.parametrize("value, expected", [
        (6, "6"),
        (0.1, "0.1"),
        ("hist", "hist"),
        (True, "1"),
        (False, "0"),
        (np.int64(3), "3"),
    ])
    def test_encoding(self, value, expected):
        assert encode_value(value) == expected

    def test_unsupported_type(self):
        with pytest.raises(TypeError):
            encode_value([1, 2])


class TestHyperparameterSet:
    """Tests for HyperparameterSet"""

    def test_preserves_insertion_order(self):
        params = HyperparameterSet([("max_depth", 6), ("eta", 0.3), ("objective", "binary:logistic")])
        assert [name for name, _ in params] == ["max_depth", "eta", "objective"]

    def test_values_are_strings(self):
        params = HyperparameterSet({"max_depth": 6, "eta": 0.3})
        assert list(params) == [("max_depth", "6"), ("eta", "0.3")]
        assert params["max_depth"] == "6"

    def test_reset_keeps_position(self):
        params = HyperparameterSet([("a", 1), ("b", 2)])
        params.set("a", 3)
        assert list(params) == [("a", "3"), ("b", "2")]

    def test_repeated_name_in_pairs_rejected(self):
        """Repeated names are reported instead of collapsing to the last value"""
        with pytest.raises(InvalidParameterError) as exc_info:
            HyperparameterSet([("eval_metric", "auc"), ("max_depth", 2), ("eval_metric", "logloss")])
        assert exc_info.value.name == "eval_metric"

    def test_coerce_returns_same_instance(self):
        params = HyperparameterSet({"max_depth": 2})
        assert HyperparameterSet.coerce(params) is params
        assert HyperparameterSet.coerce({"max_depth": 2}).to_dict() == {"max_depth": "2"}

    def test_empty(self):
        assert len(HyperparameterSet()) == 0
        assert len(HyperparameterSet.coerce(None)) == 0

    @pytest.mark.parametrize("name", ["", None, 5])
    def test_invalid_name(self, name):
        with pytest.raises(InvalidParameterError):
            HyperparameterSet([(name, 1)])

    def test_invalid_value(self):
        with pytest.raises(InvalidParameterError) as exc_info:
            HyperparameterSet({"max_depth": None})
        assert exc_info.value.name == "max_depth"
        assert isinstance(exc_info.value, TrainingError)

    def test_contains_and_repr(self):
        params = HyperparameterSet({"max_depth": 6})
        assert "max_depth" in params
        assert "eta" not in params
        assert repr(params) == "HyperparameterSet(max_depth=6)"
