"""
Tests for xgbridge/data/balance.py

Tests cover:
- balance_weights() formula with real-valued division
- explicit per-class weights
- zero-count classes
"""

import pytest

from xgbridge.data.balance import ClassWeights, balance_weights
from xgbridge.errors import ConversionError, EmptyClassError


class TestBalanceWeightsFormula:
    """Tests for the automatic 1 + n_other / n_own weights"""

    def test_imbalanced_counts(self):
        """100 signal vs 400 background gives 5.0 / 1.25"""
        weights = balance_weights(100, 400)
        assert weights.signal == pytest.approx(5.0)
        assert weights.background == pytest.approx(1.25)

    def test_equal_counts(self):
        """Balanced classes both get weight 2.0"""
        weights = balance_weights(500, 500)
        assert weights == ClassWeights(signal=2.0, background=2.0)

    def test_division_is_not_truncated(self):
        """3 signal vs 2 background keeps the fractional part"""
        weights = balance_weights(3, 2)
        assert weights.signal == pytest.approx(1.0 + 2.0 / 3.0)
        assert weights.background == pytest.approx(2.5)

    def test_returns_floats(self):
        """Weights are plain floats even for integer inputs"""
        weights = balance_weights(1, 1)
        assert isinstance(weights.signal, float)
        assert isinstance(weights.background, float)


class TestBalanceWeightsExplicit:
    """Tests for explicit class weights"""

    def test_explicit_signal_weight(self):
        """Explicit signal weight is kept, background still uses the formula"""
        weights = balance_weights(100, 400, signal_weight=2.0)
        assert weights.signal == 2.0
        assert weights.background == pytest.approx(1.25)

    def test_explicit_background_weight(self):
        """Explicit background weight is kept, signal still uses the formula"""
        weights = balance_weights(100, 400, background_weight=0.5)
        assert weights.signal == pytest.approx(5.0)
        assert weights.background == 0.5

    def test_both_explicit(self):
        """Both explicit weights bypass the counts entirely"""
        weights = balance_weights(0, 0, signal_weight=3.0, background_weight=4.0)
        assert weights == ClassWeights(signal=3.0, background=4.0)


class TestBalanceWeightsEmptyClass:
    """Tests for classes without events"""

    def test_no_signal_events(self):
        """Balancing signal with zero signal events raises"""
        with pytest.raises(EmptyClassError) as exc_info:
            balance_weights(0, 10)
        assert exc_info.value.event_class == "signal"

    def test_no_background_events(self):
        """Balancing background with zero background events raises"""
        with pytest.raises(EmptyClassError) as exc_info:
            balance_weights(10, 0)
        assert exc_info.value.event_class == "background"

    def test_empty_class_with_explicit_weight(self):
        """An explicit weight for the empty class avoids the division"""
        weights = balance_weights(0, 10, signal_weight=1.0)
        assert weights.signal == 1.0
        assert weights.background == pytest.approx(1.0)

    def test_empty_class_is_conversion_error(self):
        """EmptyClassError is reported as a conversion failure"""
        with pytest.raises(ConversionError):
            balance_weights(0, 0)
