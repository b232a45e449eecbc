"""Indicadores y evaluadores de estrategia (funciones puras)."""

import pytest

from binarydesk.domain.services.indicator_calculator import IndicatorCalculator
from binarydesk.domain.services.strategy_evaluator import (
    BreakoutConfig,
    MeanReversionConfig,
    StrategyKind,
    TrendFollowingConfig,
    build_config,
    evaluate,
)
from binarydesk.domain.value_objects.signal import Direction, TradeSignal


def rising(n, start=100.0, step=1.0):
    return [start + i * step for i in range(n)]


# ─── Indicadores ──────────────────────────────────────────────────────

def test_sma_needs_full_period():
    assert IndicatorCalculator.sma([1.0, 2.0], 3) is None
    assert IndicatorCalculator.sma([1.0, 2.0, 3.0, 4.0], 3) == pytest.approx(3.0)


def test_rsi_needs_period_plus_one_samples():
    assert IndicatorCalculator.rsi(rising(14), 14) is None
    assert IndicatorCalculator.rsi(rising(15), 14) == 100.0


def test_rsi_all_losses_is_zero():
    assert IndicatorCalculator.rsi(rising(15, step=-1.0), 14) == pytest.approx(0.0)


def test_rsi_balanced_window_is_fifty():
    prices = [100.0, 101.0] * 8  # 14 cambios: 7 subidas, 7 bajadas
    assert IndicatorCalculator.rsi(prices[:15], 14) == pytest.approx(50.0)


# ─── Trend following ──────────────────────────────────────────────────

def test_trend_following_holds_without_enough_data():
    assert evaluate(StrategyKind.TREND_FOLLOWING, TrendFollowingConfig(), rising(19)) == TradeSignal.HOLD


def test_trend_following_call_above_band():
    history = [100.0] * 19 + [101.0]
    assert evaluate(StrategyKind.TREND_FOLLOWING, TrendFollowingConfig(), history) == TradeSignal.CALL


def test_trend_following_put_below_band():
    history = [100.0] * 19 + [99.0]
    assert evaluate(StrategyKind.TREND_FOLLOWING, TrendFollowingConfig(), history) == TradeSignal.PUT


def test_trend_following_hold_inside_band():
    history = [100.0] * 19 + [100.01]
    assert evaluate(StrategyKind.TREND_FOLLOWING, TrendFollowingConfig(), history) == TradeSignal.HOLD


# ─── Mean reversion ───────────────────────────────────────────────────

def test_mean_reversion_strictly_increasing_is_put():
    assert evaluate(StrategyKind.MEAN_REVERSION, MeanReversionConfig(), rising(15)) == TradeSignal.PUT


def test_mean_reversion_strictly_decreasing_is_call():
    history = rising(15, step=-1.0)
    assert evaluate(StrategyKind.MEAN_REVERSION, MeanReversionConfig(), history) == TradeSignal.CALL


def test_mean_reversion_holds_with_period_samples_only():
    assert evaluate(StrategyKind.MEAN_REVERSION, MeanReversionConfig(), rising(14)) == TradeSignal.HOLD


# ─── Breakout ─────────────────────────────────────────────────────────

def test_breakout_call_above_previous_high():
    history = [100.0] * 19 + [101.0]
    assert evaluate(StrategyKind.BREAKOUT, BreakoutConfig(), history) == TradeSignal.CALL


def test_breakout_put_below_previous_low():
    history = [100.0] * 19 + [99.0]
    assert evaluate(StrategyKind.BREAKOUT, BreakoutConfig(), history) == TradeSignal.PUT


def test_breakout_needs_two_periods():
    assert evaluate(StrategyKind.BREAKOUT, BreakoutConfig(), [100.0] * 19) == TradeSignal.HOLD


# ─── Dispatch ─────────────────────────────────────────────────────────

def test_unknown_kind_holds():
    assert evaluate("martingale", TrendFollowingConfig(), rising(50)) == TradeSignal.HOLD


def test_build_config_applies_overrides():
    config = build_config(StrategyKind.MEAN_REVERSION, {"period": 5})
    assert config == MeanReversionConfig(period=5)


def test_build_config_rejects_unknown_params():
    with pytest.raises(TypeError):
        build_config(StrategyKind.BREAKOUT, {"period": 5, "bogus": 1})


def test_signal_direction_mapping():
    assert TradeSignal.CALL.to_direction() is Direction.CALL
    assert TradeSignal.PUT.to_direction() is Direction.PUT
    assert not TradeSignal.HOLD.is_actionable
    with pytest.raises(ValueError):
        TradeSignal.HOLD.to_direction()
