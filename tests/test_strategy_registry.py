"""Registro de estrategias: activación, evaluación y performance."""

import pytest

from binarydesk.application.services.strategy_registry import StrategyRegistry
from binarydesk.domain.entities.trade import BinaryTrade
from binarydesk.domain.exceptions.domain_errors import StrategyNotFoundError
from binarydesk.domain.services.strategy_evaluator import (
    MeanReversionConfig,
    StrategyKind,
)
from binarydesk.domain.value_objects.signal import Direction, TradeSignal


def rising(n):
    return [100.0 + i for i in range(n)]


def settled(won, amount=100.0):
    trade = BinaryTrade("EUR/USD", Direction.CALL, amount, 1.0, 0.0, 60.0, 1.85)
    trade.settle(2.0 if won else 0.5, 60.0)
    return trade


@pytest.fixture
def registry():
    reg = StrategyRegistry()
    reg.register_defaults()
    return reg


def test_defaults_are_registered_inactive(registry):
    assert registry.names == ["Trend Following", "Mean Reversion", "Breakout"]
    assert registry.active_names == []
    assert registry.get("Breakout").config.breakout_threshold == 0.0015


def test_get_unknown_raises(registry):
    with pytest.raises(StrategyNotFoundError):
        registry.get("Nope")


def test_activate_and_deactivate(registry):
    assert registry.activate("Mean Reversion")
    assert registry.get("Mean Reversion").active
    assert registry.active_names == ["Mean Reversion"]

    assert registry.deactivate("Mean Reversion")
    assert not registry.get("Mean Reversion").active
    assert registry.active_names == []


def test_unknown_names_return_false(registry):
    assert not registry.activate("Nope")
    assert not registry.deactivate("Nope")


def test_run_active_only_evaluates_active_strategies(registry):
    assert registry.run_active(rising(30), "EUR/USD") == []

    registry.activate("Mean Reversion")
    registry.activate("Trend Following")
    results = dict(registry.run_active(rising(30), "EUR/USD"))

    assert set(results) == {"Mean Reversion", "Trend Following"}
    assert results["Mean Reversion"] == TradeSignal.PUT
    assert results["Trend Following"] == TradeSignal.CALL


def test_run_active_includes_hold(registry):
    registry.activate("Breakout")
    assert registry.run_active([100.0] * 30, "EUR/USD") == [("Breakout", TradeSignal.HOLD)]


def test_run_active_accepts_any_sequence(registry):
    from collections import deque

    registry.activate("Mean Reversion")
    history = deque(rising(20), maxlen=20)
    assert registry.run_active(history, "EUR/USD") == [("Mean Reversion", TradeSignal.PUT)]


def test_register_with_dict_and_config(registry):
    registry.register("Fast MR", StrategyKind.MEAN_REVERSION, {"period": 3})
    assert registry.get("Fast MR").config == MeanReversionConfig(period=3)

    registry.register("Typed MR", "mean_reversion", MeanReversionConfig(period=4))
    assert registry.get("Typed MR").kind is StrategyKind.MEAN_REVERSION


def test_reregister_replaces_and_deactivates(registry):
    registry.activate("Breakout")
    registry.record_outcome("Breakout", settled(True))

    registry.register("Breakout", StrategyKind.BREAKOUT, {"period": 5})

    assert registry.get("Breakout").config.period == 5
    assert "Breakout" not in registry.active_names
    assert registry.get_performance("Breakout")["total_trades"] == 0


def test_activation_keeps_performance(registry):
    registry.record_outcome("Breakout", settled(True))
    registry.activate("Breakout")
    registry.deactivate("Breakout")
    assert registry.get_performance("Breakout")["total_trades"] == 1


def test_record_outcome_updates_derived_metrics(registry):
    registry.record_outcome("Trend Following", settled(True))
    registry.record_outcome("Trend Following", settled(True))
    registry.record_outcome("Trend Following", settled(False))

    perf = registry.get_performance("Trend Following")
    assert perf["total_trades"] == 3
    assert perf["winning_trades"] == 2
    assert perf["win_rate"] == 66.67
    assert perf["total_profit_and_loss"] == pytest.approx(70.0)
    assert perf["avg_profit"] == pytest.approx(23.33, abs=0.01)


def test_record_outcome_for_unknown_strategy_is_ignored(registry):
    registry.record_outcome("Ghost", settled(True))
    assert "Ghost" not in registry.get_all_performance()
    assert registry.get_performance("Ghost") is None


def test_zero_trades_have_zero_rates(registry):
    perf = registry.get_performance("Mean Reversion")
    assert perf["win_rate"] == 0.0
    assert perf["avg_profit"] == 0.0
