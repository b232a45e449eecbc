"""
BinaryDesk – Domain Service: Strategy Evaluator
=================================================
Convierte una ventana de precios en una señal CALL / PUT / HOLD.

DISEÑO (variante etiquetada):
  Cada estrategia es un StrategyKind + un config inmutable. La
  evaluación es una función pura despachada por tipo:

      evaluate(kind, config, history) -> TradeSignal

  Sin herencia ni estado: misma entrada → misma salida. Un kind sin
  evaluador registrado devuelve HOLD (nunca opera a ciegas).

POLÍTICA DE DATOS INSUFICIENTES:
  Con menos muestras de las necesarias cada evaluador devuelve HOLD.
  No es un error: es el comportamiento definido en el borde.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from enum import Enum
from typing import Any, Callable, Sequence

from binarydesk.domain.services.indicator_calculator import IndicatorCalculator
from binarydesk.domain.value_objects.signal import TradeSignal


class StrategyKind(str, Enum):
    TREND_FOLLOWING = "trend_following"
    MEAN_REVERSION = "mean_reversion"
    BREAKOUT = "breakout"


@dataclass(frozen=True)
class TrendFollowingConfig:
    period: int = 20
    threshold: float = 0.001     # fracción sobre/bajo la SMA


@dataclass(frozen=True)
class MeanReversionConfig:
    period: int = 14
    threshold: float = 0.002     # no interviene en el RSI
    oversold: float = 30.0
    overbought: float = 70.0


@dataclass(frozen=True)
class BreakoutConfig:
    period: int = 10
    breakout_threshold: float = 0.0015


StrategyConfig = TrendFollowingConfig | MeanReversionConfig | BreakoutConfig

DEFAULT_CONFIGS: dict[StrategyKind, type] = {
    StrategyKind.TREND_FOLLOWING: TrendFollowingConfig,
    StrategyKind.MEAN_REVERSION: MeanReversionConfig,
    StrategyKind.BREAKOUT: BreakoutConfig,
}


def build_config(kind: StrategyKind, params: dict[str, Any] | None = None) -> StrategyConfig:
    """Config del kind con overrides opcionales (claves desconocidas → TypeError)."""
    return DEFAULT_CONFIGS[StrategyKind(kind)](**(params or {}))


def config_to_dict(config: Any) -> dict:
    return asdict(config)


# ════════════════════════════════════════════════════════════════════
#  EVALUADORES
# ════════════════════════════════════════════════════════════════════

def evaluate_trend_following(
    config: TrendFollowingConfig,
    history: Sequence[float],
) -> TradeSignal:
    """
    CALL si el último precio supera la SMA en más de `threshold`,
    PUT si queda por debajo en más de `threshold`.
    """
    sma = IndicatorCalculator.sma(history, config.period)
    if sma is None:
        return TradeSignal.HOLD

    current = history[-1]
    if current > sma * (1 + config.threshold):
        return TradeSignal.CALL
    if current < sma * (1 - config.threshold):
        return TradeSignal.PUT
    return TradeSignal.HOLD


def evaluate_mean_reversion(
    config: MeanReversionConfig,
    history: Sequence[float],
) -> TradeSignal:
    """
    RSI < oversold → CALL (se espera rebote).
    RSI > overbought → PUT (se espera retroceso).

    Ventana estrictamente creciente: avg_loss = 0 → RSI = 100 → PUT.
    """
    rsi = IndicatorCalculator.rsi(history, config.period)
    if rsi is None:
        return TradeSignal.HOLD

    if rsi < config.oversold:
        return TradeSignal.CALL
    if rsi > config.overbought:
        return TradeSignal.PUT
    return TradeSignal.HOLD


def evaluate_breakout(
    config: BreakoutConfig,
    history: Sequence[float],
) -> TradeSignal:
    """
    Ruptura del rango de la mitad anterior de las últimas 2×period
    muestras.
    """
    period = config.period
    if period <= 0 or len(history) < period * 2:
        return TradeSignal.HOLD

    previous = history[-period * 2:-period]
    previous_high = IndicatorCalculator.highest(previous)
    previous_low = IndicatorCalculator.lowest(previous)
    current = history[-1]

    if current > previous_high * (1 + config.breakout_threshold):
        return TradeSignal.CALL
    if current < previous_low * (1 - config.breakout_threshold):
        return TradeSignal.PUT
    return TradeSignal.HOLD


_EVALUATORS: dict[StrategyKind, Callable[[Any, Sequence[float]], TradeSignal]] = {
    StrategyKind.TREND_FOLLOWING: evaluate_trend_following,
    StrategyKind.MEAN_REVERSION: evaluate_mean_reversion,
    StrategyKind.BREAKOUT: evaluate_breakout,
}


def evaluate(
    kind: StrategyKind | str,
    config: Any,
    history: Sequence[float],
) -> TradeSignal:
    """
    Despacha al evaluador del kind.

    Args:
        kind: Tipo de estrategia
        config: Config inmutable del kind
        history: Precios (más antiguo primero)

    Returns:
        TradeSignal. HOLD para kinds desconocidos.
    """
    try:
        evaluator = _EVALUATORS[StrategyKind(kind)]
    except (ValueError, KeyError):
        return TradeSignal.HOLD
    return evaluator(config, history)
