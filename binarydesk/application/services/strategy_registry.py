"""
BinaryDesk – Strategy Registry
=====================================================
Registro de estrategias con nombre, conjunto activo y performance.

REGLAS:
  - activate()/deactivate() solo cambian el flag y la pertenencia al
    conjunto activo. Nunca tocan la performance acumulada.
  - run_active() evalúa todas las activas contra el MISMO snapshot de
    precios. Devuelve también los HOLD; filtrarlos es responsabilidad
    de quien envía órdenes.
  - record_outcome() solo se llama con trades liquidados.
"""

from __future__ import annotations

from typing import Any, Sequence

from binarydesk.domain.entities.strategy import Strategy
from binarydesk.domain.entities.trade import BinaryTrade
from binarydesk.domain.exceptions.domain_errors import StrategyNotFoundError
from binarydesk.domain.services.strategy_evaluator import StrategyKind, build_config
from binarydesk.domain.value_objects.signal import TradeSignal
from binarydesk.shared.logging.logger import get_logger

logger = get_logger("strategy_registry")

# Estrategias canónicas: (nombre, kind, parámetros)
DEFAULT_STRATEGIES: tuple[tuple[str, StrategyKind, dict], ...] = (
    ("Trend Following", StrategyKind.TREND_FOLLOWING, {"period": 20, "threshold": 0.001}),
    ("Mean Reversion", StrategyKind.MEAN_REVERSION, {"period": 14, "threshold": 0.002}),
    ("Breakout", StrategyKind.BREAKOUT, {"period": 10, "breakout_threshold": 0.0015}),
)


class StrategyRegistry:
    """Estrategias registradas, cuáles están activas y cómo les va."""

    def __init__(self) -> None:
        self._strategies: dict[str, Strategy] = {}
        # Orden de activación (determinista para run_active)
        self._active: dict[str, None] = {}

    # ════════════════════════════════════════════════════════════════
    #  REGISTRO
    # ════════════════════════════════════════════════════════════════

    def register(
        self,
        name: str,
        kind: StrategyKind | str,
        config: Any = None,
    ) -> Strategy:
        """
        Registra (o reemplaza) una estrategia, inactiva.

        Args:
            name: Clave única
            kind: Tipo de evaluador
            config: Config del kind, dict de overrides, o None (defaults)
        """
        kind = StrategyKind(kind)
        if config is None or isinstance(config, dict):
            config = build_config(kind, config)

        if name in self._strategies:
            logger.warning("Estrategia '%s' reemplazada (performance reiniciada)", name)
            self._active.pop(name, None)

        strategy = Strategy(name=name, kind=kind, config=config)
        self._strategies[name] = strategy
        logger.info("Estrategia registrada | name=%s kind=%s", name, kind.value)
        return strategy

    def register_defaults(self) -> None:
        for name, kind, params in DEFAULT_STRATEGIES:
            self.register(name, kind, params)

    def get(self, name: str) -> Strategy:
        try:
            return self._strategies[name]
        except KeyError:
            raise StrategyNotFoundError(name) from None

    @property
    def names(self) -> list[str]:
        return list(self._strategies)

    @property
    def active_names(self) -> list[str]:
        return list(self._active)

    # ════════════════════════════════════════════════════════════════
    #  ACTIVACIÓN
    # ════════════════════════════════════════════════════════════════

    def activate(self, name: str) -> bool:
        strategy = self._strategies.get(name)
        if strategy is None:
            logger.warning("activate(): estrategia desconocida '%s'", name)
            return False
        strategy.active = True
        self._active[name] = None
        logger.info("▶️ Estrategia activada | %s", name)
        return True

    def deactivate(self, name: str) -> bool:
        strategy = self._strategies.get(name)
        if strategy is None:
            logger.warning("deactivate(): estrategia desconocida '%s'", name)
            return False
        strategy.active = False
        self._active.pop(name, None)
        logger.info("⏸️ Estrategia desactivada | %s", name)
        return True

    # ════════════════════════════════════════════════════════════════
    #  EVALUACIÓN
    # ════════════════════════════════════════════════════════════════

    def run_active(
        self,
        history: Sequence[float],
        symbol: str,
    ) -> list[tuple[str, TradeSignal]]:
        """
        Evalúa cada estrategia activa sobre el mismo snapshot.

        Returns:
            [(nombre, señal)] en orden de activación, HOLD incluido.
        """
        snapshot = list(history)
        results: list[tuple[str, TradeSignal]] = []
        for name in self._active:
            signal = self._strategies[name].analyze(snapshot)
            results.append((name, signal))
            if signal.is_actionable:
                logger.debug(
                    "Señal %s | strategy=%s sym=%s samples=%d",
                    signal.value, name, symbol, len(snapshot),
                )
        return results

    # ════════════════════════════════════════════════════════════════
    #  PERFORMANCE
    # ════════════════════════════════════════════════════════════════

    def record_outcome(self, name: str, trade: BinaryTrade) -> None:
        strategy = self._strategies.get(name)
        if strategy is None:
            logger.warning(
                "Resultado ignorado: estrategia '%s' no registrada (trade=%s)",
                name, trade.id,
            )
            return
        strategy.performance.record(trade)
        logger.info(
            "Performance actualizada | strategy=%s trades=%d WR=%.1f%% PnL=%.2f",
            name,
            strategy.performance.total_trades,
            strategy.performance.win_rate,
            strategy.performance.total_profit_and_loss,
        )

    def get_performance(self, name: str) -> dict | None:
        strategy = self._strategies.get(name)
        return strategy.performance.to_dict() if strategy else None

    def get_all_performance(self) -> dict[str, dict]:
        return {
            name: strategy.performance.to_dict()
            for name, strategy in self._strategies.items()
        }

    def to_list(self) -> list[dict]:
        return [s.to_dict() for s in self._strategies.values()]
