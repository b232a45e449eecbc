"""
BinaryDesk – Domain Entity: Strategy
======================================
Registro de una estrategia con nombre: tipo + config + flag de
activación + contadores de performance.

Win rate y profit promedio NO se almacenan: se recalculan desde los
contadores en cada lectura para que nunca diverjan.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Sequence

from binarydesk.domain.entities.trade import BinaryTrade, TradeStatus
from binarydesk.domain.services.strategy_evaluator import (
    StrategyKind,
    config_to_dict,
    evaluate,
)
from binarydesk.domain.value_objects.signal import TradeSignal


@dataclass
class StrategyPerformance:
    total_trades: int = 0
    winning_trades: int = 0
    total_profit_and_loss: float = 0.0

    @property
    def win_rate(self) -> float:
        if self.total_trades == 0:
            return 0.0
        return (self.winning_trades / self.total_trades) * 100.0

    @property
    def avg_profit(self) -> float:
        if self.total_trades == 0:
            return 0.0
        return self.total_profit_and_loss / self.total_trades

    def record(self, trade: BinaryTrade) -> None:
        self.total_trades += 1
        if trade.status == TradeStatus.WON:
            self.winning_trades += 1
        self.total_profit_and_loss += trade.profit or 0.0

    def to_dict(self) -> dict:
        return {
            "total_trades": self.total_trades,
            "winning_trades": self.winning_trades,
            "total_profit_and_loss": round(self.total_profit_and_loss, 2),
            "win_rate": round(self.win_rate, 2),
            "avg_profit": round(self.avg_profit, 2),
        }


@dataclass
class Strategy:
    name: str
    kind: StrategyKind
    config: Any
    active: bool = False
    performance: StrategyPerformance = field(default_factory=StrategyPerformance)

    def analyze(self, history: Sequence[float]) -> TradeSignal:
        return evaluate(self.kind, self.config, history)

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "kind": self.kind.value,
            "config": config_to_dict(self.config),
            "active": self.active,
            "performance": self.performance.to_dict(),
        }
