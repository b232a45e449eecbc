"""
BinaryDesk – Domain Events
============================
Hechos ocurridos en la mesa. Inmutables y con timestamp.
El TradingPlatform los publica en el EventBus; la capa de
presentación decide qué hacer con ellos.
"""

from __future__ import annotations

import time
import uuid
from dataclasses import dataclass, field
from typing import Dict, Any, Optional


@dataclass(frozen=True)
class DomainEvent:
    """Evento base de dominio."""

    event_id: str = field(default_factory=lambda: uuid.uuid4().hex[:12])
    timestamp: float = field(default_factory=time.time)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "event_id": self.event_id,
            "event_type": self.__class__.__name__,
            "timestamp": self.timestamp,
        }


@dataclass(frozen=True)
class TradeOpened(DomainEvent):
    """Evento: se abrió un trade (monto ya debitado)."""

    trade_id: str = ""
    symbol: str = ""
    direction: str = ""  # call | put
    amount: float = 0.0
    entry_price: float = 0.0
    expiry_at: float = 0.0
    origin_strategy: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        base = super().to_dict()
        base.update({
            "trade_id": self.trade_id,
            "symbol": self.symbol,
            "direction": self.direction,
            "amount": self.amount,
            "entry_price": self.entry_price,
            "expiry_at": self.expiry_at,
            "origin_strategy": self.origin_strategy,
        })
        return base


@dataclass(frozen=True)
class TradeSettled(DomainEvent):
    """Evento: se liquidó un trade."""

    trade_id: str = ""
    symbol: str = ""
    direction: str = ""
    status: str = ""  # won | lost
    amount: float = 0.0
    entry_price: float = 0.0
    exit_price: Optional[float] = None
    profit: float = 0.0
    balance: float = 0.0
    degraded: bool = False

    def to_dict(self) -> Dict[str, Any]:
        base = super().to_dict()
        base.update({
            "trade_id": self.trade_id,
            "symbol": self.symbol,
            "direction": self.direction,
            "status": self.status,
            "amount": self.amount,
            "entry_price": self.entry_price,
            "exit_price": self.exit_price,
            "profit": self.profit,
            "balance": self.balance,
            "degraded": self.degraded,
        })
        return base


@dataclass(frozen=True)
class PriceUpdated(DomainEvent):
    """Evento: llegó un tick para un símbolo con exposición abierta."""

    symbol: str = ""
    bid: float = 0.0
    ask: float = 0.0
    quote_timestamp: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        base = super().to_dict()
        base.update({
            "symbol": self.symbol,
            "bid": self.bid,
            "ask": self.ask,
            "quote_timestamp": self.quote_timestamp,
        })
        return base


@dataclass(frozen=True)
class StrategySignalled(DomainEvent):
    """Evento: una estrategia activa emitió CALL/PUT y se envió la orden."""

    strategy: str = ""
    symbol: str = ""
    signal: str = ""  # CALL | PUT

    def to_dict(self) -> Dict[str, Any]:
        base = super().to_dict()
        base.update({
            "strategy": self.strategy,
            "symbol": self.symbol,
            "signal": self.signal,
        })
        return base
