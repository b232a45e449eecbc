"""
BinaryDesk – Domain Value Object: Quote
=========================================
Cotización bid/ask de un símbolo en un instante dado.

- frozen=True → inmutable, seguro para pasar entre coroutines.
- slots=True  → menor footprint de memoria en hot-path.
- ask ≥ bid por construcción (spread simétrico alrededor del precio).
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Quote:
    """Cotización atómica producida por el Price Source."""

    symbol: str       # e.g. "EUR/USD"
    bid: float
    ask: float
    timestamp: float  # epoch (reloj del Price Source)

    @property
    def mid(self) -> float:
        return (self.bid + self.ask) / 2.0

    @property
    def spread(self) -> float:
        return self.ask - self.bid

    def to_dict(self) -> dict:
        """Serialización para API / notificaciones."""
        return {
            "symbol": self.symbol,
            "bid": self.bid,
            "ask": self.ask,
            "timestamp": self.timestamp,
        }
