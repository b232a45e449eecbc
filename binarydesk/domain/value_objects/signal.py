"""
BinaryDesk – Domain Value Objects: TradeSignal / Direction
===========================================================
Recomendación direccional de una estrategia y dirección de un trade.
"""

from __future__ import annotations

from enum import Enum


class TradeSignal(str, Enum):
    """Salida de un evaluador de estrategia."""
    CALL = "CALL"  # Se espera subida
    PUT = "PUT"    # Se espera bajada
    HOLD = "HOLD"  # Sin operación

    @property
    def is_actionable(self) -> bool:
        return self is not TradeSignal.HOLD

    def to_direction(self) -> "Direction":
        if self is TradeSignal.HOLD:
            raise ValueError("HOLD no tiene dirección operable")
        return Direction(self.value.lower())


class Direction(str, Enum):
    """Dirección de una opción binaria."""
    CALL = "call"
    PUT = "put"
