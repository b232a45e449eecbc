"""
BinaryDesk – Settlement Scheduler
===================================
Tabla explícita trade_id → due_at.

No hay timers por trade: un único loop (TradingPlatform.step) lee el
reloj y saca los vencidos. Con un VirtualClock la liquidación es
totalmente determinista.
"""

from __future__ import annotations


class SettlementScheduler:

    def __init__(self) -> None:
        self._due: dict[str, float] = {}

    def schedule(self, trade_id: str, due_at: float) -> None:
        self._due[trade_id] = due_at

    def cancel(self, trade_id: str) -> bool:
        return self._due.pop(trade_id, None) is not None

    def pop_due(self, now: float) -> list[str]:
        """Saca y devuelve los ids vencidos, ordenados por due_at ascendente."""
        due = sorted(
            (at, trade_id) for trade_id, at in self._due.items() if at <= now
        )
        for _, trade_id in due:
            del self._due[trade_id]
        return [trade_id for _, trade_id in due]

    def due_at(self, trade_id: str) -> float | None:
        return self._due.get(trade_id)

    @property
    def next_due_at(self) -> float | None:
        return min(self._due.values()) if self._due else None

    @property
    def pending_count(self) -> int:
        return len(self._due)

    def clear(self) -> None:
        self._due.clear()
