"""
BinaryDesk – Trade Ledger
=====================================================
Estado centralizado de trades: conjunto abierto + historial.

DISEÑO:
  - Varios trades abiertos por símbolo (a diferencia del scalping,
    aquí se permiten posiciones simultáneas).
  - Lookup O(1) por id en el conjunto abierto.
  - Historial en orden de liquidación.
  - Stats computados bajo demanda (no almacenados).

INVARIANTE:
  Un trade está en EXACTAMENTE uno de {abiertos, historial}.
  archive() hace el swap sin ningún await en medio.

LIQUIDACIÓN EN CURSO:
  claim_for_settlement() marca el trade como "settling" antes de que
  el engine espere la cotización de salida. El trade sigue visible en
  abiertos (get_state no lo pierde), pero:
    - open_trades(..., include_settling=False) lo excluye → los ticks
      no escriben sobre un trade a punto de cerrarse
    - un segundo claim devuelve None → liquidación idempotente

THREADING:
  Todo corre en un solo event-loop asyncio. No se necesitan locks.
"""

from __future__ import annotations

from binarydesk.domain.entities.trade import BinaryTrade


class TradeLedger:
    """Estado en memoria de trades abiertos y liquidados."""

    def __init__(self) -> None:
        # id → trade ACTIVE (orden de inserción = orden de apertura)
        self._open: dict[str, BinaryTrade] = {}
        # ids reclamados por una liquidación en curso
        self._settling: set[str] = set()
        # trades liquidados, orden de liquidación
        self._history: list[BinaryTrade] = []

    # ════════════════════════════════════════════════════════════════
    #  ESCRITURA
    # ════════════════════════════════════════════════════════════════

    def add_open(self, trade: BinaryTrade) -> None:
        assert trade.is_active, f"Solo se registran trades activos ({trade.status})"
        self._open[trade.id] = trade

    def claim_for_settlement(self, trade_id: str) -> BinaryTrade | None:
        """
        Reclama un trade abierto para liquidarlo.

        Returns:
            El trade, o None si no está abierto o ya está reclamado.
        """
        trade = self._open.get(trade_id)
        if trade is None or trade_id in self._settling:
            return None
        self._settling.add(trade_id)
        return trade

    def archive(self, trade: BinaryTrade) -> None:
        """
        Mueve un trade liquidado de abiertos → historial.

        Pre-condición: trade.is_settled debe ser True.
        """
        assert trade.is_settled, f"No se puede archivar trade {trade.status}"
        self._open.pop(trade.id, None)
        self._settling.discard(trade.id)
        self._history.append(trade)

    # ════════════════════════════════════════════════════════════════
    #  CONSULTAS
    # ════════════════════════════════════════════════════════════════

    def get_open(self, trade_id: str) -> BinaryTrade | None:
        return self._open.get(trade_id)

    def is_settling(self, trade_id: str) -> bool:
        return trade_id in self._settling

    def open_trades(
        self,
        symbol: str | None = None,
        include_settling: bool = True,
    ) -> list[BinaryTrade]:
        """Trades abiertos, opcionalmente filtrados por símbolo."""
        return [
            t for t in self._open.values()
            if (symbol is None or t.symbol == symbol)
            and (include_settling or t.id not in self._settling)
        ]

    def has_open(self, symbol: str) -> bool:
        """¿Algún trade abierto (incluyendo en liquidación) referencia el símbolo?"""
        return any(t.symbol == symbol for t in self._open.values())

    def open_symbols(self) -> set[str]:
        return {t.symbol for t in self._open.values()}

    def history(self, symbol: str | None = None) -> list[BinaryTrade]:
        """Historial de trades liquidados (orden de liquidación)."""
        if symbol:
            return [t for t in self._history if t.symbol == symbol]
        return list(self._history)

    def open_exposure(self) -> float:
        return sum(t.amount for t in self._open.values())

    def realized_profit_since(self, since: float) -> float:
        """Profit realizado de trades liquidados en [since, ∞)."""
        return sum(
            t.profit or 0.0
            for t in self._history
            if t.exit_at is not None and t.exit_at >= since
        )

    @property
    def open_count(self) -> int:
        return len(self._open)

    @property
    def history_count(self) -> int:
        return len(self._history)
