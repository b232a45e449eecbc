"""
BinaryDesk – Domain Entity: BinaryTrade
=====================================================
Opción binaria de pago fijo. Mutable solo mientras está ACTIVE.

═══════════════════════════════════════════════════════════════
            CICLO DE VIDA DEL TRADE
═══════════════════════════════════════════════════════════════

  place_trade() (monto debitado al abrir)
       │
       ▼
  Trade ACTIVE ──(cada tick)──▸ mark(price) → potential_profit
       │
       └── expiry_at alcanzado ──▸ settle(exit_price)
                                     │
                                     ├── CALL y exit > entry ──▸ WON
                                     ├── PUT  y exit < entry ──▸ WON
                                     └── resto (incluye empate) ──▸ LOST

POLÍTICA DE EMPATE (loss-on-tie):
  exit_price == entry_price se liquida como LOST para ambas
  direcciones. El broker se queda con la prima en un empate.

CÁLCULO DE PROFIT (en dinero):

  payout = amount × payout_multiplier
  WON:  profit = payout - amount          (100 × 1.85 → +85)
  LOST: profit = -amount                  (→ -100)

  potential_profit (solo informativo mientras está ACTIVE) aplica la
  misma regla comparando current_mark_price contra entry_price.
"""

from __future__ import annotations

import uuid
from enum import Enum

from binarydesk.domain.exceptions.domain_errors import InvalidTradeError
from binarydesk.domain.value_objects.signal import Direction


class TradeStatus(str, Enum):
    """Estados posibles de un trade binario."""
    ACTIVE = "active"  # Abierto, esperando expiración
    WON = "won"        # Liquidado a favor
    LOST = "lost"      # Liquidado en contra (o degradado)


class BinaryTrade:
    """
    Trade binario con ciclo de vida completo.

    Métodos controlados para transición de estado:
      - mark()            → actualiza mark-to-market (solo ACTIVE)
      - settle()          → ACTIVE → WON|LOST
      - settle_degraded() → ACTIVE → LOST sin precio de salida

    Una vez liquidado, no se puede modificar.
    """

    __slots__ = (
        "id", "symbol", "direction", "amount",
        "entry_price", "opened_at", "expiry_label", "expiry_at",
        "payout_multiplier", "status",
        "current_mark_price", "potential_profit",
        "origin_strategy",
        "exit_price", "exit_at", "profit", "settlement_degraded",
    )

    def __init__(
        self,
        symbol: str,
        direction: Direction,
        amount: float,
        entry_price: float,
        opened_at: float,
        expiry_at: float,
        payout_multiplier: float,
        expiry_label: str = "1m",
        origin_strategy: str | None = None,
        trade_id: str | None = None,
    ) -> None:
        self.id: str = trade_id or self.generate_id()
        self.symbol = symbol
        self.direction = direction
        self.amount = amount

        self.entry_price = entry_price
        self.opened_at = opened_at
        self.expiry_label = expiry_label
        self.expiry_at = expiry_at
        self.payout_multiplier = payout_multiplier

        # Estado
        self.status: TradeStatus = TradeStatus.ACTIVE
        self.origin_strategy = origin_strategy

        # Mark-to-market (se llena con ticks)
        self.current_mark_price: float | None = None
        self.potential_profit: float | None = None

        # Resultado (se llena al liquidar)
        self.exit_price: float | None = None
        self.exit_at: float | None = None
        self.profit: float | None = None
        self.settlement_degraded: bool = False

    @staticmethod
    def generate_id() -> str:
        return f"BIN_{uuid.uuid4().hex[:12]}"

    # ════════════════════════════════════════════════════════════════
    #  REGLAS DE RESULTADO
    # ════════════════════════════════════════════════════════════════

    @property
    def payout(self) -> float:
        """Monto acreditado si el trade gana."""
        return self.amount * self.payout_multiplier

    @property
    def win_profit(self) -> float:
        return self.payout - self.amount

    def is_winning_at(self, price: float) -> bool:
        """¿Ganaría el trade si se liquidara a este precio? Empate pierde."""
        if self.direction == Direction.CALL:
            return price > self.entry_price
        return price < self.entry_price

    # ════════════════════════════════════════════════════════════════
    #  TRANSICIONES DE ESTADO
    # ════════════════════════════════════════════════════════════════

    def mark(self, price: float) -> bool:
        """
        Actualiza el precio de mercado y el profit potencial.

        Returns:
            False (sin efecto) si el trade ya no está ACTIVE.
        """
        if self.status != TradeStatus.ACTIVE:
            return False
        self.current_mark_price = price
        self.potential_profit = (
            self.win_profit if self.is_winning_at(price) else -self.amount
        )
        return True

    def settle(self, exit_price: float, exit_at: float) -> TradeStatus:
        """
        Transición ACTIVE → WON|LOST al precio de salida.

        Raises:
            InvalidTradeError si el trade ya estaba liquidado.
        """
        self._require_active()
        won = self.is_winning_at(exit_price)
        self.exit_price = exit_price
        self.exit_at = exit_at
        self.status = TradeStatus.WON if won else TradeStatus.LOST
        self.profit = self.win_profit if won else -self.amount
        return self.status

    def settle_degraded(self, exit_at: float) -> TradeStatus:
        """
        Liquidación conservadora cuando no hay precio de salida:
        LOST con profit = -amount (peor caso documentado).
        """
        self._require_active()
        self.exit_price = None
        self.exit_at = exit_at
        self.status = TradeStatus.LOST
        self.profit = -self.amount
        self.settlement_degraded = True
        return self.status

    def _require_active(self) -> None:
        if self.status != TradeStatus.ACTIVE:
            raise InvalidTradeError(
                f"Trade {self.id} ya liquidado ({self.status.value})",
                trade_id=self.id,
            )

    # ════════════════════════════════════════════════════════════════
    #  CONSULTAS
    # ════════════════════════════════════════════════════════════════

    @property
    def is_active(self) -> bool:
        return self.status == TradeStatus.ACTIVE

    @property
    def is_settled(self) -> bool:
        return self.status in (TradeStatus.WON, TradeStatus.LOST)

    def to_dict(self) -> dict:
        """Serialización para API / notificaciones."""
        return {
            "id": self.id,
            "symbol": self.symbol,
            "direction": self.direction.value,
            "amount": round(self.amount, 2),
            "entry_price": self.entry_price,
            "opened_at": self.opened_at,
            "expiry_label": self.expiry_label,
            "expiry_at": self.expiry_at,
            "payout_multiplier": self.payout_multiplier,
            "payout": round(self.payout, 2),
            "status": self.status.value,
            "current_mark_price": self.current_mark_price,
            "potential_profit": (
                round(self.potential_profit, 2)
                if self.potential_profit is not None else None
            ),
            "origin_strategy": self.origin_strategy,
            "exit_price": self.exit_price,
            "exit_at": self.exit_at,
            "profit": round(self.profit, 2) if self.profit is not None else None,
            "settlement_degraded": self.settlement_degraded,
        }
