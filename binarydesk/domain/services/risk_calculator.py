"""
BinaryDesk – Domain Service: Risk Calculator
===============================================
Validación de órdenes y métricas de exposición. Sin dependencias
externas y sin estado propio: recibe la cuenta y los trades.

ORDEN DE VALIDACIÓN (gana el primer chequeo violado):
  0. amount NaN / ±inf           → InvalidAmountError
  1. amount > balance            → InsufficientBalanceError
  2. amount < min_trade_amount   → BelowMinimumError
  3. amount > max_trade_size     → ExceedsMaxTradeSizeError
  4. pérdida realizada hoy ≥ daily_loss_limit → DailyLossLimitError

El límite diario corta la operatoria una vez alcanzado; el tamaño de
cada orden lo acota max_trade_size.

NIVEL DE RIESGO:
  pct = exposición / balance × 100
  pct < 10 → low | pct < 25 → medium | resto → high
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable

from binarydesk.domain.entities.account import Account, RiskLevel
from binarydesk.domain.entities.trade import BinaryTrade
from binarydesk.domain.exceptions.domain_errors import (
    BelowMinimumError,
    DailyLossLimitError,
    ExceedsMaxTradeSizeError,
    InsufficientBalanceError,
    InvalidAmountError,
)
from binarydesk.domain.value_objects.performance_metrics import RiskSnapshot


@dataclass
class RiskConfig:
    """Configuración de gestión de riesgo."""

    min_trade_amount: float = 10.0
    low_risk_pct: float = 10.0
    medium_risk_pct: float = 25.0
    enforce_daily_loss_limit: bool = True


class RiskCalculator:
    """
    Calculadora de riesgo.

    RESPONSABILIDAD:
    Decidir si una orden es aceptable y resumir la exposición abierta.
    """

    def __init__(self, config: RiskConfig | None = None):
        self._config = config or RiskConfig()

    @property
    def min_trade_amount(self) -> float:
        return self._config.min_trade_amount

    # ════════════════════════════════════════════════════════════════
    #  VALIDACIÓN DE ÓRDENES
    # ════════════════════════════════════════════════════════════════

    def validate_trade_amount(
        self,
        amount: float,
        account: Account,
        daily_realized_pnl: float = 0.0,
    ) -> None:
        """
        Valida un monto contra la cuenta. No modifica nada.

        Args:
            amount: Monto a comprometer
            account: Cuenta actual
            daily_realized_pnl: Profit realizado hoy (negativo = pérdida)

        Raises:
            ValidationError (subtipo según el primer chequeo violado)
        """
        # NaN pasa cualquier comparación
        if not math.isfinite(amount):
            raise InvalidAmountError(amount)

        if amount > account.balance:
            raise InsufficientBalanceError(amount, account.balance)

        if amount < self._config.min_trade_amount:
            raise BelowMinimumError(amount, self._config.min_trade_amount)

        if amount > account.max_trade_size:
            raise ExceedsMaxTradeSizeError(amount, account.max_trade_size)

        if self._config.enforce_daily_loss_limit:
            remaining = self.daily_loss_remaining(account, daily_realized_pnl)
            if remaining <= 0:
                raise DailyLossLimitError(amount, remaining)

    @staticmethod
    def daily_loss_remaining(account: Account, daily_realized_pnl: float) -> float:
        """Pérdida realizada que falta para alcanzar el límite de hoy."""
        realized_loss = max(0.0, -daily_realized_pnl)
        return max(0.0, account.daily_loss_limit - realized_loss)

    # ════════════════════════════════════════════════════════════════
    #  EXPOSICIÓN
    # ════════════════════════════════════════════════════════════════

    def classify(self, balance: float, exposure: float) -> RiskLevel:
        pct = self.portfolio_at_risk(balance, exposure)
        if pct < self._config.low_risk_pct:
            return RiskLevel.LOW
        if pct < self._config.medium_risk_pct:
            return RiskLevel.MEDIUM
        return RiskLevel.HIGH

    @staticmethod
    def portfolio_at_risk(balance: float, exposure: float) -> float:
        """
        exposición / balance × 100, protegido:
          - sin exposición → 0.0
          - balance ≤ 0 con exposición → 100.0
        """
        if exposure <= 0:
            return 0.0
        if balance <= 0:
            return 100.0
        return (exposure / balance) * 100.0

    def snapshot(
        self,
        account: Account,
        open_trades: Iterable[BinaryTrade],
        daily_realized_pnl: float = 0.0,
    ) -> RiskSnapshot:
        """Foto de riesgo sobre los trades abiertos. Pura, O(n)."""
        total_exposure = 0.0
        potential_profit = 0.0
        potential_loss = 0.0
        count = 0

        for trade in open_trades:
            count += 1
            total_exposure += trade.amount
            pp = trade.potential_profit
            if pp is None:
                continue
            if pp > 0:
                potential_profit += pp
            elif pp < 0:
                potential_loss += -pp

        return RiskSnapshot(
            total_exposure=total_exposure,
            potential_profit=potential_profit,
            potential_loss=potential_loss,
            portfolio_at_risk=self.portfolio_at_risk(account.balance, total_exposure),
            risk_level=self.classify(account.balance, total_exposure).value,
            open_trades=count,
            daily_realized_pnl=daily_realized_pnl,
            daily_loss_remaining=self.daily_loss_remaining(account, daily_realized_pnl),
        )
