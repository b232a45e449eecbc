"""
BinaryDesk – Domain Entity: Account
=====================================
Cuenta demo de un único usuario.

El balance es el ÚNICO contador mutable compartido:
  - se debita al ABRIR un trade (fondos comprometidos)
  - se acredita payout al liquidar un trade ganador
Solo el TradingPlatform lo modifica.
"""

from __future__ import annotations

from enum import Enum


class RiskLevel(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class Account:
    """Balance + límites de riesgo + preferencias del usuario."""

    __slots__ = (
        "balance", "max_trade_size", "daily_loss_limit",
        "risk_level", "auto_trade", "sound_enabled",
    )

    def __init__(
        self,
        balance: float,
        max_trade_size: float = 1_000.0,
        daily_loss_limit: float = 500.0,
        risk_level: RiskLevel = RiskLevel.MEDIUM,
        auto_trade: bool = False,
        sound_enabled: bool = True,
    ) -> None:
        self.balance = balance
        self.max_trade_size = max_trade_size
        self.daily_loss_limit = daily_loss_limit
        self.risk_level = RiskLevel(risk_level)
        self.auto_trade = auto_trade
        self.sound_enabled = sound_enabled

    def debit(self, amount: float) -> None:
        self.balance -= amount

    def credit(self, amount: float) -> None:
        self.balance += amount

    def apply_settings(self, **changes) -> None:
        """Aplica preferencias ya validadas (ver UserSettingsUpdate)."""
        for key, value in changes.items():
            if key == "risk_level":
                value = RiskLevel(value)
            setattr(self, key, value)

    def settings_dict(self) -> dict:
        return {
            "max_trade_size": self.max_trade_size,
            "daily_loss_limit": self.daily_loss_limit,
            "risk_level": self.risk_level.value,
            "auto_trade": self.auto_trade,
            "sound_enabled": self.sound_enabled,
        }
