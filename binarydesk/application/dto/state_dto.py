"""
BinaryDesk – Application DTO: Platform State
==============================================
Foto completa de la mesa para la capa de presentación.

Los DTOs sirven como contratos entre capas.
Son estructuras simples sin lógica de negocio.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List


@dataclass
class PlatformStateDTO:
    """Respuesta de get_state()."""

    balance: float
    active_trades: List[Dict[str, Any]] = field(default_factory=list)
    trade_history: List[Dict[str, Any]] = field(default_factory=list)
    user_settings: Dict[str, Any] = field(default_factory=dict)
    performance: Dict[str, Any] = field(default_factory=dict)
    risk: Dict[str, Any] = field(default_factory=dict)
    strategy_performance: Dict[str, Dict[str, Any]] = field(default_factory=dict)
    is_connected: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "balance": round(self.balance, 2),
            "active_trades": self.active_trades,
            "trade_history": self.trade_history,
            "user_settings": self.user_settings,
            "performance": self.performance,
            "risk": self.risk,
            "strategy_performance": self.strategy_performance,
            "is_connected": self.is_connected,
        }
