"""
BinaryDesk - Performance / Risk Snapshots (Value Objects)
=====================================================
Fotos inmutables calculadas bajo demanda por StatsEngine y
RiskCalculator. Nunca se persisten: si cambia el ledger se genera
un snapshot NUEVO.

POR QUE FROZEN:
  Las metricas son una foto instantanea. Si llega un nuevo trade
  se recalcula todo en O(n); el snapshot anterior sigue siendo
  valido para quien lo tenga (comparacion temporal, API).

UNIDADES:
  A diferencia del paper trading por porcentaje, aqui todo se mide
  en DINERO (la moneda de la cuenta): profit de un trade ganador =
  amount * (payout_multiplier - 1), de uno perdedor = -amount.
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True, slots=True)
class PerformanceSnapshot:
    """
    Metricas de performance sobre el historial de trades cerrados.

    Atributos:
    ----------
    total_trades / winning_trades / losing_trades : int
        Contadores. En opciones binarias no hay empates: un precio de
        salida igual al de entrada cuenta como perdida.

    win_rate : float
        (winning_trades / total_trades) * 100. 0.0 si no hay trades.

    total_profit : float
        Suma de profit de todos los trades.

    avg_win / avg_loss : float
        Promedio de ganancia de ganadores y |perdida| promedio de
        perdedores (valor absoluto).

    profit_factor : float
        (avg_win * wins) / (avg_loss * losses) = gross_profit / gross_loss.
        0.0 si no hay perdidas (division protegida, JSON-safe).

    expectancy : float
        (WR_frac * avg_win) - (LR_frac * avg_loss), en dinero por trade.

    max_drawdown : float
        Mayor caida desde un pico en la curva acumulada de profit.

    equity_curve : tuple[float, ...]
        equity_curve[i] = sum(profit[0:i+1]) en orden de liquidacion.
    """

    # ── Contadores ──────────────────────────────────────────────────
    total_trades: int = 0
    winning_trades: int = 0
    losing_trades: int = 0

    # ── Ratios ──────────────────────────────────────────────────────
    win_rate: float = 0.0
    profit_factor: float = 0.0
    expectancy: float = 0.0

    # ── PnL detallado ──────────────────────────────────────────────
    total_profit: float = 0.0
    gross_profit: float = 0.0
    gross_loss: float = 0.0
    avg_win: float = 0.0
    avg_loss: float = 0.0
    best_trade: float = 0.0
    worst_trade: float = 0.0

    # ── Riesgo ──────────────────────────────────────────────────────
    max_drawdown: float = 0.0
    equity_curve: tuple = field(default_factory=tuple)

    def to_dict(self) -> dict:
        """Serializacion para API REST / notificaciones."""
        return {
            "total_trades": self.total_trades,
            "winning_trades": self.winning_trades,
            "losing_trades": self.losing_trades,
            "win_rate": round(self.win_rate, 2),
            "profit_factor": round(self.profit_factor, 4),
            "expectancy": round(self.expectancy, 4),
            "total_profit": round(self.total_profit, 2),
            "gross_profit": round(self.gross_profit, 2),
            "gross_loss": round(self.gross_loss, 2),
            "avg_win": round(self.avg_win, 2),
            "avg_loss": round(self.avg_loss, 2),
            "best_trade": round(self.best_trade, 2),
            "worst_trade": round(self.worst_trade, 2),
            "max_drawdown": round(self.max_drawdown, 2),
            "equity_curve": [round(e, 2) for e in self.equity_curve],
        }


@dataclass(frozen=True, slots=True)
class RiskSnapshot:
    """
    Exposicion actual sobre los trades abiertos.

    portfolio_at_risk = total_exposure / balance * 100
    risk_level: low (<10%), medium (<25%), high (resto)
    """

    total_exposure: float = 0.0
    potential_profit: float = 0.0
    potential_loss: float = 0.0
    portfolio_at_risk: float = 0.0
    risk_level: str = "low"
    open_trades: int = 0
    daily_realized_pnl: float = 0.0
    daily_loss_remaining: float = 0.0

    def to_dict(self) -> dict:
        return {
            "total_exposure": round(self.total_exposure, 2),
            "potential_profit": round(self.potential_profit, 2),
            "potential_loss": round(self.potential_loss, 2),
            "portfolio_at_risk": round(self.portfolio_at_risk, 2),
            "risk_level": self.risk_level,
            "open_trades": self.open_trades,
            "daily_realized_pnl": round(self.daily_realized_pnl, 2),
            "daily_loss_remaining": round(self.daily_loss_remaining, 2),
        }
