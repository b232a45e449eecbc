"""
BinaryDesk - Stats Engine (Performance Analytics)
=====================================================
Metricas de performance sobre trades liquidados, en DINERO.

PRINCIPIO CENTRAL:
  Todas las metricas se calculan en una UNICA PASADA O(n) sobre el
  historial. Python puro con acumuladores incrementales.

SIN CACHE:
  El historial de una mesa demo es chico y get_state() lo pide
  bajo demanda. Recalcular en O(n) es mas simple que invalidar.

══════════════════════════════════════════════════════════════════
  FORMULAS
══════════════════════════════════════════════════════════════════

  Win Rate      = wins / total * 100          (0 si no hay trades)
  Profit Factor = (avg_win * wins) / (avg_loss * losses)
                = gross_profit / gross_loss   (0 si no hay perdidas)
  Expectancy    = (WR_frac * AvgWin) - (LR_frac * AvgLoss)
  Max Drawdown  = max(peak_i - equity_i) sobre la curva acumulada

══════════════════════════════════════════════════════════════════
"""

from __future__ import annotations

from typing import Iterable

from binarydesk.domain.entities.trade import BinaryTrade, TradeStatus
from binarydesk.domain.value_objects.performance_metrics import PerformanceSnapshot

_EMPTY_SNAPSHOT = PerformanceSnapshot()


class StatsEngine:
    """Motor de performance analytics. Sin estado."""

    @staticmethod
    def compute(trades: Iterable[BinaryTrade]) -> PerformanceSnapshot:
        """
        Calcula TODAS las metricas en una unica pasada.

        Args:
            trades: Trades liquidados, en orden de liquidacion
                    (el orden define la equity curve).

        Returns:
            PerformanceSnapshot inmutable.
        """
        n = 0
        wins = 0
        losses = 0
        gross_profit = 0.0
        gross_loss = 0.0
        best = float("-inf")
        worst = float("inf")

        equity_points: list[float] = []
        cumulative = 0.0
        peak = 0.0
        max_dd = 0.0

        for trade in trades:
            n += 1
            profit = trade.profit or 0.0

            # (1) Clasificar. Un empate ya viene liquidado como LOST.
            if trade.status == TradeStatus.WON:
                wins += 1
            else:
                losses += 1

            # (2) Acumular PnL
            if profit > 0:
                gross_profit += profit
            elif profit < 0:
                gross_loss += -profit

            # (3) Extremos
            best = max(best, profit)
            worst = min(worst, profit)

            # (4) Equity curve + max drawdown inline
            cumulative += profit
            equity_points.append(cumulative)
            peak = max(peak, cumulative)
            max_dd = max(max_dd, peak - cumulative)

        if n == 0:
            return _EMPTY_SNAPSHOT

        win_rate = (wins / n) * 100.0

        avg_win = gross_profit / wins if wins > 0 else 0.0
        avg_loss = gross_loss / losses if losses > 0 else 0.0

        # 0 en lugar de inf: el snapshot tiene que serializar a JSON
        profit_factor = 0.0
        if losses > 0 and avg_loss > 0:
            profit_factor = (avg_win * wins) / (avg_loss * losses)

        expectancy = (wins / n) * avg_win - (losses / n) * avg_loss

        return PerformanceSnapshot(
            total_trades=n,
            winning_trades=wins,
            losing_trades=losses,
            win_rate=win_rate,
            profit_factor=profit_factor,
            expectancy=expectancy,
            total_profit=gross_profit - gross_loss,
            gross_profit=gross_profit,
            gross_loss=gross_loss,
            avg_win=avg_win,
            avg_loss=avg_loss,
            best_trade=best,
            worst_trade=worst,
            max_drawdown=max_dd,
            equity_curve=tuple(equity_points),
        )
