"""
BinaryDesk – Domain Service: Indicator Calculator
===================================================
Cálculos de indicadores técnicos puros sobre listas de precios.

Sin dependencias externas (no TA-Lib, solo math puro):
- Testeo unitario sin mocks
- Fórmulas explícitas y auditables
"""

from __future__ import annotations

from typing import Optional, Sequence


class IndicatorCalculator:
    """
    Calculadora de indicadores técnicos puros.

    NO mantiene estado (stateless). Todos los métodos devuelven None
    cuando no hay suficientes datos; la política de qué hacer en ese
    caso la decide el evaluador de estrategias.
    """

    @staticmethod
    def sma(
        prices: Sequence[float],
        period: int,
    ) -> Optional[float]:
        """
        Calcula SMA (Simple Moving Average).

        FÓRMULA:
        SMA = sum(prices[-period:]) / period

        Args:
            prices: Lista de precios (más antiguo primero)
            period: Período del SMA

        Returns:
            Valor SMA, o None si no hay suficientes datos
        """
        if period <= 0 or len(prices) < period:
            return None

        return sum(prices[-period:]) / period

    @staticmethod
    def rsi(
        prices: Sequence[float],
        period: int = 14,
    ) -> Optional[float]:
        """
        Calcula RSI sobre los últimos `period` cambios de precio.

        FÓRMULA:
        avg_gain = Σ cambios positivos / period
        avg_loss = Σ |cambios negativos| / period
        RSI = 100 - (100 / (1 + avg_gain / avg_loss))

        INTERPRETACIÓN:
        RSI < 30 → oversold
        RSI > 70 → overbought

        Args:
            prices: Lista de precios (más antiguo primero)
            period: Período del RSI (default 14)

        Returns:
            Valor RSI [0-100], o None si hay menos de period+1 precios
        """
        if period <= 0 or len(prices) < period + 1:
            return None

        window = prices[-(period + 1):]
        gains = 0.0
        losses = 0.0
        for prev, curr in zip(window, window[1:]):
            change = curr - prev
            if change > 0:
                gains += change
            else:
                losses += -change

        avg_gain = gains / period
        avg_loss = losses / period

        # Protección división por cero
        if avg_loss == 0:
            return 100.0  # No hay pérdidas → RSI máximo

        rs = avg_gain / avg_loss
        return 100.0 - (100.0 / (1.0 + rs))

    @staticmethod
    def highest(prices: Sequence[float]) -> Optional[float]:
        return max(prices) if prices else None

    @staticmethod
    def lowest(prices: Sequence[float]) -> Optional[float]:
        return min(prices) if prices else None
