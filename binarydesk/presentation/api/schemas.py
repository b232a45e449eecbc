"""
BinaryDesk – API Schemas
==========================
Bodies de request de la API REST.

Los campos de dominio (dirección, monto, expiración) se reciben como
valores crudos: los valida el TradingPlatform para que el rechazo
salga con el código de error de dominio y no con un 422 genérico.
Los números no finitos (NaN, ±inf) se rechazan ya en el parseo.
"""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field, FiniteFloat


class PlaceTradeRequest(BaseModel):
    """Body de POST /api/trades."""

    symbol: str = Field(..., min_length=1)
    direction: str = Field(..., description="call | put")
    amount: FiniteFloat
    expiry: Optional[str] = Field(default=None, description="30s | 1m | 5m | 15m | 1h")


class RunStrategiesRequest(BaseModel):
    """
    Body de POST /api/strategies/run.

    Sin history se evalúa el historial registrado del símbolo, tras
    registrar una cotización nueva.
    """

    symbol: str = Field(..., min_length=1)
    amount: Optional[FiniteFloat] = None
    history: Optional[List[FiniteFloat]] = None
