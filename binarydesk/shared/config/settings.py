"""
BinaryDesk – Settings (Pydantic BaseSettings)
=============================================
Configuración centralizada cargada desde variables de entorno / .env.
Se usa pydantic-settings para validación estricta al arranque.
"""

from __future__ import annotations

from typing import List, Literal

from pydantic_settings import BaseSettings
from pydantic import Field


class Settings(BaseSettings):
    # ─── Cuenta ─────────────────────────────────────────────────────────
    initial_balance: float = Field(
        default=10_000.0, description="Balance inicial de la cuenta demo",
    )
    min_trade_amount: float = Field(
        default=10.0, description="Monto mínimo por operación (piso fijo)",
    )
    payout_multiplier: float = Field(
        default=1.85, description="Multiplicador de pago de un trade ganador",
    )

    # ─── Preferencias de usuario (valores por defecto) ──────────────────
    max_trade_size: float = Field(
        default=1_000.0, description="Monto máximo por operación",
    )
    daily_loss_limit: float = Field(
        default=500.0, description="Pérdida realizada máxima por día (UTC)",
    )
    risk_level: Literal["low", "medium", "high"] = Field(default="medium")
    auto_trade: bool = Field(
        default=False, description="Ejecutar estrategias activas en cada tick",
    )
    sound_enabled: bool = Field(default=True)

    # ─── Price Source sintético ─────────────────────────────────────────
    half_spread: float = Field(
        default=0.0001, description="Medio spread sumado/restado al precio",
    )
    quote_latency_seconds: float = Field(
        default=0.2, description="Latencia simulada de cada cotización",
    )
    quote_timeout_seconds: float = Field(
        default=5.0, description="Timeout máximo al pedir una cotización",
    )
    price_feed_interval_seconds: float = Field(
        default=1.0, description="Intervalo del feed de precios por símbolo",
    )
    price_history_size: int = Field(
        default=200, description="Precios retenidos por símbolo para estrategias",
    )

    # ─── Settlement ─────────────────────────────────────────────────────
    settlement_quote_attempts: int = Field(
        default=2, description="Intentos de cotización al liquidar (1 reintento)",
    )
    scheduler_poll_interval: float = Field(
        default=0.25, description="Periodo (seg) del loop de scheduling",
    )

    # ─── Expiración ─────────────────────────────────────────────────────
    default_expiry_label: str = Field(default="1m")
    strict_expiry_labels: bool = Field(
        default=False,
        description="Rechazar etiquetas de expiración desconocidas en vez de usar 1m",
    )

    # ─── Estrategias ────────────────────────────────────────────────────
    strategy_expiry_label: str = Field(
        default="5m", description="Expiración de órdenes generadas por estrategias",
    )
    auto_trade_amount: float = Field(
        default=10.0, description="Monto de órdenes generadas por estrategias",
    )
    auto_trade_symbols: List[str] = Field(
        default=["EUR/USD"],
        description="Símbolos muestreados para auto-trade sin trades abiertos",
    )

    # ─── Event Bus ──────────────────────────────────────────────────────
    event_bus_max_queue_size: int = Field(
        default=10_000,
        description="Tamaño máximo de cola del Event Bus para contrapresión",
    )

    # ─── Server ─────────────────────────────────────────────────────────
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=8888)
    debug: bool = Field(default=False)

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
    }


# Singleton global – se importa donde se necesite
settings = Settings()
