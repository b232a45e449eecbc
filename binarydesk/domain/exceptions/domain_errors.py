"""
BinaryDesk – Domain Exceptions
================================
Excepciones específicas del dominio de negocio.

Ningún error del core es fatal para el proceso: o bien la operación
se rechaza (estado intacto) o el trade termina en un resultado
degradado pero terminal.

JERARQUÍA:
    DomainError (base)
    ├── ValidationError
    │   ├── InvalidAmountError
    │   ├── InsufficientBalanceError
    │   ├── BelowMinimumError
    │   ├── ExceedsMaxTradeSizeError
    │   ├── DailyLossLimitError
    │   ├── InvalidDirectionError
    │   ├── InvalidExpiryError
    │   └── InvalidSettingsError
    ├── InvalidTradeError
    ├── StrategyNotFoundError
    ├── PriceSourceError
    │   ├── UnknownSymbolError
    │   ├── NotConnectedError
    │   └── QuoteTimeoutError
    └── SettlementFetchError
"""

from __future__ import annotations

from typing import Any


class DomainError(Exception):
    """Excepción base para errores de dominio."""

    def __init__(self, message: str, code: str = "DOMAIN_ERROR"):
        self.message = message
        self.code = code
        super().__init__(message)

    def to_dict(self) -> dict:
        return {
            "error": self.code,
            "message": self.message,
        }


# ════════════════════════════════════════════════════════════════════
#  VALIDACIÓN DE ÓRDENES
# ════════════════════════════════════════════════════════════════════

class ValidationError(DomainError):
    """Error de validación general de datos de dominio."""

    def __init__(
        self,
        message: str,
        field: str | None = None,
        value: Any = None,
        code: str = "VALIDATION_ERROR",
    ):
        super().__init__(message, code=code)
        self.field = field
        self.value = value


class InvalidAmountError(ValidationError):
    """Monto no numérico o no finito (NaN, ±inf)."""

    def __init__(self, amount: Any):
        super().__init__(
            f"Invalid trade amount: {amount!r}",
            field="amount", value=amount, code="INVALID_AMOUNT",
        )


class InsufficientBalanceError(ValidationError):
    """El monto supera el balance disponible."""

    def __init__(self, amount: float, balance: float):
        super().__init__(
            "Insufficient balance",
            field="amount", value=amount, code="INSUFFICIENT_BALANCE",
        )
        self.balance = balance


class BelowMinimumError(ValidationError):
    """El monto está por debajo del mínimo por operación."""

    def __init__(self, amount: float, minimum: float):
        super().__init__(
            f"Minimum trade amount is ${minimum:g}",
            field="amount", value=amount, code="BELOW_MINIMUM",
        )
        self.minimum = minimum


class ExceedsMaxTradeSizeError(ValidationError):
    """El monto supera el máximo configurado por el usuario."""

    def __init__(self, amount: float, maximum: float):
        super().__init__(
            f"Trade amount exceeds maximum allowed (${maximum:g})",
            field="amount", value=amount, code="EXCEEDS_MAX_TRADE_SIZE",
        )
        self.maximum = maximum


class DailyLossLimitError(ValidationError):
    """La pérdida realizada del día ya alcanzó el límite."""

    def __init__(self, amount: float, remaining: float):
        super().__init__(
            f"Daily loss limit reached (remaining ${remaining:.2f})",
            field="amount", value=amount, code="DAILY_LOSS_LIMIT",
        )
        self.remaining = remaining


class InvalidDirectionError(ValidationError):
    def __init__(self, value: Any):
        super().__init__(
            f"Invalid direction: {value!r} (expected 'call' or 'put')",
            field="direction", value=value, code="INVALID_DIRECTION",
        )


class InvalidExpiryError(ValidationError):
    def __init__(self, value: Any):
        super().__init__(
            f"Unsupported expiry label: {value!r}",
            field="expiry", value=value, code="INVALID_EXPIRY",
        )


class InvalidSettingsError(ValidationError):
    """Actualización de preferencias rechazada."""

    def __init__(self, message: str, errors: list | None = None):
        super().__init__(message, field="settings", code="INVALID_SETTINGS")
        self.errors = errors or []

    def to_dict(self) -> dict:
        base = super().to_dict()
        base["details"] = self.errors
        return base


# ════════════════════════════════════════════════════════════════════
#  TRADES / ESTRATEGIAS
# ════════════════════════════════════════════════════════════════════

class InvalidTradeError(DomainError):
    """Error cuando un trade tiene datos inválidos o transición ilegal."""

    def __init__(self, message: str, trade_id: str | None = None):
        super().__init__(message, code="INVALID_TRADE")
        self.trade_id = trade_id


class StrategyNotFoundError(DomainError):
    def __init__(self, name: str):
        super().__init__(f"Unknown strategy: {name}", code="STRATEGY_NOT_FOUND")
        self.name = name


# ════════════════════════════════════════════════════════════════════
#  PRICE SOURCE
# ════════════════════════════════════════════════════════════════════

class PriceSourceError(DomainError):
    """Error base del proveedor de cotizaciones."""

    def __init__(self, message: str, symbol: str | None = None, code: str = "PRICE_SOURCE_ERROR"):
        super().__init__(message, code=code)
        self.symbol = symbol


class UnknownSymbolError(PriceSourceError):
    def __init__(self, symbol: str):
        super().__init__(f"Unknown symbol: {symbol}", symbol=symbol, code="UNKNOWN_SYMBOL")


class NotConnectedError(PriceSourceError):
    def __init__(self, symbol: str | None = None):
        super().__init__("Not connected to price source", symbol=symbol, code="NOT_CONNECTED")


class QuoteTimeoutError(PriceSourceError):
    def __init__(self, symbol: str, timeout: float):
        super().__init__(
            f"Quote for {symbol} timed out after {timeout:g}s",
            symbol=symbol, code="QUOTE_TIMEOUT",
        )
        self.timeout = timeout


class SettlementFetchError(DomainError):
    """
    Interno: no se pudo obtener precio de salida tras los reintentos.
    Nunca se propaga al caller; el trade se liquida como LOST.
    """

    def __init__(self, trade_id: str, cause: Exception | None = None):
        super().__init__(
            f"Could not fetch settlement quote for trade {trade_id}",
            code="SETTLEMENT_FETCH_FAILED",
        )
        self.trade_id = trade_id
        self.cause = cause
