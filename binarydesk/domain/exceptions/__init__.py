"""Domain exceptions."""
from binarydesk.domain.exceptions.domain_errors import (
    DomainError,
    ValidationError,
    InvalidAmountError,
    InsufficientBalanceError,
    BelowMinimumError,
    ExceedsMaxTradeSizeError,
    DailyLossLimitError,
    InvalidDirectionError,
    InvalidExpiryError,
    InvalidSettingsError,
    InvalidTradeError,
    StrategyNotFoundError,
    PriceSourceError,
    UnknownSymbolError,
    NotConnectedError,
    QuoteTimeoutError,
    SettlementFetchError,
)

__all__ = [
    "DomainError",
    "ValidationError",
    "InvalidAmountError",
    "InsufficientBalanceError",
    "BelowMinimumError",
    "ExceedsMaxTradeSizeError",
    "DailyLossLimitError",
    "InvalidDirectionError",
    "InvalidExpiryError",
    "InvalidSettingsError",
    "InvalidTradeError",
    "StrategyNotFoundError",
    "PriceSourceError",
    "UnknownSymbolError",
    "NotConnectedError",
    "QuoteTimeoutError",
    "SettlementFetchError",
]
