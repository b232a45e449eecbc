"""Domain events."""
from binarydesk.domain.events.domain_events import (
    DomainEvent,
    TradeOpened,
    TradeSettled,
    PriceUpdated,
    StrategySignalled,
)

__all__ = ["DomainEvent", "TradeOpened", "TradeSettled", "PriceUpdated", "StrategySignalled"]
