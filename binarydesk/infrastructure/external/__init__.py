"""External adapters - Synthetic market data and event distribution."""
from binarydesk.infrastructure.external.event_bus import EventBus
from binarydesk.infrastructure.external.synthetic_price_source import (
    DEFAULT_CATALOGUE,
    SymbolSpec,
    SyntheticPriceSource,
)

__all__ = ["EventBus", "DEFAULT_CATALOGUE", "SymbolSpec", "SyntheticPriceSource"]
