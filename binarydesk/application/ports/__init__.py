"""Application ports - Interfaces for external dependencies."""
from binarydesk.application.ports.price_source import IPriceSource, SubscriptionHandle, TickCallback
from binarydesk.application.ports.clock import IClock

__all__ = ["IPriceSource", "SubscriptionHandle", "TickCallback", "IClock"]
