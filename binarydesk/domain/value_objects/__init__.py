"""Domain value objects."""
from binarydesk.domain.value_objects.quote import Quote
from binarydesk.domain.value_objects.signal import TradeSignal, Direction
from binarydesk.domain.value_objects.performance_metrics import (
    PerformanceSnapshot,
    RiskSnapshot,
)

__all__ = ["Quote", "TradeSignal", "Direction", "PerformanceSnapshot", "RiskSnapshot"]
