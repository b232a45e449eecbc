"""Application services - Engine, scheduling, strategies and analytics."""
from binarydesk.application.services.settlement_scheduler import SettlementScheduler
from binarydesk.application.services.stats_engine import StatsEngine
from binarydesk.application.services.strategy_registry import StrategyRegistry
from binarydesk.application.services.trading_platform import TradingPlatform

__all__ = [
    "SettlementScheduler",
    "StatsEngine",
    "StrategyRegistry",
    "TradingPlatform",
]
