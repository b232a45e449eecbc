"""Domain entities."""
from binarydesk.domain.entities.trade import BinaryTrade, TradeStatus
from binarydesk.domain.entities.account import Account, RiskLevel
from binarydesk.domain.entities.strategy import Strategy, StrategyPerformance

__all__ = ["BinaryTrade", "TradeStatus", "Account", "RiskLevel", "Strategy", "StrategyPerformance"]
