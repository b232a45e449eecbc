"""Application state - In-memory ledger owned by the trading platform."""
from binarydesk.application.state.trade_ledger import TradeLedger

__all__ = ["TradeLedger"]
