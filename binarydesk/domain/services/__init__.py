"""Domain services - Pure business logic with no external dependencies."""
from binarydesk.domain.services.indicator_calculator import IndicatorCalculator
from binarydesk.domain.services.risk_calculator import RiskCalculator, RiskConfig
from binarydesk.domain.services.expiry import EXPIRY_DURATIONS, resolve_expiry
from binarydesk.domain.services.strategy_evaluator import (
    StrategyKind,
    TrendFollowingConfig,
    MeanReversionConfig,
    BreakoutConfig,
    build_config,
    evaluate,
)

__all__ = [
    "IndicatorCalculator",
    "RiskCalculator",
    "RiskConfig",
    "EXPIRY_DURATIONS",
    "resolve_expiry",
    "StrategyKind",
    "TrendFollowingConfig",
    "MeanReversionConfig",
    "BreakoutConfig",
    "build_config",
    "evaluate",
]
