"""Dobles de prueba y fábricas compartidas por los tests."""

import asyncio
import random

from binarydesk.application.services.strategy_registry import StrategyRegistry
from binarydesk.application.services.trading_platform import TradingPlatform
from binarydesk.infrastructure.external.synthetic_price_source import (
    SymbolSpec,
    SyntheticPriceSource,
)
from binarydesk.shared.config.settings import Settings

# 2023-11-14 22:13:20 UTC
START = 1_700_000_000.0
SYMBOL = "TEST/USD"
ALT_SYMBOL = "ALT/USD"


def flat_symbols():
    return [
        SymbolSpec(SYMBOL, "Test pair", "synthetic", 100.0, 0.0),
        SymbolSpec(ALT_SYMBOL, "Alt pair", "synthetic", 50.0, 0.0),
    ]


class GatedPriceSource(SyntheticPriceSource):
    """Cada quote() espera a que el gate esté abierto."""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.gate = asyncio.Event()
        self.gate.set()

    async def quote(self, symbol):
        await self.gate.wait()
        return await super().quote(symbol)


class FlakyPriceSource(SyntheticPriceSource):
    """Las próximas `failures` cotizaciones fallan; cuenta los intentos."""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.failures = 0
        self.calls = 0

    async def quote(self, symbol):
        self.calls += 1
        if self.failures > 0:
            self.failures -= 1
            raise ConnectionError("feed caído")
        return await super().quote(symbol)


def make_source(clock, cls=SyntheticPriceSource, **kwargs):
    params = dict(
        clock=clock,
        half_spread=0.0,
        latency=0.0,
        feed_interval=1.0,
        rng=random.Random(7),
        symbols=flat_symbols(),
    )
    params.update(kwargs)
    return cls(**params)


def make_settings(**overrides):
    params = dict(
        initial_balance=10_000.0,
        min_trade_amount=10.0,
        payout_multiplier=1.85,
        max_trade_size=1_000.0,
        daily_loss_limit=500.0,
        auto_trade=False,
        half_spread=0.0,
        quote_latency_seconds=0.0,
        quote_timeout_seconds=1.0,
        settlement_quote_attempts=2,
        strict_expiry_labels=False,
    )
    params.update(overrides)
    return Settings(**params)


def make_platform(source, clock, config=None, event_bus=None, on_price_update=None):
    registry = StrategyRegistry()
    registry.register_defaults()
    return TradingPlatform(
        price_source=source,
        clock=clock,
        config=config or make_settings(),
        registry=registry,
        event_bus=event_bus,
        on_price_update=on_price_update,
    )
