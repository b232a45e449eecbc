"""
Dependency Injection Container.

Único lugar donde se crean las dependencias concretas de la mesa:
reloj, price source, event bus y el TradingPlatform que las usa.
Las capas internas solo conocen los puertos (IClock, IPriceSource).
"""

from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import Any, Optional

from binarydesk.application.ports.clock import IClock
from binarydesk.application.ports.price_source import IPriceSource
from binarydesk.application.services.settlement_scheduler import SettlementScheduler
from binarydesk.application.services.stats_engine import StatsEngine
from binarydesk.application.services.strategy_registry import StrategyRegistry
from binarydesk.application.services.trading_platform import TradingPlatform
from binarydesk.application.state.trade_ledger import TradeLedger
from binarydesk.domain.services.risk_calculator import RiskCalculator, RiskConfig
from binarydesk.infrastructure.external.event_bus import EventBus
from binarydesk.shared.config.settings import Settings


@dataclass
class Container:
    """
    Contenedor de Inyección de Dependencias.

    Cada dependencia se crea al primer acceso y se comparte (singleton
    por contenedor). override() reemplaza una antes de que se use.
    """

    settings: Settings = field(default_factory=Settings)

    _clock: Optional[IClock] = None
    _price_source: Optional[IPriceSource] = None
    _event_bus: Optional[EventBus] = None

    _trade_ledger: Optional[TradeLedger] = None
    _settlement_scheduler: Optional[SettlementScheduler] = None
    _strategy_registry: Optional[StrategyRegistry] = None
    _stats_engine: Optional[StatsEngine] = None
    _risk_calculator: Optional[RiskCalculator] = None

    _trading_platform: Optional[TradingPlatform] = None

    # ==================== Ports ====================

    @property
    def clock(self) -> IClock:
        if self._clock is None:
            from binarydesk.infrastructure.clock import SystemClock
            self._clock = SystemClock()
        return self._clock

    @property
    def price_source(self) -> IPriceSource:
        """Broker sintético con el catálogo por defecto."""
        if self._price_source is None:
            from binarydesk.infrastructure.external.synthetic_price_source import (
                SyntheticPriceSource,
            )
            self._price_source = SyntheticPriceSource(
                clock=self.clock,
                half_spread=self.settings.half_spread,
                latency=self.settings.quote_latency_seconds,
                feed_interval=self.settings.price_feed_interval_seconds,
                rng=random.Random(),
            )
        return self._price_source

    @property
    def event_bus(self) -> EventBus:
        if self._event_bus is None:
            self._event_bus = EventBus(
                max_queue_size=self.settings.event_bus_max_queue_size,
            )
        return self._event_bus

    # ==================== State / Services ====================

    @property
    def trade_ledger(self) -> TradeLedger:
        if self._trade_ledger is None:
            self._trade_ledger = TradeLedger()
        return self._trade_ledger

    @property
    def settlement_scheduler(self) -> SettlementScheduler:
        if self._settlement_scheduler is None:
            self._settlement_scheduler = SettlementScheduler()
        return self._settlement_scheduler

    @property
    def strategy_registry(self) -> StrategyRegistry:
        """Registro con las tres estrategias canónicas, inactivas."""
        if self._strategy_registry is None:
            self._strategy_registry = StrategyRegistry()
            self._strategy_registry.register_defaults()
        return self._strategy_registry

    @property
    def stats_engine(self) -> StatsEngine:
        if self._stats_engine is None:
            self._stats_engine = StatsEngine()
        return self._stats_engine

    @property
    def risk_calculator(self) -> RiskCalculator:
        if self._risk_calculator is None:
            self._risk_calculator = RiskCalculator(
                RiskConfig(min_trade_amount=self.settings.min_trade_amount)
            )
        return self._risk_calculator

    @property
    def trading_platform(self) -> TradingPlatform:
        if self._trading_platform is None:
            self._trading_platform = TradingPlatform(
                price_source=self.price_source,
                clock=self.clock,
                config=self.settings,
                ledger=self.trade_ledger,
                scheduler=self.settlement_scheduler,
                registry=self.strategy_registry,
                stats_engine=self.stats_engine,
                risk_calculator=self.risk_calculator,
                event_bus=self.event_bus,
            )
        return self._trading_platform

    # ==================== Lifecycle ====================

    def reset(self) -> None:
        """Resetea todas las instancias (útil para tests)."""
        self._clock = None
        self._price_source = None
        self._event_bus = None
        self._trade_ledger = None
        self._settlement_scheduler = None
        self._strategy_registry = None
        self._stats_engine = None
        self._risk_calculator = None
        self._trading_platform = None

    def override(self, name: str, instance: Any) -> None:
        """
        Override una dependencia (útil para tests).

        Args:
            name: Nombre de la dependencia (ej: 'clock', 'price_source')
            instance: Instancia a usar
        """
        attr_name = f"_{name}"
        if hasattr(self, attr_name):
            setattr(self, attr_name, instance)
        else:
            raise ValueError(f"Unknown dependency: {name}")


# ==================== Global Container ====================

_container: Optional[Container] = None


def get_container() -> Container:
    """Instancia global del contenedor (se crea al primer uso)."""
    global _container
    if _container is None:
        _container = Container()
    return _container


def init_container(settings: Optional[Settings] = None) -> Container:
    """Reemplaza el contenedor global por uno con la configuración dada."""
    global _container
    _container = Container(settings=settings or Settings())
    return _container


def reset_container() -> None:
    global _container
    if _container is not None:
        _container.reset()
    _container = None
