"""
BinaryDesk – Synthetic Price Source
=====================================================
Implementación de IPriceSource que genera cotizaciones aleatorias
alrededor de un precio base por símbolo.

MODELO DE PRECIO:
  price = base_price + U(-volatility, +volatility)
  bid   = price - half_spread
  ask   = price + half_spread
  El precio base NO deriva: cada cotización es independiente.

TIMERS DEL FEED:
  Un timer por símbolo con al menos un callback, sin importar
  cuántos callbacks haya. El timer es una entrada symbol → next_due
  que poll(now) dispara: una cotización por disparo, el MISMO Quote
  entregado a todos los callbacks del símbolo.

  Al quedar un símbolo sin callbacks su timer desaparece, así que
  active_timer_count ≤ número de símbolos suscritos.
"""

from __future__ import annotations

import asyncio
import inspect
import random
import uuid
from dataclasses import dataclass, replace
from typing import Iterable

from binarydesk.application.ports.clock import IClock
from binarydesk.application.ports.price_source import (
    IPriceSource,
    SubscriptionHandle,
    TickCallback,
)
from binarydesk.domain.exceptions.domain_errors import (
    NotConnectedError,
    PriceSourceError,
    UnknownSymbolError,
)
from binarydesk.domain.value_objects.quote import Quote
from binarydesk.shared.logging.logger import get_logger

logger = get_logger("synthetic_price_source")


@dataclass
class SymbolSpec:
    """Metadatos y parámetros de generación de un símbolo."""

    symbol: str
    name: str
    type: str
    base_price: float
    volatility: float

    def to_dict(self) -> dict:
        return {
            "symbol": self.symbol,
            "name": self.name,
            "type": self.type,
            "base_price": self.base_price,
            "volatility": self.volatility,
        }


DEFAULT_CATALOGUE: tuple[SymbolSpec, ...] = (
    SymbolSpec("EUR/USD", "Euro vs US Dollar", "forex", 1.0854, 0.0002),
    SymbolSpec("GBP/USD", "British Pound vs US Dollar", "forex", 1.2658, 0.0003),
    SymbolSpec("USD/JPY", "US Dollar vs Japanese Yen", "forex", 151.25, 0.05),
    SymbolSpec("Gold", "Gold", "commodity", 2185.40, 1.2),
    SymbolSpec("BTC/USD", "Bitcoin", "crypto", 61520.0, 150.0),
)


class SyntheticPriceSource(IPriceSource):
    """
    Broker demo en memoria.

    El reloj inyectado marca el timestamp de las cotizaciones y el
    vencimiento de los timers; con un VirtualClock todo es determinista
    (más aún con volatility=0 y un random.Random con seed).
    """

    def __init__(
        self,
        clock: IClock,
        half_spread: float = 0.0001,
        latency: float = 0.0,
        feed_interval: float = 1.0,
        rng: random.Random | None = None,
        symbols: Iterable[SymbolSpec] | None = None,
    ) -> None:
        self._clock = clock
        self._half_spread = half_spread
        self._latency = latency
        self._feed_interval = feed_interval
        self._rng = rng or random.Random()

        catalogue = DEFAULT_CATALOGUE if symbols is None else symbols
        self._symbols: dict[str, SymbolSpec] = {
            spec.symbol: replace(spec) for spec in catalogue
        }

        # symbol → {handle_id → callback}
        self._callbacks: dict[str, dict[str, TickCallback]] = {}
        # symbol → próximo disparo del feed
        self._timers: dict[str, float] = {}

        self._connected = False
        self._ticks_delivered = 0

    # ════════════════════════════════════════════════════════════════
    #  CONEXIÓN
    # ════════════════════════════════════════════════════════════════

    async def connect(self) -> None:
        if self._connected:
            logger.warning("SyntheticPriceSource ya está conectado")
            return
        self._connected = True
        logger.info(
            "📡 Price source conectado | símbolos=%d spread=±%s latency=%.3fs",
            len(self._symbols), self._half_spread, self._latency,
        )

    def disconnect(self) -> None:
        timers = len(self._timers)
        self._connected = False
        self._timers.clear()
        self._callbacks.clear()
        logger.info("📴 Price source desconectado | timers detenidos=%d", timers)

    @property
    def is_connected(self) -> bool:
        return self._connected

    # ════════════════════════════════════════════════════════════════
    #  COTIZACIONES
    # ════════════════════════════════════════════════════════════════

    async def quote(self, symbol: str) -> Quote:
        if not self._connected:
            raise NotConnectedError(symbol)
        spec = self._symbols.get(symbol)
        if spec is None:
            raise UnknownSymbolError(symbol)

        if self._latency > 0:
            await asyncio.sleep(self._latency)
            if not self._connected:
                raise NotConnectedError(symbol)

        price = spec.base_price + self._rng.uniform(-spec.volatility, spec.volatility)
        return Quote(
            symbol=symbol,
            bid=price - self._half_spread,
            ask=price + self._half_spread,
            timestamp=self._clock.now(),
        )

    # ════════════════════════════════════════════════════════════════
    #  SUSCRIPCIONES
    # ════════════════════════════════════════════════════════════════

    def subscribe(self, symbol: str, on_tick: TickCallback) -> SubscriptionHandle:
        if symbol not in self._symbols:
            raise UnknownSymbolError(symbol)

        handle = SubscriptionHandle(id=uuid.uuid4().hex[:12], symbol=symbol)
        self._callbacks.setdefault(symbol, {})[handle.id] = on_tick

        if symbol not in self._timers:
            self._timers[symbol] = self._clock.now() + self._feed_interval
            logger.debug("⏱️ Timer creado | sym=%s", symbol)
        return handle

    def unsubscribe(self, handle: SubscriptionHandle) -> None:
        callbacks = self._callbacks.get(handle.symbol)
        if not callbacks or callbacks.pop(handle.id, None) is None:
            return
        if not callbacks:
            del self._callbacks[handle.symbol]
            self._timers.pop(handle.symbol, None)
            logger.debug("⏱️ Timer eliminado | sym=%s", handle.symbol)

    @property
    def active_timer_count(self) -> int:
        return len(self._timers)

    def subscriber_count(self, symbol: str) -> int:
        return len(self._callbacks.get(symbol, {}))

    # ════════════════════════════════════════════════════════════════
    #  FEED
    # ════════════════════════════════════════════════════════════════

    async def poll(self, now: float) -> int:
        """
        Dispara cada timer vencido una vez y lo re-agenda a
        now + feed_interval (sin ráfagas de recuperación).
        """
        if not self._connected:
            return 0

        due = [sym for sym, at in self._timers.items() if at <= now]
        delivered = 0
        for symbol in due:
            # un callback anterior pudo desuscribir el símbolo
            if symbol not in self._timers:
                continue
            self._timers[symbol] = now + self._feed_interval

            try:
                quote = await self.quote(symbol)
            except PriceSourceError as exc:
                logger.warning("Tick perdido | sym=%s → %s", symbol, exc.message)
                continue

            for handle_id, callback in list(self._callbacks.get(symbol, {}).items()):
                if handle_id not in self._callbacks.get(symbol, {}):
                    continue
                await self._deliver(callback, quote)
            delivered += 1

        self._ticks_delivered += delivered
        return delivered

    @staticmethod
    async def _deliver(callback: TickCallback, quote: Quote) -> None:
        try:
            result = callback(quote)
            if inspect.isawaitable(result):
                await result
        except Exception as exc:
            logger.error("Error en callback de tick (%s): %s", quote.symbol, exc)

    @property
    def ticks_delivered(self) -> int:
        return self._ticks_delivered

    # ════════════════════════════════════════════════════════════════
    #  CATÁLOGO
    # ════════════════════════════════════════════════════════════════

    def list_symbols(self) -> list[dict]:
        return [spec.to_dict() for spec in self._symbols.values()]

    def register_symbol(
        self,
        symbol: str,
        base_price: float,
        volatility: float,
        name: str | None = None,
        type: str = "synthetic",
    ) -> SymbolSpec:
        spec = SymbolSpec(
            symbol=symbol,
            name=name or symbol,
            type=type,
            base_price=base_price,
            volatility=volatility,
        )
        self._symbols[symbol] = spec
        logger.info(
            "Símbolo registrado | %s base=%s vol=%s", symbol, base_price, volatility,
        )
        return spec

    def set_base_price(self, symbol: str, price: float) -> None:
        spec = self._symbols.get(symbol)
        if spec is None:
            raise UnknownSymbolError(symbol)
        spec.base_price = price
