"""
BinaryDesk – Application Port: Price Source
=====================================================
Interfaz del proveedor de cotizaciones.

El TradingPlatform pide precios y se suscribe a ticks; la
infraestructura decide CÓMO producirlos (generador sintético,
feed real detrás de la misma interfaz, réplica histórica...).
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Union

from binarydesk.domain.value_objects.quote import Quote

# Callback de tick: función normal o coroutine function
TickCallback = Callable[[Quote], Union[None, Awaitable[None], Any]]


@dataclass(frozen=True, slots=True)
class SubscriptionHandle:
    """Identifica exactamente un callback registrado."""

    id: str
    symbol: str


class IPriceSource(ABC):
    """
    Interfaz para proveer cotizaciones bid/ask.

    IMPLEMENTACIONES POSIBLES:
    - SyntheticPriceSource (demo, tests)
    - Un feed real (fuera de alcance)
    """

    @abstractmethod
    async def connect(self) -> None:
        """Establece la conexión con la fuente."""

    @abstractmethod
    def disconnect(self) -> None:
        """Detiene todos los timers y limpia todas las suscripciones."""

    @property
    @abstractmethod
    def is_connected(self) -> bool:
        ...

    @abstractmethod
    async def quote(self, symbol: str) -> Quote:
        """
        Cotización fresca de un símbolo.

        Raises:
            NotConnectedError: si la fuente está desconectada
            UnknownSymbolError: si el símbolo no está registrado
        """

    @abstractmethod
    def subscribe(self, symbol: str, on_tick: TickCallback) -> SubscriptionHandle:
        """Registra un callback de ticks. Un solo timer por símbolo."""

    @abstractmethod
    def unsubscribe(self, handle: SubscriptionHandle) -> None:
        """Quita exactamente un callback. Idempotente."""

    def list_symbols(self) -> list[dict]:
        """Metadatos del catálogo de símbolos (vacío si la fuente no lo expone)."""
        return []

    async def poll(self, now: float) -> int:
        """
        Entrega los ticks vencidos a `now`.

        Las fuentes push (feed real) no necesitan implementarlo.

        Returns:
            Número de ticks entregados.
        """
        return 0
