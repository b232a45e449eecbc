"""
Event Bus.

Distribuye los Domain Events del TradingPlatform a handlers async y a
colas de consumidores (asyncio.Queue fan-out, una cola por consumidor).
"""

from __future__ import annotations

import asyncio
from typing import Awaitable, Callable, List, Optional

from binarydesk.domain.events.domain_events import DomainEvent
from binarydesk.shared.logging.logger import get_logger

logger = get_logger("event_bus")

EventHandler = Callable[[DomainEvent], Awaitable[None]]


class EventBus:
    """
    Fan-out de Domain Events por tipo (nombre de la clase).

    Los consumidores reciben el evento ya serializado (to_dict()).
    Con la cola llena se descarta el evento más viejo.
    """

    def __init__(self, max_queue_size: int = 10_000):
        self._max_queue_size = max_queue_size
        self._subscribers: dict[str, List[tuple[asyncio.Queue, str]]] = {}
        self._handlers: dict[str, List[EventHandler]] = {}
        self._lock = asyncio.Lock()
        self._published = 0

    async def publish(self, event: DomainEvent) -> None:
        event_type = event.__class__.__name__
        self._published += 1
        logger.debug(f"Publishing event: {event_type}")

        for handler in list(self._handlers.get(event_type, [])):
            try:
                await handler(event)
            except Exception as e:
                logger.error(f"Error in handler for {event_type}: {e}")

        subscribers = self._subscribers.get(event_type, [])
        if not subscribers:
            return

        event_data = event.to_dict()
        for queue, consumer_name in subscribers:
            if queue.full():
                # Drop-oldest
                try:
                    queue.get_nowait()
                    logger.warning(
                        f"Queue full for '{consumer_name}' on event '{event_type}' - old event dropped"
                    )
                except asyncio.QueueEmpty:
                    pass
            try:
                queue.put_nowait(event_data)
            except asyncio.QueueFull:
                logger.error(f"Could not enqueue event for '{consumer_name}'")

    def register_handler(self, event_type: str, handler: EventHandler) -> None:
        """El handler se llama con cada evento publicado de ese tipo."""
        self._handlers.setdefault(event_type, []).append(handler)
        logger.info(f"Handler registered for event type: {event_type}")

    async def subscribe(self, event_type: str, consumer_name: str) -> asyncio.Queue:
        """Suscribe un consumidor y devuelve su cola exclusiva."""
        async with self._lock:
            queue: asyncio.Queue = asyncio.Queue(maxsize=self._max_queue_size)
            self._subscribers.setdefault(event_type, []).append((queue, consumer_name))
            logger.info(f"Consumer '{consumer_name}' subscribed to '{event_type}'")
            return queue

    async def unsubscribe_all(self, event_type: Optional[str] = None) -> None:
        """Desuscribe todos los consumidores y handlers (de un tipo o de todos)."""
        async with self._lock:
            if event_type:
                self._subscribers.pop(event_type, None)
                self._handlers.pop(event_type, None)
            else:
                self._subscribers.clear()
                self._handlers.clear()

    @property
    def published_count(self) -> int:
        return self._published
