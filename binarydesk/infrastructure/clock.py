"""
BinaryDesk – Clocks
=====================
Implementaciones de IClock.

- SystemClock  → time.time(), para el servidor en vivo.
- VirtualClock → tiempo manual; los tests lo avanzan y llaman a
                 TradingPlatform.step() para disparar ticks y
                 liquidaciones de forma determinista.
"""

from __future__ import annotations

import time

from binarydesk.application.ports.clock import IClock


class SystemClock(IClock):

    def now(self) -> float:
        return time.time()


class VirtualClock(IClock):
    """Reloj controlado a mano. Nunca retrocede."""

    def __init__(self, start: float = 0.0) -> None:
        self._now = float(start)

    def now(self) -> float:
        return self._now

    def advance(self, seconds: float) -> float:
        if seconds < 0:
            raise ValueError("VirtualClock no puede retroceder")
        self._now += seconds
        return self._now

    def set(self, timestamp: float) -> None:
        if timestamp < self._now:
            raise ValueError("VirtualClock no puede retroceder")
        self._now = float(timestamp)
