"""
BinaryDesk – Application Port: Clock
======================================
Fuente de tiempo inyectable. El scheduling (ticks y liquidaciones)
lee siempre el reloj a través de este puerto, nunca time.time()
directo, para poder correrlo con un reloj virtual en tests.
"""

from __future__ import annotations

from abc import ABC, abstractmethod


class IClock(ABC):

    @abstractmethod
    def now(self) -> float:
        """Epoch actual en segundos."""
