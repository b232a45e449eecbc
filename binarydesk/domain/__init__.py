"""
BinaryDesk – Domain Layer
===========================
Núcleo puro del sistema. CERO dependencias externas.

Este módulo contiene:
- entities/: Entidades de negocio (BinaryTrade, Account, Strategy)
- value_objects/: Objetos inmutables (Quote, TradeSignal, snapshots)
- services/: Servicios de dominio puros (evaluador, riesgo, expiración)
- events/: Eventos de dominio
- exceptions/: Excepciones de dominio

REGLA DE DEPENDENCIA:
Este módulo NO puede importar de:
- infrastructure/
- presentation/
- application/
- Frameworks externos (FastAPI, pydantic, etc.)
"""

from binarydesk.domain.entities.trade import BinaryTrade, TradeStatus
from binarydesk.domain.entities.account import Account, RiskLevel
from binarydesk.domain.entities.strategy import Strategy
from binarydesk.domain.value_objects.quote import Quote
from binarydesk.domain.value_objects.signal import TradeSignal, Direction

__all__ = [
    "BinaryTrade",
    "TradeStatus",
    "Account",
    "RiskLevel",
    "Strategy",
    "Quote",
    "TradeSignal",
    "Direction",
]
