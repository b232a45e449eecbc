"""
BinaryDesk
==========
Mesa de opciones binarias simulada: feed de precios sintético,
ciclo de vida de trades con liquidación temporizada, métricas de
riesgo/performance y estrategias enchufables.
"""

__version__ = "0.1.0"
