"""
BinaryDesk – API Routes (FastAPI)
===================================
Endpoints REST sobre el TradingPlatform.

Endpoints disponibles:
  GET   /api/health                        → health check
  GET   /api/state                         → foto completa de la mesa
  POST  /api/trades                        → abrir un trade
  GET   /api/trades/active                 → trades abiertos
  GET   /api/trades/history                → trades liquidados
  GET   /api/stats                         → métricas de performance
  GET   /api/risk                          → exposición actual
  PATCH /api/settings                      → preferencias del usuario
  GET   /api/symbols                       → catálogo de símbolos
  GET   /api/prices/{symbol}               → historial de precios (bid)
  GET   /api/strategies                    → estrategias registradas
  POST  /api/strategies/run                → evaluar activas y operar
  POST  /api/strategies/{name}/activate    → activar estrategia
  POST  /api/strategies/{name}/deactivate  → desactivar estrategia

ERRORES:
  DomainError → 400 con to_dict() como body
  StrategyNotFoundError → 404
"""

from __future__ import annotations

from typing import Any, Dict

from fastapi import APIRouter, Body, HTTPException, Request
from fastapi.responses import JSONResponse

from binarydesk.application.services.trading_platform import TradingPlatform
from binarydesk.domain.exceptions.domain_errors import (
    DomainError,
    StrategyNotFoundError,
)
from binarydesk.presentation.api.schemas import PlaceTradeRequest, RunStrategiesRequest
from binarydesk.shared.logging.logger import get_logger

logger = get_logger("api.routes")

router = APIRouter()

# Referencia inyectada desde main.py
_platform: TradingPlatform | None = None


def init_routes(platform: TradingPlatform) -> None:
    """Inyectar el TradingPlatform desde main.py al arrancar."""
    global _platform
    _platform = platform


def _get_platform() -> TradingPlatform:
    if _platform is None:
        raise HTTPException(status_code=503, detail="Server not ready")
    return _platform


async def domain_error_handler(request: Request, exc: DomainError) -> JSONResponse:
    status = 404 if isinstance(exc, StrategyNotFoundError) else 400
    logger.info(
        "Operación rechazada | %s %s → %s: %s",
        request.method, request.url.path, exc.code, exc.message,
    )
    return JSONResponse(status_code=status, content=exc.to_dict())


# ─── Estado ────────────────────────────────────────────────────────────

@router.get("/api/health")
async def health_check() -> dict:
    """Health check para monitoreo."""
    platform = _get_platform()
    return {
        "status": "ok",
        "service": "binarydesk",
        "price_source_connected": platform.price_source.is_connected,
        "scheduler_running": platform.is_running,
    }


@router.get("/api/state")
async def get_state() -> dict:
    return _get_platform().get_state().to_dict()


@router.get("/api/symbols")
async def list_symbols() -> dict:
    return {"symbols": _get_platform().price_source.list_symbols()}


@router.get("/api/prices/{symbol:path}")
async def price_history(symbol: str) -> dict:
    prices = _get_platform().price_history(symbol)
    return {"symbol": symbol, "count": len(prices), "prices": prices}


# ─── Trades ────────────────────────────────────────────────────────────

@router.post("/api/trades", status_code=201)
async def place_trade(body: PlaceTradeRequest) -> dict:
    trade = await _get_platform().place_trade(
        body.symbol, body.direction, body.amount, expiry_label=body.expiry,
    )
    return trade.to_dict()


@router.get("/api/trades/active")
async def active_trades() -> dict:
    trades = _get_platform().active_trades()
    return {"count": len(trades), "trades": [t.to_dict() for t in trades]}


@router.get("/api/trades/history")
async def trade_history() -> dict:
    trades = _get_platform().trade_history()
    return {"count": len(trades), "trades": [t.to_dict() for t in trades]}


# ─── Métricas ──────────────────────────────────────────────────────────

@router.get("/api/stats")
async def performance_stats() -> dict:
    return _get_platform().get_performance_stats().to_dict()


@router.get("/api/risk")
async def risk_metrics() -> dict:
    return _get_platform().get_risk_metrics().to_dict()


# ─── Preferencias ──────────────────────────────────────────────────────

@router.patch("/api/settings")
async def update_settings(partial: Dict[str, Any] = Body(...)) -> dict:
    return _get_platform().update_user_settings(partial)


# ─── Estrategias ───────────────────────────────────────────────────────

@router.get("/api/strategies")
async def list_strategies() -> dict:
    return {"strategies": _get_platform().registry.to_list()}


@router.post("/api/strategies/run")
async def run_strategies(body: RunStrategiesRequest) -> dict:
    trades = await _get_platform().run_strategies(
        body.symbol,
        amount=body.amount,
        history=body.history,
        refresh=body.history is None,
    )
    return {"count": len(trades), "trades": [t.to_dict() for t in trades]}


@router.post("/api/strategies/{name}/activate")
async def activate_strategy(name: str) -> dict:
    if not _get_platform().activate_strategy(name):
        raise StrategyNotFoundError(name)
    return {"name": name, "active": True}


@router.post("/api/strategies/{name}/deactivate")
async def deactivate_strategy(name: str) -> dict:
    if not _get_platform().deactivate_strategy(name):
        raise StrategyNotFoundError(name)
    return {"name": name, "active": False}
