"""
BinaryDesk – Main Application Entry Point
============================================
Expone el TradingPlatform por HTTP.

ARQUITECTURA DE ARRANQUE:
  1. Configurar logging
  2. Crear el contenedor (price source, event bus, plataforma)
  3. Lifespan startup:
     a. platform.init()  → conecta el price source
     b. platform.start() → loop de scheduling (ticks + liquidaciones)
  4. Lifespan shutdown:
     a. platform.disconnect() → detiene loop y timers
     b. event_bus.unsubscribe_all()

  uvicorn binarydesk.main:app --host 0.0.0.0 --port 8888
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from binarydesk import __version__
from binarydesk.container import Container, get_container
from binarydesk.domain.exceptions.domain_errors import DomainError
from binarydesk.presentation.api.routes import domain_error_handler, init_routes, router
from binarydesk.shared.logging.logger import get_logger, setup_logging

logger = get_logger("main")


def create_app(container: Optional[Container] = None) -> FastAPI:
    """
    Construye la app FastAPI sobre un contenedor.

    Args:
        container: Contenedor a usar. None = contenedor global.
    """
    container = container or get_container()
    settings = container.settings

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        platform = container.trading_platform

        logger.info("=" * 60)
        logger.info("  BinaryDesk v%s - Binary Options Demo Desk", __version__)
        logger.info("  Balance inicial: %.2f", settings.initial_balance)
        logger.info("  Payout: x%.2f | Mínimo: %.2f | Máximo: %.2f",
                    settings.payout_multiplier,
                    settings.min_trade_amount,
                    settings.max_trade_size)
        logger.info("  Feed: cada %.2fs | Latencia: %.3fs | Timeout: %.1fs",
                    settings.price_feed_interval_seconds,
                    settings.quote_latency_seconds,
                    settings.quote_timeout_seconds)
        logger.info("  Estrategias: %s", ", ".join(platform.registry.names))
        logger.info("=" * 60)

        init_routes(platform)
        await platform.init()
        platform.start()
        logger.info("✓ Todos los componentes iniciados correctamente")

        yield

        logger.info("Iniciando shutdown...")
        await platform.disconnect()
        await container.event_bus.unsubscribe_all()
        logger.info("✓ Shutdown completo")

    app = FastAPI(
        title="BinaryDesk",
        description="Mesa demo de opciones binarias con estrategias automáticas",
        version=__version__,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(DomainError, domain_error_handler)
    app.include_router(router)
    return app


# ─── Logging + App ─────────────────────────────────────────────────────
setup_logging(logging.DEBUG if get_container().settings.debug else logging.INFO)
app = create_app()


def run() -> None:
    """Entry point de consola: levanta uvicorn con la configuración."""
    import uvicorn

    container = get_container()
    uvicorn.run(
        app,
        host=container.settings.host,
        port=container.settings.port,
        log_level="debug" if container.settings.debug else "info",
    )


if __name__ == "__main__":
    run()
