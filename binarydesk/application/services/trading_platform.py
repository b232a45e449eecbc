"""
BinaryDesk – Trading Platform (Binary Options Engine)
=====================================================
Dueño del balance, del ledger y del ciclo de vida de cada trade.

═══════════════════════════════════════════════════════════════
            FLUJO DE UNA ORDEN
═══════════════════════════════════════════════════════════════

    place_trade(symbol, direction, amount, expiry)
        │
        ▼
    validar (monto finito → balance → mínimo → máximo → pérdida diaria)
        │
        ▼
    await quote(symbol)           ← único punto de suspensión
        │
        ▼
    re-validar balance            (otra orden pudo debitar mientras tanto)
        │
        ▼
    debit + ledger + suscripción + agenda de liquidación
        │
      ticks ──▸ on_price_tick() ──▸ mark-to-market
        │
    expiry_at ≤ clock.now()
        │
        ▼
    settle_trade() ──▸ claim ──▸ await quote (1 reintento)
                                   │
                                   ├── ok  → WON | LOST por bid
                                   └── fail → LOST degradado

SCHEDULING:
    No hay timers por trade. step() lee el reloj inyectado, dispara
    los timers del feed (price_source.poll) y liquida lo vencido.
    En vivo lo corre un loop de fondo (start/stop); en tests se
    llama a mano avanzando un VirtualClock.

MUESTREO PARA AUTO-TRADE:
    El feed solo existe mientras el símbolo tiene trades abiertos.
    Con auto_trade y estrategias activas, step() pide una cotización
    por intervalo de feed para cada símbolo de auto_trade_symbols sin
    suscripción y la procesa como un tick. Sin timers extra.

CONCURRENCIA:
    Un solo event-loop. Entre dos awaits nada más toca el estado, así
    que no hay locks: la liquidación reclama el trade ANTES de esperar
    la cotización y los ticks ignoran los trades reclamados.
"""

from __future__ import annotations

import asyncio
import inspect
from collections import deque
from datetime import datetime, timezone
from typing import Any, Callable, Optional, Sequence

from tenacity import AsyncRetrying, retry_if_exception_type, stop_after_attempt

from binarydesk.application.dto.settings_dto import UserSettingsUpdate
from binarydesk.application.dto.state_dto import PlatformStateDTO
from binarydesk.application.ports.clock import IClock
from binarydesk.application.ports.price_source import IPriceSource, SubscriptionHandle
from binarydesk.application.services.settlement_scheduler import SettlementScheduler
from binarydesk.application.services.stats_engine import StatsEngine
from binarydesk.application.services.strategy_registry import StrategyRegistry
from binarydesk.application.state.trade_ledger import TradeLedger
from binarydesk.domain.entities.account import Account
from binarydesk.domain.entities.trade import BinaryTrade, TradeStatus
from binarydesk.domain.events.domain_events import (
    DomainEvent,
    PriceUpdated,
    StrategySignalled,
    TradeOpened,
    TradeSettled,
)
from binarydesk.domain.exceptions.domain_errors import (
    DomainError,
    InsufficientBalanceError,
    InvalidAmountError,
    InvalidDirectionError,
    PriceSourceError,
    QuoteTimeoutError,
    SettlementFetchError,
)
from binarydesk.domain.services.expiry import normalize_label, resolve_expiry
from binarydesk.domain.services.risk_calculator import RiskCalculator, RiskConfig
from binarydesk.domain.value_objects.performance_metrics import (
    PerformanceSnapshot,
    RiskSnapshot,
)
from binarydesk.domain.value_objects.quote import Quote
from binarydesk.domain.value_objects.signal import Direction
from binarydesk.shared.config.settings import Settings, settings as default_settings
from binarydesk.shared.logging.logger import get_logger

logger = get_logger("trading_platform")

# sink(quote) o sink(quote, trades_abiertos_del_simbolo) – función normal o coroutine
PriceUpdateSink = Callable[..., Any]


def _sink_wants_trades(sink: PriceUpdateSink) -> bool:
    """True si el sink acepta un segundo argumento posicional."""
    try:
        params = list(inspect.signature(sink).parameters.values())
    except (TypeError, ValueError):
        return True
    if any(p.kind == p.VAR_POSITIONAL for p in params):
        return True
    positional = [
        p for p in params
        if p.kind in (p.POSITIONAL_ONLY, p.POSITIONAL_OR_KEYWORD)
    ]
    return len(positional) >= 2


class TradingPlatform:
    """
    Motor de opciones binarias.

    Responsabilidades:
      1. Validar y abrir trades (debitando el monto)
      2. Mark-to-market con cada tick
      3. Liquidar al vencimiento (acreditando el payout si gana)
      4. Enviar órdenes de las estrategias activas
      5. Exponer agregados de performance y riesgo
    """

    def __init__(
        self,
        price_source: IPriceSource,
        clock: IClock,
        config: Settings | None = None,
        ledger: TradeLedger | None = None,
        scheduler: SettlementScheduler | None = None,
        registry: StrategyRegistry | None = None,
        stats_engine: StatsEngine | None = None,
        risk_calculator: RiskCalculator | None = None,
        event_bus: Any = None,
        on_price_update: Optional[PriceUpdateSink] = None,
    ) -> None:
        self._cfg = config or default_settings
        self._source = price_source
        self._clock = clock
        self._ledger = ledger or TradeLedger()
        self._scheduler = scheduler or SettlementScheduler()
        self._registry = registry or StrategyRegistry()
        self._stats = stats_engine or StatsEngine()
        self._risk = risk_calculator or RiskCalculator(
            RiskConfig(min_trade_amount=self._cfg.min_trade_amount)
        )
        self._event_bus = event_bus
        self._on_price_update = on_price_update
        self._sink_wants_trades = (
            on_price_update is not None and _sink_wants_trades(on_price_update)
        )

        self._account = Account(
            balance=self._cfg.initial_balance,
            max_trade_size=self._cfg.max_trade_size,
            daily_loss_limit=self._cfg.daily_loss_limit,
            risk_level=self._cfg.risk_level,
            auto_trade=self._cfg.auto_trade,
            sound_enabled=self._cfg.sound_enabled,
        )

        # Una suscripción por símbolo con trades abiertos
        self._subscriptions: dict[str, SubscriptionHandle] = {}
        self._price_history: dict[str, deque[float]] = {}
        self._last_sample_at: dict[str, float] = {}

        self._loop_task: asyncio.Task | None = None
        self._running = False

    # ════════════════════════════════════════════════════════════════
    #  PROPIEDADES
    # ════════════════════════════════════════════════════════════════

    @property
    def balance(self) -> float:
        return self._account.balance

    @property
    def account(self) -> Account:
        return self._account

    @property
    def ledger(self) -> TradeLedger:
        return self._ledger

    @property
    def registry(self) -> StrategyRegistry:
        return self._registry

    @property
    def scheduler(self) -> SettlementScheduler:
        return self._scheduler

    @property
    def price_source(self) -> IPriceSource:
        return self._source

    @property
    def is_running(self) -> bool:
        return self._loop_task is not None and not self._loop_task.done()

    @property
    def subscribed_symbols(self) -> list[str]:
        return list(self._subscriptions)

    def active_trades(self) -> list[BinaryTrade]:
        return self._ledger.open_trades()

    def trade_history(self) -> list[BinaryTrade]:
        return self._ledger.history()

    def price_history(self, symbol: str) -> list[float]:
        return list(self._price_history.get(symbol, ()))

    # ════════════════════════════════════════════════════════════════
    #  CICLO DE VIDA
    # ════════════════════════════════════════════════════════════════

    async def init(self) -> None:
        """Conecta la fuente y re-suscribe símbolos con trades abiertos."""
        await self._source.connect()
        for symbol in sorted(self._ledger.open_symbols()):
            self._ensure_subscription(symbol)
        logger.info(
            "✓ Plataforma inicializada | balance=%.2f abiertos=%d",
            self._account.balance, self._ledger.open_count,
        )

    def start(self) -> None:
        """Lanza el loop de scheduling en background (idempotente)."""
        if self.is_running:
            return
        self._running = True
        self._loop_task = asyncio.create_task(
            self._run_loop(), name="binarydesk-scheduler"
        )
        logger.info(
            "▶️ Loop de scheduling iniciado (cada %.2fs)",
            self._cfg.scheduler_poll_interval,
        )

    async def stop(self) -> None:
        self._running = False
        task, self._loop_task = self._loop_task, None
        if task is None or task.done():
            return
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass
        logger.info("⏹️ Loop de scheduling detenido")

    async def disconnect(self) -> None:
        """
        Detiene el loop y la fuente. Las suscripciones se descartan;
        la agenda de liquidación se conserva para un init() posterior.
        """
        await self.stop()
        self._source.disconnect()
        self._subscriptions.clear()
        self._last_sample_at.clear()
        logger.info(
            "🔌 Plataforma desconectada | liquidaciones pendientes=%d",
            self._scheduler.pending_count,
        )

    async def _run_loop(self) -> None:
        while self._running:
            try:
                await self.step()
            except Exception:
                logger.exception("Error en el loop de scheduling")
            await asyncio.sleep(self._cfg.scheduler_poll_interval)

    async def step(self) -> list[BinaryTrade]:
        """
        Una iteración del scheduler: ticks vencidos del feed, muestreo
        de auto-trade y luego liquidaciones vencidas, todo contra el
        mismo clock.now().

        Returns:
            Trades liquidados en esta iteración.
        """
        await self._source.poll(self._clock.now())
        await self._sample_auto_trade_symbols()
        return await self.settle_due()

    async def _sample_auto_trade_symbols(self) -> int:
        """Cotiza los símbolos de auto-trade que no tienen feed propio."""
        if not self._account.auto_trade or not self._registry.active_names:
            return 0

        now = self._clock.now()
        sampled = 0
        for symbol in self._cfg.auto_trade_symbols:
            if symbol in self._subscriptions:
                continue
            last = self._last_sample_at.get(symbol)
            if last is not None and now - last < self._cfg.price_feed_interval_seconds:
                continue
            self._last_sample_at[symbol] = now
            try:
                quote = await self._fetch_quote(symbol)
            except PriceSourceError as exc:
                logger.warning("⚠️ Muestreo fallido | sym=%s → %s", symbol, exc.message)
                continue
            await self.on_price_tick(quote)
            sampled += 1
        return sampled

    # ════════════════════════════════════════════════════════════════
    #  1. ABRIR TRADE
    # ════════════════════════════════════════════════════════════════

    async def place_trade(
        self,
        symbol: str,
        direction: Direction | str,
        amount: float,
        expiry_label: str | None = None,
        origin_strategy: str | None = None,
    ) -> BinaryTrade:
        """
        Abre un trade binario al bid actual.

        Raises:
            ValidationError: dirección/monto/expiración inválidos
            PriceSourceError: no se pudo obtener la cotización de entrada

        Si se lanza cualquier error el estado queda intacto.
        """
        direction = self._parse_direction(direction)
        try:
            amount = float(amount)
        except (TypeError, ValueError):
            raise InvalidAmountError(amount) from None
        self._validate_amount(amount)

        requested = expiry_label or self._cfg.default_expiry_label
        label, duration = resolve_expiry(requested, self._cfg.strict_expiry_labels)
        if label != normalize_label(requested):
            logger.warning(
                "⚠️ Expiración desconocida '%s' → se usa %s", requested, label,
            )

        quote = await self._fetch_quote(symbol)

        # Otra orden pudo debitar durante el await
        if amount > self._account.balance:
            raise InsufficientBalanceError(amount, self._account.balance)

        opened_at = self._clock.now()
        trade = BinaryTrade(
            symbol=symbol,
            direction=direction,
            amount=amount,
            entry_price=quote.bid,
            opened_at=opened_at,
            expiry_at=opened_at + duration,
            payout_multiplier=self._cfg.payout_multiplier,
            expiry_label=label,
            origin_strategy=origin_strategy,
        )

        self._account.debit(amount)
        self._ledger.add_open(trade)
        self._ensure_subscription(symbol)
        self._scheduler.schedule(trade.id, trade.expiry_at)

        logger.info(
            "📝 Trade ABIERTO | id=%s sym=%s dir=%s amount=%.2f entry=%.5f exp=%s balance=%.2f%s",
            trade.id, symbol, direction.value, amount, trade.entry_price,
            label, self._account.balance,
            f" strategy={origin_strategy}" if origin_strategy else "",
        )

        await self._publish(TradeOpened(
            trade_id=trade.id,
            symbol=symbol,
            direction=direction.value,
            amount=amount,
            entry_price=trade.entry_price,
            expiry_at=trade.expiry_at,
            origin_strategy=origin_strategy,
        ))
        return trade

    def _validate_amount(self, amount: float) -> None:
        self._risk.validate_trade_amount(
            amount, self._account, self._daily_realized_pnl(),
        )

    @staticmethod
    def _parse_direction(direction: Direction | str) -> Direction:
        if isinstance(direction, Direction):
            return direction
        try:
            return Direction(str(direction).strip().lower())
        except ValueError:
            raise InvalidDirectionError(direction) from None

    async def _fetch_quote(self, symbol: str) -> Quote:
        timeout = self._cfg.quote_timeout_seconds
        try:
            return await asyncio.wait_for(self._source.quote(symbol), timeout=timeout)
        except asyncio.TimeoutError:
            raise QuoteTimeoutError(symbol, timeout) from None

    # ════════════════════════════════════════════════════════════════
    #  2. TICKS
    # ════════════════════════════════════════════════════════════════

    async def on_price_tick(self, quote: Quote) -> None:
        """
        Callback de suscripción. Actualiza el historial de precios,
        el mark-to-market de los trades NO reclamados y notifica.
        """
        symbol = quote.symbol
        self._record_price(symbol, quote.bid)

        trades = self._ledger.open_trades(symbol, include_settling=False)
        for trade in trades:
            trade.mark(quote.bid)

        await self._notify(quote, trades)
        await self._publish(PriceUpdated(
            symbol=symbol,
            bid=quote.bid,
            ask=quote.ask,
            quote_timestamp=quote.timestamp,
        ))

        if self._account.auto_trade:
            await self.run_strategies(symbol)

    def _record_price(self, symbol: str, price: float) -> None:
        history = self._price_history.get(symbol)
        if history is None:
            history = deque(maxlen=self._cfg.price_history_size)
            self._price_history[symbol] = history
        history.append(price)

    async def _notify(self, quote: Quote, trades: list[BinaryTrade]) -> None:
        if self._on_price_update is None:
            return
        try:
            if self._sink_wants_trades:
                result = self._on_price_update(quote, trades)
            else:
                result = self._on_price_update(quote)
            if inspect.isawaitable(result):
                await result
        except Exception as exc:
            logger.error("Error en sink de precios (%s): %s", quote.symbol, exc)

    # ════════════════════════════════════════════════════════════════
    #  3. LIQUIDACIÓN
    # ════════════════════════════════════════════════════════════════

    async def settle_due(self) -> list[BinaryTrade]:
        """Liquida todo lo que venció a clock.now(), en orden de vencimiento."""
        settled: list[BinaryTrade] = []
        for trade_id in self._scheduler.pop_due(self._clock.now()):
            trade = await self.settle_trade(trade_id)
            if trade is not None:
                settled.append(trade)
        return settled

    async def settle_trade(self, trade_id: str) -> BinaryTrade | None:
        """
        Liquida un trade abierto. No-op (None) si el id es desconocido,
        ya está liquidado o hay otra liquidación en curso.
        """
        trade = self._ledger.claim_for_settlement(trade_id)
        if trade is None:
            logger.debug("Liquidación ignorada | id=%s (no abierto o en curso)", trade_id)
            return None
        self._scheduler.cancel(trade_id)

        try:
            quote = await self._fetch_settlement_quote(trade)
        except SettlementFetchError as exc:
            trade.settle_degraded(self._clock.now())
            logger.warning(
                "⚠️ Liquidación DEGRADADA | id=%s sym=%s → LOST (%s)",
                trade.id, trade.symbol, exc.message,
            )
        else:
            trade.settle(quote.bid, self._clock.now())

        if trade.status == TradeStatus.WON:
            self._account.credit(trade.payout)

        self._ledger.archive(trade)

        if trade.origin_strategy:
            self._registry.record_outcome(trade.origin_strategy, trade)

        if not self._ledger.has_open(trade.symbol):
            self._release_subscription(trade.symbol)

        emoji = "✅" if trade.status == TradeStatus.WON else "❌"
        logger.info(
            "%s Trade %s | id=%s sym=%s dir=%s entry=%.5f exit=%s profit=%.2f balance=%.2f",
            emoji, trade.status.value.upper(), trade.id, trade.symbol,
            trade.direction.value, trade.entry_price,
            f"{trade.exit_price:.5f}" if trade.exit_price is not None else "n/a",
            trade.profit, self._account.balance,
        )

        await self._publish(TradeSettled(
            trade_id=trade.id,
            symbol=trade.symbol,
            direction=trade.direction.value,
            status=trade.status.value,
            amount=trade.amount,
            entry_price=trade.entry_price,
            exit_price=trade.exit_price,
            profit=trade.profit,
            balance=self._account.balance,
            degraded=trade.settlement_degraded,
        ))
        return trade

    async def _fetch_settlement_quote(self, trade: BinaryTrade) -> Quote:
        """
        Cotización de salida con reintento inmediato.

        Raises:
            SettlementFetchError si fallan todos los intentos.
        """
        attempts = max(1, self._cfg.settlement_quote_attempts)
        try:
            async for attempt in AsyncRetrying(
                stop=stop_after_attempt(attempts),
                retry=retry_if_exception_type(Exception),
                reraise=True,
            ):
                with attempt:
                    if attempt.retry_state.attempt_number > 1:
                        logger.info(
                            "🔁 Reintento de cotización de salida | id=%s intento=%d/%d",
                            trade.id, attempt.retry_state.attempt_number, attempts,
                        )
                    return await self._fetch_quote(trade.symbol)
        except Exception as exc:
            raise SettlementFetchError(trade.id, exc) from exc
        raise SettlementFetchError(trade.id)

    # ════════════════════════════════════════════════════════════════
    #  4. ESTRATEGIAS
    # ════════════════════════════════════════════════════════════════

    def activate_strategy(self, name: str) -> bool:
        return self._registry.activate(name)

    def deactivate_strategy(self, name: str) -> bool:
        return self._registry.deactivate(name)

    async def run_strategies(
        self,
        symbol: str,
        amount: float | None = None,
        history: Sequence[float] | None = None,
        refresh: bool = False,
    ) -> list[BinaryTrade]:
        """
        Evalúa las estrategias activas y envía una orden por cada
        señal CALL/PUT. Los rechazos se loguean; el lote continúa.

        Args:
            history: Precios a evaluar. None = historial registrado.
            refresh: Con history=None, registrar antes una cotización
                nueva del símbolo (PriceSourceError se propaga).
        """
        if history is None:
            if refresh:
                quote = await self._fetch_quote(symbol)
                self._record_price(symbol, quote.bid)
            history = self.price_history(symbol)
        if amount is None:
            amount = self._cfg.auto_trade_amount

        placed: list[BinaryTrade] = []
        for name, signal in self._registry.run_active(history, symbol):
            if not signal.is_actionable:
                continue

            if any(
                t.origin_strategy == name for t in self._ledger.open_trades(symbol)
            ):
                logger.debug(
                    "🚫 Señal %s ignorada | %s ya tiene trade abierto en %s",
                    signal.value, name, symbol,
                )
                continue

            await self._publish(StrategySignalled(
                strategy=name, symbol=symbol, signal=signal.value,
            ))
            try:
                trade = await self.place_trade(
                    symbol,
                    signal.to_direction(),
                    amount,
                    expiry_label=self._cfg.strategy_expiry_label,
                    origin_strategy=name,
                )
            except DomainError as exc:
                logger.warning(
                    "⚠️ Orden automática rechazada | strategy=%s sym=%s signal=%s → %s: %s",
                    name, symbol, signal.value, exc.code, exc.message,
                )
                continue
            placed.append(trade)
        return placed

    # ════════════════════════════════════════════════════════════════
    #  5. AGREGADOS
    # ════════════════════════════════════════════════════════════════

    def get_performance_stats(self) -> PerformanceSnapshot:
        return self._stats.compute(self._ledger.history())

    def get_risk_metrics(self) -> RiskSnapshot:
        return self._risk.snapshot(
            self._account,
            self._ledger.open_trades(),
            self._daily_realized_pnl(),
        )

    def _daily_realized_pnl(self) -> float:
        """Profit realizado desde la medianoche UTC del reloj inyectado."""
        now = datetime.fromtimestamp(self._clock.now(), tz=timezone.utc)
        midnight = now.replace(hour=0, minute=0, second=0, microsecond=0)
        return self._ledger.realized_profit_since(midnight.timestamp())

    def get_state(self) -> PlatformStateDTO:
        return PlatformStateDTO(
            balance=self._account.balance,
            active_trades=[t.to_dict() for t in self._ledger.open_trades()],
            trade_history=[t.to_dict() for t in self._ledger.history()],
            user_settings=self._account.settings_dict(),
            performance=self.get_performance_stats().to_dict(),
            risk=self.get_risk_metrics().to_dict(),
            strategy_performance=self._registry.get_all_performance(),
            is_connected=self._source.is_connected,
        )

    def update_user_settings(self, partial: dict) -> dict:
        """
        Aplica una actualización parcial de preferencias.

        Raises:
            InvalidSettingsError (estado sin cambios)
        """
        update = UserSettingsUpdate.parse_partial(partial)
        changes = update.changes()
        self._account.apply_settings(**changes)
        logger.info("⚙️ Preferencias actualizadas | %s", changes)
        return self._account.settings_dict()

    # ════════════════════════════════════════════════════════════════
    #  INTERNOS
    # ════════════════════════════════════════════════════════════════

    def _ensure_subscription(self, symbol: str) -> None:
        if symbol in self._subscriptions:
            return
        self._subscriptions[symbol] = self._source.subscribe(symbol, self.on_price_tick)
        logger.debug("Suscripción creada | sym=%s", symbol)

    def _release_subscription(self, symbol: str) -> None:
        handle = self._subscriptions.pop(symbol, None)
        if handle is not None:
            self._source.unsubscribe(handle)
            logger.debug("Suscripción liberada | sym=%s", symbol)

    async def _publish(self, event: DomainEvent) -> None:
        if self._event_bus is not None:
            await self._event_bus.publish(event)
