"""SyntheticPriceSource: cotizaciones, suscripciones y timers del feed."""

import random

import pytest

from binarydesk.domain.exceptions.domain_errors import NotConnectedError, UnknownSymbolError
from binarydesk.domain.value_objects.quote import Quote
from binarydesk.infrastructure.external.synthetic_price_source import (
    DEFAULT_CATALOGUE,
    SyntheticPriceSource,
)
from tests.helpers import ALT_SYMBOL, START, SYMBOL, make_source


@pytest.mark.asyncio
async def test_quote_requires_connection(source):
    with pytest.raises(NotConnectedError):
        await source.quote(SYMBOL)


@pytest.mark.asyncio
async def test_unknown_symbol(source):
    await source.connect()
    with pytest.raises(UnknownSymbolError):
        await source.quote("XXX/YYY")
    with pytest.raises(UnknownSymbolError):
        source.subscribe("XXX/YYY", lambda q: None)


@pytest.mark.asyncio
async def test_quote_spread_and_timestamp(clock):
    source = make_source(clock, half_spread=0.5)
    await source.connect()
    quote = await source.quote(SYMBOL)
    assert quote.bid == pytest.approx(99.5)
    assert quote.ask == pytest.approx(100.5)
    assert quote.mid == pytest.approx(100.0)
    assert quote.timestamp == START


@pytest.mark.asyncio
async def test_quotes_stay_within_volatility(clock):
    source = SyntheticPriceSource(clock, half_spread=0.0001, rng=random.Random(42))
    await source.connect()
    for _ in range(50):
        quote = await source.quote("EUR/USD")
        assert 1.0854 - 0.0002 - 0.0001 <= quote.bid
        assert quote.ask <= 1.0854 + 0.0002 + 0.0001
        assert quote.ask >= quote.bid


def test_default_catalogue(clock):
    source = SyntheticPriceSource(clock)
    symbols = {s["symbol"]: s for s in source.list_symbols()}
    assert set(symbols) == {s.symbol for s in DEFAULT_CATALOGUE}
    assert symbols["Gold"]["type"] == "commodity"
    assert symbols["BTC/USD"]["base_price"] == 61520.0


@pytest.mark.asyncio
async def test_one_timer_per_symbol(source, clock):
    await source.connect()
    received = []
    h1 = source.subscribe(SYMBOL, received.append)
    h2 = source.subscribe(SYMBOL, received.append)
    source.subscribe(ALT_SYMBOL, received.append)

    assert source.active_timer_count == 2
    assert source.subscriber_count(SYMBOL) == 2

    clock.advance(1.0)
    delivered = await source.poll(clock.now())

    # una cotización por símbolo, entregada a cada callback
    assert delivered == 2
    assert len(received) == 3
    test_quotes = [q for q in received if q.symbol == SYMBOL]
    assert test_quotes[0] is test_quotes[1]

    source.unsubscribe(h1)
    assert source.active_timer_count == 2
    source.unsubscribe(h2)
    assert source.active_timer_count == 1


@pytest.mark.asyncio
async def test_unsubscribe_is_idempotent(source):
    await source.connect()
    handle = source.subscribe(SYMBOL, lambda q: None)
    source.unsubscribe(handle)
    source.unsubscribe(handle)
    assert source.active_timer_count == 0


@pytest.mark.asyncio
async def test_poll_only_fires_due_timers(source, clock):
    await source.connect()
    received = []
    source.subscribe(SYMBOL, received.append)

    assert await source.poll(clock.now()) == 0
    clock.advance(0.5)
    assert await source.poll(clock.now()) == 0
    clock.advance(0.5)
    assert await source.poll(clock.now()) == 1
    # re-agendado a now + intervalo, sin ráfaga de recuperación
    clock.advance(10.0)
    assert await source.poll(clock.now()) == 1
    assert len(received) == 2


@pytest.mark.asyncio
async def test_async_callbacks_are_awaited(source, clock):
    await source.connect()
    received = []

    async def on_tick(quote: Quote):
        received.append(quote.bid)

    source.subscribe(SYMBOL, on_tick)
    clock.advance(1.0)
    await source.poll(clock.now())
    assert received == [100.0]


@pytest.mark.asyncio
async def test_failing_callback_does_not_stop_delivery(source, clock):
    await source.connect()
    received = []

    def boom(quote):
        raise RuntimeError("boom")

    source.subscribe(SYMBOL, boom)
    source.subscribe(SYMBOL, received.append)
    clock.advance(1.0)
    assert await source.poll(clock.now()) == 1
    assert len(received) == 1


@pytest.mark.asyncio
async def test_disconnect_stops_everything(source, clock):
    await source.connect()
    received = []
    source.subscribe(SYMBOL, received.append)
    source.subscribe(ALT_SYMBOL, received.append)

    source.disconnect()

    assert not source.is_connected
    assert source.active_timer_count == 0
    assert source.subscriber_count(SYMBOL) == 0
    clock.advance(5.0)
    assert await source.poll(clock.now()) == 0
    assert received == []


@pytest.mark.asyncio
async def test_register_symbol_and_set_base_price(source):
    await source.connect()
    source.register_symbol("NEW/USD", 10.0, 0.0, name="New pair")
    assert (await source.quote("NEW/USD")).bid == pytest.approx(10.0)

    source.set_base_price("NEW/USD", 12.5)
    assert (await source.quote("NEW/USD")).bid == pytest.approx(12.5)

    with pytest.raises(UnknownSymbolError):
        source.set_base_price("XXX/YYY", 1.0)


def test_catalogue_is_copied_per_instance(clock):
    a = SyntheticPriceSource(clock)
    b = SyntheticPriceSource(clock)
    a.set_base_price("Gold", 1.0)
    gold = {s["symbol"]: s for s in b.list_symbols()}["Gold"]
    assert gold["base_price"] == 2185.40
