"""
Fixtures compartidas.

Todo corre contra un VirtualClock y símbolos con volatilidad cero y
spread cero: el bid de cada cotización es exactamente el precio base.
"""

import pytest
import pytest_asyncio

from binarydesk.infrastructure.clock import VirtualClock
from binarydesk.infrastructure.external.event_bus import EventBus
from tests.helpers import START, make_platform, make_settings, make_source


@pytest.fixture
def clock():
    return VirtualClock(start=START)


@pytest.fixture
def settings():
    return make_settings()


@pytest.fixture
def source(clock):
    return make_source(clock)


@pytest.fixture
def event_bus():
    return EventBus(max_queue_size=100)


@pytest.fixture
def platform(source, clock, settings, event_bus):
    return make_platform(source, clock, settings, event_bus)


@pytest_asyncio.fixture
async def connected(platform):
    await platform.init()
    yield platform
    await platform.disconnect()
