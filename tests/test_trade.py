"""BinaryTrade: reglas de resultado y transiciones de estado."""

import pytest

from binarydesk.domain.entities.trade import BinaryTrade, TradeStatus
from binarydesk.domain.exceptions.domain_errors import InvalidTradeError
from binarydesk.domain.value_objects.signal import Direction


def make_trade(direction=Direction.CALL, amount=100.0, entry=1.0850):
    return BinaryTrade(
        symbol="EUR/USD",
        direction=direction,
        amount=amount,
        entry_price=entry,
        opened_at=0.0,
        expiry_at=60.0,
        payout_multiplier=1.85,
    )


def test_id_format():
    trade = make_trade()
    assert trade.id.startswith("BIN_")
    assert len(trade.id) == 16
    int(trade.id[4:], 16)


def test_call_wins_above_entry():
    trade = make_trade()
    assert trade.settle(1.0851, 60.0) == TradeStatus.WON
    assert trade.profit == pytest.approx(85.0)
    assert trade.payout == pytest.approx(185.0)


def test_put_wins_below_entry():
    trade = make_trade(Direction.PUT)
    assert trade.settle(1.0849, 60.0) == TradeStatus.WON
    assert trade.profit == pytest.approx(85.0)


@pytest.mark.parametrize("direction", [Direction.CALL, Direction.PUT])
def test_tie_loses(direction):
    trade = make_trade(direction)
    assert trade.settle(1.0850, 60.0) == TradeStatus.LOST
    assert trade.profit == pytest.approx(-100.0)


def test_mark_updates_potential_profit():
    trade = make_trade(Direction.PUT)
    assert trade.mark(1.0840)
    assert trade.current_mark_price == 1.0840
    assert trade.potential_profit == pytest.approx(85.0)
    trade.mark(1.0860)
    assert trade.potential_profit == pytest.approx(-100.0)


def test_settled_trade_is_immutable():
    trade = make_trade()
    trade.settle(1.0860, 60.0)
    assert not trade.mark(1.0)
    assert trade.current_mark_price is None
    with pytest.raises(InvalidTradeError):
        trade.settle(1.0, 61.0)
    with pytest.raises(InvalidTradeError):
        trade.settle_degraded(61.0)


def test_degraded_settlement_is_a_loss_without_exit_price():
    trade = make_trade()
    assert trade.settle_degraded(60.0) == TradeStatus.LOST
    assert trade.exit_price is None
    assert trade.profit == pytest.approx(-100.0)
    assert trade.settlement_degraded
    assert trade.to_dict()["settlement_degraded"] is True


def test_to_dict_serializes_enums():
    data = make_trade(Direction.PUT).to_dict()
    assert data["direction"] == "put"
    assert data["status"] == "active"
    assert data["profit"] is None
