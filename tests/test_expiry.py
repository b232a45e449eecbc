import pytest

from binarydesk.domain.exceptions.domain_errors import InvalidExpiryError
from binarydesk.domain.services.expiry import is_known_label, resolve_expiry


@pytest.mark.parametrize(
    "label, seconds",
    [("30s", 30.0), ("1m", 60.0), ("5m", 300.0), ("15m", 900.0), ("1h", 3600.0)],
)
def test_known_labels(label, seconds):
    assert resolve_expiry(label) == (label, seconds)


def test_labels_are_case_insensitive():
    assert resolve_expiry(" 5M ") == ("5m", 300.0)
    assert is_known_label("1H")


def test_unknown_label_falls_back_to_one_minute():
    assert resolve_expiry("45m") == ("1m", 60.0)


def test_unknown_label_rejected_in_strict_mode():
    with pytest.raises(InvalidExpiryError) as exc:
        resolve_expiry("2d", strict=True)
    assert exc.value.code == "INVALID_EXPIRY"
