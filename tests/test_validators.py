import pytest

from moneyline_coach.errors import ValidationError
from moneyline_coach.validators import validate_bet_patch, validate_bet_payload, validate_units


def test_validate_bet_payload_ok():
    fields = validate_bet_payload({"event": "Ravens @ Bengals", "market": "Ravens -2.5", "odds": "-115"})
    assert fields == {
        "event": "Ravens @ Bengals",
        "market": "Ravens -2.5",
        "odds": "-115",
        "units": 0,
        "sportTag": None,
    }


@pytest.mark.parametrize(
    "body",
    [
        None,
        [],
        {"market": "m", "odds": "+100"},
        {"event": "e", "market": "m", "odds": -110},
        {"event": "", "market": "m", "odds": "+100"},
        {"event": "e", "market": "   ", "odds": "+100"},
        {"event": "e", "market": "m", "odds": "+100", "sportTag": 5},
    ],
)
def test_validate_bet_payload_rejects(body):
    with pytest.raises(ValidationError):
        validate_bet_payload(body)


def test_validate_units_coerces():
    assert validate_units() == 0
    assert validate_units(None) == 0
    assert validate_units(1.5) == 1.5
    assert validate_units(" 2 ") == 2
    for bad in ("two", True, {"u": 1}):
        with pytest.raises(ValidationError):
            validate_units(bad)


def test_validate_bet_patch_keeps_result_and_clv_only():
    assert validate_bet_patch({"result": "WIN", "clv": -0.8, "event": "x"}) == {"result": "win", "clv": -0.8}
    assert validate_bet_patch({}) == {}


def test_validate_bet_patch_rejects_bad_values():
    with pytest.raises(ValidationError):
        validate_bet_patch({"result": "draw"})
    with pytest.raises(ValidationError):
        validate_bet_patch({"clv": "big"})
