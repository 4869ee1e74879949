import pytest

from moneyline_coach.utils import american_to_probability, detect_sport, mask_handle, scrub_url, to_number


@pytest.mark.parametrize(
    "event,tag",
    [
        ("Cowboys vs Giants", "NFL"),
        ("Lakers @ Nuggets", "NBA"),
        ("DODGERS ML", "MLB"),
        ("UFC 300 main event", "UFC"),
        ("Wimbledon final", "Tennis"),
        ("Arsenal v Chelsea", "Other"),
        ("", "Other"),
        (None, "Other"),
    ],
)
def test_detect_sport(event, tag):
    assert detect_sport(event) == tag


def test_detect_sport_first_row_wins():
    # "open" is a tennis keyword but the NFL team matches first
    assert detect_sport("Chiefs open the season") == "NFL"


def test_american_to_probability():
    assert american_to_probability("+150") == pytest.approx(0.4)
    assert american_to_probability(-150) == pytest.approx(0.6)
    assert american_to_probability("even") is None
    assert american_to_probability(None) is None


def test_to_number():
    assert to_number("3") == 3 and isinstance(to_number("3"), int)
    assert to_number("2.5") == 2.5
    assert to_number("abc") == 0
    assert to_number(True) == 0
    assert to_number(None, default=7) == 7


def test_mask_handle():
    assert mask_handle("user@example.com") == "use****@example.com"
    assert mask_handle(None) == "anon"
    assert mask_handle("bob") == "bob****@mail.com"


def test_scrub_url_drops_query():
    assert scrub_url("https://api.test/v4/sports/x/odds/?apiKey=secret") == "https://api.test/v4/sports/x/odds/"
