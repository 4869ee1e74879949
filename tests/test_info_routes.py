from unittest.mock import patch

import pytest
import requests

from conftest import FakeResponse
from moneyline_coach.app import create_app
from moneyline_coach.discord import DiscordNotifier
from moneyline_coach.errors import FeedError
from moneyline_coach.sports_feed import SportsFeed, odds_sport_key


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    data = response.get_json()
    assert data["ok"] is True
    assert data["store"] == "memory"
    assert "ts" in data


def test_share_discord_without_webhook(client):
    response = client.post("/share-discord", json={"text": "hi"})
    assert response.status_code == 200
    assert response.get_json() == {"ok": False, "message": "No webhook set"}


@pytest.fixture
def discord_client(settings, store, completion):
    app = create_app(
        settings,
        store=store,
        completion_client=completion,
        discord_notifier=DiscordNotifier("https://discord.test/hook"),
    )
    app.testing = True
    with app.test_client() as client:
        yield client


def test_share_discord_posts_truncated_text(discord_client):
    with patch("moneyline_coach.discord.requests.post", return_value=FakeResponse(204)) as post:
        response = discord_client.post("/share-discord", json={"text": "x" * 2500})
    assert response.get_json() == {"ok": True}
    sent = post.call_args.kwargs["json"]["content"]
    assert len(sent) == 1800


def test_share_discord_empty_text_sends_ellipsis(discord_client):
    with patch("moneyline_coach.discord.requests.post", return_value=FakeResponse(204)) as post:
        discord_client.post("/share-discord", json={})
    assert post.call_args.kwargs["json"] == {"content": "..."}


def test_share_discord_rejection_is_400(discord_client):
    with patch("moneyline_coach.discord.requests.post", return_value=FakeResponse(400, text="Bad webhook")):
        response = discord_client.post("/share-discord", json={"text": "hi"})
    assert response.status_code == 400
    assert response.get_json() == {"ok": False, "error": "Bad webhook"}


def test_leaderboard_sums_anon_units(client, store):
    for units in (1, 2.5, 0):
        store.create("anon", {"event": "e", "market": "m", "odds": "+100", "units": units})
    store.create("someone", {"event": "e", "market": "m", "odds": "+100", "units": 50})
    board = client.get("/leaderboard").get_json()["leaderboard"]
    assert board == [{"nickname": "use****@example.com", "totalUnits": 3.5, "streak": 3}]


def test_odds_sport_key_mapping():
    assert odds_sport_key("cfb") == "americanfootball_ncaaf"
    assert odds_sport_key("wnba") == "wnba"


def _fake_get(url, timeout=None, headers=None, params=None):
    if "sdio.test" in url:
        sport = url.split("/")[-4]
        return FakeResponse(200, [{"Key": sport.upper()}])
    return FakeResponse(200, [{"sport_key": url.split("/")[-3]}])


def test_sports_feed_merges_by_sport(settings):
    feed = SportsFeed(settings, request_callable=_fake_get)
    merged = feed.aggregate(["nfl", "nba"])
    assert merged == [
        {"sport": "nfl", "teams": [{"Key": "NFL"}], "odds": [{"sport_key": "americanfootball_nfl"}]},
        {"sport": "nba", "teams": [{"Key": "NBA"}], "odds": [{"sport_key": "basketball_nba"}]},
    ]


def test_sports_feed_sends_credentials(settings):
    calls = []

    def recording_get(url, **kwargs):
        calls.append((url, kwargs))
        return _fake_get(url, **kwargs)

    SportsFeed(settings, request_callable=recording_get).aggregate(["mlb"])
    by_host = {("sdio" if "sdio.test" in url else "odds"): kwargs for url, kwargs in calls}
    assert by_host["sdio"]["headers"] == {"Ocp-Apim-Subscription-Key": "sdio-key"}
    assert by_host["odds"]["params"] == {"regions": "us", "markets": "h2h,spreads,totals", "apiKey": "odds-key"}


def test_sports_feed_failure_raises(settings):
    def failing_get(url, **kwargs):
        if "basketball_nba" in url:
            return FakeResponse(401, text="bad key")
        return _fake_get(url, **kwargs)

    with pytest.raises(FeedError) as err:
        SportsFeed(settings, request_callable=failing_get).aggregate(["nfl", "nba"])
    assert err.value.message == "The Odds API error for nba"


def test_sports_route_failure_is_500(settings, store, completion):
    def timeout_get(url, **kwargs):
        raise requests.Timeout("slow")

    app = create_app(
        settings,
        store=store,
        completion_client=completion,
        discord_notifier=DiscordNotifier(None),
        sports_feed=SportsFeed(settings, request_callable=timeout_get),
    )
    response = app.test_client().get("/sports")
    assert response.status_code == 500
    payload = response.get_json()
    assert payload["success"] is False
    assert "error" in payload


def test_sports_route_success(settings, store, completion):
    app = create_app(
        settings,
        store=store,
        completion_client=completion,
        discord_notifier=DiscordNotifier(None),
        sports_feed=SportsFeed(settings, request_callable=_fake_get),
    )
    payload = app.test_client().get("/api/sports").get_json()
    assert payload["success"] is True
    assert [entry["sport"] for entry in payload["data"]] == ["nfl", "nba", "mlb", "nhl", "cfb", "cbb"]
