"""Teams (SportsDataIO) + lines (The Odds API) per sport, merged by sport code."""
from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from typing import Any, Callable, Dict, Iterable, List, Optional

import requests

from .config import setup_logger
from .constants import ODDS_API_MARKETS, ODDS_API_REGIONS, ODDS_API_SPORT_KEYS, SPORTS
from .errors import FeedError
from .settings import Settings
from .utils import scrub_url

logger = setup_logger(__name__)


def odds_sport_key(sport: str) -> str:
    """Map sport code -> The Odds API sport key (unknown codes pass through)."""
    return ODDS_API_SPORT_KEYS.get(sport, sport)


class SportsFeed:
    def __init__(
        self,
        settings: Settings,
        *,
        request_callable: Optional[Callable[..., requests.Response]] = None,
        max_workers: int = 6,
    ) -> None:
        self.settings = settings
        self.request_fn = request_callable or requests.get
        self.max_workers = max_workers

    def _get_json(self, source: str, url: str, **kwargs: Any) -> Any:
        try:
            response = self.request_fn(url, timeout=self.settings.api_timeout, **kwargs)
        except requests.Timeout as exc:
            raise FeedError(source, "TIMEOUT", f"{source} request timed out", str(exc)) from exc
        except requests.RequestException as exc:
            raise FeedError(source, "NETWORK_ERROR", f"{source} request failed", str(exc)) from exc
        if response.status_code != 200:
            logger.warning("%s %s -> %s", source, scrub_url(url), response.status_code)
            raise FeedError(source, f"HTTP_{response.status_code}", f"{source} error")
        try:
            return response.json()
        except ValueError as exc:
            raise FeedError(source, "BAD_RESPONSE", f"{source} returned non-JSON body") from exc

    def fetch_teams(self, sport: str) -> Any:
        base = self.settings.sportsdataio_base_url
        if not base:
            raise FeedError("SportsDataIO", "NOT_CONFIGURED", "SPORTSDATAIO_BASE_URL is not set")
        try:
            return self._get_json(
                "SportsDataIO",
                f"{base}/{sport}/scores/json/Teams",
                headers={"Ocp-Apim-Subscription-Key": self.settings.sportsdataio_api_key or ""},
            )
        except FeedError as exc:
            exc.message = f"SportsDataIO error for {sport}"
            raise

    def fetch_odds(self, sport: str) -> Any:
        base = self.settings.odds_api_base_url
        try:
            return self._get_json(
                "OddsAPI",
                f"{base}/sports/{odds_sport_key(sport)}/odds/",
                params={
                    "regions": ODDS_API_REGIONS,
                    "markets": ODDS_API_MARKETS,
                    "apiKey": self.settings.odds_api_key or "",
                },
            )
        except FeedError as exc:
            exc.message = f"The Odds API error for {sport}"
            raise

    def aggregate(self, sports: Iterable[str] = SPORTS) -> List[Dict[str, Any]]:
        """Fetch both feeds for every sport concurrently; any failure fails the whole call."""
        sports = list(sports)
        with ThreadPoolExecutor(max_workers=self.max_workers) as pool:
            team_futures = {sport: pool.submit(self.fetch_teams, sport) for sport in sports}
            odds_futures = {sport: pool.submit(self.fetch_odds, sport) for sport in sports}
            teams = {sport: future.result() for sport, future in team_futures.items()}
            odds = {sport: future.result() for sport, future in odds_futures.items()}

        logger.info("sports_feed merged sports=%s", ",".join(sports))
        return [
            {
                "sport": sport,
                "teams": teams.get(sport) or [],
                "odds": odds.get(sport) or [],
            }
            for sport in sports
        ]
