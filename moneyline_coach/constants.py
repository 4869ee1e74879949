"""Centralized constants for the Moneyline Coach API."""

# Cookie carrying the client-side pseudo identity
USER_KEY_COOKIE = "mlh_user_key"
DEFAULT_USER_KEY = "anon"

# Remote KV layout: one JSON blob per owner
KV_KEY_PREFIX = "mlh:bets:"

BET_RESULTS = ("win", "loss", "push")

# Sport detection: first row whose keyword appears in the event text wins
SPORT_KEYWORDS = (
    ("NFL", ("nfl", "ravens", "eagles", "chiefs", "cowboys")),
    ("NBA", ("nba", "lakers", "celtics", "warriors", "knicks")),
    ("MLB", ("mlb", "yankees", "dodgers", "braves", "astros")),
    ("UFC", ("ufc", "mma", "bellator")),
    ("Tennis", ("atp", "wta", "wimbledon", "us open", "roland", "open")),
)
SPORT_OTHER = "Other"

# Sports covered by the /sports aggregation
SPORTS = ("nfl", "nba", "mlb", "nhl", "cfb", "cbb")

# Map sport code -> The Odds API sport key
ODDS_API_SPORT_KEYS = {
    "nfl": "americanfootball_nfl",
    "nba": "basketball_nba",
    "mlb": "baseball_mlb",
    "nhl": "icehockey_nhl",
    "cfb": "americanfootball_ncaaf",
    "cbb": "basketball_ncaab",
}

ODDS_API_REGIONS = "us"
ODDS_API_MARKETS = "h2h,spreads,totals"

# Coach defaults
DEFAULT_PERSONA = "sharp"
DEFAULT_RISK_TAG = "balanced"
RISK_TAGS = ("cautious", "balanced", "aggressive")

# Labels of the fenced JSON blocks the coach asks the model to emit
RECEIPTS_LABEL = "RECEIPTS"
SUGGESTED_BET_LABEL = "SUGGESTED_BET"

DEFAULT_CHECKLIST_TOPIC = "NFL Totals"
