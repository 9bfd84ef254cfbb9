"""Fixed rating-engine constants."""

from __future__ import annotations

# Players below this many games get a boosted K-modifier.
GAMES_CUTOFF = 30
# Flat boost used for lifetime ratings; season ratings decay linearly from 2x to 1x instead.
LIFETIME_BOOST = 2.0
SCALE_FACTOR = 400.0

# Winning score is clamped to this before it is used as the K-factor.
CAP_POINTS = 21

SEED_RATING = 1500
SEED_GAMES = 0

FAVORITE_MIN_WIN_PROBABILITY = 0.55

MIN_PARTNER_GAMES = 3
MIN_WINRATE_GAMES = 5
RECENT_FORM_LIMIT = 6

# Inverted on purpose so the first day boundary always overwrites them.
PLACE_HIGHEST_SEED = 100
PLACE_LOWEST_SEED = 0
RATING_HIGHEST_SEED = 0
RATING_LOWEST_SEED = 2000

__all__ = [
    "CAP_POINTS",
    "FAVORITE_MIN_WIN_PROBABILITY",
    "GAMES_CUTOFF",
    "LIFETIME_BOOST",
    "MIN_PARTNER_GAMES",
    "MIN_WINRATE_GAMES",
    "PLACE_HIGHEST_SEED",
    "PLACE_LOWEST_SEED",
    "RATING_HIGHEST_SEED",
    "RATING_LOWEST_SEED",
    "RECENT_FORM_LIMIT",
    "SCALE_FACTOR",
    "SEED_GAMES",
    "SEED_RATING",
]
