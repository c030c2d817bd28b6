"""
Strava integration module.

Usage:
    from run_goals.features.strava import TokenRefresher, StravaApiClient

Components:
- TokenRefresher: refresh-token exchange against /oauth/token
- StravaApiClient: authenticated API client (stats, athlete)

Schemas:
- TokenGrant: refreshed token triple
- StatsResult: running totals in miles
"""

from .client import StravaApiClient
from .oauth import TokenRefresher
from .schemas import StatsResult, TokenGrant

__all__ = [
    "StravaApiClient",
    "TokenRefresher",
    "StatsResult",
    "TokenGrant",
]
