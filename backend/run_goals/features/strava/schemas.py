"""
Strava payload schemas.

Schemas:
- TokenGrant: token triple returned by the OAuth refresh exchange
- StatsResult: running totals for one athlete, in miles
"""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict

from run_goals.shared.constants import meters_to_miles


class TokenGrant(BaseModel):
    """Fresh token triple from /oauth/token."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    access_token: str
    refresh_token: str
    expires_at: int

    def __repr__(self) -> str:
        return f"TokenGrant(expires_at={self.expires_at})"


class StatsResult(BaseModel):
    """
    Running totals for one athlete.

    All distances are miles. None means Strava returned no totals block.
    """

    model_config = ConfigDict(frozen=True)

    recent_run_totals: Optional[float] = None
    all_run_totals: Optional[float] = None
    ytd_run_totals: Optional[float] = None

    @classmethod
    def from_strava(cls, payload: dict) -> "StatsResult":
        """
        Build from a /athletes/{id}/stats response.

        Strava shape:
            {"recent_run_totals": {"distance": 12345.6, "count": 3, ...},
             "all_run_totals": {...}, "ytd_run_totals": {...}}

        `distance` is meters and is converted to miles here.
        """
        return cls(
            recent_run_totals=_distance_miles(payload.get("recent_run_totals")),
            all_run_totals=_distance_miles(payload.get("all_run_totals")),
            ytd_run_totals=_distance_miles(payload.get("ytd_run_totals")),
        )


def _distance_miles(totals: Any) -> Optional[float]:
    if not isinstance(totals, dict):
        return None
    distance = totals.get("distance")
    if distance is None:
        return None
    return meters_to_miles(float(distance))
