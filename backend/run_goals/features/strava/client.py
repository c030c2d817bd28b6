"""
Strava API client.

Every authenticated call goes through StravaApiClient.request(), which
classifies failures into exactly three kinds, in priority order:

1. UpstreamRejected: Strava responded with an error status
2. UpstreamUnreachable: request sent, no response (timeout, reset, DNS)
3. RequestSetupError: request could not be constructed or dispatched

The client is stateless per call: athlete id and access token are call
parameters, credentials are never stored on it.
"""

import logging
from typing import Any, Optional

import httpx
from pydantic import ValidationError

from run_goals.config import settings
from run_goals.shared.errors import RequestSetupError, UpstreamRejected, UpstreamUnreachable
from run_goals.shared.outcome import Outcome
from .schemas import StatsResult
from .transport import REQUEST_SETUP_ERRORS, response_detail

logger = logging.getLogger(__name__)


class StravaApiClient:
    """
    Async client for the Strava API.

    Usage:
        client = StravaApiClient()
        result = await client.get_user_stats(athlete_id, access_token)
    """

    def __init__(
        self,
        api_url: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        self.api_url = (api_url or settings.strava_api_url).rstrip("/")
        self.timeout = timeout if timeout is not None else settings.strava_timeout_seconds
        self._transport = transport

    async def request(
        self,
        method: str,
        endpoint: str,
        access_token: str,
        params: Optional[dict] = None
    ) -> Outcome[Any]:
        """
        Make an authenticated API request.

        Returns:
            Outcome with the decoded JSON body
        """
        if not access_token:
            return Outcome.failure(RequestSetupError("Access token is empty"))

        try:
            async with httpx.AsyncClient(transport=self._transport, timeout=self.timeout) as client:
                response = await client.request(
                    method=method,
                    url=f"{self.api_url}{endpoint}",
                    headers={"Authorization": f"Bearer {access_token}"},
                    params=params
                )
        except REQUEST_SETUP_ERRORS as e:
            logger.error(f"Strava request setup failed for {endpoint}: {e}")
            return Outcome.failure(RequestSetupError(str(e), detail=type(e).__name__))
        except httpx.RequestError as e:
            logger.warning(f"No response from Strava for {endpoint}: {type(e).__name__}")
            return Outcome.failure(UpstreamUnreachable(
                "No response received from the server.",
                detail=str(e),
            ))

        if "X-RateLimit-Limit" in response.headers:
            logger.debug(
                f"Strava rate limit: {response.headers.get('X-RateLimit-Usage')} "
                f"/ {response.headers.get('X-RateLimit-Limit')}"
            )

        if not response.is_success:
            return Outcome.failure(UpstreamRejected(
                f"API error: {response.status_code}",
                detail=response_detail(response),
                status_code=response.status_code,
            ))

        try:
            return Outcome.success(response.json())
        except ValueError:
            return Outcome.failure(UpstreamRejected(
                "API returned a body that is not JSON",
                detail=response.text[:200],
                status_code=response.status_code,
            ))

    async def get_athlete(self, access_token: str) -> Outcome[dict]:
        """Get authenticated athlete profile."""
        return await self.request("GET", "/athlete", access_token)

    async def get_user_stats(self, athlete_id: int, access_token: str) -> Outcome[StatsResult]:
        """
        Get running totals for an athlete.

        Returns:
            Outcome with StatsResult (miles)
        """
        if not isinstance(athlete_id, int) or isinstance(athlete_id, bool) or athlete_id <= 0:
            return Outcome.failure(RequestSetupError(f"Invalid athlete id: {athlete_id!r}"))

        result = await self.request("GET", f"/athletes/{athlete_id}/stats", access_token)
        if not result.ok:
            return result

        if not isinstance(result.value, dict):
            return Outcome.failure(UpstreamRejected("Stats response is not an object", detail=result.value))

        try:
            stats = StatsResult.from_strava(result.value)
        except (TypeError, ValueError, ValidationError) as e:
            logger.warning(f"Unexpected stats payload for athlete {athlete_id}: {e}")
            return Outcome.failure(UpstreamRejected(
                "Stats response has an unexpected shape",
                detail=str(e),
                status_code=200,
            ))
        return Outcome.success(stats)
