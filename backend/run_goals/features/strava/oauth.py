"""
Strava OAuth token refresh.

Exchanges a per-user refresh token for a fresh token triple.

Strava rotates refresh tokens: a successful exchange invalidates the old
refresh token. The caller must persist the returned TokenGrant before doing
anything else with it, and must not retry a failed exchange with the same
refresh token.
"""

import logging
from typing import Optional

import httpx
from pydantic import ValidationError

from run_goals.config import settings
from run_goals.features.secrets import Credentials
from run_goals.shared.errors import OAuthClientError, OAuthRejected, OAuthUnreachable
from run_goals.shared.outcome import Outcome
from .schemas import TokenGrant
from .transport import REQUEST_SETUP_ERRORS, response_detail

logger = logging.getLogger(__name__)


class TokenRefresher:
    """
    Strava refresh-token exchange.

    Usage:
        refresher = TokenRefresher()
        result = await refresher.refresh(credentials, user.refresh_token)
        if result.ok:
            grant = result.value
    """

    def __init__(
        self,
        token_url: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        self.token_url = token_url or settings.strava_token_url
        self.timeout = timeout if timeout is not None else settings.strava_timeout_seconds
        self._transport = transport

    async def refresh(self, credentials: Credentials, refresh_token: str) -> Outcome[TokenGrant]:
        """
        Refresh an expired access token.

        Returns:
            Outcome with TokenGrant, or one of
            OAuthRejected / OAuthUnreachable / OAuthClientError
        """
        if not credentials.client_id or not credentials.client_secret:
            return Outcome.failure(OAuthClientError("Client credentials are incomplete"))
        if not refresh_token:
            return Outcome.failure(OAuthClientError("Refresh token is empty"))

        data = {
            "client_id": credentials.client_id,
            "client_secret": credentials.client_secret,
            "refresh_token": refresh_token,
            "grant_type": credentials.grant_type,
        }

        try:
            async with httpx.AsyncClient(transport=self._transport, timeout=self.timeout) as client:
                response = await client.post(self.token_url, data=data)
        except REQUEST_SETUP_ERRORS as e:
            logger.error(f"Strava token refresh could not be sent: {e}")
            return Outcome.failure(OAuthClientError(f"Refresh request setup failed: {e}", detail=str(e)))
        except httpx.RequestError as e:
            logger.warning(f"Strava token endpoint unreachable: {type(e).__name__}")
            return Outcome.failure(OAuthUnreachable("No response received from the token endpoint", detail=str(e)))

        if not response.is_success:
            detail = response_detail(response)
            logger.warning(f"Strava token refresh rejected: {response.status_code}")
            return Outcome.failure(OAuthRejected(
                f"Token refresh failed: {response.status_code}",
                detail=detail,
            ))

        try:
            grant = TokenGrant.model_validate(response.json())
        except (ValueError, ValidationError) as e:
            return Outcome.failure(OAuthRejected(
                "Token refresh returned an unexpected body",
                detail=str(e),
            ))

        return Outcome.success(grant)
