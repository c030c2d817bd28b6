"""
Error taxonomy.

These exceptions are carried inside an Outcome and are not raised across
component boundaries. Each one exposes `kind` (stable name used in logs and
API responses), a human-readable message and an optional `detail` payload
(upstream error body, native store error, ...).

Hierarchy:
- RunGoalsError
  - SecretError: SecretUnavailable, SecretMalformed, SecretStoreError
  - OAuthError: OAuthRejected, OAuthUnreachable, OAuthClientError
  - UpstreamError: UpstreamRejected, UpstreamUnreachable, RequestSetupError
  - RepositoryError
"""

from typing import Any, Optional


class RunGoalsError(Exception):
    """Base error."""

    kind = "RunGoalsError"

    def __init__(self, message: str, detail: Any = None):
        super().__init__(message)
        self.message = message
        self.detail = detail

    def __repr__(self) -> str:
        return f"{self.kind}({self.message!r})"

    def to_dict(self) -> dict:
        return {"error": self.kind, "detail": self.message}


# =============================================================================
# Secret Provider
# =============================================================================

class SecretError(RunGoalsError):
    """Credentials could not be loaded."""
    kind = "SecretError"


class SecretUnavailable(SecretError):
    """Store returned no payload."""
    kind = "SecretUnavailable"


class SecretMalformed(SecretError):
    """Payload could not be parsed into credentials."""
    kind = "SecretMalformed"


class SecretStoreError(SecretError):
    """Store itself failed (transport/auth)."""
    kind = "SecretStoreError"


# =============================================================================
# Token Refresher
# =============================================================================

class OAuthError(RunGoalsError):
    """Token refresh failed."""
    kind = "OAuthError"


class OAuthRejected(OAuthError):
    """Strava answered with an error body (expired, invalid, revoked)."""
    kind = "OAuthRejected"


class OAuthUnreachable(OAuthError):
    """No response from the token endpoint."""
    kind = "OAuthUnreachable"


class OAuthClientError(OAuthError):
    """Refresh request could not be constructed."""
    kind = "OAuthClientError"


# =============================================================================
# Stats Fetcher
# =============================================================================

class UpstreamError(RunGoalsError):
    """Authenticated Strava API call failed."""
    kind = "UpstreamError"


class UpstreamRejected(UpstreamError):
    """Strava responded with an error status."""

    kind = "UpstreamRejected"

    def __init__(self, message: str, detail: Any = None, status_code: Optional[int] = None):
        super().__init__(message, detail)
        self.status_code = status_code


class UpstreamUnreachable(UpstreamError):
    """Request sent, no response received."""
    kind = "UpstreamUnreachable"


class RequestSetupError(UpstreamError):
    """Request could not be constructed or dispatched."""
    kind = "RequestSetupError"


# =============================================================================
# User Repository
# =============================================================================

class RepositoryError(RunGoalsError):
    """User directory store failed. `detail` holds the native error."""
    kind = "RepositoryError"
