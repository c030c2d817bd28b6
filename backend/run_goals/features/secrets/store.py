"""
Credential store adapters.

A credential store returns an opaque secret blob by name, or None when the
secret does not exist. Transport/auth failures are raised and classified by
SecretProvider.

Adapters:
- SettingsSecretStore: reads the blob from application settings (env/.env)
- HttpSecretStore: fetches the blob from an internal secret API
"""

import json
import logging
from typing import Optional, Protocol

import httpx

from run_goals.config import Settings, settings as default_settings

logger = logging.getLogger(__name__)


class CredentialStore(Protocol):
    """Returns secret blobs by name."""

    async def get(self, name: str) -> Optional[str]:
        ...


class SettingsSecretStore:
    """
    Serves the Strava secret from settings.

    `STRAVA_CREDENTIALS_JSON` wins over the discrete
    `STRAVA_CLIENT_ID` / `STRAVA_CLIENT_SECRET` pair.
    """

    def __init__(self, config: Optional[Settings] = None):
        self.config = config or default_settings

    async def get(self, name: str) -> Optional[str]:
        if name != self.config.strava_secret_name:
            return None

        if self.config.strava_credentials_json:
            return self.config.strava_credentials_json

        if self.config.strava_client_id or self.config.strava_client_secret:
            return json.dumps({
                "client_id": self.config.strava_client_id,
                "client_secret": self.config.strava_client_secret,
                "grant_type": "refresh_token",
            })

        return None


class HttpSecretStore:
    """
    Gets secrets through the internal secret API.

    GET {api_url}/secrets/{name} with X-API-Key header.
    - 200: response body is the secret blob
    - 404: secret does not exist
    - anything else: raises httpx.HTTPStatusError
    """

    def __init__(
        self,
        api_url: str,
        api_key: str,
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        self.api_url = api_url.rstrip("/")
        self.api_key = api_key
        self.timeout = timeout
        self._transport = transport

    async def get(self, name: str) -> Optional[str]:
        async with httpx.AsyncClient(transport=self._transport, timeout=self.timeout) as client:
            response = await client.get(
                f"{self.api_url}/secrets/{name}",
                headers={"X-API-Key": self.api_key},
            )

        if response.status_code == 404:
            logger.debug("Secret %s not found in secret store", name)
            return None

        response.raise_for_status()
        return response.text


def get_credential_store(config: Optional[Settings] = None) -> CredentialStore:
    """Pick the store adapter from settings."""
    config = config or default_settings
    if config.secret_store_url and config.internal_api_key:
        return HttpSecretStore(
            api_url=config.secret_store_url,
            api_key=config.internal_api_key,
            timeout=config.strava_timeout_seconds,
        )
    return SettingsSecretStore(config)
