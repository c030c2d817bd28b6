"""
Tests for SecretProvider and the credential store adapters.
"""

import json

import httpx
import pytest

from run_goals.config import Settings
from run_goals.features.secrets import (
    Credentials,
    HttpSecretStore,
    SecretProvider,
    SettingsSecretStore,
    get_credential_store,
)
from run_goals.shared.errors import SecretMalformed, SecretStoreError, SecretUnavailable

from fakes import CREDENTIALS_BLOB, FakeCredentialStore


def _settings(**overrides) -> Settings:
    values = {
        "strava_client_id": None,
        "strava_client_secret": None,
        "strava_credentials_json": None,
        "secret_store_url": None,
        "internal_api_key": None,
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


# =============================================================================
# SecretProvider
# =============================================================================

class TestSecretProvider:

    @pytest.mark.asyncio
    async def test_loads_credentials(self):
        store = FakeCredentialStore()
        result = await SecretProvider(store).load_credentials("strava")

        assert result.ok
        assert result.value == Credentials(client_id="12345", client_secret="shh")
        assert result.value.grant_type == "refresh_token"
        assert store.requested == ["strava"]

    @pytest.mark.asyncio
    @pytest.mark.parametrize("blob", [None, ""])
    async def test_missing_payload_is_unavailable(self, blob):
        result = await SecretProvider(FakeCredentialStore(blob=blob)).load_credentials("strava")

        assert not result.ok
        assert isinstance(result.error, SecretUnavailable)
        assert result.value is None

    @pytest.mark.asyncio
    @pytest.mark.parametrize("blob", [
        "not json",
        "[1, 2, 3]",
        json.dumps({"client_id": "1"}),
        json.dumps({"client_id": "", "client_secret": "x"}),
    ])
    async def test_bad_payload_is_malformed(self, blob):
        result = await SecretProvider(FakeCredentialStore(blob=blob)).load_credentials("strava")

        assert isinstance(result.error, SecretMalformed)

    @pytest.mark.asyncio
    async def test_store_failure_is_store_error(self):
        cause = PermissionError("access denied")
        result = await SecretProvider(FakeCredentialStore(error=cause)).load_credentials("strava")

        assert isinstance(result.error, SecretStoreError)
        assert result.error.detail is cause
        assert result.error.__cause__ is cause

    def test_credentials_repr_hides_secret(self):
        creds = Credentials(client_id="1", client_secret="top-secret")
        assert "top-secret" not in repr(creds)


# =============================================================================
# SettingsSecretStore
# =============================================================================

class TestSettingsSecretStore:

    @pytest.mark.asyncio
    async def test_json_blob_wins(self):
        store = SettingsSecretStore(_settings(
            strava_credentials_json=CREDENTIALS_BLOB,
            strava_client_id="other",
        ))
        assert await store.get("strava") == CREDENTIALS_BLOB

    @pytest.mark.asyncio
    async def test_discrete_fields(self):
        store = SettingsSecretStore(_settings(strava_client_id="1", strava_client_secret="s"))
        blob = json.loads(await store.get("strava"))
        assert blob == {"client_id": "1", "client_secret": "s", "grant_type": "refresh_token"}

    @pytest.mark.asyncio
    async def test_nothing_configured(self):
        assert await SettingsSecretStore(_settings()).get("strava") is None

    @pytest.mark.asyncio
    async def test_other_secret_name(self):
        store = SettingsSecretStore(_settings(strava_client_id="1", strava_client_secret="s"))
        assert await store.get("github") is None

    @pytest.mark.asyncio
    async def test_half_configured_is_malformed(self):
        provider = SecretProvider(SettingsSecretStore(_settings(strava_client_id="1")))
        result = await provider.load_credentials("strava")
        assert isinstance(result.error, SecretMalformed)


# =============================================================================
# HttpSecretStore
# =============================================================================

class TestHttpSecretStore:

    def _store(self, handler) -> HttpSecretStore:
        return HttpSecretStore(
            api_url="https://secrets.internal/",
            api_key="key",
            transport=httpx.MockTransport(handler),
        )

    @pytest.mark.asyncio
    async def test_returns_blob(self):
        seen = {}

        def handler(request):
            seen["url"] = str(request.url)
            seen["key"] = request.headers.get("X-API-Key")
            return httpx.Response(200, text=CREDENTIALS_BLOB)

        assert await self._store(handler).get("strava") == CREDENTIALS_BLOB
        assert seen == {"url": "https://secrets.internal/secrets/strava", "key": "key"}

    @pytest.mark.asyncio
    async def test_not_found_is_absent(self):
        store = self._store(lambda request: httpx.Response(404))
        result = await SecretProvider(store).load_credentials("strava")
        assert isinstance(result.error, SecretUnavailable)

    @pytest.mark.asyncio
    async def test_forbidden_is_store_error(self):
        store = self._store(lambda request: httpx.Response(403, text="forbidden"))
        result = await SecretProvider(store).load_credentials("strava")
        assert isinstance(result.error, SecretStoreError)

    @pytest.mark.asyncio
    async def test_unreachable_is_store_error(self):
        def handler(request):
            raise httpx.ConnectError("refused", request=request)

        result = await SecretProvider(self._store(handler)).load_credentials("strava")
        assert isinstance(result.error, SecretStoreError)


class TestGetCredentialStore:

    def test_settings_store_by_default(self):
        assert isinstance(get_credential_store(_settings()), SettingsSecretStore)

    def test_http_store_when_configured(self):
        store = get_credential_store(_settings(
            secret_store_url="https://secrets.internal",
            internal_api_key="key",
        ))
        assert isinstance(store, HttpSecretStore)
