"""
Secret Provider.

Loads and parses the Strava OAuth client credentials blob.
No caching: every invocation constructs its own provider and loads fresh
credentials. No retry: the caller decides.
"""

import json
import logging

from pydantic import ValidationError

from run_goals.shared.errors import SecretMalformed, SecretStoreError, SecretUnavailable
from run_goals.shared.outcome import Outcome
from .schemas import Credentials
from .store import CredentialStore

logger = logging.getLogger(__name__)


class SecretProvider:
    """
    Credentials loader.

    Usage:
        provider = SecretProvider(get_credential_store())
        result = await provider.load_credentials("strava")
    """

    def __init__(self, store: CredentialStore):
        self.store = store

    async def load_credentials(self, secret_name: str) -> Outcome[Credentials]:
        """
        Load credentials by secret name.

        Returns:
            Outcome with Credentials, or one of
            SecretUnavailable / SecretMalformed / SecretStoreError
        """
        try:
            blob = await self.store.get(secret_name)
        except Exception as e:
            logger.error("Secret store failed for %s: %s", secret_name, e)
            error = SecretStoreError(f"Secret store failed: {e}", detail=e)
            error.__cause__ = e
            return Outcome.failure(error)

        if not blob:
            logger.error("Secret %s has no payload", secret_name)
            return Outcome.failure(SecretUnavailable(f"No secret string for {secret_name}"))

        try:
            payload = json.loads(blob)
        except (TypeError, ValueError) as e:
            return Outcome.failure(SecretMalformed(f"Secret {secret_name} is not valid JSON", detail=str(e)))

        if not isinstance(payload, dict):
            return Outcome.failure(SecretMalformed(f"Secret {secret_name} is not a JSON object"))

        try:
            credentials = Credentials.model_validate(payload)
        except ValidationError as e:
            fields = sorted({".".join(str(p) for p in err["loc"]) for err in e.errors()})
            return Outcome.failure(SecretMalformed(
                f"Secret {secret_name} is missing or has invalid fields: {', '.join(fields)}",
                detail=fields,
            ))

        return Outcome.success(credentials)
