"""
OAuth client credentials.

Usage:
    from run_goals.features.secrets import SecretProvider, get_credential_store

Components:
- SecretProvider: loads and validates the credentials blob
- SettingsSecretStore / HttpSecretStore: credential store adapters
"""

from .provider import SecretProvider
from .schemas import Credentials
from .store import (
    CredentialStore,
    HttpSecretStore,
    SettingsSecretStore,
    get_credential_store,
)

__all__ = [
    "SecretProvider",
    "Credentials",
    "CredentialStore",
    "HttpSecretStore",
    "SettingsSecretStore",
    "get_credential_store",
]
