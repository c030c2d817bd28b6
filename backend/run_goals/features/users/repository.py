"""
User Repository Adapter.

Thin read/write façade over the user directory store. Store exceptions are
wrapped in RepositoryError with the native error attached; semantics are not
translated.
"""

import logging
from typing import Any

from run_goals.shared.errors import RepositoryError
from run_goals.shared.outcome import Outcome
from .schemas import UserRecord
from .store import UserStore

logger = logging.getLogger(__name__)


class UserRepository:
    """Repository for the user directory."""

    def __init__(self, store: UserStore):
        self.store = store

    async def list_users(self) -> Outcome[list[UserRecord]]:
        """
        Read all user records.

        Returns:
            Outcome with the list of users (possibly empty)
        """
        try:
            users = await self.store.scan()
        except Exception as e:
            logger.error(f"User directory scan failed: {e}")
            return Outcome.failure(_wrap(e, "scan failed"))
        return Outcome.success(list(users))

    async def update_user(self, athlete_id: int, fields: dict[str, Any]) -> Outcome[None]:
        """
        Update one user's fields.

        Args:
            athlete_id: Strava athlete ID
            fields: Partial fields to write (token triple)
        """
        try:
            await self.store.put(athlete_id, fields)
        except Exception as e:
            logger.error(f"User directory update failed for athlete {athlete_id}: {e}")
            return Outcome.failure(_wrap(e, f"update of athlete {athlete_id} failed"))
        return Outcome.success(None)


def _wrap(error: Exception, message: str) -> RepositoryError:
    wrapped = RepositoryError(f"{message}: {error}", detail=error)
    wrapped.__cause__ = error
    return wrapped
