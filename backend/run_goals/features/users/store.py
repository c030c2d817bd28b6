"""
User directory store adapters.

A user directory store supports two operations:
- scan(): all user records
- put(athlete_id, fields): update one record's fields
"""

from typing import Any, Protocol

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from .models import Athlete
from .schemas import UserRecord

WRITABLE_FIELDS = frozenset({"access_token", "refresh_token", "expires_at"})


class UserStore(Protocol):
    """External user directory."""

    async def scan(self) -> list[UserRecord]:
        ...

    async def put(self, athlete_id: int, fields: dict[str, Any]) -> None:
        ...


class SqlAlchemyUserStore:
    """
    User directory backed by the `athletes` table.

    Each call opens its own session so per-user updates never share a
    transaction.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self.session_factory = session_factory

    async def scan(self) -> list[UserRecord]:
        async with self.session_factory() as session:
            result = await session.execute(
                select(Athlete).order_by(Athlete.athlete_id)
            )
            return [UserRecord.model_validate(row) for row in result.scalars().all()]

    async def put(self, athlete_id: int, fields: dict[str, Any]) -> None:
        unknown = set(fields) - WRITABLE_FIELDS
        if unknown:
            raise ValueError(f"Fields not writable: {', '.join(sorted(unknown))}")

        async with self.session_factory() as session:
            athlete = await session.get(Athlete, athlete_id)
            if athlete is None:
                raise KeyError(f"Athlete {athlete_id} not found")
            for key, value in fields.items():
                setattr(athlete, key, value)
            await session.commit()
