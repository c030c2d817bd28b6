"""
User directory module.

Usage:
    from run_goals.features.users import UserRepository, SqlAlchemyUserStore

Models:
- Athlete: user directory table

Schemas:
- UserRecord: immutable view of one user

Components:
- UserRepository: list/update façade returning Outcome
- SqlAlchemyUserStore: store adapter over the async session factory
"""

from .models import Athlete
from .repository import UserRepository
from .schemas import UserRecord
from .store import SqlAlchemyUserStore, UserStore

__all__ = [
    "Athlete",
    "UserRepository",
    "UserRecord",
    "SqlAlchemyUserStore",
    "UserStore",
]
