"""
User schemas.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict


class UserRecord(BaseModel):
    """
    One entry of the user directory.

    The access token may be used only while `now < expires_at`.
    """

    model_config = ConfigDict(frozen=True, from_attributes=True)

    athlete_id: int
    refresh_token: str
    access_token: Optional[str] = None
    expires_at: Optional[int] = None
    goal: Optional[float] = None
    telegram_chat_id: Optional[int] = None

    def token_expired(self, now: float) -> bool:
        """True when the access token is missing or no longer valid at `now`."""
        if not self.access_token or self.expires_at is None:
            return True
        return now >= self.expires_at

    def __repr__(self) -> str:
        return f"UserRecord(athlete_id={self.athlete_id}, goal={self.goal})"
