"""
User directory models.

Models:
- Athlete: one row per connected Strava athlete (tokens + goal)
"""

from datetime import datetime

from sqlalchemy import BigInteger, Column, DateTime, Float, String

from run_goals.models.base import Base


class Athlete(Base):
    """
    Strava-connected user.

    Rows are created by the onboarding flow; this service only reads them
    and rewrites the token triple after a refresh.
    Tokens should be encrypted in production.
    """

    __tablename__ = "athletes"

    athlete_id = Column(BigInteger, primary_key=True, autoincrement=False)

    # OAuth tokens
    access_token = Column(String(255), nullable=True)
    refresh_token = Column(String(255), nullable=False)
    expires_at = Column(BigInteger, nullable=True)  # Unix timestamp

    # Goal in miles, set from the frontend
    goal = Column(Float, nullable=True)

    # Notification recipient
    telegram_chat_id = Column(BigInteger, nullable=True)

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    def __repr__(self):
        return f"<Athlete {self.athlete_id}>"
