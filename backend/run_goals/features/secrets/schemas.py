"""
Credential schemas.
"""

from pydantic import BaseModel, ConfigDict, Field


class Credentials(BaseModel):
    """
    Strava OAuth client credentials.

    Loaded once per invocation and never persisted.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    client_id: str = Field(min_length=1)
    client_secret: str = Field(min_length=1)
    grant_type: str = "refresh_token"

    def __repr__(self) -> str:
        return f"Credentials(client_id={self.client_id!r}, client_secret='***')"
