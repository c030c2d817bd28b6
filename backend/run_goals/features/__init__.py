"""
Feature modules for Run Goals.

Each feature is a self-contained module with:
- schemas.py - Pydantic schemas
- models.py - SQLAlchemy models (optional)
- repository.py / store.py - Data access (optional)
- client.py / oauth.py - Strava API access (optional)
"""
