"""
API Router v1

Combines all route modules.
"""

from fastapi import APIRouter

from run_goals.api.v1.routes import internal, totals

api_router = APIRouter()

api_router.include_router(totals.router, tags=["Totals"])
api_router.include_router(internal.router)
