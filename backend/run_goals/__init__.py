"""
Run Goals

Strava running totals aggregation and goal notifications.
"""

__version__ = "0.1.0"
