"""
Shared constants.
"""

# Strava reports distances in meters; goals and totals are in miles.
METERS_PER_MILE = 1609.344


def meters_to_miles(meters: float) -> float:
    """Convert meters to miles."""
    return meters / METERS_PER_MILE
