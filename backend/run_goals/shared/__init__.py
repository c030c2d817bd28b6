"""
Shared building blocks (NOT business logic).

Usage:
    from run_goals.shared import Outcome, RunGoalsError
    from run_goals.shared.telegram import TelegramNotifier
"""
from .errors import RunGoalsError
from .outcome import Outcome

__all__ = [
    "RunGoalsError",
    "Outcome",
]
