"""
Outcome type.

Every fallible operation in run_goals returns an Outcome instead of raising:
exactly one of `value` or `error` is set.

Usage:
    result = await provider.load_credentials("strava")
    if not result.ok:
        logger.error("Cannot load credentials: %s", result.error)
        return Outcome.failure(result.error)
    credentials = result.value
"""

from dataclasses import dataclass
from typing import Generic, Optional, TypeVar

from .errors import RunGoalsError

T = TypeVar("T")


@dataclass(frozen=True)
class Outcome(Generic[T]):
    """Value-or-error result. Never both, never neither."""

    value: Optional[T] = None
    error: Optional[RunGoalsError] = None
    _has_value: bool = False

    def __post_init__(self):
        if self._has_value and self.error is not None:
            raise ValueError("Outcome cannot hold both a value and an error")
        if not self._has_value and self.error is None:
            raise ValueError("Outcome must hold either a value or an error")

    @classmethod
    def success(cls, value: T = None) -> "Outcome[T]":
        """Build a successful outcome. `None` is a valid value (void operations)."""
        return cls(value=value, error=None, _has_value=True)

    @classmethod
    def failure(cls, error: RunGoalsError) -> "Outcome[T]":
        """Build a failed outcome."""
        if error is None:
            raise ValueError("Outcome.failure requires an error")
        return cls(value=None, error=error, _has_value=False)

    @property
    def ok(self) -> bool:
        return self._has_value

    def unwrap(self) -> T:
        """Return the value or raise the carried error."""
        if self.error is not None:
            raise self.error
        return self.value

    def __repr__(self) -> str:
        if self.ok:
            return f"Outcome.success({self.value!r})"
        return f"Outcome.failure({self.error!r})"
