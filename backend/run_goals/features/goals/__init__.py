"""
Goal evaluation and aggregation.

Usage:
    from run_goals.features.goals import run_goal_check, query_totals

Components:
- AggregationWorkflow: per-user refresh/fetch/evaluate loop
- run_goal_check / query_totals: entry point handlers
- GoalCheckRunner: in-process scheduler
"""

from .handlers import (
    GoalCheckSummary,
    TotalsResponse,
    build_workflow,
    query_totals,
    run_goal_check,
)
from .scheduler import GoalCheckRunner
from .workflow import (
    AggregateReport,
    AggregationWorkflow,
    FailureStage,
    UserFailure,
    UserResult,
    UserStatus,
    WorkflowMode,
    goal_met,
)

__all__ = [
    "GoalCheckSummary",
    "TotalsResponse",
    "build_workflow",
    "query_totals",
    "run_goal_check",
    "GoalCheckRunner",
    "AggregateReport",
    "AggregationWorkflow",
    "FailureStage",
    "UserFailure",
    "UserResult",
    "UserStatus",
    "WorkflowMode",
    "goal_met",
]
