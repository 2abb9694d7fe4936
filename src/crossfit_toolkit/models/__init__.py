"""Output models handed to the presentation layer."""

from .bests import BestSummary, GroupBy, HistoryGroup, LogOutcome
from .goals import GoalWithProgress, TrendProjection, TrendStatus
from .recovery import (
    AlertLevel,
    ReasonMetric,
    RecoveryReason,
    RecoveryScore,
    RecoveryStatus,
)

__all__ = [
    "BestSummary",
    "GroupBy",
    "HistoryGroup",
    "LogOutcome",
    "GoalWithProgress",
    "TrendProjection",
    "TrendStatus",
    "AlertLevel",
    "ReasonMetric",
    "RecoveryReason",
    "RecoveryScore",
    "RecoveryStatus",
]
