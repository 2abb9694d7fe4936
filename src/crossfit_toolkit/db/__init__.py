"""Database layer for logs, goals and check-ins."""

from .database import Database
from .models import (
    CatalogItem,
    Category,
    CheckInType,
    DailyCheckIn,
    Goal,
    GoalStatus,
    LoggedPerformance,
    MetricKind,
    ScoreType,
    UserSettings,
    Variant,
)

__all__ = [
    "Database",
    "CatalogItem",
    "Category",
    "CheckInType",
    "DailyCheckIn",
    "Goal",
    "GoalStatus",
    "LoggedPerformance",
    "MetricKind",
    "ScoreType",
    "UserSettings",
    "Variant",
]
