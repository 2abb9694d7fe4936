"""Personal records, goal trends and recovery scoring for CrossFit training."""

from crossfit_toolkit.catalog import CatalogService, infer_metric_kind
from crossfit_toolkit.config import Settings, get_settings
from crossfit_toolkit.db.database import Database
from crossfit_toolkit.db.models import (
    CatalogItem,
    DailyCheckIn,
    Goal,
    LoggedPerformance,
    MetricKind,
    ScoreType,
    Variant,
)
from crossfit_toolkit.services import (
    CheckInService,
    GoalService,
    PerformanceService,
    SettingsService,
)

__version__ = "0.1.0"

__all__ = [
    "CatalogService",
    "infer_metric_kind",
    "Settings",
    "get_settings",
    "Database",
    "CatalogItem",
    "DailyCheckIn",
    "Goal",
    "LoggedPerformance",
    "MetricKind",
    "ScoreType",
    "Variant",
    "CheckInService",
    "GoalService",
    "PerformanceService",
    "SettingsService",
]
