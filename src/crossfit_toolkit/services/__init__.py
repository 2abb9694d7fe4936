"""Services that load records, call the analysis functions and persist results."""

from .check_in_service import CheckInService
from .goal_service import GoalService
from .performance_service import PerformanceService
from .settings_service import SettingsService

__all__ = [
    "CheckInService",
    "GoalService",
    "PerformanceService",
    "SettingsService",
]
