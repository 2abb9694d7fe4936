"""
Recovery scoring configuration.

Thresholds, weights, labels and messages used by the recovery scorer.
"""

import math
from typing import Dict, List, NamedTuple, Optional

from ..models.recovery import AlertLevel


# =============================================================================
# Metric labels
# =============================================================================

ENERGY_LABELS: Dict[int, str] = {
    1: "Exhausted",
    2: "Low",
    3: "OK",
    4: "Good",
    5: "Great",
}

SORENESS_LABELS: Dict[int, str] = {
    1: "None",
    2: "Light",
    3: "Moderate",
    4: "High",
    5: "Severe",
}

METRIC_RANGE = range(1, 6)

SLEEP_OPTIONS = (5, 6, 7, 8, 9)

SLEEP_LABELS: Dict[int, str] = {
    5: "5h",
    6: "6h",
    7: "7h",
    8: "8h",
    9: "9h+",
}


# =============================================================================
# Point calculation
# =============================================================================

DEFAULT_MIN_SLEEP_HOURS = 7

# Points per hour of sleep below the minimum, and the cap
SLEEP_POINTS_PER_HOUR = 2
MAX_SLEEP_DEFICIT_POINTS = 6

MAX_CONSECUTIVE_POINTS = 4

# energy points = (5 - value) * ENERGY_WEIGHT
ENERGY_WEIGHT = 1.0

# soreness points = (value - 1) * SORENESS_WEIGHT
SORENESS_WEIGHT = 1.0

# Days without a check-in before the consecutive counter resets
GAP_RESET_DAYS = 2

# Last check-in at least this many days ago shows "welcome back"
LONG_GAP_DAYS = 3


# =============================================================================
# Alert thresholds
# =============================================================================

class AlertThreshold(NamedTuple):
    min: float
    max: float
    level: AlertLevel


# Inclusive ranges, contiguous over [0, inf)
ALERT_THRESHOLDS: List[AlertThreshold] = [
    AlertThreshold(0, 2, AlertLevel.NONE),
    AlertThreshold(3, 5, AlertLevel.INFO),
    AlertThreshold(6, 8, AlertLevel.WARNING),
    AlertThreshold(9, math.inf, AlertLevel.CRITICAL),
]

ALERT_TITLES: Dict[AlertLevel, str] = {
    AlertLevel.NONE: "",
    AlertLevel.INFO: "Monitor Your Recovery",
    AlertLevel.WARNING: "Consider Lighter Intensity",
    AlertLevel.CRITICAL: "Rest Day Recommended",
}

ALERT_DESCRIPTIONS: Dict[AlertLevel, str] = {
    AlertLevel.NONE: "",
    AlertLevel.INFO: "You're showing some signs of fatigue. Listen to your body.",
    AlertLevel.WARNING: "Multiple recovery factors suggest taking it easy today.",
    AlertLevel.CRITICAL: "Your body needs rest. Consider an active recovery or full rest day.",
}


# =============================================================================
# Reason messages
# =============================================================================

def get_consecutive_message(days: int) -> str:
    """Message for consecutive training days (shown when days >= 2)."""
    if days >= 5:
        return "4+ consecutive training days"
    return f"{days} consecutive training days"


def get_energy_message(value: int) -> Optional[str]:
    """Message for low energy (shown when energy <= 2)."""
    if value == 1:
        return "Very low energy"
    if value == 2:
        return "Low energy"
    return None


def get_soreness_message(value: int) -> Optional[str]:
    """Message for high soreness (shown when soreness >= 4)."""
    if value == 5:
        return "High soreness"
    if value == 4:
        return "Elevated soreness"
    return None


def get_sleep_message(hours: float, min_sleep_hours: float = DEFAULT_MIN_SLEEP_HOURS) -> Optional[str]:
    """Message for a sleep deficit (shown when hours < min_sleep_hours)."""
    if hours >= min_sleep_hours:
        return None
    deficit = min_sleep_hours - hours
    if deficit >= 3:
        return "Significant sleep deficit"
    if deficit >= 2:
        return "Insufficient sleep"
    return "Slightly under-rested"
