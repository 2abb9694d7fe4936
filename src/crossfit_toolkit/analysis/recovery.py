"""
Recovery scoring from daily check-ins.

Turn today's self-reported check-in and the current run of consecutive
training days into fatigue points, an alert level and the reasons to show
the user. Points are additive:

- consecutive days: (days - 1), capped at 4
- energy: (5 - energy) * weight
- soreness: (soreness - 1) * weight
- sleep: 2 points per hour below the minimum, capped at 6

On a rest day, or before today's check-in, only the consecutive-days
points apply.
"""

from datetime import date, timedelta
from typing import Iterable, List, Optional

from ..dates import parse_date, today as utc_today
from ..db.models import CheckInType, DailyCheckIn
from ..models.recovery import AlertLevel, ReasonMetric, RecoveryReason, RecoveryScore
from .recovery_config import (
    ALERT_THRESHOLDS,
    DEFAULT_MIN_SLEEP_HOURS,
    ENERGY_WEIGHT,
    GAP_RESET_DAYS,
    MAX_CONSECUTIVE_POINTS,
    MAX_SLEEP_DEFICIT_POINTS,
    SLEEP_POINTS_PER_HOUR,
    SORENESS_WEIGHT,
    get_consecutive_message,
    get_energy_message,
    get_sleep_message,
    get_soreness_message,
)


# =============================================================================
# Point calculations
# =============================================================================

def calculate_consecutive_points(days: int) -> float:
    """Points for consecutive training days: (days - 1), capped."""
    if days <= 1:
        return 0
    return min(days - 1, MAX_CONSECUTIVE_POINTS)


def calculate_energy_points(energy: int) -> float:
    """Lower energy = more points."""
    return (5 - energy) * ENERGY_WEIGHT


def calculate_soreness_points(soreness: int) -> float:
    """Higher soreness = more points."""
    return (soreness - 1) * SORENESS_WEIGHT


def calculate_sleep_points(hours: float, min_sleep_hours: float = DEFAULT_MIN_SLEEP_HOURS) -> float:
    """Points for sleeping under the user's minimum.

    - At or above min: 0 points
    - 1 hour below: 2 points
    - 2 hours below: 4 points
    - 3+ hours below: 6 points (max)
    """
    if hours >= min_sleep_hours:
        return 0
    deficit = min_sleep_hours - hours
    return min(deficit * SLEEP_POINTS_PER_HOUR, MAX_SLEEP_DEFICIT_POINTS)


def get_alert_level(total: float) -> AlertLevel:
    """Alert level for a total score.

    Ranges are inclusive and matched in order. A fractional total that
    falls between two integer ranges takes the higher one.
    """
    for threshold in ALERT_THRESHOLDS:
        if threshold.min <= total <= threshold.max:
            return threshold.level
    for threshold in ALERT_THRESHOLDS:
        if total < threshold.min:
            return threshold.level
    return AlertLevel.NONE


def _is_training(check_in: Optional[DailyCheckIn]) -> bool:
    return check_in is not None and check_in.type == CheckInType.TRAINING


# =============================================================================
# Reasons
# =============================================================================

def build_reasons(
    consecutive_days: int,
    check_in: Optional[DailyCheckIn],
    min_sleep_hours: float = DEFAULT_MIN_SLEEP_HOURS,
) -> List[RecoveryReason]:
    """Build the user-facing reasons behind a score.

    Only clearly notable factors are listed: 2+ consecutive days, energy of
    1-2, soreness of 4-5 and sleep under the minimum. Mildly elevated
    factors still score points without producing a reason.
    """
    reasons: List[RecoveryReason] = []

    if consecutive_days >= 2:
        reasons.append(RecoveryReason(
            metric=ReasonMetric.CONSECUTIVE,
            points=calculate_consecutive_points(consecutive_days),
            message=get_consecutive_message(consecutive_days),
        ))

    if not _is_training(check_in):
        return reasons

    if check_in.energy is not None and check_in.energy <= 2:
        message = get_energy_message(check_in.energy)
        if message:
            reasons.append(RecoveryReason(
                metric=ReasonMetric.ENERGY,
                points=calculate_energy_points(check_in.energy),
                message=message,
            ))

    if check_in.soreness is not None and check_in.soreness >= 4:
        message = get_soreness_message(check_in.soreness)
        if message:
            reasons.append(RecoveryReason(
                metric=ReasonMetric.SORENESS,
                points=calculate_soreness_points(check_in.soreness),
                message=message,
            ))

    if check_in.sleep_hours is not None and check_in.sleep_hours < min_sleep_hours:
        message = get_sleep_message(check_in.sleep_hours, min_sleep_hours)
        if message:
            reasons.append(RecoveryReason(
                metric=ReasonMetric.SLEEP,
                points=calculate_sleep_points(check_in.sleep_hours, min_sleep_hours),
                message=message,
            ))

    return reasons


# =============================================================================
# Main scoring function
# =============================================================================

def calculate_recovery_score(
    consecutive_days: int,
    check_in: Optional[DailyCheckIn] = None,
    min_sleep_hours: float = DEFAULT_MIN_SLEEP_HOURS,
) -> RecoveryScore:
    """Calculate the recovery score for today.

    Args:
        consecutive_days: Consecutive training days, including today if logged
        check_in: Today's check-in, if any
        min_sleep_hours: The user's minimum sleep threshold

    Returns:
        RecoveryScore with total points, alert level and reasons
    """
    total = calculate_consecutive_points(consecutive_days)

    if _is_training(check_in):
        if check_in.energy is not None:
            total += calculate_energy_points(check_in.energy)
        if check_in.soreness is not None:
            total += calculate_soreness_points(check_in.soreness)
        if check_in.sleep_hours is not None:
            total += calculate_sleep_points(check_in.sleep_hours, min_sleep_hours)

    return RecoveryScore(
        total=total,
        level=get_alert_level(total),
        reasons=build_reasons(consecutive_days, check_in, min_sleep_hours),
    )


def should_show_alert(score: RecoveryScore) -> bool:
    """Check if a recovery score should show an alert."""
    return score.level != AlertLevel.NONE


# =============================================================================
# Consecutive training days
# =============================================================================

def count_consecutive_training_days(
    check_ins: Iterable[DailyCheckIn],
    today: Optional[date] = None,
    gap_reset_days: int = GAP_RESET_DAYS,
) -> int:
    """Count consecutive training days, walking back from today.

    Check-ins are visited newest first against an expected date, starting
    at today and moving to the day before each counted check-in. Counting
    stops at a rest day, or when a check-in falls more than
    ``gap_reset_days`` before the expected date. A check-in for today is
    optional.

    Args:
        check_ins: Recent check-ins, any order
        today: Day to count back from (defaults to today, UTC)
        gap_reset_days: Most missed days tolerated between training days

    Returns:
        Number of training days in the current streak
    """
    ordered = sorted(check_ins, key=lambda c: c.date, reverse=True)
    today = today or utc_today()
    expected = today
    count = 0

    for check_in in ordered:
        check_in_date = parse_date(check_in.date)
        if check_in_date is None or check_in_date > today:
            # Future-dated records are not part of the streak
            continue

        if (expected - check_in_date).days > gap_reset_days:
            break

        if check_in.is_rest:
            break

        count += 1
        expected = check_in_date - timedelta(days=1)

    return count
