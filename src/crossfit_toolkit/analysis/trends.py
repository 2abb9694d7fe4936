"""
Goal progress and trend projection.

Estimate whether recent logs are on pace to reach a goal's target value by
its target date, by fitting a least-squares line through the most recent
logs and extrapolating it to the target.
"""

from datetime import date, datetime, timedelta, timezone
from typing import Iterable, List, Optional, Sequence, Tuple, Union

from ..dates import MS_PER_DAY, days_between, parse_date, today as utc_today
from ..db.models import Goal, GoalStatus, LoggedPerformance, ScoreType
from ..models.goals import TrendProjection, TrendStatus
from .bests import is_lower_better

# Number of most recent logs the trend line is fitted to
TREND_WINDOW = 5

# A projection within this many days of the target date is on track
ON_TRACK_TOLERANCE_DAYS = 7


def _as_datetime(value: Union[date, datetime, None]) -> datetime:
    if value is None:
        return datetime.now(timezone.utc)
    if isinstance(value, datetime):
        return value if value.tzinfo else value.replace(tzinfo=timezone.utc)
    return datetime(value.year, value.month, value.day, tzinfo=timezone.utc)


def fit_linear_trend(values: Sequence[float]) -> Tuple[float, float]:
    """Fit y = slope * x + intercept with x = 0..n-1 (ordinary least squares).

    Args:
        values: Dependent values in order; at least two

    Returns:
        Tuple of (slope, intercept)
    """
    n = len(values)
    xs = range(n)
    sum_x = sum(xs)
    sum_y = sum(values)
    sum_xy = sum(x * y for x, y in zip(xs, values))
    sum_xx = sum(x * x for x in xs)

    slope = (n * sum_xy - sum_x * sum_y) / (n * sum_xx - sum_x * sum_x)
    intercept = (sum_y - slope * sum_x) / n
    return slope, intercept


def project_trend(
    logs: Iterable[LoggedPerformance],
    target_value: float,
    target_date: Union[str, date],
    score_type: ScoreType,
    today: Union[date, datetime, None] = None,
    window: int = TREND_WINDOW,
    tolerance_days: float = ON_TRACK_TOLERANCE_DAYS,
) -> TrendProjection:
    """Project when the target will be reached from recent logs.

    The trend line is fitted against each log's position in the recent
    window, not its date. Spacing in time only enters through the average
    number of days between logs, used to turn "logs needed" into days.

    Args:
        logs: Logs counting toward the goal, in any order
        target_value: Normalized target value
        target_date: Target date (YYYY-MM-DD or date)
        score_type: Score type of the goal's item
        today: Reference point for the projection (defaults to now, UTC)
        window: Number of most recent logs to fit
        tolerance_days: Half-width of the on-track band around the target date

    Returns:
        TrendProjection; projected_date is omitted for no_data, for a
        trend moving away from the target and for a projection past the
        last representable date (classified behind)
    """
    logs = list(logs)
    if len(logs) < 2:
        return TrendProjection(trend=TrendStatus.NO_DATA)

    recent = sorted(logs, key=lambda log: log.date)[-window:]
    n = len(recent)

    slope, intercept = fit_linear_trend([log.result_value for log in recent])

    if slope == 0:
        return TrendProjection(trend=TrendStatus.NO_DATA)

    improving = slope < 0 if is_lower_better(score_type) else slope > 0
    if not improving:
        return TrendProjection(trend=TrendStatus.BEHIND)

    # Solve target = slope * x + intercept for x, measured from the last log
    logs_to_target = (target_value - intercept) / slope
    logs_needed = logs_to_target - (n - 1)

    day_span = (recent[-1].date - recent[0].date) / MS_PER_DAY
    avg_days_per_log = day_span / (n - 1)
    days_to_target = logs_needed * avg_days_per_log

    try:
        projected = _as_datetime(today) + timedelta(days=days_to_target)
    except OverflowError:
        # Improvement too slow to reach the target within the calendar
        return TrendProjection(trend=TrendStatus.BEHIND)
    target = _as_datetime(parse_date(target_date))
    days_ahead = (target - projected).total_seconds() / 86400

    if days_ahead >= tolerance_days:
        trend = TrendStatus.AHEAD
    elif days_ahead >= -tolerance_days:
        trend = TrendStatus.ON_TRACK
    else:
        trend = TrendStatus.BEHIND

    return TrendProjection(trend=trend, projected_date=projected.date().isoformat())


def calculate_progress(
    current_value: Optional[float],
    target_value: float,
    score_type: ScoreType,
) -> float:
    """Progress toward a target as a percentage clamped to [0, 100].

    For Time, progress = target / current; a 5:00 best against a 4:00
    target is 80%. For everything else, progress = current / target.
    Nothing logged yet (or a zero best) is 0%.
    """
    if current_value is None or current_value == 0:
        return 0.0

    if is_lower_better(score_type):
        progress = (target_value / current_value) * 100
    elif target_value == 0:
        progress = 100.0 if current_value > 0 else 0.0
    else:
        progress = (current_value / target_value) * 100

    return min(max(progress, 0.0), 100.0)


def is_goal_achieved(
    current_value: Optional[float],
    target_value: float,
    score_type: ScoreType,
) -> bool:
    """Check if a value meets the target in the score type's direction."""
    if current_value is None:
        return False
    if is_lower_better(score_type):
        return current_value <= target_value
    return current_value >= target_value


def calculate_days_remaining(target_date: Union[str, date], today: Optional[date] = None) -> int:
    """Days from today until the target date (negative once it has passed)."""
    target = parse_date(target_date)
    if target is None:
        return 0
    return days_between(today or utc_today(), target)


def filter_logs_for_goal(
    logs: Iterable[LoggedPerformance],
    goal: Goal,
    score_type: ScoreType,
) -> List[LoggedPerformance]:
    """Logs that count toward a goal: same variant, and same reps for lifts."""
    return [log for log in logs if _log_passes_goal_filters(goal, log, score_type)]


def _log_passes_goal_filters(goal: Goal, log: LoggedPerformance, score_type: ScoreType) -> bool:
    if goal.variant is not None and goal.variant != log.variant:
        return False
    if goal.reps is not None and score_type == ScoreType.LOAD and goal.reps != log.reps:
        return False
    return True


def goal_matches_log(goal: Goal, log: LoggedPerformance, score_type: ScoreType) -> bool:
    """Check if a log is for the goal's item and passes its filters."""
    return goal.item_id == log.item_id and _log_passes_goal_filters(goal, log, score_type)


def find_achieved_goals(
    log: LoggedPerformance,
    goals: Iterable[Goal],
    score_type: ScoreType,
) -> List[Goal]:
    """Active goals that a newly logged performance achieves."""
    return [
        goal for goal in goals
        if goal.status == GoalStatus.ACTIVE
        and goal_matches_log(goal, log, score_type)
        and is_goal_achieved(log.result_value, goal.target_value, score_type)
    ]
