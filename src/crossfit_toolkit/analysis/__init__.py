"""Pure analysis functions: bests, goal trends and recovery scoring."""

from .bests import (
    best_by_distance,
    best_by_time_for_calories,
    best_for_dual_metric_item,
    best_overall,
    group_history,
    is_lower_better,
    summarize_bests,
)
from .trends import (
    calculate_days_remaining,
    calculate_progress,
    filter_logs_for_goal,
    find_achieved_goals,
    goal_matches_log,
    is_goal_achieved,
    project_trend,
)
from .recovery import (
    build_reasons,
    calculate_recovery_score,
    count_consecutive_training_days,
    get_alert_level,
    should_show_alert,
)

__all__ = [
    "best_by_distance",
    "best_by_time_for_calories",
    "best_for_dual_metric_item",
    "best_overall",
    "group_history",
    "is_lower_better",
    "summarize_bests",
    "calculate_days_remaining",
    "calculate_progress",
    "filter_logs_for_goal",
    "find_achieved_goals",
    "goal_matches_log",
    "is_goal_achieved",
    "project_trend",
    "build_reasons",
    "calculate_recovery_score",
    "count_consecutive_training_days",
    "get_alert_level",
    "should_show_alert",
]
