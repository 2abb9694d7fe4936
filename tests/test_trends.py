"""Tests for goal progress and trend projection."""

from datetime import date, timedelta

import pytest

from crossfit_toolkit.analysis.trends import (
    calculate_days_remaining,
    calculate_progress,
    filter_logs_for_goal,
    find_achieved_goals,
    fit_linear_trend,
    goal_matches_log,
    is_goal_achieved,
    project_trend,
)
from crossfit_toolkit.db.models import GoalStatus, ScoreType, Variant
from crossfit_toolkit.models.goals import TrendStatus

from conftest import make_goal, make_log

TODAY = date(2025, 3, 1)


def weekly_logs(values, start=date(2025, 1, 1)):
    """One log per week, oldest first."""
    return [make_log(v, on=start + timedelta(days=7 * i)) for i, v in enumerate(values)]


class TestFitLinearTrend:
    """Tests for fit_linear_trend function."""

    def test_perfect_line(self):
        slope, intercept = fit_linear_trend([10, 12, 14, 16])
        assert slope == pytest.approx(2)
        assert intercept == pytest.approx(10)

    def test_flat_line(self):
        slope, _ = fit_linear_trend([5, 5, 5])
        assert slope == 0


class TestProjectTrend:
    """Tests for project_trend function."""

    @pytest.mark.parametrize("count", [0, 1])
    def test_fewer_than_two_logs_is_no_data(self, count):
        logs = weekly_logs([100] * count)
        result = project_trend(logs, 150, "2025-06-01", ScoreType.LOAD, today=TODAY)
        assert result.trend == TrendStatus.NO_DATA
        assert result.projected_date is None

    def test_flat_slope_is_no_data(self):
        logs = weekly_logs([100, 100, 100])
        result = project_trend(logs, 150, "2025-06-01", ScoreType.LOAD, today=TODAY)
        assert result.trend == TrendStatus.NO_DATA

    def test_worsening_load_is_behind_without_date(self):
        logs = weekly_logs([120, 110, 100])
        result = project_trend(logs, 150, "2025-06-01", ScoreType.LOAD, today=TODAY)
        assert result.trend == TrendStatus.BEHIND
        assert result.projected_date is None

    def test_worsening_time_is_behind(self):
        logs = weekly_logs([280, 290, 300])
        result = project_trend(logs, 240, "2025-06-01", ScoreType.TIME, today=TODAY)
        assert result.trend == TrendStatus.BEHIND

    def test_linear_improvement_reaching_target_on_date_is_on_track(self):
        # +5kg per weekly log; last log on TODAY, target reached 4 logs later
        start = TODAY - timedelta(days=7 * 4)
        logs = weekly_logs([100, 105, 110, 115, 120], start=start)
        target_date = TODAY + timedelta(days=28)
        result = project_trend(logs, 140, target_date.isoformat(), ScoreType.LOAD, today=TODAY)
        assert result.trend == TrendStatus.ON_TRACK
        projected = date.fromisoformat(result.projected_date)
        assert abs((projected - target_date).days) <= 7

    def test_far_target_date_is_ahead(self):
        logs = weekly_logs([100, 105, 110, 115, 120])
        result = project_trend(logs, 140, "2026-01-01", ScoreType.LOAD, today=TODAY)
        assert result.trend == TrendStatus.AHEAD

    def test_near_target_date_is_behind(self):
        logs = weekly_logs([100, 101, 102])
        result = project_trend(logs, 200, "2025-03-10", ScoreType.LOAD, today=TODAY)
        assert result.trend == TrendStatus.BEHIND
        assert result.projected_date is not None

    def test_improving_time_projects_forward(self):
        start = TODAY - timedelta(days=14)
        logs = weekly_logs([300, 290, 280], start=start)
        result = project_trend(logs, 250, "2025-03-22", ScoreType.TIME, today=TODAY)
        # 3 more weekly logs at -10s each: 21 days out
        assert result.projected_date == "2025-03-22"
        assert result.trend == TrendStatus.ON_TRACK

    @pytest.mark.parametrize("target_date,trend", [
        ("2025-03-29", TrendStatus.AHEAD),      # projected 7 days early
        ("2025-03-15", TrendStatus.ON_TRACK),   # projected 7 days late
        ("2025-03-14", TrendStatus.BEHIND),     # projected 8 days late
    ])
    def test_tolerance_boundaries_are_inclusive(self, target_date, trend):
        start = TODAY - timedelta(days=14)
        logs = weekly_logs([300, 290, 280], start=start)
        result = project_trend(logs, 250, target_date, ScoreType.TIME, today=TODAY)
        assert result.projected_date == "2025-03-22"
        assert result.trend == trend

    def test_projection_past_calendar_end_is_behind(self):
        logs = weekly_logs([100, 100, 100, 100, 100.001])
        result = project_trend(logs, 200, "2025-06-01", ScoreType.LOAD, today=date(2025, 2, 1))
        assert result.trend == TrendStatus.BEHIND
        assert result.projected_date is None

    def test_only_last_five_logs_are_used(self):
        old_decline = [200, 150, 100]
        recent_rise = [100, 105, 110, 115, 120]
        logs = weekly_logs(old_decline + recent_rise)
        result = project_trend(logs, 140, "2026-01-01", ScoreType.LOAD, today=TODAY)
        assert result.trend == TrendStatus.AHEAD

    def test_unsorted_input_is_sorted_by_date(self):
        logs = weekly_logs([100, 105, 110, 115, 120])
        result = project_trend(list(reversed(logs)), 140, "2026-01-01", ScoreType.LOAD, today=TODAY)
        assert result.trend == TrendStatus.AHEAD


class TestCalculateProgress:
    """Tests for calculate_progress function."""

    def test_time_progress(self):
        assert calculate_progress(300, 240, ScoreType.TIME) == pytest.approx(80)

    def test_load_progress(self):
        assert calculate_progress(275, 300, ScoreType.LOAD) == pytest.approx(91.666, rel=1e-3)

    @pytest.mark.parametrize("current", [None, 0])
    def test_nothing_logged_is_zero(self, current):
        assert calculate_progress(current, 300, ScoreType.LOAD) == 0
        assert calculate_progress(current, 240, ScoreType.TIME) == 0

    def test_clamped_to_hundred(self):
        assert calculate_progress(400, 300, ScoreType.LOAD) == 100
        assert calculate_progress(200, 240, ScoreType.TIME) == 100

    def test_time_progress_is_monotonic(self):
        values = [400, 350, 300, 260, 240, 200]
        progress = [calculate_progress(v, 240, ScoreType.TIME) for v in values]
        assert progress == sorted(progress)

    def test_load_progress_is_monotonic(self):
        values = [50, 100, 150, 200, 300, 400]
        progress = [calculate_progress(v, 300, ScoreType.LOAD) for v in values]
        assert progress == sorted(progress)
        assert all(0 <= p <= 100 for p in progress)


class TestIsGoalAchieved:
    """Tests for is_goal_achieved function."""

    def test_time(self):
        assert is_goal_achieved(240, 240, ScoreType.TIME) is True
        assert is_goal_achieved(241, 240, ScoreType.TIME) is False

    def test_load(self):
        assert is_goal_achieved(150, 150, ScoreType.LOAD) is True
        assert is_goal_achieved(149, 150, ScoreType.LOAD) is False

    def test_none_is_not_achieved(self):
        assert is_goal_achieved(None, 150, ScoreType.LOAD) is False


class TestCalculateDaysRemaining:
    """Tests for calculate_days_remaining function."""

    def test_future(self):
        assert calculate_days_remaining("2025-03-11", today=TODAY) == 10

    def test_past_is_negative(self):
        assert calculate_days_remaining("2025-02-27", today=TODAY) == -2


class TestGoalFilters:
    """Tests for goal log filters."""

    def test_variant_filter(self):
        goal = make_goal(240, variant=Variant.RX)
        logs = [make_log(250, variant=Variant.RX), make_log(230, variant=Variant.SCALED), make_log(235)]
        filtered = filter_logs_for_goal(logs, goal, ScoreType.TIME)
        assert [log.result_value for log in filtered] == [250]

    def test_reps_filter_only_for_load(self):
        goal = make_goal(150, item_id="back-squat", reps=3)
        logs = [make_log(140, reps=3), make_log(150, reps=1), make_log(120)]
        assert len(filter_logs_for_goal(logs, goal, ScoreType.LOAD)) == 1
        assert len(filter_logs_for_goal(logs, goal, ScoreType.REPS)) == 3

    def test_goal_matches_log_requires_same_item(self):
        goal = make_goal(240, item_id="fran")
        assert goal_matches_log(goal, make_log(230, item_id="fran"), ScoreType.TIME) is True
        assert goal_matches_log(goal, make_log(230, item_id="grace"), ScoreType.TIME) is False


class TestFindAchievedGoals:
    """Tests for find_achieved_goals function."""

    def test_finds_matching_active_goals(self):
        log = make_log(235, item_id="fran", variant=Variant.RX)
        hit = make_goal(240, item_id="fran")
        miss_value = make_goal(230, item_id="fran")
        miss_variant = make_goal(240, item_id="fran", variant=Variant.SCALED)
        other_item = make_goal(240, item_id="grace")
        achieved = find_achieved_goals(
            log, [hit, miss_value, miss_variant, other_item], ScoreType.TIME
        )
        assert [g.id for g in achieved] == [hit.id]

    def test_ignores_inactive_goals(self):
        log = make_log(235, item_id="fran")
        done = make_goal(240, item_id="fran", status=GoalStatus.ACHIEVED)
        cancelled = make_goal(240, item_id="fran", status=GoalStatus.CANCELLED)
        assert find_achieved_goals(log, [done, cancelled], ScoreType.TIME) == []
