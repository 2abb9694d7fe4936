"""Tests for the SQLite database layer."""

import sqlite3

import pytest

from crossfit_toolkit.db.database import Database
from crossfit_toolkit.db.models import (
    Category,
    CatalogItem,
    CheckInType,
    GoalStatus,
    MetricKind,
    ScoreType,
    UserSettings,
    Variant,
)
from crossfit_toolkit.exceptions import DataIntegrityError, DatabaseError, LogValidationError

from conftest import make_check_in, make_goal, make_log


class TestLogs:
    """Tests for logged performance storage."""

    def test_add_and_get(self, db):
        log = make_log(272, variant=Variant.RX, display_result="4:32")
        db.add_log(log)
        stored = db.get_log(log.id)
        assert stored == log

    def test_logs_for_item_oldest_first(self, db):
        db.add_log(make_log(280, on="2025-01-03"))
        db.add_log(make_log(300, on="2025-01-01"))
        db.add_log(make_log(250, on="2025-01-02", item_id="grace"))
        logs = db.get_logs_for_item("fran")
        assert [log.result_value for log in logs] == [300, 280]

    def test_recent_logs_newest_first(self, db):
        for day in ("2025-01-01", "2025-01-03", "2025-01-02"):
            db.add_log(make_log(100, on=day))
        recent = db.get_recent_logs(limit=2)
        assert len(recent) == 2
        assert recent[0].date > recent[1].date

    def test_rejects_distance_and_calories(self, db):
        with pytest.raises(LogValidationError):
            db.add_log(make_log(60, distance=250, calories=20))

    def test_duplicate_id_is_integrity_error(self, db):
        log = make_log(100)
        db.add_log(log)
        with pytest.raises(DataIntegrityError):
            db.add_log(log)

    def test_delete(self, db):
        log = db.add_log(make_log(100))
        assert db.delete_log(log.id) is True
        assert db.get_log(log.id) is None
        assert db.delete_log(log.id) is False

    def test_add_log_writes_achieved_goals(self, db):
        goal = db.add_goal(make_goal(240))
        goal.status = GoalStatus.ACHIEVED
        goal.achieved_at = "2025-01-01T00:00:00+00:00"
        log = db.add_log(make_log(235), achieved_goals=[goal])
        assert db.get_log(log.id) is not None
        assert db.get_goal(goal.id).status == GoalStatus.ACHIEVED

    def test_failed_goal_write_rolls_back_log(self, db, monkeypatch):
        goal = db.add_goal(make_goal(240))
        goal.status = GoalStatus.ACHIEVED

        def fail_write(conn, goal):
            raise sqlite3.OperationalError("disk I/O error")

        monkeypatch.setattr(db, "_write_goal", fail_write)
        log = make_log(235)
        with pytest.raises(DatabaseError):
            db.add_log(log, achieved_goals=[goal])

        assert db.get_log(log.id) is None
        assert db.get_goal(goal.id).status == GoalStatus.ACTIVE


class TestGoals:
    """Tests for goal storage."""

    def test_add_get_update(self, db):
        goal = db.add_goal(make_goal(240, variant=Variant.RX))
        goal.status = GoalStatus.ACHIEVED
        goal.achieved_at = "2025-02-01T00:00:00+00:00"
        db.update_goal(goal)
        stored = db.get_goal(goal.id)
        assert stored.status == GoalStatus.ACHIEVED
        assert stored.variant == Variant.RX
        assert stored.achieved_at == "2025-02-01T00:00:00+00:00"

    def test_active_goals(self, db):
        active = db.add_goal(make_goal(240))
        db.add_goal(make_goal(230, status=GoalStatus.CANCELLED))
        assert [g.id for g in db.get_active_goals()] == [active.id]
        assert len(db.get_all_goals()) == 2


class TestCheckIns:
    """Tests for check-in storage."""

    def test_upsert_replaces_same_date(self, db):
        first = db.upsert_check_in(make_check_in("2025-03-10", energy=4))
        second = db.upsert_check_in(make_check_in("2025-03-10", CheckInType.REST))
        assert second.id == first.id
        stored = db.get_check_in_by_date("2025-03-10")
        assert stored.type == CheckInType.REST
        assert stored.energy is None
        assert db.count_check_ins() == 1

    def test_recent_newest_first(self, db):
        for day in ("2025-03-08", "2025-03-10", "2025-03-09"):
            db.upsert_check_in(make_check_in(day))
        recent = db.get_recent_check_ins(limit=2)
        assert [c.date for c in recent] == ["2025-03-10", "2025-03-09"]
        assert db.get_latest_check_in().date == "2025-03-10"

    def test_delete(self, db):
        check_in = db.upsert_check_in(make_check_in("2025-03-10"))
        assert db.delete_check_in(check_in.id) is True
        assert db.get_check_in(check_in.id) is None


class TestCustomItemsAndFavorites:
    """Tests for custom items and favorites."""

    def test_custom_item_round_trip(self, db):
        item = CatalogItem(
            id="custom-1",
            name="Echo Bike",
            category=Category.MONOSTRUCTURAL,
            score_type=ScoreType.TIME,
            metric_kind=MetricKind.DISTANCE_CALORIES,
            is_builtin=False,
            created_at=1,
        )
        db.add_custom_item(item)
        stored = db.get_custom_item("custom-1")
        assert stored.metric_kind == MetricKind.DISTANCE_CALORIES
        assert stored.is_builtin is False
        assert [i.id for i in db.get_custom_items()] == ["custom-1"]

    def test_toggle_favorite(self, db):
        assert db.toggle_favorite("fran") is True
        assert db.get_favorite_ids() == {"fran"}
        assert db.toggle_favorite("fran") is False
        assert db.get_favorite_ids() == set()


class TestSettingsAndStats:
    """Tests for settings and stats."""

    def test_settings_defaults(self, db):
        assert db.get_settings() == UserSettings()
        assert db.get_settings(default_min_sleep_hours=8).min_sleep_hours == 8

    def test_save_settings(self, db):
        db.save_settings(UserSettings(weight_unit="lb", min_sleep_hours=8))
        stored = db.get_settings()
        assert stored.weight_unit == "lb"
        assert stored.min_sleep_hours == 8

    def test_stats(self, db):
        db.add_log(make_log(100))
        db.add_goal(make_goal(90))
        db.upsert_check_in(make_check_in("2025-03-10"))
        db.upsert_check_in(make_check_in("2025-03-09", CheckInType.REST))
        stats = db.get_stats()
        assert stats["total_logs"] == 1
        assert stats["active_goals"] == 1
        assert stats["check_ins"] == 2
        assert stats["training_days"] == 1


class TestDatabaseFile:
    def test_creates_parent_directory(self, tmp_path):
        path = tmp_path / "nested" / "dir" / "toolkit.db"
        Database(str(path))
        assert path.exists()
