"""Pytest configuration and fixtures."""

from datetime import date
from itertools import count

import pytest

from crossfit_toolkit.catalog import CatalogService
from crossfit_toolkit.config import Settings
from crossfit_toolkit.dates import date_to_epoch_ms
from crossfit_toolkit.db.database import Database
from crossfit_toolkit.db.models import (
    CatalogItem,
    Category,
    CheckInType,
    DailyCheckIn,
    Goal,
    GoalStatus,
    LoggedPerformance,
    MetricKind,
    ScoreType,
)

_ids = count(1)


def make_log(
    result_value,
    on="2025-01-01",
    item_id="fran",
    variant=None,
    reps=None,
    distance=None,
    calories=None,
    display_result=None,
    log_id=None,
):
    """Build a LoggedPerformance dated at UTC midnight of ``on``."""
    day = date.fromisoformat(on) if isinstance(on, str) else on
    return LoggedPerformance(
        id=log_id or f"log-{next(_ids)}",
        item_id=item_id,
        result_value=result_value,
        display_result=display_result or str(result_value),
        date=date_to_epoch_ms(day),
        variant=variant,
        reps=reps,
        distance=distance,
        calories=calories,
        created_at=date_to_epoch_ms(day),
    )


def make_check_in(on, type=CheckInType.TRAINING, energy=3, soreness=2, sleep_hours=7):
    if type == CheckInType.REST:
        energy = soreness = sleep_hours = None
    return DailyCheckIn(
        id=f"checkin-{next(_ids)}",
        date=on,
        type=type,
        energy=energy,
        soreness=soreness,
        sleep_hours=sleep_hours,
    )


def make_goal(
    target_value,
    target_date="2025-06-01",
    item_id="fran",
    variant=None,
    reps=None,
    status=GoalStatus.ACTIVE,
):
    return Goal(
        id=f"goal-{next(_ids)}",
        item_id=item_id,
        target_value=target_value,
        target_date=target_date,
        created_at="2025-01-01T00:00:00+00:00",
        status=status,
        variant=variant,
        reps=reps,
    )


def make_item(
    score_type=ScoreType.TIME,
    metric_kind=MetricKind.NONE,
    category=Category.BENCHMARK,
    item_id="item",
):
    return CatalogItem(
        id=item_id,
        name=item_id.title(),
        category=category,
        score_type=score_type,
        metric_kind=metric_kind,
    )


@pytest.fixture
def settings(tmp_path):
    """Settings pointing at a temporary database."""
    return Settings(data_dir=tmp_path, db_path=tmp_path / "toolkit.db")


@pytest.fixture
def db(settings):
    """Fresh SQLite database in a temporary directory."""
    return Database(str(settings.db_path))


@pytest.fixture
def catalog(db):
    return CatalogService(db)


@pytest.fixture
def row_item():
    return make_item(
        score_type=ScoreType.TIME,
        metric_kind=MetricKind.DISTANCE_CALORIES,
        category=Category.MONOSTRUCTURAL,
        item_id="row",
    )


@pytest.fixture
def run_item():
    return make_item(
        score_type=ScoreType.TIME,
        metric_kind=MetricKind.DISTANCE,
        category=Category.MONOSTRUCTURAL,
        item_id="run",
    )


@pytest.fixture
def lift_item():
    return make_item(
        score_type=ScoreType.LOAD,
        category=Category.LIFT,
        item_id="back-squat",
    )
