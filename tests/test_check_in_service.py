"""Tests for CheckInService."""

from datetime import date

import pytest

from crossfit_toolkit.db.models import CheckInType, UserSettings
from crossfit_toolkit.exceptions import CheckInNotFoundError, CheckInValidationError
from crossfit_toolkit.models.recovery import AlertLevel
from crossfit_toolkit.services import CheckInService

TODAY = date(2025, 3, 10)


@pytest.fixture
def service(db, settings):
    return CheckInService(db, settings)


class TestSaveCheckIn:
    """Tests for saving check-ins."""

    def test_save_training(self, service):
        saved = service.save_training(4, 2, 8, on="2025-03-10")
        assert saved.type == CheckInType.TRAINING
        assert service.get_check_in("2025-03-10").energy == 4

    @pytest.mark.parametrize("energy,soreness,sleep", [(0, 3, 7), (6, 3, 7), (3, 0, 7), (3, 3, 4), (3, 3, 7.5)])
    def test_invalid_values(self, service, energy, soreness, sleep):
        with pytest.raises(CheckInValidationError):
            service.save_training(energy, soreness, sleep, on="2025-03-10")

    def test_invalid_date(self, service):
        with pytest.raises(CheckInValidationError):
            service.save_rest(on="yesterday")

    def test_one_check_in_per_date(self, service, db):
        first = service.save_training(4, 2, 8, on="2025-03-10")
        second = service.save_rest(on="2025-03-10")
        assert second.id == first.id
        stored = service.get_check_in("2025-03-10")
        assert stored.type == CheckInType.REST
        assert stored.energy is None
        assert db.count_check_ins() == 1

    def test_delete(self, service):
        saved = service.save_rest(on="2025-03-10")
        service.delete_check_in(saved.id)
        assert service.get_check_in("2025-03-10") is None
        with pytest.raises(CheckInNotFoundError):
            service.delete_check_in(saved.id)


class TestStreakAndGaps:
    """Tests for consecutive days and gap flags."""

    def test_consecutive_training_days(self, service):
        for day in ("2025-03-07", "2025-03-08", "2025-03-09", "2025-03-10"):
            service.save_training(3, 2, 7, on=day)
        assert service.get_consecutive_training_days(TODAY) == 4

    def test_first_check_in(self, service):
        assert service.is_first_check_in() is True
        service.save_rest(on="2025-03-10")
        assert service.is_first_check_in() is False

    def test_long_gap(self, service):
        assert service.has_long_gap(TODAY) is False
        service.save_rest(on="2025-03-08")
        assert service.has_long_gap(TODAY) is False
        service.delete_check_in(service.get_check_in("2025-03-08").id)
        service.save_rest(on="2025-03-07")
        assert service.has_long_gap(TODAY) is True


class TestGetRecovery:
    """Tests for get_recovery."""

    def test_no_check_ins(self, service):
        status = service.get_recovery(TODAY)
        assert status.score.total == 0
        assert status.score.level == AlertLevel.NONE
        assert status.check_in is None
        assert status.is_first_check_in is True
        assert status.title == ""

    def test_critical_after_hard_week(self, service):
        for day in ("2025-03-06", "2025-03-07", "2025-03-08", "2025-03-09"):
            service.save_training(3, 3, 7, on=day)
        service.save_training(1, 5, 5, on="2025-03-10")
        status = service.get_recovery(TODAY)
        assert status.consecutive_days == 5
        # 4 streak + 4 energy + 4 soreness + 4 sleep
        assert status.score.total == 16
        assert status.score.level == AlertLevel.CRITICAL
        assert status.title == "Rest Day Recommended"
        assert status.date == "2025-03-10"

    def test_rest_day_scores_zero(self, service):
        service.save_training(3, 2, 7, on="2025-03-09")
        service.save_rest(on="2025-03-10")
        status = service.get_recovery(TODAY)
        assert status.consecutive_days == 0
        assert status.score.total == 0

    def test_uses_saved_min_sleep(self, service, db):
        service.save_training(5, 1, 7, on="2025-03-10")
        assert service.get_recovery(TODAY).score.total == 0
        db.save_settings(UserSettings(min_sleep_hours=9))
        assert service.get_recovery(TODAY).score.total == 4


class TestReading:
    """Tests for reading check-ins back."""

    def test_recent_newest_first(self, service):
        for day in ("2025-03-08", "2025-03-09", "2025-03-10"):
            service.save_rest(on=day)
        assert [c.date for c in service.get_recent(limit=2)] == ["2025-03-10", "2025-03-09"]
        assert service.get_today_check_in() is None
