"""Tests for SettingsService."""

import pytest

from crossfit_toolkit.config import Settings
from crossfit_toolkit.exceptions import ValidationError
from crossfit_toolkit.services import SettingsService


@pytest.fixture
def service(db, settings):
    return SettingsService(db, settings)


class TestSettingsService:
    """Tests for reading and updating user settings."""

    def test_defaults(self, service):
        current = service.get()
        assert current.weight_unit == "kg"
        assert current.distance_unit == "m"
        assert current.min_sleep_hours == 7

    def test_partial_update(self, service):
        service.update(weight_unit="lb")
        service.update(min_sleep_hours=8)
        current = service.get()
        assert current.weight_unit == "lb"
        assert current.min_sleep_hours == 8

    @pytest.mark.parametrize("kwargs", [
        {"weight_unit": "stone"},
        {"distance_unit": "miles"},
        {"min_sleep_hours": 10},
    ])
    def test_invalid_values(self, service, kwargs):
        with pytest.raises(ValidationError):
            service.update(**kwargs)

    def test_unsaved_defaults_come_from_configuration(self, db, tmp_path):
        configured = Settings(
            data_dir=tmp_path,
            default_weight_unit="lb",
            default_distance_unit="ft",
            default_min_sleep_hours=8,
        )
        current = SettingsService(db, configured).get()
        assert current.weight_unit == "lb"
        assert current.distance_unit == "ft"
        assert current.min_sleep_hours == 8

    def test_saved_settings_override_configuration(self, db, tmp_path):
        configured = Settings(data_dir=tmp_path, default_weight_unit="lb")
        SettingsService(db, configured).update(weight_unit="kg")
        assert SettingsService(db, configured).get().weight_unit == "kg"
