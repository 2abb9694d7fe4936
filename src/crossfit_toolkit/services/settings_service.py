"""User settings service.

Weight and distance units are used for display only; the minimum sleep
hours feed the recovery score.
"""

import logging
from typing import Optional

from ..analysis.recovery_config import SLEEP_OPTIONS
from ..config import Settings, get_settings
from ..db.database import Database
from ..db.models import UserSettings
from ..exceptions import ValidationError

logger = logging.getLogger(__name__)

WEIGHT_UNITS = ("kg", "lb")
DISTANCE_UNITS = ("m", "ft")


class SettingsService:
    """Service for reading and updating user settings."""

    def __init__(self, db: Database, settings: Optional[Settings] = None):
        self.db = db
        self.settings = settings or get_settings()

    def get(self) -> UserSettings:
        """Get user settings, with defaults from the environment if unsaved."""
        return self.db.get_settings(
            default_min_sleep_hours=self.settings.default_min_sleep_hours,
            default_weight_unit=self.settings.default_weight_unit,
            default_distance_unit=self.settings.default_distance_unit,
        )

    def update(
        self,
        weight_unit: Optional[str] = None,
        distance_unit: Optional[str] = None,
        min_sleep_hours: Optional[float] = None,
    ) -> UserSettings:
        """Update the given fields, leaving the others unchanged.

        Raises:
            ValidationError: If a unit is unknown or the sleep threshold is
                not one of the preset options
        """
        current = self.get()

        if weight_unit is not None:
            if weight_unit not in WEIGHT_UNITS:
                raise ValidationError(f"Unknown weight unit: {weight_unit}", field="weight_unit")
            current.weight_unit = weight_unit

        if distance_unit is not None:
            if distance_unit not in DISTANCE_UNITS:
                raise ValidationError(f"Unknown distance unit: {distance_unit}", field="distance_unit")
            current.distance_unit = distance_unit

        if min_sleep_hours is not None:
            if min_sleep_hours not in SLEEP_OPTIONS:
                raise ValidationError(
                    f"Minimum sleep must be one of {', '.join(str(h) for h in SLEEP_OPTIONS)}",
                    field="min_sleep_hours",
                )
            current.min_sleep_hours = min_sleep_hours

        self.db.save_settings(current)
        logger.info(f"Updated settings: {current.to_dict()}")
        return current
