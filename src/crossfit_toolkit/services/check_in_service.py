"""Daily check-ins and the recovery status built from them.

This service handles:
- Saving training and rest day check-ins (one per date)
- Counting consecutive training days
- Scoring today's recovery and picking the alert copy
"""

import logging
import uuid
from datetime import date
from typing import List, Optional, Union

from ..analysis.recovery import calculate_recovery_score, count_consecutive_training_days
from ..analysis.recovery_config import (
    ALERT_DESCRIPTIONS,
    ALERT_TITLES,
    LONG_GAP_DAYS,
    METRIC_RANGE,
    SLEEP_OPTIONS,
)
from ..config import Settings, get_settings
from ..dates import now_epoch_ms, parse_date, today as utc_today
from ..db.database import Database
from ..db.models import CheckInType, DailyCheckIn
from ..exceptions import CheckInNotFoundError, CheckInValidationError
from ..models.recovery import RecoveryStatus
from .settings_service import SettingsService

logger = logging.getLogger(__name__)


class CheckInService:
    """Service for daily check-ins and recovery scoring."""

    def __init__(self, db: Database, settings: Optional[Settings] = None):
        self.db = db
        self.settings = settings or get_settings()

    def _resolve_date(self, on: Union[str, date, None]) -> str:
        if on is None:
            return utc_today().isoformat()
        parsed = parse_date(on)
        if parsed is None:
            raise CheckInValidationError(f"Invalid date: {on}", field="date")
        return parsed.isoformat()

    @staticmethod
    def _validate_metric(name: str, value: int) -> None:
        if value not in METRIC_RANGE:
            raise CheckInValidationError(
                f"{name.capitalize()} must be between {METRIC_RANGE.start} and {METRIC_RANGE.stop - 1}",
                field=name,
                details={"value": value},
            )

    # =========================================================================
    # Saving
    # =========================================================================

    def save_training(
        self,
        energy: int,
        soreness: int,
        sleep_hours: float,
        on: Union[str, date, None] = None,
    ) -> DailyCheckIn:
        """Save a training day check-in, replacing any check-in for the date.

        Raises:
            CheckInValidationError: If a metric is outside 1-5 or the sleep
                hours are not one of the preset options
        """
        self._validate_metric("energy", energy)
        self._validate_metric("soreness", soreness)
        if sleep_hours not in SLEEP_OPTIONS:
            raise CheckInValidationError(
                f"Sleep hours must be one of {', '.join(str(h) for h in SLEEP_OPTIONS)}",
                field="sleep_hours",
                details={"value": sleep_hours},
            )

        check_in = DailyCheckIn(
            id=str(uuid.uuid4()),
            date=self._resolve_date(on),
            type=CheckInType.TRAINING,
            energy=energy,
            soreness=soreness,
            sleep_hours=sleep_hours,
            created_at=now_epoch_ms(),
        )
        saved = self.db.upsert_check_in(check_in)
        logger.info(f"Saved training check-in for {saved.date}")
        return saved

    def save_rest(self, on: Union[str, date, None] = None) -> DailyCheckIn:
        """Save a rest day check-in; rest days carry no metrics."""
        check_in = DailyCheckIn(
            id=str(uuid.uuid4()),
            date=self._resolve_date(on),
            type=CheckInType.REST,
            created_at=now_epoch_ms(),
        )
        saved = self.db.upsert_check_in(check_in)
        logger.info(f"Saved rest day check-in for {saved.date}")
        return saved

    def delete_check_in(self, check_in_id: str) -> None:
        if not self.db.delete_check_in(check_in_id):
            raise CheckInNotFoundError(check_in_id)

    # =========================================================================
    # Reading
    # =========================================================================

    def get_check_in(self, on: Union[str, date, None] = None) -> Optional[DailyCheckIn]:
        return self.db.get_check_in_by_date(self._resolve_date(on))

    def get_today_check_in(self) -> Optional[DailyCheckIn]:
        return self.get_check_in()

    def get_recent(self, limit: int = 7) -> List[DailyCheckIn]:
        return self.db.get_recent_check_ins(limit)

    def get_consecutive_training_days(self, today: Optional[date] = None) -> int:
        check_ins = self.db.get_recent_check_ins(self.settings.check_in_window_days)
        return count_consecutive_training_days(
            check_ins,
            today=today or utc_today(),
            gap_reset_days=self.settings.gap_reset_days,
        )

    def is_first_check_in(self) -> bool:
        return self.db.count_check_ins() == 0

    def has_long_gap(self, today: Optional[date] = None) -> bool:
        """Check if the latest check-in is at least three days old."""
        latest = self.db.get_latest_check_in()
        if latest is None:
            return False
        latest_date = parse_date(latest.date)
        return ((today or utc_today()) - latest_date).days >= LONG_GAP_DAYS

    # =========================================================================
    # Recovery
    # =========================================================================

    def get_recovery(self, today: Optional[date] = None) -> RecoveryStatus:
        """Score today's recovery from today's check-in and the training streak."""
        today = today or utc_today()
        check_in = self.db.get_check_in_by_date(today.isoformat())
        consecutive_days = self.get_consecutive_training_days(today)
        min_sleep_hours = SettingsService(self.db, self.settings).get().min_sleep_hours

        score = calculate_recovery_score(consecutive_days, check_in, min_sleep_hours)
        logger.debug(
            f"Recovery for {today}: {score.total} points ({score.level.value}), "
            f"{consecutive_days} consecutive days"
        )

        return RecoveryStatus(
            date=today.isoformat(),
            check_in=check_in,
            consecutive_days=consecutive_days,
            score=score,
            title=ALERT_TITLES[score.level],
            description=ALERT_DESCRIPTIONS[score.level],
            is_first_check_in=self.is_first_check_in(),
            has_long_gap=self.has_long_gap(today),
        )
