"""Logging performances and reading back bests and history.

This service handles:
- Validation of a new result against its catalog item
- Storage of the log and detection of a new personal record
- Marking active goals achieved by the new log
"""

import logging
import uuid
from datetime import date, datetime, timezone
from typing import List, Optional, Union

from ..analysis.bests import best_overall, group_history, is_better, summarize_bests
from ..analysis.trends import find_achieved_goals
from ..catalog import CatalogService
from ..dates import date_to_epoch_ms, now_epoch_ms, parse_date, today as utc_today
from ..db.database import Database
from ..db.models import (
    CatalogItem,
    GoalStatus,
    LoggedPerformance,
    ScoreType,
    Variant,
)
from ..exceptions import LogNotFoundError, LogValidationError
from ..models.bests import BestSummary, HistoryGroup, LogOutcome
from ..results import format_seconds_to_time, parse_result_to_value

logger = logging.getLogger(__name__)


class PerformanceService:
    """Service for logging performances and reading personal records."""

    def __init__(self, db: Database, catalog: Optional[CatalogService] = None):
        self.db = db
        self.catalog = catalog or CatalogService(db)

    # =========================================================================
    # Logging
    # =========================================================================

    def _validate(
        self,
        item: CatalogItem,
        result_value: float,
        reps: Optional[int],
        distance: Optional[float],
        calories: Optional[float],
    ) -> None:
        if result_value <= 0:
            raise LogValidationError(
                f"Result must be a positive {item.score_type.value} value",
                field="result",
            )
        if reps is not None:
            if item.score_type != ScoreType.LOAD:
                raise LogValidationError("Reps can only be logged for lifts", field="reps")
            if reps < 1:
                raise LogValidationError("Reps must be at least 1", field="reps")
        if distance is not None and calories is not None:
            raise LogValidationError(
                "A log cannot carry both distance and calories", field="calories"
            )
        if distance is not None:
            if not item.metric_kind.supports_distance:
                raise LogValidationError(f"{item.name} is not logged by distance", field="distance")
            if distance <= 0:
                raise LogValidationError("Distance must be positive", field="distance")
        if calories is not None:
            if not item.metric_kind.supports_calories:
                raise LogValidationError(f"{item.name} is not logged by calories", field="calories")
            if calories <= 0:
                raise LogValidationError("Calories must be positive", field="calories")

    def log_performance(
        self,
        item_id: str,
        result: str,
        performed_on: Union[str, date, None] = None,
        variant: Optional[Variant] = None,
        reps: Optional[int] = None,
        distance: Optional[float] = None,
        calories: Optional[float] = None,
        notes: Optional[str] = None,
    ) -> LogOutcome:
        """Validate and store a result, then resolve goals it achieves.

        Args:
            item_id: Catalog item the result is for
            result: Result as entered ("4:32", "100", "18+5")
            performed_on: Date of the performance (defaults to today)
            variant: Optional Rx+/Rx/Scaled classification
            reps: Rep scheme, lifts only
            distance: Metres covered, distance-capable items only
            calories: Calories burned, calorie-capable items only
            notes: Free text

        Returns:
            LogOutcome with the stored log, PR flag and achieved goal IDs

        Raises:
            CatalogItemNotFoundError: If the item does not exist
            LogValidationError: If the result does not fit the item
        """
        item = self.catalog.get_item(item_id)

        result = result.strip()
        result_value = parse_result_to_value(result, item.score_type)
        self._validate(item, result_value, reps, distance, calories)

        day = parse_date(performed_on) if performed_on is not None else utc_today()
        if day is None:
            raise LogValidationError(f"Invalid date: {performed_on}", field="date")

        display_result = result
        if calories is not None and item.score_type == ScoreType.TIME:
            display_result = f"{calories:g} cal in {format_seconds_to_time(result_value)}"

        earlier_logs = self.db.get_logs_for_item(item.id)

        log = LoggedPerformance(
            id=str(uuid.uuid4()),
            item_id=item.id,
            result_value=result_value,
            display_result=display_result,
            date=date_to_epoch_ms(day),
            variant=variant,
            reps=reps,
            distance=distance,
            calories=calories,
            notes=notes,
            created_at=now_epoch_ms(),
        )
        achieved = find_achieved_goals(log, self.db.get_active_goals(), item.score_type)
        achieved_at = datetime.now(timezone.utc).isoformat()
        for goal in achieved:
            goal.status = GoalStatus.ACHIEVED
            goal.achieved_at = achieved_at

        self.db.add_log(log, achieved_goals=achieved)
        for goal in achieved:
            logger.info(f"Goal {goal.id} achieved by log {log.id}")

        previous_best = self._comparable_best(earlier_logs, log, item)
        is_new_pr = previous_best is None or self._beats(log, previous_best, item)

        if is_new_pr:
            logger.info(f"New PR for {item.name}: {display_result}")

        return LogOutcome(
            log=log,
            is_new_pr=is_new_pr,
            previous_best=previous_best,
            achieved_goal_ids=[goal.id for goal in achieved],
        )

    def _comparable_best(
        self,
        earlier_logs: List[LoggedPerformance],
        log: LoggedPerformance,
        item: CatalogItem,
    ) -> Optional[LoggedPerformance]:
        """Best earlier log in the same pool as ``log``.

        Pools are per variant, and further per rep count for lifts, per
        distance for distance logs and per elapsed time for calorie logs.
        """
        pool = [other for other in earlier_logs if other.variant == log.variant]

        if log.distance is not None:
            pool = [other for other in pool if other.distance == log.distance]
        elif log.calories is not None:
            pool = [
                other for other in pool
                if other.calories is not None and other.result_value == log.result_value
            ]
            best = None
            for other in pool:
                if best is None or other.calories > best.calories:
                    best = other
            return best
        elif item.metric_kind.supports_distance or item.metric_kind.supports_calories:
            pool = [other for other in pool if other.distance is None and other.calories is None]

        if item.score_type == ScoreType.LOAD:
            reps = log.reps or 1
            pool = [other for other in pool if (other.reps or 1) == reps]

        return best_overall(pool, item.score_type)

    @staticmethod
    def _beats(log: LoggedPerformance, best: LoggedPerformance, item: CatalogItem) -> bool:
        if log.calories is not None:
            return log.calories > best.calories
        return is_better(log.result_value, best.result_value, item.score_type)

    def get_log(self, log_id: str) -> LoggedPerformance:
        log = self.db.get_log(log_id)
        if log is None:
            raise LogNotFoundError(log_id)
        return log

    def delete_performance(self, log_id: str) -> None:
        """Delete a log. Goals it achieved stay achieved."""
        if not self.db.delete_log(log_id):
            raise LogNotFoundError(log_id)
        logger.info(f"Deleted log {log_id}")

    # =========================================================================
    # Reading bests
    # =========================================================================

    def get_logs(self, item_id: str, variant: Optional[Variant] = None) -> List[LoggedPerformance]:
        logs = self.db.get_logs_for_item(item_id)
        if variant is not None:
            logs = [log for log in logs if log.variant == variant]
        return logs

    def get_bests(self, item_id: str, variant: Optional[Variant] = None) -> BestSummary:
        """Best performances for an item, optionally for one variant."""
        item = self.catalog.get_item(item_id)
        return summarize_bests(self.get_logs(item.id, variant), item)

    def get_history(self, item_id: str) -> List[HistoryGroup]:
        """An item's logs grouped for display, best first within each group."""
        item = self.catalog.get_item(item_id)
        return group_history(self.db.get_logs_for_item(item.id), item)

    def get_recent(self, limit: int = 10) -> List[LoggedPerformance]:
        return self.db.get_recent_logs(limit)
