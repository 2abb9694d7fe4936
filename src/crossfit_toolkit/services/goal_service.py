"""Goal management and progress tracking."""

import logging
import uuid
from datetime import date, datetime, timezone
from typing import List, Optional, Union

from ..analysis.bests import best_overall
from ..analysis.trends import (
    calculate_days_remaining,
    calculate_progress,
    filter_logs_for_goal,
    project_trend,
)
from ..catalog import CatalogService
from ..config import Settings, get_settings
from ..dates import parse_date, today as utc_today
from ..db.database import Database
from ..db.models import Goal, GoalStatus, ScoreType, Variant
from ..exceptions import GoalNotEditableError, GoalNotFoundError, ValidationError
from ..models.goals import GoalWithProgress
from ..results import format_value_as_result, parse_result_to_value
from .settings_service import SettingsService

logger = logging.getLogger(__name__)


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


class GoalService:
    """Service for creating goals and enriching them with progress."""

    def __init__(
        self,
        db: Database,
        catalog: Optional[CatalogService] = None,
        settings: Optional[Settings] = None,
    ):
        self.db = db
        self.catalog = catalog or CatalogService(db)
        self.settings = settings or get_settings()

    def _validate_target(self, target_value: float, target_date: Union[str, date]) -> str:
        if target_value <= 0:
            raise ValidationError("Target must be a positive value", field="target_value")
        parsed = parse_date(target_date)
        if parsed is None:
            raise ValidationError(f"Invalid target date: {target_date}", field="target_date")
        return parsed.isoformat()

    def parse_target(self, item_id: str, target: str) -> float:
        """Parse a target as entered ("4:00", "120", "18+5") for an item."""
        item = self.catalog.get_item(item_id)
        return parse_result_to_value(target.strip(), item.score_type)

    # =========================================================================
    # CRUD
    # =========================================================================

    def create_goal(
        self,
        item_id: str,
        target_value: float,
        target_date: Union[str, date],
        variant: Optional[Variant] = None,
        reps: Optional[int] = None,
    ) -> Goal:
        """Create an active goal for a catalog item.

        Raises:
            CatalogItemNotFoundError: If the item does not exist
            ValidationError: If the target or rep filter is invalid
        """
        item = self.catalog.get_item(item_id)
        target_iso = self._validate_target(target_value, target_date)
        if reps is not None and item.score_type != ScoreType.LOAD:
            raise ValidationError("Rep filters only apply to lifts", field="reps")

        goal = Goal(
            id=str(uuid.uuid4()),
            item_id=item.id,
            target_value=target_value,
            target_date=target_iso,
            created_at=_now_iso(),
            variant=variant,
            reps=reps,
        )
        self.db.add_goal(goal)
        logger.info(f"Created goal {goal.id} for {item.name}: {target_value} by {target_iso}")
        return goal

    def get_goal(self, goal_id: str) -> Goal:
        goal = self.db.get_goal(goal_id)
        if goal is None:
            raise GoalNotFoundError(goal_id)
        return goal

    def _get_active(self, goal_id: str) -> Goal:
        goal = self.get_goal(goal_id)
        if not goal.is_active:
            raise GoalNotEditableError(goal_id, goal.status.value)
        return goal

    def update_goal(
        self,
        goal_id: str,
        target_value: Optional[float] = None,
        target_date: Union[str, date, None] = None,
    ) -> Goal:
        """Change an active goal's target value and/or date."""
        goal = self._get_active(goal_id)
        new_value = target_value if target_value is not None else goal.target_value
        new_date = target_date if target_date is not None else goal.target_date
        goal.target_value = new_value
        goal.target_date = self._validate_target(new_value, new_date)
        return self.db.update_goal(goal)

    def achieve_goal(self, goal_id: str) -> Goal:
        goal = self._get_active(goal_id)
        goal.status = GoalStatus.ACHIEVED
        goal.achieved_at = _now_iso()
        logger.info(f"Goal {goal_id} marked achieved")
        return self.db.update_goal(goal)

    def cancel_goal(self, goal_id: str) -> Goal:
        goal = self._get_active(goal_id)
        goal.status = GoalStatus.CANCELLED
        logger.info(f"Goal {goal_id} cancelled")
        return self.db.update_goal(goal)

    def delete_goal(self, goal_id: str) -> None:
        if not self.db.delete_goal(goal_id):
            raise GoalNotFoundError(goal_id)

    def get_active_goal_for_item(
        self,
        item_id: str,
        variant: Optional[Variant] = None,
        reps: Optional[int] = None,
    ) -> Optional[Goal]:
        """The active goal for an item with exactly this variant and reps."""
        for goal in self.db.get_active_goals():
            if goal.item_id == item_id and goal.variant == variant and goal.reps == reps:
                return goal
        return None

    # =========================================================================
    # Progress
    # =========================================================================

    def enrich_goal(
        self,
        goal: Goal,
        weight_unit: Optional[str] = None,
        today: Optional[date] = None,
    ) -> GoalWithProgress:
        """Attach current best, progress, days remaining and trend to a goal."""
        item = self.catalog.find_item(goal.item_id)
        score_type = item.score_type if item else ScoreType.REPS
        item_name = item.name if item else goal.item_id

        logs = filter_logs_for_goal(self.db.get_logs_for_item(goal.item_id), goal, score_type)
        best = best_overall(logs, score_type)
        current_value = best.result_value if best else None

        if weight_unit is None:
            weight_unit = SettingsService(self.db, self.settings).get().weight_unit
        unit = weight_unit if score_type == ScoreType.LOAD else None

        projection = project_trend(
            logs,
            goal.target_value,
            goal.target_date,
            score_type,
            today=today,
            window=self.settings.trend_window,
            tolerance_days=self.settings.trend_tolerance_days,
        )

        return GoalWithProgress(
            id=goal.id,
            item_id=goal.item_id,
            item_name=item_name,
            target_value=goal.target_value,
            target_date=goal.target_date,
            created_at=goal.created_at,
            status=goal.status,
            achieved_at=goal.achieved_at,
            variant=goal.variant,
            reps=goal.reps,
            current_value=current_value,
            current_result=best.display_result if best else None,
            target_result=format_value_as_result(goal.target_value, score_type, unit),
            progress=calculate_progress(current_value, goal.target_value, score_type),
            days_remaining=calculate_days_remaining(goal.target_date, today or utc_today()),
            trend=projection.trend,
            projected_date=projection.projected_date,
        )

    def list_active_goals(self, today: Optional[date] = None) -> List[GoalWithProgress]:
        """Active goals with progress, nearest target date first."""
        enriched = [self.enrich_goal(goal, today=today) for goal in self.db.get_active_goals()]
        return sorted(enriched, key=lambda g: g.days_remaining)

    def list_achieved_goals(self, today: Optional[date] = None) -> List[GoalWithProgress]:
        """Achieved goals with progress, most recently achieved first."""
        goals = self.db.get_goals_by_status(GoalStatus.ACHIEVED)
        enriched = [self.enrich_goal(goal, today=today) for goal in goals]
        return sorted(enriched, key=lambda g: g.achieved_at or "", reverse=True)

    def list_goals(
        self,
        status: Optional[GoalStatus] = None,
        today: Optional[date] = None,
    ) -> List[GoalWithProgress]:
        if status == GoalStatus.ACTIVE:
            return self.list_active_goals(today)
        if status == GoalStatus.ACHIEVED:
            return self.list_achieved_goals(today)
        if status is not None:
            return [self.enrich_goal(g, today=today) for g in self.db.get_goals_by_status(status)]
        return [self.enrich_goal(g, today=today) for g in self.db.get_all_goals()]
