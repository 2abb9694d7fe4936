"""Goal progress and trend output models."""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from ..db.models import GoalStatus, Variant
from .base import to_camel


class TrendStatus(str, Enum):
    """Projected pace toward a goal."""
    AHEAD = "ahead"
    ON_TRACK = "on_track"
    BEHIND = "behind"
    NO_DATA = "no_data"


class TrendProjection(BaseModel):
    """Result of fitting a trend line to recent logs."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )

    trend: TrendStatus = Field(..., description="Projected pace toward the target")
    projected_date: Optional[str] = Field(
        None, description="Estimated achievement date (YYYY-MM-DD)"
    )


class GoalWithProgress(BaseModel):
    """A goal enriched with current best, progress and trend."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )

    id: str = Field(..., description="Goal identifier")
    item_id: str = Field(..., description="Catalog item the goal targets")
    item_name: str = Field(..., description="Catalog item display name")
    target_value: float = Field(..., description="Normalized target value")
    target_date: str = Field(..., description="Target date (YYYY-MM-DD)")
    created_at: str = Field(..., description="When the goal was set")
    status: GoalStatus = Field(..., description="Goal status")
    achieved_at: Optional[str] = Field(None, description="When the goal was achieved")
    variant: Optional[Variant] = Field(None, description="Variant filter")
    reps: Optional[int] = Field(None, description="Rep-max filter for lifts")

    current_value: Optional[float] = Field(None, description="Current best value")
    current_result: Optional[str] = Field(None, description="Current best as logged")
    target_result: str = Field(..., description="Target value formatted as a result")
    progress: float = Field(default=0.0, ge=0, le=100, description="Progress percentage")
    days_remaining: int = Field(..., description="Days until the target date")
    trend: TrendStatus = Field(default=TrendStatus.NO_DATA, description="Projected trend")
    projected_date: Optional[str] = Field(None, description="Estimated achievement date")
