"""Recovery score output models."""

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from ..db.models import DailyCheckIn
from .base import to_camel


class AlertLevel(str, Enum):
    """Recovery alert level derived from total fatigue points."""
    NONE = "none"
    INFO = "info"
    WARNING = "warning"
    CRITICAL = "critical"


class ReasonMetric(str, Enum):
    """Factor that contributed to a recovery reason."""
    CONSECUTIVE = "consecutive"
    ENERGY = "energy"
    SORENESS = "soreness"
    SLEEP = "sleep"


class RecoveryReason(BaseModel):
    """A single user-facing reason behind the recovery score."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )

    metric: ReasonMetric = Field(..., description="Which factor contributed")
    points: float = Field(..., ge=0, description="Fatigue points (internal, not displayed)")
    message: str = Field(..., description="User-facing message")


class RecoveryScore(BaseModel):
    """Fatigue score with alert level and contributing reasons."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )

    total: float = Field(..., ge=0, description="Total fatigue points")
    level: AlertLevel = Field(..., description="Alert level for the total")
    reasons: List[RecoveryReason] = Field(
        default_factory=list,
        description="Contributing factors, in display order"
    )


class RecoveryStatus(BaseModel):
    """Everything the daily recovery card needs."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )

    date: str = Field(..., description="Date the status was computed for")
    check_in: Optional[DailyCheckIn] = Field(None, description="Today's check-in, if any")
    consecutive_days: int = Field(default=0, ge=0, description="Consecutive training days")
    score: RecoveryScore = Field(..., description="Recovery score")
    title: str = Field(default="", description="Alert title")
    description: str = Field(default="", description="Alert description")
    is_first_check_in: bool = Field(default=False, description="No check-in recorded yet")
    has_long_gap: bool = Field(default=False, description="Last check-in was 3+ days ago")
