"""Personal record (best value) output models."""

from enum import Enum
from typing import Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from ..db.models import LoggedPerformance, MetricKind
from .base import to_camel


class GroupBy(str, Enum):
    """Key used to partition an item's history for display."""
    DISTANCE = "distance"
    CALORIE_TIME = "calorie_time"  # calories logged over a fixed time
    REPS = "reps"                  # 1RM, 3RM, ...
    VARIANT = "variant"            # Rx+, Rx, Scaled, unspecified


class BestSummary(BaseModel):
    """Best performances for one catalog item.

    Dual-metric items (rowers, bikes, ski ergs) surface both the distance
    and the calorie buckets side by side.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )

    item_id: str = Field(..., description="Catalog item the bests belong to")
    metric_kind: MetricKind = Field(default=MetricKind.NONE, description="Metric grouping applied")
    overall: Optional[LoggedPerformance] = Field(
        None, description="Single best performance across all applicable logs"
    )
    by_distance: Dict[float, LoggedPerformance] = Field(
        default_factory=dict,
        description="Best time per distance (metres)"
    )
    by_calorie_time: Dict[float, LoggedPerformance] = Field(
        default_factory=dict,
        description="Most calories per elapsed time (seconds)"
    )

    @property
    def has_data(self) -> bool:
        return self.overall is not None or bool(self.by_distance) or bool(self.by_calorie_time)


class HistoryGroup(BaseModel):
    """A group of logs sharing one grouping key, best first."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )

    group_by: GroupBy = Field(..., description="Kind of grouping key")
    key: Optional[Union[float, str]] = Field(
        None, description="Distance, time, reps or variant value; None for unspecified variant"
    )
    label: str = Field(..., description="Display label for the group")
    best: LoggedPerformance = Field(..., description="Best log in the group")
    logs: List[LoggedPerformance] = Field(
        default_factory=list,
        description="All logs in the group: best first, then newest first"
    )


class LogOutcome(BaseModel):
    """Result of logging a performance."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )

    log: LoggedPerformance = Field(..., description="The stored log")
    is_new_pr: bool = Field(default=False, description="Beats every comparable earlier log")
    previous_best: Optional[LoggedPerformance] = Field(
        None, description="Best comparable log before this one"
    )
    achieved_goal_ids: List[str] = Field(
        default_factory=list,
        description="Goals marked achieved by this log"
    )
