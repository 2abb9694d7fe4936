"""Data models for logged performances, goals and check-ins."""

from dataclasses import dataclass, asdict
from enum import Enum
from typing import Optional


class ScoreType(str, Enum):
    """How a catalog item is scored."""
    TIME = "Time"                # seconds, lower is better
    LOAD = "Load"                # kg/lb
    REPS = "Reps"
    ROUNDS_REPS = "Rounds+Reps"  # rounds * 100 + reps
    DISTANCE = "Distance"        # metres
    CALORIES = "Calories"


class Category(str, Enum):
    """Catalog item category."""
    BENCHMARK = "Benchmark"
    LIFT = "Lift"
    MONOSTRUCTURAL = "Monostructural"
    SKILL = "Skill"
    CUSTOM = "Custom"


class MetricKind(str, Enum):
    """Which extra metrics a monostructural item can be logged with."""
    NONE = "none"
    DISTANCE = "distance"
    CALORIES = "calories"
    DISTANCE_CALORIES = "distance+calories"

    @property
    def supports_distance(self) -> bool:
        return self in (MetricKind.DISTANCE, MetricKind.DISTANCE_CALORIES)

    @property
    def supports_calories(self) -> bool:
        return self in (MetricKind.CALORIES, MetricKind.DISTANCE_CALORIES)


class Variant(str, Enum):
    """Performance variant; logs are only compared within one variant."""
    RX_PLUS = "Rx+"
    RX = "Rx"
    SCALED = "Scaled"


class GoalStatus(str, Enum):
    ACTIVE = "active"
    ACHIEVED = "achieved"
    CANCELLED = "cancelled"


class CheckInType(str, Enum):
    TRAINING = "training"
    REST = "rest"


def _enum_or_none(enum_cls, value):
    if value is None or value == "":
        return None
    return enum_cls(value)


@dataclass
class CatalogItem:
    """An exercise, benchmark or lift that results are logged against."""
    id: str
    name: str
    category: Category
    score_type: ScoreType
    metric_kind: MetricKind = MetricKind.NONE
    description: Optional[str] = None
    is_builtin: bool = True
    is_favorite: bool = False
    created_at: int = 0

    def to_dict(self) -> dict:
        d = asdict(self)
        d["category"] = self.category.value
        d["score_type"] = self.score_type.value
        d["metric_kind"] = self.metric_kind.value
        return d

    @classmethod
    def from_row(cls, row: dict) -> "CatalogItem":
        return cls(
            id=row["id"],
            name=row["name"],
            category=Category(row["category"]),
            score_type=ScoreType(row["score_type"]),
            metric_kind=MetricKind(row.get("metric_kind") or MetricKind.NONE.value),
            description=row.get("description"),
            is_builtin=bool(row.get("is_builtin", 0)),
            is_favorite=bool(row.get("is_favorite", 0)),
            created_at=row.get("created_at") or 0,
        )


@dataclass
class LoggedPerformance:
    """A single logged result for a catalog item.

    ``result_value`` is normalized to the item's native unit so that logs
    can be compared numerically: seconds for Time, weight for Load, a count
    for Reps/Calories, metres for Distance and ``rounds * 100 + reps`` for
    Rounds+Reps.
    """
    id: str
    item_id: str
    result_value: float
    display_result: str
    date: int  # epoch milliseconds
    variant: Optional[Variant] = None
    reps: Optional[int] = None          # Load items only
    distance: Optional[float] = None    # metres
    calories: Optional[float] = None
    notes: Optional[str] = None
    created_at: int = 0

    def to_dict(self) -> dict:
        d = asdict(self)
        d["variant"] = self.variant.value if self.variant else None
        return d

    @classmethod
    def from_row(cls, row: dict) -> "LoggedPerformance":
        return cls(
            id=row["id"],
            item_id=row["item_id"],
            result_value=row["result_value"],
            display_result=row["display_result"],
            date=row["date"],
            variant=_enum_or_none(Variant, row.get("variant")),
            reps=row.get("reps"),
            distance=row.get("distance"),
            calories=row.get("calories"),
            notes=row.get("notes"),
            created_at=row.get("created_at") or 0,
        )


@dataclass
class Goal:
    """A target value for a catalog item, to be reached by a date."""
    id: str
    item_id: str
    target_value: float
    target_date: str  # YYYY-MM-DD
    created_at: str
    status: GoalStatus = GoalStatus.ACTIVE
    achieved_at: Optional[str] = None
    variant: Optional[Variant] = None
    reps: Optional[int] = None

    @property
    def is_active(self) -> bool:
        return self.status == GoalStatus.ACTIVE

    def to_dict(self) -> dict:
        d = asdict(self)
        d["status"] = self.status.value
        d["variant"] = self.variant.value if self.variant else None
        return d

    @classmethod
    def from_row(cls, row: dict) -> "Goal":
        return cls(
            id=row["id"],
            item_id=row["item_id"],
            target_value=row["target_value"],
            target_date=row["target_date"],
            created_at=row["created_at"],
            status=GoalStatus(row["status"]),
            achieved_at=row.get("achieved_at"),
            variant=_enum_or_none(Variant, row.get("variant")),
            reps=row.get("reps"),
        )


@dataclass
class DailyCheckIn:
    """One self-reported check-in per calendar date.

    Training days carry energy (1-5), soreness (1-5) and sleep hours;
    rest days carry no metrics.
    """
    id: str
    date: str  # YYYY-MM-DD
    type: CheckInType
    energy: Optional[int] = None
    soreness: Optional[int] = None
    sleep_hours: Optional[float] = None
    created_at: int = 0

    @property
    def is_rest(self) -> bool:
        return self.type == CheckInType.REST

    def to_dict(self) -> dict:
        d = asdict(self)
        d["type"] = self.type.value
        return d

    @classmethod
    def from_row(cls, row: dict) -> "DailyCheckIn":
        return cls(
            id=row["id"],
            date=row["date"],
            type=CheckInType(row["type"]),
            energy=row.get("energy"),
            soreness=row.get("soreness"),
            sleep_hours=row.get("sleep_hours"),
            created_at=row.get("created_at") or 0,
        )


@dataclass
class UserSettings:
    """User preferences stored alongside the logs."""
    weight_unit: str = "kg"
    distance_unit: str = "m"
    min_sleep_hours: float = 7

    def to_dict(self) -> dict:
        return asdict(self)
