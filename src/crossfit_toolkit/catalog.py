"""
Catalog of benchmarks, lifts, monostructural movements and skills.

Builtin items are defined below; custom items and favorites live in the
database. Every item carries an explicit metric kind, so nothing downstream
needs to guess from the item's name.
"""

import logging
import re
import uuid
from typing import Any, Dict, List, Optional

from .dates import now_epoch_ms
from .db.database import Database
from .db.models import CatalogItem, Category, MetricKind, ScoreType
from .exceptions import CatalogItemNotFoundError, ValidationError

logger = logging.getLogger(__name__)


# =============================================================================
# Builtin catalog
# =============================================================================

BUILTIN_CATALOG: List[Dict[str, Any]] = [
    # Benchmark WODs (The Girls and heroes)
    {
        "id": "fran",
        "name": "Fran",
        "category": "Benchmark",
        "score_type": "Time",
        "description": "21-15-9: Thrusters (95/65 lb) & Pull-ups",
    },
    {
        "id": "grace",
        "name": "Grace",
        "category": "Benchmark",
        "score_type": "Time",
        "description": "30 Clean & Jerks for time (135/95 lb)",
    },
    {
        "id": "helen",
        "name": "Helen",
        "category": "Benchmark",
        "score_type": "Time",
        "description": "3 RFT: 400m Run, 21 KB Swings (53/35 lb), 12 Pull-ups",
    },
    {
        "id": "diane",
        "name": "Diane",
        "category": "Benchmark",
        "score_type": "Time",
        "description": "21-15-9: Deadlifts (225/155 lb) & Handstand Push-ups",
    },
    {
        "id": "elizabeth",
        "name": "Elizabeth",
        "category": "Benchmark",
        "score_type": "Time",
        "description": "21-15-9: Cleans (135/95 lb) & Ring Dips",
    },
    {
        "id": "cindy",
        "name": "Cindy",
        "category": "Benchmark",
        "score_type": "Rounds+Reps",
        "description": "20 min AMRAP: 5 Pull-ups, 10 Push-ups, 15 Air Squats",
    },
    {
        "id": "murph",
        "name": "Murph",
        "category": "Benchmark",
        "score_type": "Time",
        "description": "1 mile Run, 100 Pull-ups, 200 Push-ups, 300 Squats, 1 mile Run (20/14 lb vest)",
    },
    {
        "id": "jackie",
        "name": "Jackie",
        "category": "Benchmark",
        "score_type": "Time",
        "description": "1000m Row, 50 Thrusters (45/35 lb), 30 Pull-ups",
    },
    {
        "id": "isabel",
        "name": "Isabel",
        "category": "Benchmark",
        "score_type": "Time",
        "description": "30 Snatches for time (135/95 lb)",
    },
    {
        "id": "karen",
        "name": "Karen",
        "category": "Benchmark",
        "score_type": "Time",
        "description": "150 Wall Balls for time (20/14 lb)",
    },
    # Lifts
    {"id": "back-squat", "name": "Back Squat", "category": "Lift", "score_type": "Load"},
    {"id": "front-squat", "name": "Front Squat", "category": "Lift", "score_type": "Load"},
    {"id": "overhead-squat", "name": "Overhead Squat", "category": "Lift", "score_type": "Load"},
    {"id": "deadlift", "name": "Deadlift", "category": "Lift", "score_type": "Load"},
    {"id": "clean", "name": "Clean", "category": "Lift", "score_type": "Load"},
    {"id": "clean-and-jerk", "name": "Clean & Jerk", "category": "Lift", "score_type": "Load"},
    {"id": "snatch", "name": "Snatch", "category": "Lift", "score_type": "Load"},
    {"id": "strict-press", "name": "Strict Press", "category": "Lift", "score_type": "Load"},
    {"id": "push-press", "name": "Push Press", "category": "Lift", "score_type": "Load"},
    {"id": "push-jerk", "name": "Push Jerk", "category": "Lift", "score_type": "Load"},
    {"id": "bench-press", "name": "Bench Press", "category": "Lift", "score_type": "Load"},
    # Monostructural
    {
        "id": "run",
        "name": "Run",
        "category": "Monostructural",
        "score_type": "Time",
        "metric_kind": "distance",
        "description": "Running for time, specify distance when logging",
    },
    {
        "id": "row",
        "name": "Row",
        "category": "Monostructural",
        "score_type": "Time",
        "metric_kind": "distance+calories",
        "description": "Rowing for distance or calories in a given time",
    },
    {
        "id": "ski-erg",
        "name": "Ski Erg",
        "category": "Monostructural",
        "score_type": "Time",
        "metric_kind": "distance+calories",
        "description": "Ski erg for distance or calories in a given time",
    },
    {
        "id": "bike-cals",
        "name": "Assault Bike (Cal)",
        "category": "Monostructural",
        "score_type": "Calories",
        "description": "Max calories in set time on Assault Bike",
    },
    # Skills
    {"id": "pullups-max", "name": "Pull-ups (Max)", "category": "Skill", "score_type": "Reps"},
    {"id": "hspu-max", "name": "HSPU (Max)", "category": "Skill", "score_type": "Reps"},
    {"id": "muscle-ups-max", "name": "Muscle-ups (Max)", "category": "Skill", "score_type": "Reps"},
    {"id": "double-unders-max", "name": "Double-unders (Max)", "category": "Skill", "score_type": "Reps"},
    {"id": "toes-to-bar-max", "name": "Toes-to-Bar (Max)", "category": "Skill", "score_type": "Reps"},
]


def _builtin_item(data: Dict[str, Any]) -> CatalogItem:
    return CatalogItem(
        id=data["id"],
        name=data["name"],
        category=Category(data["category"]),
        score_type=ScoreType(data["score_type"]),
        metric_kind=MetricKind(data.get("metric_kind", MetricKind.NONE.value)),
        description=data.get("description"),
        is_builtin=True,
    )


_NAME_WORDS = re.compile(r"[a-z]+")


def infer_metric_kind(name: str, category: Category, score_type: ScoreType) -> MetricKind:
    """Guess a metric kind for an item that was created without one.

    Only monostructural items scored for time are considered: ergometers
    (row, bike, ski) take distance and calories, runs take distance.
    Used once, when a custom item is created.
    """
    if category != Category.MONOSTRUCTURAL or score_type != ScoreType.TIME:
        return MetricKind.NONE

    lowered = name.lower()
    words = set(_NAME_WORDS.findall(lowered))
    if any(key in lowered for key in ("row", "bike", "ski")):
        return MetricKind.DISTANCE_CALORIES
    if "run" in words or "running" in words:
        return MetricKind.DISTANCE
    return MetricKind.NONE


class CatalogService:
    """Lookup over the builtin catalog plus the user's custom items."""

    def __init__(self, db: Database):
        self.db = db
        self._builtin = {data["id"]: data for data in BUILTIN_CATALOG}

    def _with_favorite(self, item: CatalogItem, favorites: set) -> CatalogItem:
        item.is_favorite = item.id in favorites
        return item

    def get_item(self, item_id: str) -> CatalogItem:
        """Get an item by ID.

        Raises:
            CatalogItemNotFoundError: If no builtin or custom item has the ID
        """
        favorites = self.db.get_favorite_ids()
        if item_id in self._builtin:
            return self._with_favorite(_builtin_item(self._builtin[item_id]), favorites)

        custom = self.db.get_custom_item(item_id)
        if custom is None:
            raise CatalogItemNotFoundError(item_id)
        return self._with_favorite(custom, favorites)

    def find_item(self, item_id: str) -> Optional[CatalogItem]:
        try:
            return self.get_item(item_id)
        except CatalogItemNotFoundError:
            return None

    def list_items(self, category: Optional[Category] = None) -> List[CatalogItem]:
        """All items, builtin first, optionally restricted to one category."""
        favorites = self.db.get_favorite_ids()
        items = [_builtin_item(data) for data in BUILTIN_CATALOG]
        items.extend(self.db.get_custom_items())
        if category is not None:
            items = [item for item in items if item.category == category]
        return [self._with_favorite(item, favorites) for item in items]

    def list_favorites(self) -> List[CatalogItem]:
        return [item for item in self.list_items() if item.is_favorite]

    def search(self, query: str) -> List[CatalogItem]:
        """Case-insensitive substring match on item names."""
        lowered = query.strip().lower()
        if not lowered:
            return self.list_items()
        return [item for item in self.list_items() if lowered in item.name.lower()]

    def create_custom_item(
        self,
        name: str,
        score_type: ScoreType,
        category: Category = Category.CUSTOM,
        metric_kind: Optional[MetricKind] = None,
        description: Optional[str] = None,
    ) -> CatalogItem:
        """Create a custom item.

        When no metric kind is given it is inferred from the name and
        stored with the item.
        """
        name = name.strip()
        if not name:
            raise ValidationError("Item name cannot be empty", field="name")

        if metric_kind is None:
            metric_kind = infer_metric_kind(name, category, score_type)

        item = CatalogItem(
            id=f"custom-{uuid.uuid4().hex[:12]}",
            name=name,
            category=category,
            score_type=score_type,
            metric_kind=metric_kind,
            description=description,
            is_builtin=False,
            created_at=now_epoch_ms(),
        )
        self.db.add_custom_item(item)
        logger.info(f"Created custom item {item.id} ({item.name}, {metric_kind.value})")
        return item

    def delete_custom_item(self, item_id: str) -> None:
        if item_id in self._builtin:
            raise ValidationError("Builtin items cannot be deleted", field="item_id")
        if not self.db.delete_custom_item(item_id):
            raise CatalogItemNotFoundError(item_id)

    def toggle_favorite(self, item_id: str) -> bool:
        """Toggle an item's favorite flag and return the new state."""
        self.get_item(item_id)
        return self.db.toggle_favorite(item_id)
