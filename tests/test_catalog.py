"""Tests for the catalog service."""

import pytest

from crossfit_toolkit.catalog import BUILTIN_CATALOG, infer_metric_kind
from crossfit_toolkit.db.models import Category, MetricKind, ScoreType
from crossfit_toolkit.exceptions import CatalogItemNotFoundError, ValidationError


class TestBuiltinCatalog:
    """Tests for the builtin item definitions."""

    def test_ids_are_unique(self):
        ids = [item["id"] for item in BUILTIN_CATALOG]
        assert len(ids) == len(set(ids))

    def test_monostructural_items_have_explicit_metric_kind(self, catalog):
        assert catalog.get_item("row").metric_kind == MetricKind.DISTANCE_CALORIES
        assert catalog.get_item("run").metric_kind == MetricKind.DISTANCE
        assert catalog.get_item("fran").metric_kind == MetricKind.NONE


class TestInferMetricKind:
    """Tests for infer_metric_kind function."""

    @pytest.mark.parametrize("name,kind", [
        ("Concept2 Row", MetricKind.DISTANCE_CALORIES),
        ("Echo Bike", MetricKind.DISTANCE_CALORIES),
        ("Ski Erg Sprint", MetricKind.DISTANCE_CALORIES),
        ("Hill Run", MetricKind.DISTANCE),
        ("Swim", MetricKind.NONE),
    ])
    def test_monostructural_time_items(self, name, kind):
        assert infer_metric_kind(name, Category.MONOSTRUCTURAL, ScoreType.TIME) == kind

    def test_other_categories_are_none(self):
        assert infer_metric_kind("Row", Category.BENCHMARK, ScoreType.TIME) == MetricKind.NONE
        assert infer_metric_kind("Row", Category.MONOSTRUCTURAL, ScoreType.CALORIES) == MetricKind.NONE


class TestCatalogService:
    """Tests for CatalogService."""

    def test_get_missing_item_raises(self, catalog):
        with pytest.raises(CatalogItemNotFoundError):
            catalog.get_item("does-not-exist")
        assert catalog.find_item("does-not-exist") is None

    def test_search_is_case_insensitive(self, catalog):
        names = [item.name for item in catalog.search("SQUAT")]
        assert "Back Squat" in names
        assert "Front Squat" in names
        assert "Fran" not in names

    def test_list_by_category(self, catalog):
        lifts = catalog.list_items(Category.LIFT)
        assert lifts
        assert all(item.category == Category.LIFT for item in lifts)

    def test_custom_item_gets_inferred_metric_kind(self, catalog):
        item = catalog.create_custom_item(
            "Rogue Echo Bike", ScoreType.TIME, category=Category.MONOSTRUCTURAL
        )
        assert item.metric_kind == MetricKind.DISTANCE_CALORIES
        stored = catalog.get_item(item.id)
        assert stored.metric_kind == MetricKind.DISTANCE_CALORIES
        assert stored.is_builtin is False

    def test_explicit_metric_kind_is_kept(self, catalog):
        item = catalog.create_custom_item(
            "Rowing Intervals",
            ScoreType.TIME,
            category=Category.MONOSTRUCTURAL,
            metric_kind=MetricKind.DISTANCE,
        )
        assert catalog.get_item(item.id).metric_kind == MetricKind.DISTANCE

    def test_empty_name_rejected(self, catalog):
        with pytest.raises(ValidationError):
            catalog.create_custom_item("  ", ScoreType.REPS)

    def test_builtin_items_cannot_be_deleted(self, catalog):
        with pytest.raises(ValidationError):
            catalog.delete_custom_item("fran")

    def test_delete_custom_item(self, catalog):
        item = catalog.create_custom_item("Burpee Test", ScoreType.REPS)
        catalog.delete_custom_item(item.id)
        with pytest.raises(CatalogItemNotFoundError):
            catalog.get_item(item.id)

    def test_toggle_favorite(self, catalog):
        assert catalog.toggle_favorite("fran") is True
        assert catalog.get_item("fran").is_favorite is True
        assert [item.id for item in catalog.list_favorites()] == ["fran"]
        assert catalog.toggle_favorite("fran") is False

    def test_toggle_favorite_unknown_item(self, catalog):
        with pytest.raises(CatalogItemNotFoundError):
            catalog.toggle_favorite("nope")
