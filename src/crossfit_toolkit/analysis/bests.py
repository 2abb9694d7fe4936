"""
Personal record aggregation.

Find the best logged performance for a catalog item, respecting the item's
direction of improvement (lower is better only for Time) and its metric
kind. Distance-capable items keep one best per distance, calorie-capable
items keep one best per elapsed time, and dual-metric items surface both.

All reductions keep the first-encountered log on a tie: a candidate only
replaces the current best when it is strictly better.
"""

from typing import Callable, Dict, Iterable, List, Optional

from ..db.models import CatalogItem, LoggedPerformance, MetricKind, ScoreType, Variant
from ..models.bests import BestSummary, GroupBy, HistoryGroup
from ..results import get_reps_label, format_seconds_to_time


# Variant groups are shown in this order, unspecified variant last.
VARIANT_DISPLAY_ORDER: List[Optional[Variant]] = [
    Variant.RX_PLUS,
    Variant.RX,
    Variant.SCALED,
    None,
]


def is_lower_better(score_type: ScoreType) -> bool:
    """Check if a score type is "lower is better" (only Time)."""
    return score_type == ScoreType.TIME


def is_better(candidate: float, current: float, score_type: ScoreType) -> bool:
    """Strict comparison in the score type's direction of improvement."""
    if is_lower_better(score_type):
        return candidate < current
    return candidate > current


def _reduce_best(
    logs: Iterable[LoggedPerformance],
    better: Callable[[LoggedPerformance, LoggedPerformance], bool],
) -> Optional[LoggedPerformance]:
    best = None
    for log in logs:
        if best is None or better(log, best):
            best = log
    return best


def best_overall(
    logs: Iterable[LoggedPerformance],
    score_type: ScoreType,
    variant: Optional[Variant] = None,
) -> Optional[LoggedPerformance]:
    """Get the single best log, optionally restricted to one variant.

    Args:
        logs: Logged performances for one catalog item
        score_type: The item's score type
        variant: Only consider logs with this variant

    Returns:
        The best log, or None if no log matches
    """
    if variant is not None:
        logs = [log for log in logs if log.variant == variant]

    return _reduce_best(
        logs,
        lambda log, best: is_better(log.result_value, best.result_value, score_type),
    )


def best_by_distance(logs: Iterable[LoggedPerformance]) -> Dict[float, LoggedPerformance]:
    """Get the fastest log for each distance.

    Logs without a distance are ignored. Distances must match exactly to
    share a bucket.
    """
    bests: Dict[float, LoggedPerformance] = {}
    for log in logs:
        if log.distance is None:
            continue
        existing = bests.get(log.distance)
        if existing is None or log.result_value < existing.result_value:
            bests[log.distance] = log
    return bests


def best_by_time_for_calories(logs: Iterable[LoggedPerformance]) -> Dict[float, LoggedPerformance]:
    """Get the log with the most calories for each elapsed time.

    Logs without calories are ignored. Buckets are keyed by ``result_value``
    (seconds).
    """
    bests: Dict[float, LoggedPerformance] = {}
    for log in logs:
        if log.calories is None:
            continue
        existing = bests.get(log.result_value)
        if existing is None or existing.calories is None or log.calories > existing.calories:
            bests[log.result_value] = log
    return bests


def best_for_dual_metric_item(
    logs: Iterable[LoggedPerformance],
    score_type: ScoreType,
) -> Optional[LoggedPerformance]:
    """Reduce the distance and calorie buckets of a dual-metric item to one best."""
    logs = list(logs)
    candidates = list(best_by_distance(logs).values()) + list(best_by_time_for_calories(logs).values())
    return best_overall(candidates, score_type)


def summarize_bests(logs: Iterable[LoggedPerformance], item: CatalogItem) -> BestSummary:
    """Compute the bests to display for an item.

    The item's metric kind decides the shape of the result:
    - distance+calories: both bucket maps plus the merged overall best
    - distance: distance buckets only
    - calories: calorie buckets only
    - none: a single overall best, whatever the category
    """
    logs = list(logs)
    kind = item.metric_kind

    if kind == MetricKind.DISTANCE_CALORIES:
        return BestSummary(
            item_id=item.id,
            metric_kind=kind,
            overall=best_for_dual_metric_item(logs, item.score_type),
            by_distance=best_by_distance(logs),
            by_calorie_time=best_by_time_for_calories(logs),
        )

    if kind == MetricKind.DISTANCE:
        by_distance = best_by_distance(logs)
        return BestSummary(
            item_id=item.id,
            metric_kind=kind,
            overall=best_overall(by_distance.values(), item.score_type),
            by_distance=by_distance,
        )

    if kind == MetricKind.CALORIES:
        by_calorie_time = best_by_time_for_calories(logs)
        return BestSummary(
            item_id=item.id,
            metric_kind=kind,
            overall=best_overall(by_calorie_time.values(), item.score_type),
            by_calorie_time=by_calorie_time,
        )

    return BestSummary(
        item_id=item.id,
        metric_kind=kind,
        overall=best_overall(logs, item.score_type),
    )


# =============================================================================
# History grouping
# =============================================================================

def _order_group(
    logs: List[LoggedPerformance],
    better: Callable[[LoggedPerformance, LoggedPerformance], bool],
) -> List[LoggedPerformance]:
    """Best log first, remaining logs newest first."""
    best = _reduce_best(logs, better)
    rest = [log for log in logs if log is not best]
    rest.sort(key=lambda log: log.date, reverse=True)
    return [best] + rest


def _format_distance(metres: float) -> str:
    if metres >= 1000 and metres % 100 == 0:
        return f"{metres / 1000:g}km"
    return f"{metres:g}m"


def _bucket(logs: Iterable[LoggedPerformance], key: Callable[[LoggedPerformance], object]) -> Dict:
    buckets: Dict = {}
    for log in logs:
        buckets.setdefault(key(log), []).append(log)
    return buckets


def _variant_groups(
    logs: List[LoggedPerformance],
    better: Callable[[LoggedPerformance, LoggedPerformance], bool],
) -> List[HistoryGroup]:
    buckets = _bucket(logs, lambda log: log.variant)
    groups = []
    for variant in VARIANT_DISPLAY_ORDER:
        if variant not in buckets:
            continue
        ordered = _order_group(buckets[variant], better)
        groups.append(HistoryGroup(
            group_by=GroupBy.VARIANT,
            key=variant.value if variant else None,
            label=variant.value if variant else "Unspecified",
            best=ordered[0],
            logs=ordered,
        ))
    return groups


def group_history(logs: Iterable[LoggedPerformance], item: CatalogItem) -> List[HistoryGroup]:
    """Partition an item's logs into display groups.

    Distance-capable items group by distance, calorie-capable items by
    elapsed time, Load items by rep count and everything else by variant.
    Dual-metric items produce distance groups followed by calorie groups.
    Logs on a distance/calorie item that carry neither metric fall back to
    variant groups after the metric groups.
    """
    logs = list(logs)
    if not logs:
        return []

    score_type = item.score_type
    by_value = lambda log, best: is_better(log.result_value, best.result_value, score_type)
    kind = item.metric_kind

    if kind.supports_distance or kind.supports_calories:
        groups: List[HistoryGroup] = []
        grouped_ids = set()

        if kind.supports_distance:
            with_distance = [log for log in logs if log.distance is not None]
            buckets = _bucket(with_distance, lambda log: log.distance)
            for distance in sorted(buckets):
                ordered = _order_group(
                    buckets[distance],
                    lambda log, best: log.result_value < best.result_value,
                )
                groups.append(HistoryGroup(
                    group_by=GroupBy.DISTANCE,
                    key=distance,
                    label=_format_distance(distance),
                    best=ordered[0],
                    logs=ordered,
                ))
            grouped_ids.update(log.id for log in with_distance)

        if kind.supports_calories:
            with_calories = [log for log in logs if log.calories is not None]
            buckets = _bucket(with_calories, lambda log: log.result_value)
            for seconds in sorted(buckets):
                ordered = _order_group(
                    buckets[seconds],
                    lambda log, best: log.calories > best.calories,
                )
                groups.append(HistoryGroup(
                    group_by=GroupBy.CALORIE_TIME,
                    key=seconds,
                    label=format_seconds_to_time(seconds),
                    best=ordered[0],
                    logs=ordered,
                ))
            grouped_ids.update(log.id for log in with_calories)

        leftover = [log for log in logs if log.id not in grouped_ids]
        return groups + _variant_groups(leftover, by_value)

    if score_type == ScoreType.LOAD:
        # A lift logged without a rep count is a 1RM.
        buckets = _bucket(logs, lambda log: log.reps if log.reps is not None else 1)
        groups = []
        for reps in sorted(buckets):
            ordered = _order_group(buckets[reps], by_value)
            groups.append(HistoryGroup(
                group_by=GroupBy.REPS,
                key=reps,
                label=get_reps_label(reps),
                best=ordered[0],
                logs=ordered,
            ))
        return groups

    return _variant_groups(logs, by_value)
