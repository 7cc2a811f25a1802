"""Herd and feeding history summaries."""

from collections import Counter, defaultdict
from collections.abc import Iterable
from typing import TypedDict

from herdfeed.data.models import Animal, FeedEvent, FeedStatus, PigGroup


class HerdSummary(TypedDict):
    total: int
    by_group: dict[str, int]
    by_status: dict[str, int]
    underfed_count: int
    underfed_rate: float  # fraction of herd currently Underfed
    alert_count: int  # Underfed + Missed
    average_weight_kg: float
    total_weight_kg: float
    active_groups: list[str]


class FeedHistorySummary(TypedDict):
    event_count: int
    total_kg: float
    by_group: dict[str, float]
    by_feed_type: dict[str, float]
    override_counts: dict[str, int]
    last_fed: dict[str, str]  # group -> timestamp of latest event


def summarize_herd(animals: Iterable[Animal]) -> HerdSummary:
    """Headline figures for the herd (dashboard numbers)."""
    animals = list(animals)
    total = len(animals)
    by_status = Counter(a.status.value for a in animals)
    total_weight = sum(a.weight for a in animals)

    underfed = by_status.get(FeedStatus.UNDERFED.value, 0)
    missed = by_status.get(FeedStatus.MISSED.value, 0)

    # Preserve enum order for groups rather than first-seen order
    present = {a.group for a in animals}
    active_groups = [g.value for g in PigGroup if g in present]

    return HerdSummary(
        total=total,
        by_group=dict(Counter(a.group.value for a in animals)),
        by_status=dict(by_status),
        underfed_count=underfed,
        underfed_rate=underfed / total if total else 0.0,
        alert_count=underfed + missed,
        average_weight_kg=total_weight / total if total else 0.0,
        total_weight_kg=total_weight,
        active_groups=active_groups,
    )


def summarize_feed_history(events: Iterable[FeedEvent], group: PigGroup | None = None) -> FeedHistorySummary:
    """Totals over recorded feed events, optionally for one group.

    Events are expected newest first (as stored in FeedHistory).
    """
    by_group: dict[str, float] = defaultdict(float)
    by_feed_type: dict[str, float] = defaultdict(float)
    override_counts: Counter[str] = Counter()
    last_fed: dict[str, str] = {}
    count = 0
    total_kg = 0.0

    for event in events:
        if group is not None and event.group != group:
            continue
        count += 1
        total_kg += event.total_kg
        by_group[event.group.value] += event.total_kg
        by_feed_type[event.feed_type] += event.total_kg
        override_counts.update(o.value for o in event.overrides.values())
        last_fed.setdefault(event.group.value, event.timestamp)

    return FeedHistorySummary(
        event_count=count,
        total_kg=round(total_kg, 3),
        by_group={k: round(v, 3) for k, v in by_group.items()},
        by_feed_type={k: round(v, 3) for k, v in by_feed_type.items()},
        override_counts=dict(override_counts),
        last_fed=last_fed,
    )
