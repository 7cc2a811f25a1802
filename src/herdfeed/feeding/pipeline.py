"""Feeding event pipeline.

Computation and storage are separate steps:

1. process_feeding() is pure. It takes a submission plus read-only snapshots of
   the herd and the group ration profiles and returns the per-animal outcomes
   together with the immutable FeedEvent.
2. commit_feeding() writes the outcomes to the registry and appends the event
   to history.
3. record_feeding() runs both, lets the caller persist the commit, and only
   then signals the notifier when any animal came out Underfed or Missed. A
   failed notification never undoes the commit.
"""

import logging
import uuid
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass

from herdfeed.core.notify import AlertNotifier, dispatch_alert
from herdfeed.data.models import (
    ALERT_STATUSES,
    Animal,
    FeedEvent,
    FeedingOutcome,
    GroupProfile,
    PigGroup,
    utc_now_iso,
)
from herdfeed.data.registry import FeedHistory, HerdRegistry
from herdfeed.feeding.allocation import allocate_feed
from herdfeed.feeding.classify import (
    FeedingPolicy,
    classify_intake,
    expected_ration,
    ration_coefficient,
)
from herdfeed.feeding.submission import FeedingSubmission

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FeedingResult:
    """Outcomes of one feeding event plus the event record to store."""

    event: FeedEvent
    outcomes: tuple[FeedingOutcome, ...]

    @property
    def group(self) -> PigGroup:
        return self.event.group

    @property
    def alert_outcomes(self) -> list[FeedingOutcome]:
        return [o for o in self.outcomes if o.status in ALERT_STATUSES]

    @property
    def alert_count(self) -> int:
        return len(self.alert_outcomes)


def new_event_id() -> str:
    return f"e-{uuid.uuid4().hex[:12]}"


def process_feeding(
    submission: FeedingSubmission,
    animals: Sequence[Animal],
    profiles: Mapping[PigGroup, GroupProfile],
    policy: FeedingPolicy | None = None,
    event_id: str | None = None,
    timestamp: str | None = None,
) -> FeedingResult:
    """
    Allocate a delivery across its group and classify every member.

    Args:
        submission: Validated feeding event input
        animals: Herd snapshot (all groups; only the target group is used)
        profiles: Ration profile per group
        policy: Classification thresholds
        event_id: Event id to use (default: generated)
        timestamp: ISO timestamp to use (default: now, UTC)

    Returns:
        FeedingResult with exactly one outcome per animal in the group

    Raises:
        UnclassifiableGroupError: If profiles has no entry for the group
    """
    policy = policy or FeedingPolicy()
    group = submission.group
    coefficient = ration_coefficient(group, profiles)

    allocations = allocate_feed(group, submission.total_kg, animals)
    member_ids = {a["animal_id"] for a in allocations}

    ignored = sorted(set(submission.overrides) - member_ids)
    if ignored:
        logger.debug("Ignoring overrides for animals outside %s: %s", group.value, ", ".join(ignored))
    overrides = {k: v for k, v in submission.overrides.items() if k in member_ids}

    outcomes = []
    for allocation in allocations:
        expected = expected_ration(allocation["weight_kg"], coefficient)
        override = overrides.get(allocation["animal_id"])
        status, intake, ratio = classify_intake(
            allocation["estimated_intake_kg"], expected, override=override, policy=policy
        )
        outcomes.append(
            FeedingOutcome(
                animal_id=allocation["animal_id"],
                estimated_intake=intake,
                status=status,
                expected_ration=expected,
                ratio=ratio,
                override=override,
            )
        )

    event = FeedEvent(
        id=event_id or new_event_id(),
        timestamp=timestamp or utc_now_iso(),
        group=group,
        feed_type=submission.feed_type,
        total_kg=submission.total_kg,
        method=submission.method,
        recorded_by=submission.recorded_by,
        overrides=overrides,
    )
    return FeedingResult(event=event, outcomes=tuple(outcomes))


def commit_feeding(result: FeedingResult, registry: HerdRegistry, history: FeedHistory) -> None:
    """Store a processed feeding: update animals, then append the event."""
    registry.apply_outcomes(result.outcomes)
    history.append(result.event)
    logger.info(
        "Recorded %.2f kg of %s for %s group (%d animals, %d alerts)",
        result.event.total_kg,
        result.event.feed_type,
        result.group.value,
        len(result.outcomes),
        result.alert_count,
    )


async def record_feeding(
    submission: FeedingSubmission,
    registry: HerdRegistry,
    history: FeedHistory,
    profiles: Mapping[PigGroup, GroupProfile],
    notifier: AlertNotifier | None = None,
    policy: FeedingPolicy | None = None,
    on_commit: Callable[[FeedingResult], None] | None = None,
) -> FeedingResult:
    """Process, commit and (if needed) alert for one feeding event.

    on_commit runs right after the commit and before any notification, so a
    caller can save state without waiting on a slow alert sink. The notifier is
    called with (count, group) only when at least one animal is Underfed or
    Missed. Notification errors are logged, not raised.
    """
    result = process_feeding(submission, registry.snapshot(), profiles, policy=policy)
    commit_feeding(result, registry, history)
    if on_commit is not None:
        on_commit(result)

    if result.alert_count > 0 and notifier is not None:
        await dispatch_alert(notifier, result.alert_count, result.group.value)

    return result
