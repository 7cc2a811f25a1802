"""Classify an animal's feeding outcome from its estimated intake.

The expected ration is body weight times the group's ration coefficient.
Intake is judged by its ratio to that ration; a manual override observed at
the trough replaces the computed status.
"""

import math
from collections.abc import Mapping
from dataclasses import dataclass
from typing import NamedTuple

from herdfeed.core.config import settings
from herdfeed.core.errors import UnclassifiableGroupError
from herdfeed.data.models import FeedStatus, GroupProfile, Override, PigGroup

DEFAULT_OK_RATIO = 0.85

# Status and recorded intake forced by each override.
# True keeps the computed estimate, False records zero intake.
OVERRIDE_RULES: dict[Override, tuple[FeedStatus, bool]] = {
    Override.ATE: (FeedStatus.OK, True),
    Override.PARTIAL: (FeedStatus.UNDERFED, True),
    Override.MISSED: (FeedStatus.MISSED, False),
}


@dataclass(frozen=True)
class FeedingPolicy:
    """Thresholds used to turn an intake ratio into a status."""

    ok_ratio: float = DEFAULT_OK_RATIO

    def __post_init__(self) -> None:
        if self.ok_ratio <= 0:
            raise ValueError(f"ok_ratio must be positive, got {self.ok_ratio}")

    @classmethod
    def from_settings(cls) -> "FeedingPolicy":
        return cls(ok_ratio=settings.ok_ratio)


class Classification(NamedTuple):
    status: FeedStatus
    intake_kg: float
    ratio: float


def ration_coefficient(group: PigGroup, profiles: Mapping[PigGroup, GroupProfile]) -> float:
    """Look up the ration coefficient (kg feed per kg body weight) for a group.

    Raises:
        UnclassifiableGroupError: If the lookup has no profile for the group
    """
    profile = profiles.get(group)
    if profile is None:
        raise UnclassifiableGroupError(group.value)
    return profile.base_ration_per_kg


def expected_ration(weight_kg: float, coefficient: float) -> float:
    """Expected daily feed (kg) for an animal of the given weight."""
    return weight_kg * coefficient


def intake_ratio(estimated_kg: float, expected_kg: float) -> float:
    """Ratio of estimated to expected intake; 1.0 when nothing is expected."""
    if expected_kg == 0:
        return 1.0
    return estimated_kg / expected_kg


def classify_ratio(estimated_kg: float, ratio: float, policy: FeedingPolicy | None = None) -> FeedStatus:
    """Computed status, before any override is applied."""
    policy = policy or FeedingPolicy()
    if estimated_kg == 0:
        return FeedStatus.MISSED
    # Shares of an exact delivery can land a rounding step below the threshold
    if ratio >= policy.ok_ratio or math.isclose(ratio, policy.ok_ratio):
        return FeedStatus.OK
    return FeedStatus.UNDERFED


def classify_intake(
    estimated_kg: float,
    expected_kg: float,
    override: Override | None = None,
    policy: FeedingPolicy | None = None,
) -> Classification:
    """
    Final status and recorded intake for one animal in one feeding event.

    Args:
        estimated_kg: Allocated intake estimate (kg)
        expected_kg: Expected ration (kg)
        override: Manually observed outcome, if any
        policy: Classification thresholds (default: 0.85 OK ratio)

    Returns:
        Classification of (status, intake_kg, ratio). Never Pending.
    """
    ratio = intake_ratio(estimated_kg, expected_kg)

    if override is not None:
        status, keep_estimate = OVERRIDE_RULES[override]
        return Classification(status, estimated_kg if keep_estimate else 0.0, ratio)

    return Classification(classify_ratio(estimated_kg, ratio, policy), estimated_kg, ratio)
