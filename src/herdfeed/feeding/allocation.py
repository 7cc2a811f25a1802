"""
Feed allocation model for group feeding events.

A bulk feed delivery goes into a shared trough, so individual intake is not
measured. Each animal's intake is estimated from its share of the group's
total body weight:

    estimated_intake = total_kg * (animal_weight / group_total_weight)

Animals outside the targeted group are not part of the allocation.
"""

from collections.abc import Iterable
from typing import TypedDict

from herdfeed.data.models import Animal, PigGroup


class Allocation(TypedDict):
    """Estimated share of one delivery for one animal."""

    animal_id: str
    weight_kg: float
    share: float  # fraction of the group's body weight, 0-1
    estimated_intake_kg: float


def group_members(animals: Iterable[Animal], group: PigGroup) -> list[Animal]:
    """Animals belonging to a group, in registry order."""
    return [a for a in animals if a.group == group]


def group_total_weight(animals: Iterable[Animal], group: PigGroup) -> float:
    """Sum of body weights (kg) of all animals in a group."""
    return sum(a.weight for a in animals if a.group == group)


def allocate_feed(
    group: PigGroup,
    total_kg: float,
    animals: Iterable[Animal],
) -> list[Allocation]:
    """
    Split a delivered feed mass across a group by body-weight share.

    Args:
        group: Group that received the delivery
        total_kg: Total feed mass delivered (kg, >= 0)
        animals: Current herd snapshot; animals in other groups are ignored

    Returns:
        One Allocation per animal in the group, in snapshot order.
        If the group's total weight is zero every estimate is 0.
    """
    members = group_members(animals, group)
    total_weight = sum(a.weight for a in members)

    allocations: list[Allocation] = []
    for animal in members:
        share = animal.weight / total_weight if total_weight > 0 else 0.0
        allocations.append(
            Allocation(
                animal_id=animal.id,
                weight_kg=animal.weight,
                share=share,
                estimated_intake_kg=total_kg * share,
            )
        )

    return allocations
