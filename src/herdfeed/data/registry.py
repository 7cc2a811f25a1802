"""In-memory herd registry and feed event history."""

import copy
import logging
import time
from collections.abc import Iterable, Iterator

from herdfeed.core.errors import AnimalNotFoundError, InvalidAnimalError
from herdfeed.data.models import (
    ALERT_STATUSES,
    Animal,
    FeedEvent,
    FeedingOutcome,
    PigGroup,
    Sex,
)

logger = logging.getLogger(__name__)


class HerdRegistry:
    """Animals in the herd, newest registration first."""

    def __init__(self, animals: Iterable[Animal] = ()):
        self._animals: list[Animal] = list(animals)

    def __len__(self) -> int:
        return len(self._animals)

    def __iter__(self) -> Iterator[Animal]:
        return iter(self._animals)

    def __contains__(self, animal_id: object) -> bool:
        return any(a.id == animal_id for a in self._animals)

    def _new_id(self) -> str:
        stamp = int(time.time() * 1000)
        while f"p-{stamp}" in self:
            stamp += 1
        return f"p-{stamp}"

    def get(self, animal_id: str) -> Animal:
        for animal in self._animals:
            if animal.id == animal_id:
                return animal
        raise AnimalNotFoundError(animal_id)

    def find(self, identifier: str) -> Animal:
        """Find an animal by id, tag or (case-insensitive) name."""
        needle = identifier.strip().lower()
        for animal in self._animals:
            if needle in (animal.id.lower(), animal.tag_id.lower(), animal.name.lower()):
                return animal
        raise AnimalNotFoundError(identifier)

    def search(self, text: str) -> list[Animal]:
        """Animals whose tag or name contains text (case-insensitive)."""
        needle = text.strip().lower()
        return [a for a in self._animals if needle in a.tag_id.lower() or needle in a.name.lower()]

    def in_group(self, group: PigGroup) -> list[Animal]:
        return [a for a in self._animals if a.group == group]

    def snapshot(self) -> list[Animal]:
        """Deep copy of the herd, safe to hand to the allocation engine."""
        return copy.deepcopy(self._animals)

    def register(
        self,
        tag_id: str,
        name: str,
        weight: float,
        group: PigGroup = PigGroup.GROWER,
        sex: Sex = Sex.MALE,
        breed: str = "Unknown",
        dob: str = "",
        is_pregnant: bool = False,
        photo_url: str = "",
        animal_id: str | None = None,
    ) -> Animal:
        """Add a new animal. It starts Pending with no recorded intake.

        Raises:
            InvalidAnimalError: If tag or name is blank, the id is taken,
                or the weight is invalid
        """
        if not tag_id.strip() or not name.strip():
            raise InvalidAnimalError("Both tag id and name are required")
        if animal_id is not None and animal_id in self:
            raise InvalidAnimalError(f"Animal id {animal_id} already registered")

        animal = Animal(
            id=animal_id or self._new_id(),
            tag_id=tag_id.strip(),
            name=name.strip(),
            group=group,
            sex=sex,
            weight=weight,
            dob=dob,
            breed=breed or "Unknown",
            is_pregnant=is_pregnant,
            photo_url=photo_url or f"https://picsum.photos/seed/{tag_id.strip()}/200/200",
        )
        self._animals.insert(0, animal)
        logger.info("Registered %s (%s) in %s", animal.tag_id, animal.id, animal.group.value)
        return animal

    def update(
        self,
        animal_id: str,
        *,
        tag_id: str | None = None,
        name: str | None = None,
        weight: float | None = None,
        group: PigGroup | None = None,
        sex: Sex | None = None,
        breed: str | None = None,
        dob: str | None = None,
        is_pregnant: bool | None = None,
        photo_url: str | None = None,
    ) -> Animal:
        """Edit an animal's record.

        A changed weight is appended to the weight history. Feeding status
        and intake cannot be edited here.
        """
        animal = self.get(animal_id)

        if tag_id is not None:
            if not tag_id.strip():
                raise InvalidAnimalError("Tag id cannot be blank")
            animal.tag_id = tag_id.strip()
        if name is not None:
            if not name.strip():
                raise InvalidAnimalError("Name cannot be blank")
            animal.name = name.strip()
        if weight is not None:
            animal.set_weight(weight)
        if group is not None:
            animal.group = group
        if sex is not None:
            animal.sex = sex
        if breed:
            animal.breed = breed
        if dob:
            animal.dob = dob
        if photo_url:
            animal.photo_url = photo_url
        if is_pregnant is not None:
            animal.is_pregnant = is_pregnant
        if animal.sex is not Sex.FEMALE:
            animal.is_pregnant = False

        return animal

    def apply_outcomes(self, outcomes: Iterable[FeedingOutcome]) -> int:
        """Write feeding outcomes onto their animals.

        Outcomes for unknown ids are skipped. Animals without an outcome keep
        their previous intake and status.

        Returns:
            Number of animals updated
        """
        by_id = {a.id: a for a in self._animals}
        updated = 0
        for outcome in outcomes:
            animal = by_id.get(outcome.animal_id)
            if animal is None:
                logger.warning("Outcome for unknown animal %s skipped", outcome.animal_id)
                continue
            animal.last_intake_kg = outcome.estimated_intake
            animal.status = outcome.status
            updated += 1
        return updated

    def alerts(self) -> list[Animal]:
        """Animals whose latest feeding left them Underfed or Missed."""
        return [a for a in self._animals if a.status in ALERT_STATUSES]


class FeedHistory:
    """Append-only log of feed events, newest first."""

    def __init__(self, events: Iterable[FeedEvent] = ()):
        self._events: list[FeedEvent] = list(events)

    def __len__(self) -> int:
        return len(self._events)

    def __iter__(self) -> Iterator[FeedEvent]:
        return iter(self._events)

    def append(self, event: FeedEvent) -> None:
        self._events.insert(0, event)

    def latest(self, group: PigGroup | None = None) -> FeedEvent | None:
        for event in self._events:
            if group is None or event.group == group:
                return event
        return None

    def for_group(self, group: PigGroup) -> list[FeedEvent]:
        return [e for e in self._events if e.group == group]
