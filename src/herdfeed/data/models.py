"""Herd data model: animals, group ration profiles, feed events and outcomes."""

import math
from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import Enum
from types import MappingProxyType

from herdfeed.core.errors import InvalidAnimalError


class PigGroup(Enum):
    """Life-stage / health cohorts used as management groups."""

    PIGLET = "Piglet"
    PREGNANT = "Pregnant"
    GROWER = "Grower"
    ADULT = "Adult"
    QUARANTINE = "Sick/Quarantine"


class Sex(Enum):
    MALE = "Male"
    FEMALE = "Female"


class FeedStatus(Enum):
    """Feeding outcome status of an animal."""

    OK = "OK"
    UNDERFED = "Underfed"
    MISSED = "Missed"
    PENDING = "Pending"  # Never fed yet


class Override(Enum):
    """Manually observed outcome that supersedes the computed classification."""

    ATE = "ate"
    MISSED = "missed"
    PARTIAL = "partial"


# Statuses that count towards an underfeeding alert
ALERT_STATUSES = frozenset({FeedStatus.UNDERFED, FeedStatus.MISSED})


def utc_now_iso() -> str:
    return datetime.now(UTC).isoformat()


def check_weight(weight: float) -> float:
    """Validate a body weight in kg, returning it as a float.

    Raises:
        InvalidAnimalError: If the weight is negative, NaN or infinite
    """
    try:
        value = float(weight)
    except (TypeError, ValueError) as e:
        raise InvalidAnimalError(f"Weight must be a number, got {weight!r}") from e
    if not math.isfinite(value) or value < 0:
        raise InvalidAnimalError(f"Weight must be a finite, non-negative number of kg, got {weight!r}")
    return value


@dataclass(frozen=True)
class WeightEntry:
    date: str
    value: float


@dataclass
class Animal:
    """A single animal in the herd.

    Status and last_intake_kg are written only from feeding outcomes
    (see HerdRegistry.apply_outcomes).
    """

    id: str
    tag_id: str
    name: str
    group: PigGroup
    sex: Sex
    weight: float
    dob: str = ""
    breed: str = "Unknown"
    is_pregnant: bool = False
    photo_url: str = ""
    weight_history: list[WeightEntry] = field(default_factory=list)
    last_intake_kg: float = 0.0
    status: FeedStatus = FeedStatus.PENDING

    def __post_init__(self) -> None:
        self.weight = check_weight(self.weight)
        if self.sex is not Sex.FEMALE:
            self.is_pregnant = False
        if not self.weight_history:
            self.weight_history.append(WeightEntry(utc_now_iso(), self.weight))

    def set_weight(self, weight: float, when: str | None = None) -> bool:
        """Change the current weight, recording it in the weight history.

        Returns:
            True if the weight changed (and a history entry was appended)
        """
        weight = check_weight(weight)
        if weight == self.weight:
            return False
        self.weight = weight
        self.weight_history.append(WeightEntry(when or utc_now_iso(), weight))
        return True

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "tagId": self.tag_id,
            "name": self.name,
            "dob": self.dob,
            "group": self.group.value,
            "sex": self.sex.value,
            "breed": self.breed,
            "weight": self.weight,
            "weightHistory": [{"date": w.date, "value": w.value} for w in self.weight_history],
            "isPregnant": self.is_pregnant,
            "photoUrl": self.photo_url,
            "lastIntakeKg": self.last_intake_kg,
            "status": self.status.value,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Animal":
        return cls(
            id=data["id"],
            tag_id=data["tagId"],
            name=data["name"],
            dob=data.get("dob", ""),
            group=PigGroup(data["group"]),
            sex=Sex(data["sex"]),
            breed=data.get("breed", "Unknown"),
            weight=data["weight"],
            weight_history=[WeightEntry(w["date"], w["value"]) for w in data.get("weightHistory", [])],
            is_pregnant=bool(data.get("isPregnant", False)),
            photo_url=data.get("photoUrl", ""),
            last_intake_kg=float(data.get("lastIntakeKg", 0.0)),
            status=FeedStatus(data.get("status", FeedStatus.PENDING.value)),
        )


@dataclass(frozen=True)
class GroupProfile:
    """Expected daily ration for a group, as kg of feed per kg of body weight."""

    id: PigGroup
    name: str
    base_ration_per_kg: float

    def __post_init__(self) -> None:
        if not (math.isfinite(self.base_ration_per_kg) and self.base_ration_per_kg > 0):
            raise ValueError(f"Ration coefficient for {self.name} must be positive, got {self.base_ration_per_kg}")


@dataclass(frozen=True)
class FeedType:
    id: str
    name: str
    protein: float  # % crude protein
    energy: float  # MJ/kg digestible energy
    cost_per_kg: float


@dataclass(frozen=True)
class FeedEvent:
    """A recorded group feeding. Never mutated after creation."""

    id: str
    timestamp: str
    group: PigGroup
    feed_type: str
    total_kg: float
    method: str
    recorded_by: str
    overrides: Mapping[str, Override] = field(default_factory=dict)

    def __post_init__(self) -> None:
        # Freeze the override mapping along with the event
        object.__setattr__(self, "overrides", MappingProxyType(dict(self.overrides)))

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "timestamp": self.timestamp,
            "group": self.group.value,
            "feedType": self.feed_type,
            "totalKg": self.total_kg,
            "method": self.method,
            "recordedBy": self.recorded_by,
            "overrides": {k: v.value for k, v in self.overrides.items()},
        }

    @classmethod
    def from_dict(cls, data: dict) -> "FeedEvent":
        return cls(
            id=data["id"],
            timestamp=data["timestamp"],
            group=PigGroup(data["group"]),
            feed_type=data["feedType"],
            total_kg=float(data["totalKg"]),
            method=data.get("method", ""),
            recorded_by=data.get("recordedBy", ""),
            overrides={k: Override(v) for k, v in (data.get("overrides") or {}).items()},
        )


@dataclass(frozen=True)
class FeedingOutcome:
    """Result of one feeding event for one animal."""

    animal_id: str
    estimated_intake: float
    status: FeedStatus
    expected_ration: float = 0.0
    ratio: float = 1.0
    override: Override | None = None

    def to_dict(self) -> dict:
        return {
            "animalId": self.animal_id,
            "estimatedIntake": self.estimated_intake,
            "status": self.status.value,
            "expectedRation": self.expected_ration,
            "ratio": self.ratio,
            "override": self.override.value if self.override else None,
        }
