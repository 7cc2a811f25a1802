"""Tests for the herd registry, feed history and animal model."""

import math

import pytest
from conftest import make_animal

from herdfeed.core.errors import AnimalNotFoundError, InvalidAnimalError
from herdfeed.data.models import (
    Animal,
    FeedEvent,
    FeedingOutcome,
    FeedStatus,
    Override,
    PigGroup,
    Sex,
)
from herdfeed.data.registry import FeedHistory, HerdRegistry


class TestAnimal:
    """Tests for animal record invariants."""

    def test_new_animal_is_pending(self):
        animal = make_animal("A", 40.0)
        assert animal.status == FeedStatus.PENDING
        assert animal.last_intake_kg == 0.0

    def test_weight_history_seeded(self):
        animal = make_animal("A", 40.0)
        assert len(animal.weight_history) == 1
        assert animal.weight_history[-1].value == 40.0

    def test_set_weight_appends_history(self):
        animal = make_animal("A", 40.0)
        assert animal.set_weight(42.5) is True
        assert animal.weight == 42.5
        assert [w.value for w in animal.weight_history] == [40.0, 42.5]

    def test_same_weight_no_history(self):
        animal = make_animal("A", 40.0)
        assert animal.set_weight(40.0) is False
        assert len(animal.weight_history) == 1

    @pytest.mark.parametrize("weight", [-1.0, math.inf, math.nan, "heavy"])
    def test_rejects_invalid_weight(self, weight):
        with pytest.raises(InvalidAnimalError):
            make_animal("A", weight)

    def test_rejected_weight_change_keeps_record(self):
        animal = make_animal("A", 40.0)
        with pytest.raises(InvalidAnimalError):
            animal.set_weight(-5)
        assert animal.weight == 40.0
        assert animal.weight_history[-1].value == 40.0

    def test_males_cannot_be_pregnant(self):
        animal = Animal(
            id="m1", tag_id="T1", name="Boar", group=PigGroup.ADULT, sex=Sex.MALE, weight=200, is_pregnant=True
        )
        assert animal.is_pregnant is False

    def test_dict_round_trip_keeps_status(self):
        animal = make_animal("A", 40.0)
        animal.status = FeedStatus.UNDERFED
        animal.last_intake_kg = 0.4
        restored = Animal.from_dict(animal.to_dict())
        assert restored == animal


class TestHerdRegistry:
    """Tests for registry operations."""

    def test_register_new_animal(self):
        registry = HerdRegistry()
        animal = registry.register(tag_id="TAG-2045", name="Bessie", weight=20, group=PigGroup.GROWER)

        assert animal.id.startswith("p-")
        assert animal.status == FeedStatus.PENDING
        assert animal.photo_url.endswith("TAG-2045/200/200")
        assert registry.get(animal.id) is animal

    def test_register_newest_first(self):
        registry = HerdRegistry()
        first = registry.register(tag_id="T1", name="One", weight=20)
        second = registry.register(tag_id="T2", name="Two", weight=20)
        assert [a.id for a in registry] == [second.id, first.id]
        assert first.id != second.id

    def test_register_requires_tag_and_name(self):
        registry = HerdRegistry()
        with pytest.raises(InvalidAnimalError):
            registry.register(tag_id=" ", name="Nameless", weight=20)
        with pytest.raises(InvalidAnimalError):
            registry.register(tag_id="T1", name="", weight=20)

    def test_register_duplicate_id(self, registry):
        with pytest.raises(InvalidAnimalError):
            registry.register(tag_id="T9", name="Dup", weight=20, animal_id="A")

    def test_get_missing(self, registry):
        with pytest.raises(AnimalNotFoundError):
            registry.get("nope")

    def test_find_by_tag_or_name(self, registry):
        assert registry.find("tag-a").id == "A"
        assert registry.find("b").id == "B"

    def test_search_matches_tag_or_name_substring(self, registry):
        registry.register(tag_id="TAG-2045", name="Bessie", weight=42, animal_id="E")

        assert [a.id for a in registry.search("204")] == ["E"]
        assert [a.id for a in registry.search("ESS")] == ["E"]
        assert len(registry.search("tag-")) == 5
        assert registry.search("zzz") == []

    def test_in_group(self, registry):
        assert [a.id for a in registry.in_group(PigGroup.GROWER)] == ["A", "B"]

    def test_update_weight_records_history(self, registry):
        registry.update("A", weight=44.0)
        animal = registry.get("A")
        assert animal.weight == 44.0
        assert animal.weight_history[-1].value == animal.weight

    def test_update_sex_clears_pregnancy(self, registry):
        registry.update("C", is_pregnant=True)
        assert registry.get("C").is_pregnant is True

        registry.update("C", sex=Sex.MALE)
        assert registry.get("C").is_pregnant is False

    def test_update_rejects_blank_name(self, registry):
        with pytest.raises(InvalidAnimalError):
            registry.update("A", name="  ")

    def test_snapshot_is_independent(self, registry):
        snapshot = registry.snapshot()
        snapshot[0].weight = 999
        assert registry.get("A").weight == 40.0

    def test_apply_outcomes(self, registry):
        updated = registry.apply_outcomes(
            [
                FeedingOutcome("A", 0.4, FeedStatus.UNDERFED),
                FeedingOutcome("ghost", 1.0, FeedStatus.OK),
            ]
        )
        assert updated == 1
        assert registry.get("A").status == FeedStatus.UNDERFED
        assert registry.get("A").last_intake_kg == 0.4
        assert registry.get("B").status == FeedStatus.PENDING

    def test_alerts(self, registry):
        registry.apply_outcomes(
            [
                FeedingOutcome("A", 0.0, FeedStatus.MISSED),
                FeedingOutcome("B", 2.4, FeedStatus.OK),
                FeedingOutcome("C", 1.0, FeedStatus.UNDERFED),
            ]
        )
        assert [a.id for a in registry.alerts()] == ["A", "C"]


class TestFeedHistory:
    """Tests for the feed event log."""

    def make_event(self, event_id: str, group: PigGroup = PigGroup.GROWER) -> FeedEvent:
        return FeedEvent(
            id=event_id,
            timestamp=f"2026-10-19T0{event_id[-1]}:00:00+00:00",
            group=group,
            feed_type="grower",
            total_kg=3.6,
            method="Trough",
            recorded_by="Sam",
            overrides={"A": Override.PARTIAL},
        )

    def test_newest_first(self):
        history = FeedHistory()
        history.append(self.make_event("e1"))
        history.append(self.make_event("e2"))
        assert [e.id for e in history] == ["e2", "e1"]

    def test_latest_for_group(self):
        history = FeedHistory()
        history.append(self.make_event("e1", PigGroup.PIGLET))
        history.append(self.make_event("e2", PigGroup.GROWER))
        assert history.latest(PigGroup.PIGLET).id == "e1"
        assert history.latest().id == "e2"
        assert history.latest(PigGroup.ADULT) is None

    def test_event_dict_round_trip(self):
        event = self.make_event("e1")
        assert FeedEvent.from_dict(event.to_dict()) == event
