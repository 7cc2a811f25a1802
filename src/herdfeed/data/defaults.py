"""Default ration profiles, feed catalogue and seed herd."""

from datetime import UTC, date, datetime, timedelta

from herdfeed.data.models import Animal, FeedType, GroupProfile, PigGroup, Sex

# Expected daily feed as a fraction of body weight
# Young, fast-growing and gestating animals need more per kg
DEFAULT_GROUP_PROFILES: dict[PigGroup, GroupProfile] = {
    PigGroup.PIGLET: GroupProfile(PigGroup.PIGLET, "Piglet", 0.05),
    PigGroup.GROWER: GroupProfile(PigGroup.GROWER, "Grower", 0.04),
    PigGroup.PREGNANT: GroupProfile(PigGroup.PREGNANT, "Pregnant", 0.03),
    PigGroup.ADULT: GroupProfile(PigGroup.ADULT, "Adult", 0.025),
    PigGroup.QUARANTINE: GroupProfile(PigGroup.QUARANTINE, "Sick/Quarantine", 0.02),
}

DEFAULT_FEED_TYPES: list[FeedType] = [
    FeedType("starter", "Piglet Starter", protein=22.0, energy=14.5, cost_per_kg=0.95),
    FeedType("grower", "Grower Pellets", protein=18.0, energy=13.8, cost_per_kg=0.62),
    FeedType("sow", "Gestation Sow Mix", protein=14.0, energy=12.9, cost_per_kg=0.55),
    FeedType("finisher", "Finisher Meal", protein=16.0, energy=13.5, cost_per_kg=0.58),
]

# (tag, name, group, sex, breed, weight kg, age days, pregnant)
_SEED_HERD = [
    ("TAG-1001", "Bessie", PigGroup.PREGNANT, Sex.FEMALE, "Yorkshire", 185.0, 540, True),
    ("TAG-1002", "Hamlet", PigGroup.ADULT, Sex.MALE, "Duroc", 220.0, 720, False),
    ("TAG-1003", "Truffle", PigGroup.GROWER, Sex.FEMALE, "Landrace", 45.0, 120, False),
    ("TAG-1004", "Chops", PigGroup.GROWER, Sex.MALE, "Yorkshire", 52.0, 130, False),
    ("TAG-1005", "Nibbles", PigGroup.PIGLET, Sex.FEMALE, "Berkshire", 8.5, 35, False),
    ("TAG-1006", "Pickles", PigGroup.PIGLET, Sex.MALE, "Berkshire", 9.2, 35, False),
    ("TAG-1007", "Snort", PigGroup.QUARANTINE, Sex.MALE, "Hampshire", 60.0, 200, False),
]


def get_feed_type(feed_type_id: str) -> FeedType | None:
    return next((f for f in DEFAULT_FEED_TYPES if f.id == feed_type_id), None)


def generate_seed_data(today: date | None = None) -> list[Animal]:
    """Build a small starter herd. Every animal starts Pending."""
    if today is None:
        today = datetime.now(UTC).date()

    animals = []
    for i, (tag, name, group, sex, breed, weight, age_days, pregnant) in enumerate(_SEED_HERD, start=1):
        animals.append(
            Animal(
                id=f"p-{i}",
                tag_id=tag,
                name=name,
                group=group,
                sex=sex,
                breed=breed,
                weight=weight,
                dob=(today - timedelta(days=age_days)).isoformat(),
                is_pregnant=pregnant,
                photo_url=f"https://picsum.photos/seed/{tag}/200/200",
            )
        )
    return animals
