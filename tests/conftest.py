"""Shared test fixtures."""

import sys
from pathlib import Path

import pytest
import respx

# Add src/ to path so tests can import herdfeed
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from herdfeed.core.config import settings  # noqa: E402
from herdfeed.data.models import Animal, GroupProfile, PigGroup, Sex  # noqa: E402
from herdfeed.data.registry import FeedHistory, HerdRegistry  # noqa: E402

WEBHOOK_URL = "https://alerts.example.com/hooks/herd"


def make_animal(
    animal_id: str = "a1",
    weight: float = 40.0,
    group: PigGroup = PigGroup.GROWER,
    sex: Sex = Sex.MALE,
    tag_id: str | None = None,
    name: str | None = None,
) -> Animal:
    """Create an animal with sensible defaults."""
    return Animal(
        id=animal_id,
        tag_id=tag_id or f"TAG-{animal_id.upper()}",
        name=name or animal_id.capitalize(),
        group=group,
        sex=sex,
        weight=weight,
    )


@pytest.fixture
def grower_pair():
    """Two growers, A at 40 kg and B at 60 kg."""
    return [make_animal("A", 40.0), make_animal("B", 60.0)]


@pytest.fixture
def mixed_herd(grower_pair):
    """Growers A and B plus animals in other groups."""
    return [
        *grower_pair,
        make_animal("C", 180.0, group=PigGroup.PREGNANT, sex=Sex.FEMALE),
        make_animal("D", 9.0, group=PigGroup.PIGLET),
    ]


@pytest.fixture
def profiles():
    """Ration profiles with the grower coefficient at 0.04 kg/kg."""
    return {
        PigGroup.GROWER: GroupProfile(PigGroup.GROWER, "Grower", 0.04),
        PigGroup.PREGNANT: GroupProfile(PigGroup.PREGNANT, "Pregnant", 0.03),
        PigGroup.PIGLET: GroupProfile(PigGroup.PIGLET, "Piglet", 0.05),
    }


@pytest.fixture
def registry(mixed_herd):
    return HerdRegistry(mixed_herd)


@pytest.fixture
def history():
    return FeedHistory()


@pytest.fixture
def data_file(tmp_path, monkeypatch):
    """Point the herd state file at a temporary location."""
    path = tmp_path / "herd.json"
    monkeypatch.setattr(settings, "data_file", path)
    return path


@pytest.fixture
def mock_webhook():
    """Mock the alert webhook endpoint."""
    with respx.mock(base_url="https://alerts.example.com") as mock:
        yield mock


class RecordingNotifier:
    """Notifier that remembers every call."""

    def __init__(self, fail: bool = False):
        self.calls: list[tuple[int, str]] = []
        self.fail = fail

    async def notify(self, count: int, group: str) -> None:
        self.calls.append((count, group))
        if self.fail:
            raise RuntimeError("mail server down")


@pytest.fixture
def notifier():
    return RecordingNotifier()


@pytest.fixture
def failing_notifier():
    return RecordingNotifier(fail=True)
