"""Load and save herd state as JSON.

The state file holds the herd registry and the feed event history:

    {"version": 1, "pigs": [...], "feedEvents": [...]}

A missing file yields a freshly seeded herd with no history.
"""

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path

from herdfeed.core.config import settings
from herdfeed.core.errors import StateFileError
from herdfeed.data.defaults import generate_seed_data
from herdfeed.data.models import Animal, FeedEvent
from herdfeed.data.registry import FeedHistory, HerdRegistry

logger = logging.getLogger(__name__)

STATE_VERSION = 1


@dataclass
class HerdState:
    registry: HerdRegistry = field(default_factory=HerdRegistry)
    history: FeedHistory = field(default_factory=FeedHistory)

    def to_dict(self) -> dict:
        return {
            "version": STATE_VERSION,
            "pigs": [a.to_dict() for a in self.registry],
            "feedEvents": [e.to_dict() for e in self.history],
        }

    @classmethod
    def from_dict(cls, data: dict) -> "HerdState":
        return cls(
            registry=HerdRegistry(Animal.from_dict(a) for a in data.get("pigs", [])),
            history=FeedHistory(FeedEvent.from_dict(e) for e in data.get("feedEvents", [])),
        )

    @classmethod
    def seeded(cls) -> "HerdState":
        return cls(registry=HerdRegistry(generate_seed_data()))


def load_state(path: Path | None = None) -> HerdState:
    """Load herd state, seeding a new herd when no file exists.

    Raises:
        StateFileError: If the file is not valid herd state JSON
    """
    if path is None:
        path = settings.resolved_data_file()

    if not path.exists():
        logger.info("No herd state at %s, starting from seed data", path)
        return HerdState.seeded()

    try:
        with open(path) as f:
            return HerdState.from_dict(json.load(f))
    except (AttributeError, KeyError, TypeError, ValueError) as e:
        raise StateFileError(path, f"{type(e).__name__}: {e}") from e


def save_state(state: HerdState, path: Path | None = None) -> Path:
    """Write herd state atomically (temp file + rename)."""
    if path is None:
        path = settings.resolved_data_file()

    path.parent.mkdir(parents=True, exist_ok=True)
    tmp_path = path.with_suffix(path.suffix + ".tmp")
    with open(tmp_path, "w") as f:
        json.dump(state.to_dict(), f, indent=2)
    tmp_path.replace(path)
    return path


def reset_state(path: Path | None = None) -> HerdState:
    """Discard all animals and feeding history, replacing them with seed data."""
    if path is None:
        path = settings.resolved_data_file()

    path.unlink(missing_ok=True)
    state = HerdState.seeded()
    save_state(state, path)
    logger.warning("Herd state at %s reset to defaults", path)
    return state
