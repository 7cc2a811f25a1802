"""Data modules - herd model, registry, defaults and storage."""

from herdfeed.data.defaults import (
    DEFAULT_FEED_TYPES,
    DEFAULT_GROUP_PROFILES,
    generate_seed_data,
    get_feed_type,
)
from herdfeed.data.models import (
    Animal,
    FeedEvent,
    FeedingOutcome,
    FeedStatus,
    FeedType,
    GroupProfile,
    Override,
    PigGroup,
    Sex,
    WeightEntry,
)
from herdfeed.data.registry import FeedHistory, HerdRegistry
from herdfeed.data.storage import HerdState, load_state, reset_state, save_state

__all__ = [
    # models
    "Animal",
    "FeedEvent",
    "FeedingOutcome",
    "FeedStatus",
    "FeedType",
    "GroupProfile",
    "Override",
    "PigGroup",
    "Sex",
    "WeightEntry",
    # registry
    "HerdRegistry",
    "FeedHistory",
    # defaults
    "DEFAULT_GROUP_PROFILES",
    "DEFAULT_FEED_TYPES",
    "generate_seed_data",
    "get_feed_type",
    # storage
    "HerdState",
    "load_state",
    "save_state",
    "reset_state",
]
