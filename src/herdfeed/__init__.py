"""Herd feed intake tracking.

This package estimates per-animal feed intake from group feeding events
and classifies each animal's feeding outcome.

Subpackages:
- herdfeed.core: Configuration, logging, units and alert notification
- herdfeed.data: Herd model, registry, defaults and JSON storage
- herdfeed.feeding: Allocation, classification and the feeding pipeline
- herdfeed.reports: Herd and feeding history summaries
- herdfeed.cli: Command-line tools
"""

# Re-export common items for convenience
from herdfeed.core import settings
from herdfeed.feeding import (
    FeedingPolicy,
    FeedingSubmission,
    allocate_feed,
    classify_intake,
    process_feeding,
    record_feeding,
)

__all__ = [
    "settings",
    "FeedingPolicy",
    "FeedingSubmission",
    "allocate_feed",
    "classify_intake",
    "process_feeding",
    "record_feeding",
]

__version__ = "0.1.0"
