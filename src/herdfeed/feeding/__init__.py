"""Feeding engine: allocation of group deliveries and status classification.

This module provides:
- Body-weight share allocation of a delivered feed mass (allocation.py)
- Intake ratio classification with manual overrides (classify.py)
- Validated feeding event input (submission.py)
- The process / commit / notify pipeline (pipeline.py)
"""

from herdfeed.feeding.allocation import Allocation, allocate_feed, group_total_weight
from herdfeed.feeding.classify import (
    DEFAULT_OK_RATIO,
    Classification,
    FeedingPolicy,
    classify_intake,
    classify_ratio,
    expected_ration,
    intake_ratio,
    ration_coefficient,
)
from herdfeed.feeding.pipeline import FeedingResult, commit_feeding, process_feeding, record_feeding
from herdfeed.feeding.submission import FeedingSubmission

__all__ = [
    # allocation
    "Allocation",
    "allocate_feed",
    "group_total_weight",
    # classify
    "DEFAULT_OK_RATIO",
    "Classification",
    "FeedingPolicy",
    "classify_intake",
    "classify_ratio",
    "expected_ration",
    "intake_ratio",
    "ration_coefficient",
    # pipeline
    "FeedingSubmission",
    "FeedingResult",
    "process_feeding",
    "commit_feeding",
    "record_feeding",
]
