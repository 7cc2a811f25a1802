"""Core module - configuration, logging, units and alert notification."""

from herdfeed.core import notify, units
from herdfeed.core.config import get_cache_dir, settings
from herdfeed.core.errors import (
    AnimalNotFoundError,
    HerdFeedError,
    InvalidAnimalError,
    NotificationError,
    RetryableError,
    StateFileError,
    UnclassifiableGroupError,
)
from herdfeed.core.logging_config import setup_logging
from herdfeed.core.notify import (
    AlertNotifier,
    LogNotifier,
    WebhookNotifier,
    dispatch_alert,
    get_notifier,
)
from herdfeed.core.units import (
    format_mass,
    format_ratio,
    get_mass_unit,
    is_imperial,
    kg_to_lb,
    lb_to_kg,
)

__all__ = [
    "notify",
    "units",
    "settings",
    "get_cache_dir",
    "setup_logging",
    # Errors
    "HerdFeedError",
    "InvalidAnimalError",
    "AnimalNotFoundError",
    "UnclassifiableGroupError",
    "NotificationError",
    "RetryableError",
    "StateFileError",
    # Notifiers
    "AlertNotifier",
    "LogNotifier",
    "WebhookNotifier",
    "dispatch_alert",
    "get_notifier",
    # Unit conversion helpers
    "format_mass",
    "format_ratio",
    "get_mass_unit",
    "is_imperial",
    "kg_to_lb",
    "lb_to_kg",
]
