"""Exceptions shared across herdfeed."""

from pathlib import Path


class HerdFeedError(Exception):
    """Base class for herdfeed errors."""

    pass


class InvalidAnimalError(HerdFeedError, ValueError):
    """Raised when an animal record carries an invalid weight or identity."""

    pass


class AnimalNotFoundError(HerdFeedError, LookupError):
    """Raised when an animal id is not in the registry."""

    def __init__(self, animal_id: str):
        self.animal_id = animal_id
        super().__init__(f"Animal {animal_id} not found")


class UnclassifiableGroupError(HerdFeedError):
    """Raised when no ration profile exists for a group.

    Without a ration coefficient the expected ration is undefined, so no
    feeding status can be derived for the group's animals.
    """

    def __init__(self, group: str):
        self.group = group
        super().__init__(f"No ration profile for group {group!r}; outcomes are unclassifiable")


class NotificationError(HerdFeedError):
    """Non-retryable error from the alert webhook."""

    pass


class RetryableError(HerdFeedError):
    """Transient error that should be retried (timeouts, connection errors, 5xx)."""

    pass


class StateFileError(HerdFeedError):
    """Raised when the herd state file cannot be parsed."""

    def __init__(self, path: Path, reason: str):
        self.path = path
        super().__init__(f"Cannot read herd state at {path}: {reason}")
