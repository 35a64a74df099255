"""
Error taxonomy for the exercise and plan collections.
All of these are recoverable; none of them should take the process down.
"""


class TrainingError(Exception):
    """Base class for every error raised by the training core."""


class ValidationError(TrainingError):
    """Required field(s) were empty after trimming."""

    def __init__(self, message, fields=None):
        super().__init__(message)
        self.fields = list(fields or [])


class NotFoundError(TrainingError):
    """An id that is no longer (or never was) in the collection."""

    def __init__(self, kind, entity_id):
        super().__init__(f"{kind} '{entity_id}' not found")
        self.kind = kind
        self.id = entity_id


class PersistenceError(TrainingError):
    def __init__(self, key, message):
        super().__init__(f"{key}: {message}")
        self.key = key


class PersistenceReadError(PersistenceError):
    """Stored content for a key could not be parsed."""


class PersistenceWriteError(PersistenceError):
    """A full-collection write did not reach the disk."""


class SessionClosedError(TrainingError):
    """A selection session was used after commit/cancel, or none is open."""
