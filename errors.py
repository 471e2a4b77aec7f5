"""
errors.py
Exception hierarchy for Pocket Notes.

Validation errors reject a user intent before anything is changed. Persistence
errors are raised after the in-memory change has already been applied, so the
caller can tell the user the data was not saved without losing it.
"""

from typing import Any, Optional

import structlog

logger = structlog.get_logger(__name__)


class PocketNotesError(Exception):
    """Base exception for Pocket Notes"""

    code = "POCKET_NOTES_ERROR"

    def __init__(self, message: str, code: Optional[str] = None):
        self.message = message
        if code:
            self.code = code
        super().__init__(message)


class ValidationError(PocketNotesError):
    """A rejected user intent; state is unchanged."""

    code = "VALIDATION_ERROR"


# --- Group creation ---
class EmptyName(ValidationError):
    code = "EMPTY_NAME"

    def __init__(self, message: str = "Please enter a group name."):
        super().__init__(message)


class TooShort(ValidationError):
    code = "TOO_SHORT"

    def __init__(self, min_length: int):
        self.min_length = min_length
        super().__init__(f"Group name must be at least {min_length} characters long.")


class DuplicateName(ValidationError):
    code = "DUPLICATE_NAME"

    def __init__(self, name: str):
        self.name = name
        super().__init__("This group name already exists.")


class InvalidColor(ValidationError):
    code = "INVALID_COLOR"

    def __init__(self, color: Any):
        self.color = color
        super().__init__("Please choose one of the available colours.")


# --- Note creation ---
class EmptyContent(ValidationError):
    code = "EMPTY_CONTENT"

    def __init__(self, message: str = "A note cannot be empty."):
        super().__init__(message)


class NoActiveGroup(ValidationError):
    code = "NO_ACTIVE_GROUP"

    def __init__(self, group_id: Any = None):
        self.group_id = group_id
        super().__init__("Select a group before adding a note.")


class PersistenceError(PocketNotesError):
    """Writing to (or reading from) local storage failed.

    `entity` holds the Group or Note that was created in memory but could not
    be saved, when there is one.
    """

    code = "PERSISTENCE_ERROR"

    def __init__(self, message: str, key: Optional[str] = None, entity: Any = None):
        self.key = key
        self.entity = entity
        super().__init__(message)
        logger.error("persistence_error", key=key, message=message)
