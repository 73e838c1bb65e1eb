"""
Error taxonomy for the kanban backend.

Every fallible filesystem call on the direct path of a command surfaces as
one of these. The message is what the front end shows the user.
Malformed JSON sidecar files are NOT errors (see jsonmap.py).
"""


class KanbanError(Exception):
    """Base class for every error a command can raise."""
    pass


class ResourceNotFound(KanbanError):
    """Raised when a source file/directory for rename or delete is missing."""
    pass


class ImageNotFound(ResourceNotFound):
    """Raised when a stored image name has no file behind it."""
    pass


class StorageError(KanbanError):
    """Raised on permission, disk or other OS-level read/write failures."""
    pass


class UnknownCommand(KanbanError):
    """Raised when dispatch is asked for a name not in COMMAND_TABLE."""
    pass


class ConfigError(KanbanError):
    """Raised when configuration is invalid or incomplete."""
    pass


class InvalidParams(KanbanError):
    """Raised when a command is called with missing or unexpected params."""
    pass
