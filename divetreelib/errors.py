"""Exceptions raised while loading dives from a tree store.

Fatal errors abort the whole load. Recoverable errors describe a single
entry; they are handed to the active error policy and the walk continues.
"""

from typing import Any, Optional


class DiveLoadError(Exception):
    """Base class for all loader errors."""

    fatal = False

    def __init__(self, message: str, path: Optional[str] = None):
        super().__init__(message)
        self.path = path


# Fatal


class LocationError(DiveLoadError, ValueError):
    """Raised when a location string is not of the form 'git <path>[:branch]'."""
    fatal = True


class RepositoryOpenError(DiveLoadError):
    """Raised when the repository cannot be opened."""
    fatal = True

    def __init__(self, location: str, branch: Optional[str] = None):
        super().__init__(
            f"Unable to open git repository at '{location}' (branch '{branch or 'HEAD'}')",
            path=location,
        )
        self.branch = branch


class BranchNotFoundError(DiveLoadError):
    """Raised when a branch name cannot be resolved."""
    fatal = True

    def __init__(self, branch: Optional[str]):
        super().__init__(f"Unable to look up branch '{branch or 'HEAD'}'")
        self.branch = branch


class TreePeelError(DiveLoadError):
    """Raised when a resolved branch cannot be peeled to its root tree."""
    fatal = True

    def __init__(self, branch: Optional[str]):
        super().__init__(f"Could not look up tree of branch '{branch or 'HEAD'}'")
        self.branch = branch


class ErrorThresholdExceeded(DiveLoadError, RuntimeError):
    """Raised by a threshold policy once too many errors were reported."""
    fatal = True

    def __init__(self, max_errors: int):
        super().__init__(f"Error threshold exceeded ({max_errors} errors)")
        self.max_errors = max_errors


# Recoverable, per entry


class ContentLoadError(DiveLoadError):
    """Raised when the content of a file entry cannot be loaded."""


class UnknownEntryError(DiveLoadError):
    """Reported for a file that matches no record pattern in its context."""

    def __init__(self, root: str, name: str, dive: Any = None, trip: Any = None):
        super().__init__(f"Unknown file {root}{name} ({dive} {trip})", path=root + name)
        self.name = name
        self.dive = dive
        self.trip = trip


class InvalidDiveNumberError(DiveLoadError):
    """Reported when the suffix of a dive file is not an integer."""

    def __init__(self, path: str, suffix: str):
        super().__init__(f"Invalid dive number '{suffix}' in {path}", path=path)
        self.suffix = suffix
