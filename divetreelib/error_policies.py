"""
Error handling policies for divetreelib.

Every error the loader reports goes through a policy, which decides whether
the load keeps going. Policies are the report sink of the loader: they are
where recoverable per-entry errors end up, and where fatal errors are
announced before they propagate.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional
import sys

from .errors import ContentLoadError, ErrorThresholdExceeded


class ErrorPolicy(ABC):
    """
    Base class for error handling policies.

    Subclasses implement different strategies for handling errors that
    occur while loading individual entries.
    """

    @abstractmethod
    def handle(self, error: Exception, node: Any = None) -> None:
        """
        Handle an error reported during a load.

        Args:
            error: The exception being reported
            node: The tree entry being processed, if any

        Returns:
            None to let the walk continue. Re-raise to stop it.
        """
        pass

    @staticmethod
    def _record(error: Exception, node: Any) -> Dict[str, Any]:
        path = getattr(error, 'path', None)
        if path is None and node is not None:
            path = getattr(node, 'path', str(node))
        return {
            'path': path,
            'error': error,
            'error_type': type(error).__name__,
            'error_message': str(error),
        }


class FailFastPolicy(ErrorPolicy):
    """
    Policy that immediately re-raises any error, stopping the load.

    Useful when a partially loaded dive log is worse than none.
    """

    def handle(self, error: Exception, node: Any = None) -> None:
        """Re-raise the error immediately."""
        raise error


class ContinueOnErrorsPolicy(ErrorPolicy):
    """
    Policy that reports errors and continues the load.

    This is the default: errors are collected for later inspection and,
    when verbose, printed to stderr as they happen.
    """

    def __init__(self, verbose: bool = True):
        """
        Initialize the policy.

        Args:
            verbose: If True, print warnings to stderr when errors occur
        """
        self.errors: List[Dict[str, Any]] = []
        self.unreadable_paths: List[str] = []
        self.verbose = verbose

    def handle(self, error: Exception, node: Any = None) -> None:
        record = self._record(error, node)
        self.errors.append(record)

        if isinstance(error, ContentLoadError) and record['path']:
            self.unreadable_paths.append(record['path'])

        if self.verbose:
            print(f"WARNING: {error}", file=sys.stderr)

    def get_statistics(self) -> dict:
        """
        Get statistics about errors encountered.

        Returns:
            Dictionary with error counts and details
        """
        return {
            'total_errors': len(self.errors),
            'unreadable': len(self.unreadable_paths),
            'unknown_files': sum(1 for e in self.errors if e['error_type'] == 'UnknownEntryError'),
            'errors': self.errors,
        }


class CollectErrorsPolicy(ContinueOnErrorsPolicy):
    """
    Policy that collects all errors without printing anything.

    Useful for presenting all problems together at the end of a load.
    """

    def __init__(self):
        super().__init__(verbose=False)


class ThresholdPolicy(ErrorPolicy):
    """
    Policy that tolerates errors up to a threshold, then fails.

    A few broken entries are expected in a long-lived dive log; hundreds
    usually mean the tree is not a dive log at all.
    """

    def __init__(self, max_errors: int = 10, verbose: bool = True):
        """
        Initialize threshold policy.

        Args:
            max_errors: Maximum errors to tolerate before failing
            verbose: If True, print warnings for errors
        """
        self.max_errors = max_errors
        self.error_count = 0
        self.verbose = verbose
        self.errors: List[Exception] = []

    def handle(self, error: Exception, node: Any = None) -> None:
        """Handle error if under threshold, otherwise raise ErrorThresholdExceeded."""
        self.error_count += 1
        self.errors.append(error)

        if self.error_count > self.max_errors:
            raise ErrorThresholdExceeded(self.max_errors) from error

        if self.verbose:
            print(f"WARNING ({self.error_count}/{self.max_errors}): {error}", file=sys.stderr)


def error_count(policy: Optional[ErrorPolicy]) -> int:
    """Number of errors a policy has seen, 0 if it does not keep count."""
    if policy is None:
        return 0
    if isinstance(policy, ThresholdPolicy):
        return policy.error_count
    return len(getattr(policy, 'errors', ()))
