"""Configuration for dive loading.

LoaderConfig collects the knobs of a load in one validated object, so the
high-level API functions can stay simple.
"""

from dataclasses import dataclass
from typing import List, Optional

from .error_policies import ErrorPolicy, FailFastPolicy, ContinueOnErrorsPolicy


@dataclass
class LoaderConfig:
    """Configuration of a dive load.

    Attributes:
        git_executable: Name or path of the git binary
        default_branch: Branch used when the location names none
            (None = the repository's HEAD)
        max_depth: Maximum tree depth to walk (None = unlimited)
        strict: Stop at the first reported error
        verbose: Print recoverable errors to stderr as they happen
    """
    git_executable: str = "git"
    default_branch: Optional[str] = None
    max_depth: Optional[int] = None
    strict: bool = False
    verbose: bool = True

    def validate(self) -> List[str]:
        """Validate configuration consistency.

        Returns:
            List of validation errors (empty if valid)
        """
        errors = []

        if not self.git_executable or not self.git_executable.strip():
            errors.append("git_executable must not be empty")

        if self.max_depth is not None and self.max_depth < 0:
            errors.append(f"max_depth must be >= 0, got {self.max_depth}")

        if self.default_branch is not None and not self.default_branch.strip():
            errors.append("default_branch must be None or a non-empty name")

        return errors

    def check(self) -> None:
        """Raise ValueError if the configuration is invalid."""
        errors = self.validate()
        if errors:
            raise ValueError(f"Invalid configuration: {'; '.join(errors)}")

    def make_policy(self) -> ErrorPolicy:
        """Build the error policy this configuration asks for."""
        if self.strict:
            return FailFastPolicy()
        return ContinueOnErrorsPolicy(verbose=self.verbose)
