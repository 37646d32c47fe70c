"""divetreelib - load dive logs stored as git trees.

A dive log tree keeps everything in its names:

    2019/05/03-reef/              trip starting May 3rd
        00-Trip                   trip descriptor
        14-Tue-07:00:00/          dive on May 14th at 07:00:00
            Dive1                 dive file, dive number 1
            Divecomputer          dive computer data
    2019/05/12-deep-09:30:00/     dive outside any trip

divetreelib walks such a tree once, pre-order, and rebuilds the trips and
dives from the names alone.

Quick start:
━━━━━━━━━━━━━━━━━━━━━━━━━━
    from divetreelib import load_dives

    result = load_dives("git /path/to/divelog:main")
    for dive in result.collection.dives:
        print(dive.when, dive.trip)
━━━━━━━━━━━━━━━━━━━━━━━━━━
"""

__version__ = "0.1.0"

from .api import (
    GitLocation,
    LoadResult,
    git_load_dives,
    is_git_location,
    load_dives,
    load_dives_from_tree,
    parse_location,
)
from .config import LoaderConfig
from .dives import Trip, Dive, DiveCollection, DiveLog, DecodeHooks, classify_directory
from .adapters import GitRepository, GitTreeAdapter, MemoryTreeAdapter
from .error_policies import (
    ErrorPolicy,
    FailFastPolicy,
    ContinueOnErrorsPolicy,
    CollectErrorsPolicy,
    ThresholdPolicy,
)
from .errors import (
    DiveLoadError,
    LocationError,
    RepositoryOpenError,
    BranchNotFoundError,
    TreePeelError,
    ErrorThresholdExceeded,
    ContentLoadError,
    UnknownEntryError,
    InvalidDiveNumberError,
)

__all__ = [
    "__version__",
    # API
    "GitLocation",
    "LoadResult",
    "git_load_dives",
    "is_git_location",
    "load_dives",
    "load_dives_from_tree",
    "parse_location",
    "LoaderConfig",
    # Records
    "Trip",
    "Dive",
    "DiveCollection",
    "DiveLog",
    "DecodeHooks",
    "classify_directory",
    # Adapters
    "GitRepository",
    "GitTreeAdapter",
    "MemoryTreeAdapter",
    # Policies
    "ErrorPolicy",
    "FailFastPolicy",
    "ContinueOnErrorsPolicy",
    "CollectErrorsPolicy",
    "ThresholdPolicy",
    # Errors
    "DiveLoadError",
    "LocationError",
    "RepositoryOpenError",
    "BranchNotFoundError",
    "TreePeelError",
    "ErrorThresholdExceeded",
    "ContentLoadError",
    "UnknownEntryError",
    "InvalidDiveNumberError",
]
