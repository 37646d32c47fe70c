"""High-level API for divetreelib.

Simple functional entry points that wire an adapter, the state tracker,
the file dispatcher and an error policy together for one load.
"""

from dataclasses import dataclass
from typing import Optional

from .adapters.git import GitTreeAdapter
from .config import LoaderConfig
from .core import PreOrderTraverser, TreeAdapter, TreeNode
from .dives import DecodeHooks, DiveCollection, DiveLog, FileDispatcher, StateTracker, WalkContext
from .error_policies import ErrorPolicy, error_count
from .errors import ContentLoadError, DiveLoadError, LocationError


GIT_MARKER = "git"


@dataclass(frozen=True)
class GitLocation:
    """Repository path and optional branch parsed from a location string."""
    path: str
    branch: Optional[str] = None


@dataclass
class LoadResult:
    """Outcome of a load that was not aborted."""
    collection: DiveCollection
    trips_created: int = 0
    dives_created: int = 0
    files_processed: int = 0
    directories_skipped: int = 0
    entries_visited: int = 0
    errors_reported: int = 0


def is_git_location(where: str) -> bool:
    """Check for the 'git' marker followed by whitespace."""
    marker = len(GIT_MARKER)
    return where.startswith(GIT_MARKER) and len(where) > marker and where[marker].isspace()


def parse_location(where: str) -> GitLocation:
    """Parse 'git <path>[:branch]'.

    The last colon separates the branch, so paths containing colons need an
    explicit branch. An empty branch means the default branch.

    Raises:
        LocationError: If the string is not a git location
    """
    if not is_git_location(where):
        raise LocationError(f"Not a git location: {where!r}")

    loc = where[len(GIT_MARKER):].strip()
    path, sep, branch = loc.rpartition(":")
    if not sep:
        path, branch = loc, ""
    path = path.strip()
    if not path:
        raise LocationError(f"No repository path in {where!r}")
    return GitLocation(path, branch.strip() or None)


def load_dives_from_tree(
    root: TreeNode,
    adapter: TreeAdapter,
    collection: Optional[DiveCollection] = None,
    hooks: Optional[DecodeHooks] = None,
    policy: Optional[ErrorPolicy] = None,
    config: Optional[LoaderConfig] = None,
) -> LoadResult:
    """Walk a resolved tree and load its trips and dives.

    Args:
        root: Root directory of the dive log tree
        adapter: Adapter for the tree store
        collection: Where records are created (default: a new DiveLog)
        hooks: Receive record payloads (default: keep raw bytes)
        policy: Report sink for per-entry errors (default: from config)
        config: Loader configuration

    Returns:
        LoadResult with the collection and walk statistics

    Example:
        >>> adapter = MemoryTreeAdapter.from_paths({
        ...     "2019/05/12-deep-09:30:00/Dive": b"",
        ... })
        >>> result = load_dives_from_tree(adapter.create_root_node(), adapter)
        >>> result.dives_created
        1
    """
    config = config or LoaderConfig()
    config.check()
    policy = policy or config.make_policy()
    collection = collection if collection is not None else DiveLog()
    hooks = hooks or DecodeHooks()

    tracker = StateTracker(collection)
    dispatcher = FileDispatcher(adapter, hooks, policy)
    errors_before = error_count(policy)

    def visit(node: TreeNode, context: WalkContext) -> Optional[WalkContext]:
        if node.is_directory():
            return tracker.enter_directory(node.name, context)
        dispatcher.dispatch(node, context)
        return None

    def on_error(node: TreeNode, error: Exception) -> None:
        # Unreadable subtrees are reported like unreadable files
        if not isinstance(error, ContentLoadError):
            raise error
        policy.handle(error, node)

    traverser = PreOrderTraverser(adapter, on_error=on_error)
    visited = traverser.walk(root, visit, WalkContext(), max_depth=config.max_depth)

    return LoadResult(
        collection=collection,
        trips_created=tracker.trips_created,
        dives_created=tracker.dives_created,
        files_processed=dispatcher.files_processed,
        directories_skipped=tracker.directories_skipped,
        entries_visited=visited,
        errors_reported=error_count(policy) - errors_before,
    )


def load_dives(
    where: str,
    collection: Optional[DiveCollection] = None,
    hooks: Optional[DecodeHooks] = None,
    policy: Optional[ErrorPolicy] = None,
    config: Optional[LoaderConfig] = None,
) -> LoadResult:
    """Load dives from a git location string, 'git <path>[:branch]'.

    Fatal errors are reported through the policy and then raised.

    Raises:
        LocationError: Malformed location string
        RepositoryOpenError: Repository cannot be opened
        BranchNotFoundError: Branch cannot be resolved
        TreePeelError: Branch does not lead to a tree
    """
    config = config or LoaderConfig()
    config.check()
    policy = policy or config.make_policy()

    try:
        location = parse_location(where)
        branch = location.branch or config.default_branch
        adapter = GitTreeAdapter.from_location(location.path, branch, config.git_executable)
    except DiveLoadError as e:
        policy.handle(e)
        raise

    return load_dives_from_tree(adapter.create_root_node(), adapter,
                                collection=collection, hooks=hooks,
                                policy=policy, config=config)


def git_load_dives(where: str, **kwargs) -> int:
    """Status-code wrapper around load_dives.

    Per-entry errors do not change the status, except in strict mode
    (FailFastPolicy) or under a ThresholdPolicy, where a reported entry
    error aborts the load.

    Returns:
        0 if the load ran to the end, 1 if it was aborted
    """
    try:
        load_dives(where, **kwargs)
    except DiveLoadError:
        return 1
    return 0
