"""Walk state: which trip and dive the entries being visited belong to.

The state is an immutable WalkContext handed from each directory to its
children. A trip is active exactly inside the subtree of its trip
directory and a dive inside the subtree of its dive directory, so leaving a
subtree needs no bookkeeping and a dive filed directly under a month can
never pick up a trip from an earlier month.
"""

from dataclasses import dataclass, replace
from typing import Optional, Tuple

from .classifier import Classification, DirectoryAction, classify_directory
from .model import Dive, DiveCollection, Trip


@dataclass(frozen=True)
class WalkContext:
    """Ancestor names plus the active trip and dive for one directory level."""
    ancestors: Tuple[str, ...] = ()
    trip: Optional[Trip] = None
    dive: Optional[Dive] = None

    @property
    def path(self) -> str:
        """Slash-joined ancestors with a trailing slash, '' at the root."""
        return "".join(f"{name}/" for name in self.ancestors)

    def descend(self, name: str) -> "WalkContext":
        return replace(self, ancestors=self.ancestors + (name,))


class StateTracker:
    """Creates trips and dives for qualifying directories.

    The tracker is the only place records are created. It is stateless
    apart from its counters; what is active travels in the WalkContext.
    """

    def __init__(self, collection: DiveCollection):
        self.collection = collection
        self.trips_created = 0
        self.dives_created = 0
        self.directories_skipped = 0

    def enter_directory(self, name: str, context: WalkContext) -> Optional[WalkContext]:
        """Classify a directory and return the context for its children.

        Returns:
            The child context, or None if the directory is not dive data
            and must not be entered
        """
        result = classify_directory(name, context.ancestors)
        return self.apply(result, name, context)

    def apply(self, result: Classification, name: str,
              context: WalkContext) -> Optional[WalkContext]:
        if result.action is DirectoryAction.SKIP:
            self.directories_skipped += 1
            return None

        child = context.descend(name)

        if result.action is DirectoryAction.ENTER_TRIP:
            trip = self.collection.create_trip(result.timestamp)
            self.trips_created += 1
            return replace(child, trip=trip)

        if result.action is DirectoryAction.ENTER_DIVE:
            dive = self.collection.create_dive(result.timestamp)
            if context.trip is not None:
                self.collection.link(dive, context.trip)
            self.dives_created += 1
            return replace(child, dive=dive)

        return child
