"""Attribution of record files to the active dive or trip.

Inside a dive directory the loader knows two kinds of files, ``Dive[N]``
and ``Divecomputer[suffix]``; inside a trip directory it knows ``00-Trip``.
Everything else is reported as unknown. Content is loaded only after a
file has been matched.
"""

from typing import Optional

from ..core import TreeAdapter, TreeNode
from ..error_policies import ErrorPolicy
from ..errors import ContentLoadError, InvalidDiveNumberError, UnknownEntryError
from .model import DecodeHooks
from .state import WalkContext


DIVECOMPUTER_PREFIX = "Divecomputer"
DIVE_PREFIX = "Dive"
TRIP_FILE = "00-Trip"


class FileDispatcher:
    """Routes file entries to the decode hooks."""

    def __init__(self, adapter: TreeAdapter, hooks: DecodeHooks, policy: ErrorPolicy):
        self.adapter = adapter
        self.hooks = hooks
        self.policy = policy
        self.files_processed = 0

    def dispatch(self, node: TreeNode, context: WalkContext) -> bool:
        """Handle one file entry.

        Returns:
            True if the file was recognised and its content handed to a
            hook, False if it was reported
        """
        name = node.name
        dive = context.dive
        trip = context.trip

        if dive is not None and name.startswith(DIVECOMPUTER_PREFIX):
            content = self._load(node, "Unable to read divecomputer file")
            if content is None:
                return False
            self.hooks.divecomputer(dive, name[len(DIVECOMPUTER_PREFIX):], content)

        elif dive is not None and name.startswith(DIVE_PREFIX):
            content = self._load(node, "Unable to read dive file")
            if content is None:
                return False
            suffix = name[len(DIVE_PREFIX):]
            if suffix:
                dive.number = self._dive_number(node, suffix)
            self.hooks.dive(dive, content)

        elif trip is not None and name == TRIP_FILE:
            content = self._load(node, "Unable to read trip file")
            if content is None:
                return False
            self.hooks.trip(trip, content)

        else:
            self.policy.handle(UnknownEntryError(context.path, name, dive, trip), node)
            return False

        self.files_processed += 1
        return True

    def _load(self, node: TreeNode, message: str) -> Optional[bytes]:
        try:
            return self.adapter.read_content(node)
        except ContentLoadError as e:
            self.policy.handle(ContentLoadError(f"{message} {node.path}: {e}", path=node.path), node)
            return None

    def _dive_number(self, node: TreeNode, suffix: str) -> Optional[int]:
        if suffix.isascii() and suffix.isdigit():
            return int(suffix)
        self.policy.handle(InvalidDiveNumberError(node.path, suffix), node)
        return None
