"""Trip and dive records, and the collection they are stored in."""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, List, Optional


@dataclass(eq=False)
class Trip:
    """A group of dives, dated by the day the trip started."""
    when: datetime
    dives: List["Dive"] = field(default_factory=list)
    content: Optional[bytes] = None

    def __repr__(self) -> str:
        return f"Trip({self.when.date().isoformat()}, dives={len(self.dives)})"


@dataclass(eq=False)
class Dive:
    """A single dive.

    ``trip`` is a non-owning back reference set when the dive is linked.
    ``divecomputers`` maps the suffix of each Divecomputer file to its raw
    payload.
    """
    when: datetime
    number: Optional[int] = None
    trip: Optional[Trip] = None
    content: Optional[bytes] = None
    divecomputers: Dict[str, bytes] = field(default_factory=dict)

    def __repr__(self) -> str:
        return f"Dive({self.when.isoformat(timespec='seconds')}, number={self.number})"


class DiveCollection(ABC):
    """Where created trips and dives go.

    Implementations decide how records are indexed; the loader only creates
    and links them, in walk order.
    """

    @abstractmethod
    def create_trip(self, when: datetime) -> Trip:
        pass

    @abstractmethod
    def create_dive(self, when: datetime) -> Dive:
        pass

    def link(self, dive: Dive, trip: Trip) -> None:
        """Attach a dive to a trip."""
        dive.trip = trip
        trip.dives.append(dive)


class DiveLog(DiveCollection):
    """In-memory collection keeping trips and dives in creation order."""

    def __init__(self):
        self.trips: List[Trip] = []
        self.dives: List[Dive] = []

    def create_trip(self, when: datetime) -> Trip:
        trip = Trip(when)
        self.trips.append(trip)
        return trip

    def create_dive(self, when: datetime) -> Dive:
        dive = Dive(when)
        self.dives.append(dive)
        return dive

    def dives_without_trip(self) -> List[Dive]:
        return [dive for dive in self.dives if dive.trip is None]

    def __len__(self) -> int:
        return len(self.dives)

    def __repr__(self) -> str:
        return f"DiveLog(trips={len(self.trips)}, dives={len(self.dives)})"


class DecodeHooks:
    """Callbacks receiving record payloads once the loader has located them.

    The default hooks keep the raw bytes on the record. Subclass and
    override to decode the payloads into dive data.
    """

    def divecomputer(self, dive: Dive, suffix: str, content: bytes) -> None:
        dive.divecomputers[suffix] = content

    def dive(self, dive: Dive, content: bytes) -> None:
        dive.content = content

    def trip(self, trip: Trip, content: bytes) -> None:
        trip.content = content
