"""Classifications of how current state compares to a tracking statement.

A diff is computed for the key fingerprint and for each remote proof. Diffs
that contradict what the tracker previously trusted break tracking; the rest
are informational.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass


class TrackDiff(ABC):
    @abstractmethod
    def breaks_tracking(self) -> bool: ...

    @abstractmethod
    def to_display_string(self) -> str: ...

    def __str__(self) -> str:
        return self.to_display_string()


@dataclass(frozen=True, slots=True)
class TrackDiffNone(TrackDiff):
    """Unchanged since tracking."""

    def breaks_tracking(self) -> bool:
        return False

    def to_display_string(self) -> str:
        return "tracked"


@dataclass(frozen=True, slots=True)
class TrackDiffNew(TrackDiff):
    """Not covered by the tracking statement."""

    def breaks_tracking(self) -> bool:
        return False

    def to_display_string(self) -> str:
        return "new"


@dataclass(frozen=True, slots=True)
class TrackDiffClash(TrackDiff):
    observed: str
    expected: str

    def breaks_tracking(self) -> bool:
        return True

    def to_display_string(self) -> str:
        return f'CHANGED from "{self.expected}"'


@dataclass(frozen=True, slots=True)
class TrackDiffDeleted(TrackDiff):
    def breaks_tracking(self) -> bool:
        return True

    def to_display_string(self) -> str:
        return "deleted"


@dataclass(frozen=True, slots=True)
class TrackDiffRemoteFail(TrackDiff):
    def breaks_tracking(self) -> bool:
        return True

    def to_display_string(self) -> str:
        return "remote failed"


@dataclass(frozen=True, slots=True)
class TrackDiffRemoteWorking(TrackDiff):
    def breaks_tracking(self) -> bool:
        return False

    def to_display_string(self) -> str:
        return "newly working"


@dataclass(frozen=True, slots=True)
class TrackDiffRemoteChanged(TrackDiff):
    observed: str
    expected: str

    def breaks_tracking(self) -> bool:
        return True

    def to_display_string(self) -> str:
        return f'changed from "{self.expected}"'
