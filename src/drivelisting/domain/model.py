"""Domain types for resolved Drive folder listings (pure, dependency-light)."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import Final

FOLDER_MEDIA_TYPE: Final[str] = "application/vnd.google-apps.folder"
DEFAULT_MEDIA_TYPE: Final[str] = "application/octet-stream"


class MediaKind(StrEnum):
    CONTAINER = "container"
    LEAF = "leaf"


class CandidateSource(StrEnum):
    """Where in the folder page a candidate identifier was harvested."""

    BLOCK = "block"
    TAIL = "tail"


@dataclass(frozen=True, slots=True)
class Candidate:
    id: str
    source: CandidateSource


@dataclass(frozen=True, slots=True)
class Entry:
    """A confirmed child of a folder: either a sub-folder or a file."""

    id: str
    name: str
    media_kind: MediaKind
    media_type: str
    view_url: str
    download_url: str

    @property
    def is_container(self) -> bool:
        return self.media_kind is MediaKind.CONTAINER


@dataclass(frozen=True, slots=True)
class ResolutionResult:
    """Outcome of resolving one folder page.

    ``parsed`` is False when the page could not be structurally parsed at all;
    such a result carries no entries and is *not* considered empty.
    """

    entries: tuple[Entry, ...] = ()
    parsed: bool = True

    @property
    def is_empty(self) -> bool:
        return self.parsed and not self.entries

    @classmethod
    def unparseable(cls) -> ResolutionResult:
        return cls(entries=(), parsed=False)


@dataclass(frozen=True, slots=True)
class DriveListing:
    """A resolved Drive reference: a folder listing or a single-file listing."""

    source_id: str
    result: ResolutionResult = field(default_factory=ResolutionResult)
