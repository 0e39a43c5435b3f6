"""Ports for resolving Drive references."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from .model import Entry, ResolutionResult


@runtime_checkable
class DriveResolver(Protocol):
    """Port implemented by anything that can list a public folder or describe a file."""

    def resolve_folder(self, folder_id: str) -> ResolutionResult: ...

    def resolve_file(self, file_id: str) -> Entry: ...


__all__ = ["DriveResolver"]
