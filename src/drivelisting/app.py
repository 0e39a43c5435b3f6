"""Application orchestration entry points."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from drivelisting.adapters.drive import PublicFolderResolver
from drivelisting.adapters.spreadsheet import export_entries_xlsx
from drivelisting.config import get_drive_config
from drivelisting.domain.identifiers import extract_file_id, extract_folder_id, is_file_link
from drivelisting.domain.model import DriveListing, ResolutionResult

if TYPE_CHECKING:
    from collections.abc import Sequence
    from pathlib import Path

    from drivelisting.config import DriveConfig
    from drivelisting.domain.model import Entry
    from drivelisting.domain.ports import DriveResolver

log = getLogger(__name__)


def list_drive_reference(
    reference: str,
    *,
    resolver: DriveResolver | None = None,
    config: DriveConfig | None = None,
) -> DriveListing:
    """Resolve a Drive folder URL, folder id or file link into a listing.

    File links take the single-item path and produce a one-entry listing.
    """

    active_resolver = resolver or PublicFolderResolver(config=config or get_drive_config())

    if is_file_link(reference):
        file_id = extract_file_id(reference)
        log.info("Resolving single file %s", file_id)
        entry = active_resolver.resolve_file(file_id)
        return DriveListing(source_id=file_id, result=ResolutionResult(entries=(entry,)))

    folder_id = extract_folder_id(reference)
    log.info("Resolving folder %s", folder_id)
    result = active_resolver.resolve_folder(folder_id)
    return DriveListing(source_id=folder_id, result=result)


def export_listing(entries: Sequence[Entry], output_path: Path) -> Path:
    """Export already resolved entries as an Excel workbook."""

    return export_entries_xlsx(entries, output_path)
