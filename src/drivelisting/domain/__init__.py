"""Domain model, errors and identifier handling."""

from __future__ import annotations

from .errors import (
    AccessForbiddenError,
    DriveListingError,
    FolderNotFoundError,
    InvalidReferenceError,
    ResolutionError,
)
from .identifiers import extract_file_id, extract_folder_id, is_file_link
from .model import (
    DEFAULT_MEDIA_TYPE,
    FOLDER_MEDIA_TYPE,
    Candidate,
    CandidateSource,
    DriveListing,
    Entry,
    MediaKind,
    ResolutionResult,
)

__all__ = [
    "DEFAULT_MEDIA_TYPE",
    "FOLDER_MEDIA_TYPE",
    "AccessForbiddenError",
    "Candidate",
    "CandidateSource",
    "DriveListing",
    "DriveListingError",
    "Entry",
    "FolderNotFoundError",
    "InvalidReferenceError",
    "MediaKind",
    "ResolutionError",
    "ResolutionResult",
    "extract_file_id",
    "extract_folder_id",
    "is_file_link",
]
