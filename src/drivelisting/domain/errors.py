"""Errors raised while resolving public Drive references."""

from __future__ import annotations


class DriveListingError(RuntimeError):
    """Base class for all domain errors of this package."""


class FolderNotFoundError(DriveListingError):
    """The resource does not exist or could not be reached."""

    def __init__(self, message: str = "Folder not found") -> None:
        super().__init__(message)


class AccessForbiddenError(DriveListingError):
    """The resource exists but is not publicly accessible."""

    def __init__(self, message: str = "Access forbidden") -> None:
        super().__init__(message)


class ResolutionError(DriveListingError):
    """Internal failure while parsing a page that was fetched successfully."""


class InvalidReferenceError(DriveListingError, ValueError):
    """The user supplied reference is not a usable Drive folder or file link."""
