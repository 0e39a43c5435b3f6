"""Normalise user supplied Drive links and bare identifiers."""

from __future__ import annotations

import re
from typing import Final
from urllib.parse import parse_qs, urlsplit

from .errors import InvalidReferenceError

ALLOWED_HOSTS: Final[frozenset[str]] = frozenset({"drive.google.com", "docs.google.com"})
MIN_FOLDER_ID_LENGTH: Final[int] = 10

_BARE_ID = re.compile(r"^[A-Za-z0-9_-]{10,}$")
_FILE_PATH = re.compile(r"/file/d/([A-Za-z0-9_-]+)")
_FILE_LINK = re.compile(r"/file/d/([A-Za-z0-9_-]{5,})/")
# Most specific first.
_FOLDER_PATTERNS: Final[tuple[re.Pattern[str], ...]] = (
    re.compile(r"/u/\d+/folders/([A-Za-z0-9_-]+)"),
    re.compile(r"/folders/([A-Za-z0-9_-]+)"),
    re.compile(r"folderview\?id=([A-Za-z0-9_-]+)"),
    re.compile(r"open\?id=([A-Za-z0-9_-]+)"),
    re.compile(r"[?&]id=([A-Za-z0-9_-]+)"),
)

SUPPORTED_FORMATS_HELP: Final[str] = (
    "Could not extract folder ID from the provided URL. Supported formats:\n"
    "- https://drive.google.com/drive/folders/FOLDER_ID\n"
    "- https://drive.google.com/drive/u/1/folders/FOLDER_ID\n"
    "- https://drive.google.com/folderview?id=FOLDER_ID\n"
    "- https://drive.google.com/open?id=FOLDER_ID\n"
    "- Or just the folder ID"
)


def _clean(reference: str) -> str:
    if not isinstance(reference, str) or not reference.strip():
        raise InvalidReferenceError("Folder URL must be a non-empty string.")
    return reference.strip()


def _is_bare_id(value: str) -> bool:
    return "://" not in value and _BARE_ID.match(value) is not None


def _split_drive_url(value: str) -> tuple[str, str]:
    """Return ``(path, query)`` of an allow-listed Drive URL."""

    parts = urlsplit(value)
    if not parts.scheme or not parts.netloc:
        raise InvalidReferenceError("Folder URL is not a valid URL.")
    hostname = (parts.hostname or "").lower()
    if hostname not in ALLOWED_HOSTS:
        raise InvalidReferenceError("URL must be a Google Drive folder URL (drive.google.com).")
    return parts.path, parts.query


def is_file_link(reference: str) -> bool:
    """True for ``https://drive.google.com/file/d/<id>/...`` style links."""

    try:
        path, _ = _split_drive_url(_clean(reference))
    except InvalidReferenceError:
        return False
    return _FILE_LINK.search(path) is not None


def extract_file_id(reference: str) -> str:
    path, _ = _split_drive_url(_clean(reference))
    match = _FILE_LINK.search(path)
    if match is None:
        raise InvalidReferenceError(
            "The provided URL is not a recognized Google Drive file link."
        )
    return match.group(1)


def extract_folder_id(reference: str) -> str:
    """Return the folder identifier referenced by a Drive URL or a bare id.

    File links are rejected because a folder is expected; the caller should
    route them to the single-file resolution path instead.
    """

    value = _clean(reference)
    if _is_bare_id(value):
        return value

    path, query = _split_drive_url(value)
    if _FILE_PATH.search(path):
        raise InvalidReferenceError(
            "The provided URL is a file link, not a folder link. Open the file's parent "
            "folder in Google Drive and paste that folder URL instead."
        )

    target = f"{path}?{query}" if query else path
    for pattern in _FOLDER_PATTERNS:
        match = pattern.search(target)
        if match and len(match.group(1)) >= MIN_FOLDER_ID_LENGTH:
            return match.group(1)

    for candidate in parse_qs(query).get("id", []):
        if _BARE_ID.match(candidate):
            return candidate

    raise InvalidReferenceError(SUPPORTED_FORMATS_HELP)
