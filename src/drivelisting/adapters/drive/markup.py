"""Heuristic parsing of the HTML served for public Drive pages.

Drive renders folder contents into minified script blobs instead of offering a
listing endpoint. Everything in this module is pure string processing over that
markup, so it can be exercised without any network access.
"""

from __future__ import annotations

import html
import re
from dataclasses import dataclass
from logging import getLogger
from typing import Final

log = getLogger(__name__)

BLOCK_START_MARKER: Final[str] = "// Google Inc."
BLOCK_END_MARKER: Final[str] = "</script></div>"
MIN_ITEM_ID_LENGTH: Final[int] = 20

_DATA_ID = re.compile(r'data-id="([^"]+)"')
_ITEM_ID = re.compile(r"[A-Za-z0-9_-]+")
_DRIVE_IVD = re.compile(r"""window\['_DRIVE_ivd'\]\s*=\s*['"]([^'"]+)['"]""", re.DOTALL)
_FOLDER_NAME = re.compile(
    r"\\x22([^\\]+?)\\x22,\\x22application\\/vnd\.google-apps\.folder\\x22"
)
_OG_TITLE = re.compile(r'<meta\s+property="og:title"\s+content="([^"]+)"', re.IGNORECASE)
_HTML_TITLE = re.compile(r"<title[^>]*>([^<]+)</title>", re.IGNORECASE)
_BRAND_SUFFIX = re.compile(r"\s*-\s*Google Drive\s*$", re.IGNORECASE)


@dataclass(frozen=True, slots=True)
class DataBlock:
    """The embedded data blob of a folder page and where the tail region starts."""

    text: str
    start: int
    end: int

    @property
    def tail_start(self) -> int:
        return self.end


def locate_data_block(markup: str) -> DataBlock | None:
    """Return the largest ``// Google Inc.`` ... ``</script></div>`` span.

    Every start marker is paired with the nearest following end marker. Decoy
    script blocks are short, so the longest pair is taken (the earliest one on
    ties). ``None`` means the page carries no marker pair at all.
    """

    best: DataBlock | None = None
    starts = 0
    search_from = 0
    while (start := markup.find(BLOCK_START_MARKER, search_from)) != -1:
        starts += 1
        search_from = start + len(BLOCK_START_MARKER)
        end_idx = markup.find(BLOCK_END_MARKER, start)
        if end_idx == -1:
            continue
        end = end_idx + len(BLOCK_END_MARKER)
        if best is None or end - start > best.end - best.start:
            best = DataBlock(text=markup[start:end], start=start, end=end)

    if best is None:
        log.debug("No data block found (%d start markers)", starts)
        return None
    log.debug(
        "Selected data block of %d chars (%d..%d) among %d start markers",
        best.end - best.start,
        best.start,
        best.end,
        starts,
    )
    return best


def extract_ids(fragment: str) -> list[str]:
    """Return the distinct ``data-id`` values that look like Drive item ids.

    Values shorter than 20 characters or using characters outside
    ``[A-Za-z0-9_-]`` are structural noise and are skipped. Order of first
    appearance is preserved.
    """

    ids: dict[str, None] = {}
    for match in _DATA_ID.finditer(fragment):
        value = match.group(1)
        if len(value) >= MIN_ITEM_ID_LENGTH and _ITEM_ID.fullmatch(value):
            ids.setdefault(value, None)
    return list(ids)


def build_membership_index(markup: str) -> frozenset[str]:
    """Collect the names Drive tags as folders inside ``window['_DRIVE_ivd']``.

    The blob is an escaped JS string in which each folder record contains
    ``\\x22<name>\\x22,\\x22application\\/vnd.google-apps.folder\\x22``. A name
    field may carry a trailing ``, <internal id>`` which is cut off.
    """

    assignment = _DRIVE_IVD.search(markup)
    if assignment is None:
        log.info("No _DRIVE_ivd assignment found; folder name index is empty")
        return frozenset()

    names: set[str] = set()
    for match in _FOLDER_NAME.finditer(assignment.group(1)):
        name = match.group(1).strip()
        head, comma, _ = name.partition(",")
        if comma and head.strip():
            name = head.strip()
        if name:
            names.add(name)

    log.debug("Folder name index holds %d names: %s", len(names), sorted(names))
    return frozenset(names)


def _clean_title(raw: str) -> str | None:
    title = _BRAND_SUFFIX.sub("", html.unescape(raw).strip())
    return title or None


def parse_title(markup: str) -> str | None:
    """Return the item title from ``og:title``, falling back to ``<title>``."""

    for pattern in (_OG_TITLE, _HTML_TITLE):
        match = pattern.search(markup)
        if match is None:
            continue
        title = _clean_title(match.group(1))
        if title:
            return title
    return None
