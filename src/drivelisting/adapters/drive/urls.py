"""URL shapes of the public Drive pages the scraper depends on."""

from __future__ import annotations

from urllib.parse import quote


def folder_view_url(base_url: str, item_id: str) -> str:
    return f"{base_url}/drive/folders/{quote(item_id, safe='')}"


def file_view_url(base_url: str, item_id: str) -> str:
    return f"{base_url}/file/d/{quote(item_id, safe='')}/view"


def file_download_url(base_url: str, item_id: str) -> str:
    return f"{base_url}/uc?export=download&id={quote(item_id, safe='')}"
