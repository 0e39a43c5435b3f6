"""Public Google Drive folder scraping adapter."""

from __future__ import annotations

from .markup import build_membership_index, extract_ids, locate_data_block, parse_title
from .media_types import has_file_extension, infer_media_type
from .pages import DrivePageFetcher
from .resolver import PublicFolderResolver, parse_folder_page

__all__ = [
    "DrivePageFetcher",
    "PublicFolderResolver",
    "build_membership_index",
    "extract_ids",
    "has_file_extension",
    "infer_media_type",
    "locate_data_block",
    "parse_folder_page",
    "parse_title",
]
