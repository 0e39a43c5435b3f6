"""Filename extension heuristics used to tell files apart from folders."""

from __future__ import annotations

from types import MappingProxyType
from typing import Final

from drivelisting.domain.model import DEFAULT_MEDIA_TYPE

MEDIA_TYPES_BY_EXTENSION: Final = MappingProxyType(
    {
        # video
        "mp4": "video/mp4",
        "avi": "video/x-msvideo",
        "mov": "video/quicktime",
        "wmv": "video/x-ms-wmv",
        "flv": "video/x-flv",
        "webm": "video/webm",
        "mkv": "video/x-matroska",
        "m4v": "video/x-m4v",
        "3gp": "video/3gpp",
        # audio
        "mp3": "audio/mpeg",
        "wav": "audio/wav",
        "ogg": "audio/ogg",
        "flac": "audio/flac",
        "aac": "audio/aac",
        "m4a": "audio/mp4",
        "wma": "audio/x-ms-wma",
        # images
        "png": "image/png",
        "jpg": "image/jpeg",
        "jpeg": "image/jpeg",
        "gif": "image/gif",
        "bmp": "image/bmp",
        "svg": "image/svg+xml",
        "webp": "image/webp",
        "ico": "image/x-icon",
        "tiff": "image/tiff",
        "tif": "image/tiff",
        # documents
        "pdf": "application/pdf",
        "doc": "application/msword",
        "docx": "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
        "xls": "application/vnd.ms-excel",
        "xlsx": "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
        "ppt": "application/vnd.ms-powerpoint",
        "pptx": "application/vnd.openxmlformats-officedocument.presentationml.presentation",
        "txt": "text/plain",
        "rtf": "application/rtf",
        "csv": "text/csv",
        # archives
        "zip": "application/zip",
        "rar": "application/vnd.rar",
        "7z": "application/x-7z-compressed",
        "tar": "application/x-tar",
        "gz": "application/gzip",
        # code and markup
        "json": "application/json",
        "xml": "application/xml",
        "html": "text/html",
        "htm": "text/html",
        "css": "text/css",
        "js": "application/javascript",
        "ts": "application/typescript",
        "py": "text/x-python",
        "java": "text/x-java-source",
        "c": "text/x-c",
        "cpp": "text/x-c",
        "h": "text/x-c",
    }
)

# Extensions that mark a title as a file even when no media type is known for them.
FILE_EXTENSIONS: Final[frozenset[str]] = frozenset(MEDIA_TYPES_BY_EXTENSION) | frozenset(
    {
        "mpeg", "mpg", "raw", "odt", "ods", "odp", "bz2", "xz",
        "rb", "go", "rs", "php", "sql",
        "exe", "msi", "dmg", "iso", "apk", "ipa", "deb", "rpm",
        "epub", "mobi", "azw", "djvu",
        "psd", "ai", "sketch", "fig",
        "srt", "vtt", "ass",
        "torrent", "nfo",
    }
)  # fmt: skip


def _extension(name: str) -> str | None:
    _, dot, suffix = name.strip().lower().rpartition(".")
    if not dot or not suffix:
        return None
    return suffix


def has_file_extension(name: str) -> bool:
    extension = _extension(name)
    return extension is not None and extension in FILE_EXTENSIONS


def infer_media_type(name: str) -> str:
    extension = _extension(name)
    if extension is None:
        return DEFAULT_MEDIA_TYPE
    return MEDIA_TYPES_BY_EXTENSION.get(extension, DEFAULT_MEDIA_TYPE)
