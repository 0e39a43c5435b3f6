"""Pydantic models for the JSON documents the command line reads and writes."""

from __future__ import annotations

from typing import Final, Literal

from pydantic import BaseModel, ConfigDict, Field

from drivelisting.domain.model import FOLDER_MEDIA_TYPE, DriveListing, Entry, MediaKind

ErrorCode = Literal[
    "INVALID_FOLDER_URL",
    "INVALID_EXPORT_REQUEST",
    "FOLDER_NOT_FOUND",
    "FOLDER_ACCESS_FORBIDDEN",
    "INTERNAL_ERROR",
]

EMPTY_FOLDER_MESSAGE: Final[str] = (
    "Folder appears to be empty. Make sure it contains files and that "
    "'Anyone with the link' has at least view permission."
)
UNPARSEABLE_FOLDER_MESSAGE: Final[str] = (
    "The folder HTML was loaded but no files could be parsed. Please ensure the folder is "
    "shared as 'Anyone with the link can view/edit' and try again. Google Drive HTML "
    "structure may have changed."
)


class ListingBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class FilePayload(ListingBaseModel):
    id: str
    name: str
    mime_type: str = Field(alias="mimeType")
    view_url: str = Field(alias="viewUrl")
    download_url: str = Field(default="", alias="downloadUrl")

    @classmethod
    def from_entry(cls, entry: Entry) -> FilePayload:
        return cls(
            id=entry.id,
            name=entry.name,
            mime_type=entry.media_type,
            view_url=entry.view_url,
            download_url=entry.download_url,
        )

    def to_entry(self) -> Entry:
        kind = MediaKind.CONTAINER if self.mime_type == FOLDER_MEDIA_TYPE else MediaKind.LEAF
        return Entry(
            id=self.id,
            name=self.name,
            media_kind=kind,
            media_type=self.mime_type,
            view_url=self.view_url,
            download_url=self.download_url,
        )


class ListingPayload(ListingBaseModel):
    folder_id: str | None = Field(default=None, alias="folderId")
    source: Literal["public"] = "public"
    files: list[FilePayload]
    message: str | None = None

    @classmethod
    def from_listing(cls, listing: DriveListing) -> ListingPayload:
        result = listing.result
        message: str | None = None
        if not result.entries:
            message = EMPTY_FOLDER_MESSAGE if result.is_empty else UNPARSEABLE_FOLDER_MESSAGE
        return cls(
            folder_id=listing.source_id,
            files=[FilePayload.from_entry(entry) for entry in result.entries],
            message=message,
        )


class ErrorDetail(ListingBaseModel):
    code: ErrorCode
    message: str


class ErrorPayload(ListingBaseModel):
    error: ErrorDetail

    @classmethod
    def build(cls, code: ErrorCode, message: str) -> ErrorPayload:
        return cls(error=ErrorDetail(code=code, message=message))
