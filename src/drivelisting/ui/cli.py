# ruff: noqa: T201

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from signal import SIGINT, signal
from typing import TYPE_CHECKING, Final

from dotenv import load_dotenv
from pydantic import ValidationError

from drivelisting.app import export_listing, list_drive_reference
from drivelisting.config import ConfigurationError, configure_logging, get_drive_config
from drivelisting.domain.errors import (
    AccessForbiddenError,
    FolderNotFoundError,
    InvalidReferenceError,
)
from drivelisting.domain.identifiers import is_file_link

from .schema import ErrorCode, ErrorPayload, ListingPayload

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

    from pydantic import BaseModel

log = logging.getLogger(__name__)

EXIT_INTERNAL_ERROR: Final[int] = 1
EXIT_INVALID_INPUT: Final[int] = 2
EXIT_NOT_FOUND: Final[int] = 3
EXIT_FORBIDDEN: Final[int] = 4

NOT_FOUND_MESSAGES: Final[dict[str, str]] = {
    "folder": "Folder not found or no longer available.",
    "file": "File not found or no longer available.",
}
FORBIDDEN_MESSAGES: Final[dict[str, str]] = {
    "folder": "This folder is not publicly accessible. Please set it to "
    "'Anyone with the link can view' and try again.",
    "file": "This file is not publicly accessible. Please ensure its parent folder is "
    "shared as 'Anyone with the link can view' and try again.",
}


class CommandError(Exception):
    """Carries an error document and exit code up to ``main``."""

    def __init__(self, code: ErrorCode, message: str, *, exit_code: int) -> None:
        super().__init__(message)
        self.payload = ErrorPayload.build(code, message)
        self.exit_code = exit_code


def _positive_int(value: str) -> int:
    try:
        parsed = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid integer: {value!r}") from exc
    if parsed < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1, got {parsed}")
    return parsed


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="List public Google Drive folders")
    subparsers = parser.add_subparsers(dest="command", required=True)

    folder = subparsers.add_parser("folder", help="Resolve a public folder (or file) link")
    folder.add_argument("reference", help="Drive folder URL, folder id or file link")
    folder.add_argument(
        "--max-concurrent-probes",
        type=_positive_int,
        default=None,
        help="Number of verification requests in flight at once (defaults to config)",
    )
    folder.add_argument(
        "--export",
        type=Path,
        help="Also write the listing to this .xlsx file",
    )

    export = subparsers.add_parser("export", help="Export a saved JSON listing to Excel")
    export.add_argument("listing", type=Path, help="JSON listing written by 'folder'")
    export.add_argument("output", type=Path, help="Destination .xlsx file")

    return parser.parse_args(list(argv))


def _emit(payload: BaseModel) -> None:
    print(payload.model_dump_json(by_alias=True, exclude_none=True, indent=2))


def _run_folder(args: argparse.Namespace) -> ListingPayload:
    config = get_drive_config(max_concurrent_probes=args.max_concurrent_probes)
    kind = "file" if is_file_link(args.reference) else "folder"
    try:
        listing = list_drive_reference(args.reference, config=config)
    except InvalidReferenceError as exc:
        raise CommandError("INVALID_FOLDER_URL", str(exc), exit_code=EXIT_INVALID_INPUT) from exc
    except FolderNotFoundError as exc:
        raise CommandError(
            "FOLDER_NOT_FOUND", NOT_FOUND_MESSAGES[kind], exit_code=EXIT_NOT_FOUND
        ) from exc
    except AccessForbiddenError as exc:
        raise CommandError(
            "FOLDER_ACCESS_FORBIDDEN", FORBIDDEN_MESSAGES[kind], exit_code=EXIT_FORBIDDEN
        ) from exc

    log.info(
        "Listing for %s: files=%d, empty=%s, parsed=%s",
        listing.source_id,
        len(listing.result.entries),
        listing.result.is_empty,
        listing.result.parsed,
    )
    if args.export is not None:
        if listing.result.entries:
            export_listing(listing.result.entries, args.export)
        else:
            log.warning(
                "Listing for %s has no files; not writing %s", listing.source_id, args.export
            )
    return ListingPayload.from_listing(listing)


def _run_export(args: argparse.Namespace) -> None:
    try:
        payload = ListingPayload.model_validate_json(args.listing.read_text(encoding="utf-8"))
    except (OSError, ValidationError) as exc:
        raise CommandError(
            "INVALID_EXPORT_REQUEST",
            f"Could not read listing {args.listing}: {exc}",
            exit_code=EXIT_INVALID_INPUT,
        ) from exc
    if not payload.files:
        raise CommandError(
            "INVALID_EXPORT_REQUEST",
            "The listing must include a 'files' array with at least one file.",
            exit_code=EXIT_INVALID_INPUT,
        )
    export_listing([item.to_entry() for item in payload.files], args.output)


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    configure_logging()
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    parsed_args = _parse_args(args_list)

    try:
        if parsed_args.command == "folder":
            _emit(_run_folder(parsed_args))
        elif parsed_args.command == "export":
            _run_export(parsed_args)
        else:
            raise ValueError(f"Unsupported command: {parsed_args.command}")  # noqa: TRY301
    except CommandError as exc:
        log.error("%s", exc)  # noqa: TRY400
        _emit(exc.payload)
        sys.exit(exc.exit_code)
    except ConfigurationError as exc:
        log.error("Configuration error: %s", exc)  # noqa: TRY400
        _emit(ErrorPayload.build("INTERNAL_ERROR", str(exc)))
        sys.exit(EXIT_INTERNAL_ERROR)
    except Exception:
        log.exception("Fatal error while listing")
        _emit(ErrorPayload.build("INTERNAL_ERROR", "Unexpected error while scraping the folder."))
        sys.exit(EXIT_INTERNAL_ERROR)


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    log.info("Closed by user (Ctrl+C)")
    sys.exit(0)


def run() -> None:
    load_dotenv()
    signal(SIGINT, sigint_handler)
    main()


if __name__ == "__main__":
    run()
