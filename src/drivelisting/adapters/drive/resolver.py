"""Resolve public Drive folder pages into typed listings.

Pipeline for one folder:

1. fetch the folder page (``DrivePageFetcher.fetch_page``);
2. build the folder-name index and locate the embedded data block;
3. harvest candidate ids from the block and from the tail after it;
4. container pass: probe every candidate as a folder and classify by title;
5. leaf pass: probe unresolved candidates as files;
6. aggregate in discovery order.

Probes of one pass run in a bounded pool; results are put back into discovery
order before classification results are merged.
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable, Sequence
from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

from drivelisting.adapters.http_resilience import ResilientClient
from drivelisting.config.drive import DriveConfig
from drivelisting.config.http_resilience import ResilienceConfig
from drivelisting.domain.errors import DriveListingError, ResolutionError
from drivelisting.domain.model import (
    FOLDER_MEDIA_TYPE,
    Candidate,
    CandidateSource,
    Entry,
    MediaKind,
    ResolutionResult,
)

from .markup import build_membership_index, extract_ids, locate_data_block, parse_title
from .media_types import has_file_extension, infer_media_type
from .pages import DrivePageFetcher
from .urls import file_download_url, file_view_url, folder_view_url

if TYPE_CHECKING:
    from collections.abc import Iterable

log = getLogger(__name__)

ClientFactory = Callable[[ResilienceConfig], ResilientClient]


def _default_client_factory(config: ResilienceConfig) -> ResilientClient:
    return ResilientClient(config)


@dataclass(slots=True)
class ContainerPassResult:
    containers: list[Entry] = field(default_factory=list)
    detected_files: list[Entry] = field(default_factory=list)
    invalid: list[Candidate] = field(default_factory=list)


@dataclass(frozen=True, slots=True)
class FolderPage:
    """The parsed parts of a folder page that drive verification."""

    candidates: tuple[Candidate, ...]
    folder_names: frozenset[str]


def parse_folder_page(markup: str) -> FolderPage | None:
    """Extract candidates and the folder-name index, or ``None`` if unparseable."""

    folder_names = build_membership_index(markup)
    block = locate_data_block(markup)
    if block is None:
        return None

    block_ids = extract_ids(block.text)
    tail_ids = extract_ids(markup[block.tail_start :])
    log.info("Data block: %d candidate ids, tail: %d candidate ids", len(block_ids), len(tail_ids))

    candidates: dict[str, Candidate] = {}
    for item_id in block_ids:
        candidates.setdefault(item_id, Candidate(id=item_id, source=CandidateSource.BLOCK))
    for item_id in tail_ids:
        candidates.setdefault(item_id, Candidate(id=item_id, source=CandidateSource.TAIL))
    return FolderPage(candidates=tuple(candidates.values()), folder_names=folder_names)


def leaf_entry(base_url: str, item_id: str, name: str) -> Entry:
    return Entry(
        id=item_id,
        name=name,
        media_kind=MediaKind.LEAF,
        media_type=infer_media_type(name),
        view_url=file_view_url(base_url, item_id),
        download_url=file_download_url(base_url, item_id),
    )


def container_entry(base_url: str, item_id: str, name: str) -> Entry:
    url = folder_view_url(base_url, item_id)
    # Folders have no download form; the view URL doubles as the fetch locator.
    return Entry(
        id=item_id,
        name=name,
        media_kind=MediaKind.CONTAINER,
        media_type=FOLDER_MEDIA_TYPE,
        view_url=url,
        download_url=url,
    )


def classify_container_title(
    base_url: str,
    item_id: str,
    title: str,
    folder_names: frozenset[str],
) -> Entry:
    """Classify a title that was served on the folder URL.

    A recognised file extension makes it a file unless the folder-name index
    lists the title, in which case the index wins.
    """

    if has_file_extension(title) and title not in folder_names:
        return leaf_entry(base_url, item_id, title)
    return container_entry(base_url, item_id, title)


def aggregate_entries(*groups: Iterable[Entry]) -> ResolutionResult:
    seen: set[str] = set()
    entries: list[Entry] = []
    for group in groups:
        for entry in group:
            if entry.id in seen:
                continue
            seen.add(entry.id)
            entries.append(entry)
    return ResolutionResult(entries=tuple(entries), parsed=True)


async def bounded_gather[T, R](
    items: Sequence[T],
    func: Callable[[T], Awaitable[R]],
    *,
    limit: int,
) -> list[R]:
    """Run ``func`` over ``items`` with at most ``limit`` in flight, keeping input order."""

    semaphore = asyncio.Semaphore(limit)

    async def run(item: T) -> R:
        async with semaphore:
            return await func(item)

    async with asyncio.TaskGroup() as group:
        tasks = [group.create_task(run(item)) for item in items]
    return [task.result() for task in tasks]


class CandidateVerifier:
    """Confirms candidates against live Drive pages for one folder resolution."""

    def __init__(
        self,
        pages: DrivePageFetcher,
        *,
        base_url: str,
        folder_names: frozenset[str],
        max_concurrent_probes: int,
    ) -> None:
        self._pages = pages
        self._base_url = base_url
        self._folder_names = folder_names
        self._limit = max_concurrent_probes

    async def container_pass(self, candidates: Sequence[Candidate]) -> ContainerPassResult:
        log.info("Verifying %d candidate ids as potential folders", len(candidates))
        outcomes = await bounded_gather(candidates, self._probe_container, limit=self._limit)

        result = ContainerPassResult()
        for candidate, entry in zip(candidates, outcomes, strict=True):
            if entry is None:
                result.invalid.append(candidate)
            elif entry.is_container:
                result.containers.append(entry)
            else:
                result.detected_files.append(entry)

        log.info(
            "Folder verification complete: %d folders, %d detected files, %d invalid",
            len(result.containers),
            len(result.detected_files),
            len(result.invalid),
        )
        return result

    async def leaf_pass(self, candidates: Sequence[Candidate]) -> list[Entry]:
        log.info("Verifying %d candidate ids as potential files", len(candidates))
        outcomes = await bounded_gather(candidates, self._probe_leaf, limit=self._limit)
        files = [entry for entry in outcomes if entry is not None]
        log.info("File verification complete: %d valid files", len(files))
        return files

    async def _probe_container(self, candidate: Candidate) -> Entry | None:
        markup = await self._pages.probe(folder_view_url(self._base_url, candidate.id))
        if markup is None:
            log.info("Folder probe for %s unresolved", candidate.id)
            return None
        title = parse_title(markup)
        if title is None:
            log.info("Folder probe for %s: could not parse title", candidate.id)
            return None

        entry = classify_container_title(self._base_url, candidate.id, title, self._folder_names)
        if entry.is_container:
            log.info("Folder verified: %r (%s)", title, candidate.id)
        else:
            log.info("Detected as file by extension: %r (%s)", title, candidate.id)
        return entry

    async def _probe_leaf(self, candidate: Candidate) -> Entry | None:
        markup = await self._pages.probe(file_view_url(self._base_url, candidate.id))
        if markup is None:
            log.info("File probe for %s unresolved", candidate.id)
            return None
        title = parse_title(markup)
        if title is None:
            log.info("File probe for %s: could not parse title", candidate.id)
            return None
        if title in self._folder_names:
            log.info("Skipping %r (%s): listed as a folder name", title, candidate.id)
            return None

        log.info("File verified: %r (%s)", title, candidate.id)
        return leaf_entry(self._base_url, candidate.id, title)


def leaf_pass_candidates(
    candidates: Sequence[Candidate],
    container_result: ContainerPassResult,
) -> list[Candidate]:
    """Invalid container-pass candidates plus any tail candidate left unclassified."""

    classified = {
        entry.id for entry in (*container_result.containers, *container_result.detected_files)
    }
    pending: dict[str, Candidate] = {c.id: c for c in container_result.invalid}
    for candidate in candidates:
        if candidate.source is CandidateSource.TAIL and candidate.id not in classified:
            pending.setdefault(candidate.id, candidate)
    return list(pending.values())


class PublicFolderResolver:
    """Resolves public Drive folders and single files without the Drive API."""

    def __init__(
        self,
        *,
        config: DriveConfig | None = None,
        client_factory: ClientFactory | None = None,
    ) -> None:
        self._config = config or DriveConfig()
        self._client_factory = client_factory or _default_client_factory

    @property
    def config(self) -> DriveConfig:
        return self._config

    def resolve_folder(self, folder_id: str) -> ResolutionResult:
        return asyncio.run(self.resolve_folder_async(folder_id))

    def resolve_file(self, file_id: str) -> Entry:
        return asyncio.run(self.resolve_file_async(file_id))

    async def resolve_folder_async(self, folder_id: str) -> ResolutionResult:
        base_url = self._config.base_url
        async with self._client_factory(self._config.resilience) as client:
            pages = DrivePageFetcher(client, self._config)
            markup = await pages.fetch_page(folder_view_url(base_url, folder_id), label="folder")
            try:
                result = await self._resolve_markup(pages, markup)
            except DriveListingError:
                raise
            except Exception as exc:
                msg = f"Unexpected error while scraping folder {folder_id}"
                raise ResolutionError(msg) from exc

        log.info(
            "Resolved folder %s: %d entries (parsed=%s, empty=%s)",
            folder_id,
            len(result.entries),
            result.parsed,
            result.is_empty,
        )
        return result

    async def resolve_file_async(self, file_id: str) -> Entry:
        base_url = self._config.base_url
        async with self._client_factory(self._config.resilience) as client:
            pages = DrivePageFetcher(client, self._config)
            markup = await pages.fetch_page(file_view_url(base_url, file_id), label="file")
        title = parse_title(markup)
        if title is None:
            log.info("Could not parse a title for file %s; using its id as name", file_id)
        return leaf_entry(base_url, file_id, title or file_id)

    async def _resolve_markup(self, pages: DrivePageFetcher, markup: str) -> ResolutionResult:
        page = parse_folder_page(markup)
        if page is None:
            log.warning("Could not find the folder data block; the page layout may have changed")
            return ResolutionResult.unparseable()

        verifier = CandidateVerifier(
            pages,
            base_url=self._config.base_url,
            folder_names=page.folder_names,
            max_concurrent_probes=self._config.max_concurrent_probes,
        )
        first = await verifier.container_pass(page.candidates)
        files = await verifier.leaf_pass(leaf_pass_candidates(page.candidates, first))
        return aggregate_entries(first.containers, first.detected_files, files)
