"""Fetching of public Drive pages with status-to-error mapping."""

from __future__ import annotations

import asyncio
from logging import getLogger
from typing import TYPE_CHECKING

import httpx

from drivelisting.domain.errors import AccessForbiddenError, FolderNotFoundError

if TYPE_CHECKING:
    from drivelisting.adapters.http_resilience import ResilientClient
    from drivelisting.config.drive import DriveConfig

log = getLogger(__name__)


class DrivePageFetcher:
    """Issues single-attempt GETs against Drive and inspects statuses itself."""

    def __init__(self, client: ResilientClient, config: DriveConfig) -> None:
        self._client = client
        self._config = config

    async def fetch_page(self, url: str, *, label: str) -> str:
        """Return the markup of a primary page or raise a domain error.

        404 maps to ``FolderNotFoundError``, every other status >= 400 to
        ``AccessForbiddenError``. A transport failure or running past the page
        timeout means the resource could not be reached and is reported as not
        found.
        """

        timeout = self._config.page_timeout_seconds
        log.info("Fetching %s page: %s", label, url)
        try:
            async with asyncio.timeout(timeout):
                response = await self._client.get(url, timeout=timeout)
        except TimeoutError as exc:
            log.warning("Fetching %s %s took longer than %ss", label, url, timeout)
            raise FolderNotFoundError(f"Timed out fetching {label} {url}") from exc
        except httpx.HTTPError as exc:
            log.warning("Network error fetching %s %s: %s", label, url, exc)
            raise FolderNotFoundError(f"Could not fetch {label} {url}") from exc

        status = response.status_code
        if status == httpx.codes.NOT_FOUND:
            raise FolderNotFoundError(f"{label.capitalize()} {url} not found (404)")
        if status == httpx.codes.FORBIDDEN:
            raise AccessForbiddenError(f"{label.capitalize()} {url} access forbidden (403)")
        if status >= httpx.codes.BAD_REQUEST:
            raise AccessForbiddenError(f"{label.capitalize()} {url} returned HTTP {status}")

        markup = response.text
        log.info("Received %s HTML: %d chars", label, len(markup))
        return markup

    async def probe(self, url: str) -> str | None:
        """Return the markup of a verification page, or ``None`` if it is unusable.

        The probe timeout bounds the whole call, rate-limit wait included.
        """

        timeout = self._config.probe_timeout_seconds
        try:
            async with asyncio.timeout(timeout):
                response = await self._client.get(url, timeout=timeout)
        except TimeoutError:
            log.debug("Probe %s exceeded %ss", url, timeout)
            return None
        except httpx.HTTPError as exc:
            log.debug("Probe %s failed: %s", url, exc)
            return None
        if not response.is_success:
            log.debug("Probe %s returned HTTP %d", url, response.status_code)
            return None
        return response.text
