"""Configuration types for the shared async HTTP client.

Requests are single attempts: callers decide how to treat a failed request,
so there is no retry policy here, and nothing is cached between runs.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Mapping


@dataclass(slots=True, frozen=True)
class RateLimit:
    max_calls: int
    per_seconds: float


@dataclass(slots=True, frozen=True)
class ResilienceConfig:
    name: str
    base_url: str | None = None
    timeout_seconds: float = 30.0
    ratelimit: RateLimit | None = None
    default_headers: Mapping[str, str] | None = None
    follow_redirects: bool = True
