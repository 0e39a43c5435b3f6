"""Google Drive scraping configuration values."""

from __future__ import annotations

from dataclasses import dataclass, field

from .env import optional_env_int, optional_env_var
from .errors import ConfigurationError
from .http_resilience import RateLimit, ResilienceConfig

DRIVE_BASE_URL = "https://drive.google.com"
DRIVE_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
)
PAGE_TIMEOUT_SECONDS = 30.0
PROBE_TIMEOUT_SECONDS = 10.0
DEFAULT_MAX_CONCURRENT_PROBES = 4


def default_drive_resilience(
    *,
    user_agent: str = DRIVE_USER_AGENT,
    ratelimit: RateLimit | None = None,
) -> ResilienceConfig:
    return ResilienceConfig(
        name="drive",
        timeout_seconds=PAGE_TIMEOUT_SECONDS,
        ratelimit=ratelimit,
        default_headers={"User-Agent": user_agent},
    )


@dataclass(frozen=True, slots=True)
class DriveConfig:
    """Holds everything the public folder scraper needs to talk to Drive."""

    base_url: str = DRIVE_BASE_URL
    page_timeout_seconds: float = PAGE_TIMEOUT_SECONDS
    probe_timeout_seconds: float = PROBE_TIMEOUT_SECONDS
    max_concurrent_probes: int = DEFAULT_MAX_CONCURRENT_PROBES
    resilience: ResilienceConfig = field(default_factory=default_drive_resilience)

    def __post_init__(self) -> None:
        if self.max_concurrent_probes < 1:
            raise ConfigurationError("max_concurrent_probes must be at least 1")


def get_drive_config(*, max_concurrent_probes: int | None = None) -> DriveConfig:
    """Build a ``DriveConfig`` from optional environment overrides."""

    requests_per_second = optional_env_int("DRIVELISTING_REQUESTS_PER_SECOND", minimum=1)
    ratelimit = (
        RateLimit(max_calls=requests_per_second, per_seconds=1.0)
        if requests_per_second is not None
        else None
    )
    resilience = default_drive_resilience(
        user_agent=optional_env_var("DRIVELISTING_USER_AGENT") or DRIVE_USER_AGENT,
        ratelimit=ratelimit,
    )
    concurrency = (
        max_concurrent_probes
        if max_concurrent_probes is not None
        else optional_env_int("DRIVELISTING_MAX_CONCURRENT_PROBES", minimum=1)
    )
    return DriveConfig(
        base_url=(optional_env_var("DRIVELISTING_BASE_URL") or DRIVE_BASE_URL).rstrip("/"),
        max_concurrent_probes=(
            concurrency if concurrency is not None else DEFAULT_MAX_CONCURRENT_PROBES
        ),
        resilience=resilience,
    )
