from __future__ import annotations

import pytest

from drivelisting.adapters.drive import PublicFolderResolver
from drivelisting.config.drive import DriveConfig
from tests.support.drive import BASE_URL, FakeDrive


@pytest.fixture(autouse=True)
def _clean_drivelisting_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in (
        "DRIVELISTING_BASE_URL",
        "DRIVELISTING_USER_AGENT",
        "DRIVELISTING_MAX_CONCURRENT_PROBES",
        "DRIVELISTING_REQUESTS_PER_SECOND",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def drive_config() -> DriveConfig:
    return DriveConfig(base_url=BASE_URL, max_concurrent_probes=1)


@pytest.fixture
def fake_drive() -> FakeDrive:
    return FakeDrive()


@pytest.fixture
def resolver(drive_config: DriveConfig, fake_drive: FakeDrive) -> PublicFolderResolver:
    return PublicFolderResolver(config=drive_config, client_factory=fake_drive.client_factory())
