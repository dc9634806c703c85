from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from contribution_api.main import create_app
from contribution_api.settings import Settings


FIXTURES_DIR = Path(__file__).parent / "fixtures"


@pytest.fixture
def contributions_markup() -> str:
    """Captured-style GitHub contribution calendar markup."""

    return (FIXTURES_DIR / "contributions.html").read_text(encoding="utf-8")


@pytest.fixture
def settings() -> Settings:
    return Settings(
        _env_file=None,
        default_username="CodingWithKantecki",
        rate_limit_per_minute=1000,
        sentry_dsn=None,
    )


@pytest.fixture
def client(settings: Settings) -> TestClient:
    with TestClient(create_app(settings)) as test_client:
        yield test_client
