from pathlib import Path

import pytest

from app import create_app
from serving.config import ServerConfig

FIXTURES = Path(__file__).parent / "fixtures"


@pytest.fixture
def fixtures_dir() -> Path:
    return FIXTURES


@pytest.fixture
def make_client():
    def _make(directory=FIXTURES, disable_cache=False):
        config = ServerConfig(directory=str(directory), disable_cache=disable_cache)
        return create_app(config).test_client()

    return _make
