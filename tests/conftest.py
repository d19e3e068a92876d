import os

import pytest

from tests.fixtures.bot_fixtures import make_config

# Concise log rendering.
os.environ.pop("DEBUG", None)


@pytest.fixture
def config():
    """Bot configuration with throttling and backoff disabled."""
    return make_config()


@pytest.fixture
def credentials_file(tmp_path):
    """Write a credentials file and return its path."""

    def _write(content: str) -> str:
        path = tmp_path / "oauth.json"
        path.write_text(content, encoding="utf-8")
        return str(path)

    return _write
