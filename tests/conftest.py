"""Shared fixtures for localspy tests."""

import pytest
from helpers import make_config

from localspy.config import Settings
from localspy.reviewer.models import ReviewConfig, SourceFile


@pytest.fixture
def config() -> ReviewConfig:
    return make_config()


@pytest.fixture
def settings() -> Settings:
    return Settings(_env_file=None, max_workers=1)


@pytest.fixture
def source_file() -> SourceFile:
    return SourceFile(
        path="/project/src/app.py",
        content="import os\n\nprint(os.environ['SECRET'])\n",
        language="python",
        size=41,
    )


@pytest.fixture
def project(tmp_path):
    """Project with a.ts (200 bytes) and b.py (50 bytes)."""
    (tmp_path / "a.ts").write_text("x" * 200)
    (tmp_path / "b.py").write_text("y" * 50)
    return tmp_path
