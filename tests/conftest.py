# tests/conftest.py
"""Shared fixtures for vidcatalog tests."""

import pytest

from vidcatalog.config import settings
from vidcatalog.models import Video
from vidcatalog.service import CatalogService
from vidcatalog.storage.files import VideoFileManager
from vidcatalog.storage.memory import InMemoryVideoRepository
from vidcatalog.storage.sqlite import SQLiteVideoRepository


@pytest.fixture(autouse=True)
def isolated_data_dir(tmp_path, monkeypatch):
    """Keep every test away from ~/.vidcatalog."""
    data_dir = tmp_path / "vidcatalog-data"
    monkeypatch.setattr(settings, "data_dir", data_dir)
    return data_dir


@pytest.fixture
def video_a():
    return Video(name="A", url="http://x/a", duration=10)


@pytest.fixture
def video_b():
    return Video(name="B", url="http://x/b", duration=20)


@pytest.fixture
def memory_repo():
    """Fresh InMemoryVideoRepository."""
    return InMemoryVideoRepository()


@pytest.fixture
def sqlite_repo():
    """SQLiteVideoRepository backed by in-memory database."""
    return SQLiteVideoRepository(":memory:")


@pytest.fixture(params=["memory", "sqlite"])
def repo(request):
    """Each repository variant in turn."""
    if request.param == "memory":
        return InMemoryVideoRepository()
    return SQLiteVideoRepository(":memory:")


@pytest.fixture
def file_manager(tmp_path):
    return VideoFileManager(tmp_path / "videos")


@pytest.fixture
def service(repo, file_manager):
    """CatalogService over each repository variant."""
    return CatalogService(repository=repo, file_manager=file_manager)
