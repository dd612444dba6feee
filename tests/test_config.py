# tests/test_config.py
"""Tests for vidcatalog configuration."""

import json
from pathlib import Path
from unittest.mock import patch

from vidcatalog.config import Settings
from vidcatalog.models import Role


class TestSettings:
    def test_default_settings(self):
        s = Settings()
        assert s.host == "127.0.0.1"
        assert s.port == 8080
        assert s.storage == "sqlite"
        assert s.derive_data_url is True
        assert s.data_dir == Path.home() / ".vidcatalog"

    def test_db_path_derived(self):
        s = Settings()
        assert s.db_path == s.data_dir / "vidcatalog.db"

    def test_videos_dir_derived(self):
        s = Settings()
        assert s.videos_dir == s.data_dir / "videos"

    def test_ensure_dirs_creates(self, tmp_path):
        s = Settings(data_dir=tmp_path / "testdata")
        s.ensure_dirs()
        assert s.data_dir.exists()
        assert s.videos_dir.exists()

    def test_default_users(self):
        s = Settings()
        assert Role.ADMIN in s.users["admin"].roles
        assert s.users["user0"].roles == [Role.USER]

    def test_env_override(self):
        with patch.dict("os.environ", {"VIDCATALOG_PORT": "1234", "VIDCATALOG_STORAGE": "memory"}):
            s = Settings()
            assert s.port == 1234
            assert s.storage == "memory"

    def test_users_from_env_json(self):
        users = {"carol": {"password": "secret", "roles": ["ADMIN"]}}
        with patch.dict("os.environ", {"VIDCATALOG_USERS": json.dumps(users)}):
            s = Settings()
            assert list(s.users) == ["carol"]
            assert s.users["carol"].roles == [Role.ADMIN]
