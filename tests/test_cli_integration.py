# tests/test_cli_integration.py
"""CLI integration tests using Typer's CliRunner."""

from unittest.mock import patch

import pytest
from typer.testing import CliRunner

from vidcatalog.cli import app
from vidcatalog.service import CatalogService
from vidcatalog.storage.sqlite import SQLiteVideoRepository


runner = CliRunner()


@pytest.fixture
def mock_service(file_manager):
    """Patch _get_service to return a service with in-memory backends."""
    svc = CatalogService(repository=SQLiteVideoRepository(":memory:"), file_manager=file_manager)
    with patch("vidcatalog.cli._get_service", return_value=svc):
        yield svc


class TestCLI:
    def test_add_and_list(self, mock_service):
        result = runner.invoke(app, ["add", "Intro", "http://x/intro", "120"])
        assert result.exit_code == 0
        assert "Added" in result.stdout
        assert "ID:       1" in result.stdout

        result = runner.invoke(app, ["list"])
        assert result.exit_code == 0
        assert "Intro" in result.stdout

    def test_list_empty(self, mock_service):
        result = runner.invoke(app, ["list"])
        assert result.exit_code == 0
        assert "empty" in result.stdout.lower()

    def test_add_negative_duration_rejected(self, mock_service):
        result = runner.invoke(app, ["add", "Intro", "http://x/intro", "--", "-1"])
        assert result.exit_code != 0

    def test_info(self, mock_service):
        runner.invoke(app, ["add", "Intro", "http://x/intro", "120"])
        result = runner.invoke(app, ["info", "1"])
        assert result.exit_code == 0
        assert "Intro" in result.stdout
        assert "(nobody)" in result.stdout

    def test_info_not_found(self, mock_service):
        result = runner.invoke(app, ["info", "99"])
        assert result.exit_code == 1

    def test_search_by_name(self, mock_service):
        runner.invoke(app, ["add", "Intro", "http://x/intro", "120"])
        runner.invoke(app, ["add", "Outro", "http://x/outro", "30"])
        result = runner.invoke(app, ["search", "--name", "Outro"])
        assert result.exit_code == 0
        assert "Outro" in result.stdout
        assert "Intro" not in result.stdout

    def test_search_by_duration(self, mock_service):
        runner.invoke(app, ["add", "Intro", "http://x/intro", "120"])
        runner.invoke(app, ["add", "Outro", "http://x/outro", "30"])
        result = runner.invoke(app, ["search", "--max-duration", "120"])
        assert "Outro" in result.stdout
        assert "Intro" not in result.stdout

    def test_search_needs_one_filter(self, mock_service):
        result = runner.invoke(app, ["search"])
        assert result.exit_code == 1

    def test_like_unlike_likers(self, mock_service):
        runner.invoke(app, ["add", "Intro", "http://x/intro", "120"])
        assert runner.invoke(app, ["like", "1", "alice"]).exit_code == 0
        assert runner.invoke(app, ["like", "1", "alice"]).exit_code == 1

        result = runner.invoke(app, ["likers", "1"])
        assert "alice" in result.stdout

        assert runner.invoke(app, ["unlike", "1", "alice"]).exit_code == 0
        assert runner.invoke(app, ["unlike", "1", "alice"]).exit_code == 1
        result = runner.invoke(app, ["likers", "1"])
        assert "Nobody" in result.stdout

    def test_like_not_found(self, mock_service):
        result = runner.invoke(app, ["like", "99", "alice"])
        assert result.exit_code == 1

    def test_no_args_shows_help(self):
        result = runner.invoke(app, [])
        assert "vidcatalog" in result.output.lower()
