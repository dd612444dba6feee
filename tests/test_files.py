# tests/test_files.py
"""Tests for the local video payload store."""

import io

import pytest

from vidcatalog.models import Video
from vidcatalog.storage.files import VideoFileManager


class TestVideoFileManager:
    def test_creates_directory(self, tmp_path):
        VideoFileManager(tmp_path / "nested" / "videos")
        assert (tmp_path / "nested" / "videos").is_dir()

    def test_save_and_read(self, file_manager):
        video = Video(id=1, name="A")
        assert file_manager.has_video_data(video) is False
        path = file_manager.save_video_data(video, io.BytesIO(b"\x00\x01mpeg"))
        assert path.name == "video1.mpg"
        assert file_manager.has_video_data(video) is True
        assert file_manager.get_video_data_path(video).read_bytes() == b"\x00\x01mpeg"

    def test_overwrite(self, file_manager):
        video = Video(id=2, name="B")
        file_manager.save_video_data(video, io.BytesIO(b"old"))
        file_manager.save_video_data(video, io.BytesIO(b"new"))
        assert file_manager.get_video_data_path(video).read_bytes() == b"new"

    def test_missing_data(self, file_manager):
        with pytest.raises(FileNotFoundError):
            file_manager.get_video_data_path(Video(id=3, name="C"))

    def test_default_dir_from_settings(self, isolated_data_dir):
        manager = VideoFileManager()
        path = manager.save_video_data(Video(id=4, name="D"), io.BytesIO(b"x"))
        assert path.parent == isolated_data_dir / "videos"

    def test_failed_copy_keeps_previous_data(self, file_manager, tmp_path):
        video = Video(id=5, name="E")
        file_manager.save_video_data(video, io.BytesIO(b"complete"))

        class BrokenStream(io.BytesIO):
            def read(self, *args):
                if self.tell() > 0:
                    raise OSError("connection reset")
                return super().read(4)

        with pytest.raises(OSError, match="connection reset"):
            file_manager.save_video_data(video, BrokenStream(b"truncated-upload"))

        assert file_manager.get_video_data_path(video).read_bytes() == b"complete"
        assert sorted(p.name for p in (tmp_path / "videos").iterdir()) == ["video5.mpg"]

    def test_failed_first_upload_leaves_nothing(self, file_manager, tmp_path):
        video = Video(id=6, name="F")

        class BrokenStream(io.BytesIO):
            def read(self, *args):
                raise OSError("connection reset")

        with pytest.raises(OSError):
            file_manager.save_video_data(video, BrokenStream(b"x"))

        assert file_manager.has_video_data(video) is False
        assert list((tmp_path / "videos").iterdir()) == []
