"""Core business logic for vidcatalog."""

import logging
import threading
from pathlib import Path
from typing import BinaryIO

from vidcatalog.config import settings
from vidcatalog.models import Video, VideoState, VideoStatus
from vidcatalog.storage.files import VideoFileManager
from vidcatalog.storage.memory import InMemoryVideoRepository
from vidcatalog.storage.repository import VideoRepository
from vidcatalog.storage.sqlite import SQLiteVideoRepository

logger = logging.getLogger(__name__)

VIDEO_SVC_PATH = "/video"
DATA_PARAMETER = "data"


class VideoNotFoundError(Exception):
    """Raised when a requested video is not in the catalog."""


class VideoDataError(Exception):
    """Raised when a video's binary data cannot be written or read."""


def data_url(server_base: str, video_id: int) -> str:
    """Absolute download URL for a video's payload, e.g. http://localhost:8080/video/1/data."""
    return f"{server_base.rstrip('/')}{VIDEO_SVC_PATH}/{video_id}/{DATA_PARAMETER}"


class CatalogService:
    """Core service layer — single orchestration point for all catalog operations.

    The REST API, CLI and MCP server are thin wrappers over this class.
    Callers authenticate and authorize before calling in; usernames are
    passed explicitly.
    """

    def __init__(
        self,
        repository: VideoRepository,
        file_manager: VideoFileManager | None = None,
    ) -> None:
        self._repo = repository
        self._files = file_manager or VideoFileManager()
        self._locks: dict[int, threading.Lock] = {}
        self._locks_guard = threading.Lock()

    def add_video(self, video: Video, server_base: str | None = None) -> Video:
        """Store a new video and assign its id.

        Args:
            video: Caller-supplied record; its id is normally 0.
            server_base: Scheme, host and port the client reached us on. When
                given, the url is replaced with the derived data URL.

        Returns:
            The stored Video with its id (and derived url).
        """
        if server_base is None:
            stored = self._repo.save(video)
        else:
            stored = self._repo.save(video, url_factory=lambda vid: data_url(server_base, vid))
        logger.info("Video added: %d — %s", stored.id, stored.name)
        return stored

    def list_videos(self) -> list[Video]:
        """List all videos in the catalog."""
        return self._repo.list_all()

    def get_video(self, video_id: int) -> Video:
        """Get a video by id.

        Raises:
            VideoNotFoundError: If the video is not in the catalog.
        """
        video = self._repo.get(video_id)
        if video is None:
            raise VideoNotFoundError(f"Video not found: {video_id}")
        return video

    def find_by_name(self, name: str) -> list[Video]:
        """Videos whose title is exactly ``name``."""
        return self._repo.find_by_name(name)

    def find_by_duration_less_than(self, duration: int) -> list[Video]:
        """Videos strictly shorter than ``duration`` seconds."""
        return self._repo.find_by_duration_less_than(duration)

    def like_video(self, video_id: int, username: str) -> bool:
        """Record that ``username`` likes a video.

        Returns:
            False if the user already liked it (nothing is changed).

        Raises:
            VideoNotFoundError: If the video is not in the catalog.
        """
        with self._lock_for(video_id):
            video = self.get_video(video_id)
            if not video.like_by(username):
                logger.warning("Video %d already liked by %s", video_id, username)
                return False
            self._repo.save(video)
        logger.info("Video %d liked by %s (%d likes)", video_id, username, video.likes)
        return True

    def unlike_video(self, video_id: int, username: str) -> bool:
        """Withdraw ``username``'s like.

        Returns:
            False if the user had not liked it (nothing is changed).

        Raises:
            VideoNotFoundError: If the video is not in the catalog.
        """
        with self._lock_for(video_id):
            video = self.get_video(video_id)
            if not video.unlike_by(username):
                logger.warning("Video %d not liked by %s", video_id, username)
                return False
            self._repo.save(video)
        logger.info("Video %d unliked by %s (%d likes)", video_id, username, video.likes)
        return True

    def get_likers(self, video_id: int) -> list[str]:
        """Usernames that like a video, sorted.

        Raises:
            VideoNotFoundError: If the video is not in the catalog.
        """
        return sorted(self.get_video(video_id).liked_by)

    def save_video_data(self, video_id: int, data: BinaryIO) -> VideoStatus:
        """Store the binary payload for an existing video.

        Raises:
            VideoNotFoundError: If the video is not in the catalog.
            VideoDataError: If the payload cannot be written.
        """
        video = self.get_video(video_id)
        try:
            self._files.save_video_data(video, data)
        except OSError as e:
            raise VideoDataError(f"Unable to save data for video {video_id}: {e}") from e
        logger.info("Stored data for video %d", video_id)
        return VideoStatus(state=VideoState.READY)

    def get_video_data_path(self, video_id: int) -> Path:
        """Locate the binary payload of a video.

        Raises:
            VideoNotFoundError: If the video is not in the catalog.
            VideoDataError: If no payload has been uploaded for it.
        """
        video = self.get_video(video_id)
        try:
            return self._files.get_video_data_path(video)
        except FileNotFoundError as e:
            raise VideoDataError(f"Unable to get data for video {video_id}") from e

    def _lock_for(self, video_id: int) -> threading.Lock:
        """Per-video lock serializing fetch, toggle and save.

        Only existing videos get a lock, so the map never outgrows the catalog.

        Raises:
            VideoNotFoundError: If the video is not in the catalog.
        """
        self.get_video(video_id)
        with self._locks_guard:
            return self._locks.setdefault(video_id, threading.Lock())


def create_default_service() -> CatalogService:
    """Build a service from settings: SQLite or in-memory store, payloads under data_dir."""
    settings.ensure_dirs()
    if settings.storage == "memory":
        repository: VideoRepository = InMemoryVideoRepository()
    else:
        repository = SQLiteVideoRepository()
    return CatalogService(repository=repository, file_manager=VideoFileManager())
