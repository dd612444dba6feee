"""Abstract repository interface for video storage."""

from abc import ABC, abstractmethod
from collections.abc import Callable

from vidcatalog.models import Video

UrlFactory = Callable[[int], str]


class VideoRepository(ABC):
    """Abstract base class defining the video storage contract.

    All concrete storage implementations (in-memory, SQLite, etc.)
    must implement this interface. Records handed out are copies:
    changes are only visible to other callers once passed to save().
    """

    @abstractmethod
    def save(self, video: Video, url_factory: UrlFactory | None = None) -> Video:
        """Persist a video. Upserts by id.

        A video with id 0 gets the next id from a monotonically increasing
        counter. If url_factory is given, the url is rebuilt from the
        (possibly new) id before the record becomes visible to readers.

        Returns:
            The stored record, including its id and url.
        """

    @abstractmethod
    def get(self, video_id: int) -> Video | None:
        """Retrieve a video by ID. Returns None if not found."""

    @abstractmethod
    def list_all(self) -> list[Video]:
        """List all videos in the catalog."""

    @abstractmethod
    def find_by_name(self, name: str) -> list[Video]:
        """All videos whose name is exactly ``name`` (case-sensitive)."""

    @abstractmethod
    def find_by_duration_less_than(self, duration: int) -> list[Video]:
        """All videos strictly shorter than ``duration``."""
