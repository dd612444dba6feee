"""In-memory implementation of the video repository."""

import threading
from collections.abc import Callable

from vidcatalog.models import Video
from vidcatalog.storage.repository import UrlFactory, VideoRepository


class InMemoryVideoRepository(VideoRepository):
    """Dict-backed video storage for a single process.

    Everything is lost on restart. A single lock guards both the map
    and the id counter, so concurrent saves never share an id and readers
    never see a half-built record.
    """

    def __init__(self) -> None:
        self._videos: dict[int, Video] = {}
        self._last_id = 0
        self._lock = threading.Lock()

    def save(self, video: Video, url_factory: UrlFactory | None = None) -> Video:
        """Persist a video, assigning an id if it has none."""
        stored = video.model_copy(deep=True)
        with self._lock:
            if stored.id == 0:
                self._last_id += 1
                stored.id = self._last_id
            else:
                # Caller-chosen ids must never be handed out again
                self._last_id = max(self._last_id, stored.id)
            if url_factory is not None:
                stored.url = url_factory(stored.id)
            self._videos[stored.id] = stored
        return stored.model_copy(deep=True)

    def get(self, video_id: int) -> Video | None:
        with self._lock:
            video = self._videos.get(video_id)
            return video.model_copy(deep=True) if video is not None else None

    def list_all(self) -> list[Video]:
        return self._select(lambda v: True)

    def find_by_name(self, name: str) -> list[Video]:
        return self._select(lambda v: v.name == name)

    def find_by_duration_less_than(self, duration: int) -> list[Video]:
        return self._select(lambda v: v.duration < duration)

    def _select(self, predicate: Callable[[Video], bool]) -> list[Video]:
        """Copy out the matching records, in id order."""
        with self._lock:
            return [
                v.model_copy(deep=True)
                for v in sorted(self._videos.values(), key=lambda v: v.id)
                if predicate(v)
            ]
