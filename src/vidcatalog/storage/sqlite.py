"""SQLite implementation of the video repository."""

import sqlite3
import threading
from collections import defaultdict

from vidcatalog.config import settings
from vidcatalog.models import Video
from vidcatalog.storage.repository import UrlFactory, VideoRepository


class SQLiteVideoRepository(VideoRepository):
    """SQLite-backed video storage.

    Implements VideoRepository interface using stdlib sqlite3. Ids come
    from AUTOINCREMENT so they are never reused, and the liker set lives
    in its own table keyed by (video_id, username).

    One connection is shared by all request threads; a lock serializes
    access to it.
    """

    _CREATE_TABLES = """
        CREATE TABLE IF NOT EXISTS videos (
            id        INTEGER PRIMARY KEY AUTOINCREMENT,
            name      TEXT NOT NULL,
            url       TEXT DEFAULT '',
            duration  INTEGER DEFAULT 0
        );
        CREATE TABLE IF NOT EXISTS video_likes (
            video_id  INTEGER NOT NULL REFERENCES videos(id),
            username  TEXT NOT NULL,
            PRIMARY KEY (video_id, username)
        );
    """

    def __init__(self, db_path: str | None = None) -> None:
        """Initialize the repository.

        Args:
            db_path: Path to SQLite database file. Defaults to settings.db_path.
                     Use ":memory:" for testing.
        """
        self._db_path = db_path or str(settings.db_path)
        self._conn = sqlite3.connect(self._db_path, check_same_thread=False)
        self._conn.row_factory = sqlite3.Row
        self._lock = threading.Lock()
        self._init_db()

    def _init_db(self) -> None:
        """Create tables if they don't exist."""
        with self._lock:
            self._conn.executescript(self._CREATE_TABLES)
            self._conn.commit()

    def save(self, video: Video, url_factory: UrlFactory | None = None) -> Video:
        """Persist a video, assigning an id if it has none. Upserts by id."""
        stored = video.model_copy(deep=True)
        with self._lock, self._conn:
            if stored.id == 0:
                cur = self._conn.execute(
                    "INSERT INTO videos (name, url, duration) VALUES (?, ?, ?)",
                    (stored.name, stored.url, stored.duration),
                )
                stored.id = cur.lastrowid
            else:
                self._conn.execute(
                    """
                    INSERT INTO videos (id, name, url, duration)
                    VALUES (?, ?, ?, ?)
                    ON CONFLICT(id) DO UPDATE SET
                        name = excluded.name,
                        url = excluded.url,
                        duration = excluded.duration
                    """,
                    (stored.id, stored.name, stored.url, stored.duration),
                )
            if url_factory is not None:
                stored.url = url_factory(stored.id)
                self._conn.execute(
                    "UPDATE videos SET url = ? WHERE id = ?", (stored.url, stored.id)
                )
            self._conn.execute("DELETE FROM video_likes WHERE video_id = ?", (stored.id,))
            self._conn.executemany(
                "INSERT INTO video_likes (video_id, username) VALUES (?, ?)",
                [(stored.id, username) for username in sorted(stored.liked_by)],
            )
        return stored

    def get(self, video_id: int) -> Video | None:
        """Retrieve a video by ID with its likers. Returns None if not found."""
        videos = self._query("WHERE id = ?", (video_id,))
        return videos[0] if videos else None

    def list_all(self) -> list[Video]:
        return self._query("", ())

    def find_by_name(self, name: str) -> list[Video]:
        # = on TEXT is case-sensitive under the default BINARY collation
        return self._query("WHERE name = ?", (name,))

    def find_by_duration_less_than(self, duration: int) -> list[Video]:
        return self._query("WHERE duration < ?", (duration,))

    def _query(self, where: str, params: tuple) -> list[Video]:
        """Load matching videos and their likers in one locked read."""
        with self._lock:
            rows = self._conn.execute(
                f"SELECT * FROM videos {where} ORDER BY id", params
            ).fetchall()
            if not rows:
                return []
            like_rows = self._conn.execute(
                "SELECT video_id, username FROM video_likes "
                f"WHERE video_id IN (SELECT id FROM videos {where})",
                params,
            ).fetchall()

        likers: dict[int, set[str]] = defaultdict(set)
        for like in like_rows:
            likers[like["video_id"]].add(like["username"])
        return [self._row_to_video(row, likers[row["id"]]) for row in rows]

    @staticmethod
    def _row_to_video(row: sqlite3.Row, liked_by: set[str]) -> Video:
        """Convert a database row and its liker set to a Video model."""
        return Video(
            id=row["id"],
            name=row["name"],
            url=row["url"],
            duration=row["duration"],
            liked_by=liked_by,
        )
