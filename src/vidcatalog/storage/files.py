"""Local filesystem storage for video payloads."""

import shutil
import tempfile
from pathlib import Path
from typing import BinaryIO

from vidcatalog.config import settings
from vidcatalog.models import Video


class VideoFileManager:
    """Stores each video's binary data as one file under videos_dir.

    Knows nothing about the catalog; callers look the video up first.
    """

    def __init__(self, videos_dir: Path | None = None) -> None:
        self._dir = videos_dir or settings.videos_dir
        self._dir.mkdir(parents=True, exist_ok=True)

    def _path(self, video: Video) -> Path:
        return self._dir / f"video{video.id}.mpg"

    def has_video_data(self, video: Video) -> bool:
        return self._path(video).exists()

    def save_video_data(self, video: Video, data: BinaryIO) -> Path:
        """Copy a binary stream into the video's payload file, replacing any previous data.

        The stream is written to a temporary file first and moved into place
        only once complete; a failed copy leaves the previous payload (or no
        payload) behind.
        """
        target = self._path(video)
        with tempfile.NamedTemporaryFile(
            "wb", dir=self._dir, prefix=f"{target.name}.", suffix=".part", delete=False
        ) as out:
            partial = Path(out.name)
            try:
                shutil.copyfileobj(data, out)
            except BaseException:
                out.close()
                partial.unlink(missing_ok=True)
                raise
        partial.replace(target)
        return target

    def get_video_data_path(self, video: Video) -> Path:
        """Path of the video's payload file.

        Raises:
            FileNotFoundError: If no data was uploaded for this video.
        """
        if not self.has_video_data(video):
            raise FileNotFoundError(f"No data stored for video {video.id}")
        return self._path(video)
