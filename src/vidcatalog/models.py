"""Domain models for vidcatalog."""

from enum import Enum

from pydantic import BaseModel, Field, computed_field


class Video(BaseModel):
    """A catalog entry.

    ``likes`` is derived from the liker set, so the two can never disagree.
    The liker set is kept out of the JSON representation and exposed
    separately.
    """

    id: int = 0  # 0 until the store assigns one
    name: str
    url: str = ""
    duration: int = Field(default=0, ge=0)  # seconds
    liked_by: set[str] = Field(default_factory=set, exclude=True)

    @computed_field
    @property
    def likes(self) -> int:
        """Number of users who like this video."""
        return len(self.liked_by)

    def like_by(self, username: str) -> bool:
        """Add a liker. Returns False if the user already likes this video."""
        if username in self.liked_by:
            return False
        self.liked_by.add(username)
        return True

    def unlike_by(self, username: str) -> bool:
        """Remove a liker. Returns False if the user did not like this video."""
        if username not in self.liked_by:
            return False
        self.liked_by.remove(username)
        return True


def same_content(a: Video, b: Video) -> bool:
    """Whether two videos describe the same content (name, url and duration).

    Ignores id and likes; store lookup is always by id.
    """
    return a.name == b.name and a.url == b.url and a.duration == b.duration


class Role(str, Enum):
    USER = "USER"
    ADMIN = "ADMIN"


class VideoState(str, Enum):
    READY = "READY"
    PROCESSING = "PROCESSING"


class VideoStatus(BaseModel):
    """Result of a payload upload."""

    state: VideoState
