"""Request bodies for the REST API."""

from pydantic import BaseModel, Field

from vidcatalog.models import Video


class VideoCreate(BaseModel):
    """Body of POST /video. Ids and likes are never taken from the client."""

    name: str
    url: str = ""
    duration: int = Field(default=0, ge=0)

    def to_video(self) -> Video:
        return Video(name=self.name, url=self.url, duration=self.duration)
