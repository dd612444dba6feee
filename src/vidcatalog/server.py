"""FastMCP server — thin wrapper exposing CatalogService as MCP tools."""

from fastmcp import FastMCP

from vidcatalog.models import Video
from vidcatalog.service import CatalogService, VideoNotFoundError, create_default_service


mcp = FastMCP(
    name="vidcatalog",
    instructions=(
        "vidcatalog is a catalog of videos with per-user likes. "
        "Use list_videos, get_video and the find_by_* tools to explore it, "
        "add_video to register a video, and like_video / unlike_video "
        "on behalf of a named user."
    ),
)

_service: CatalogService | None = None


def _get_service() -> CatalogService:
    """Lazy-initialise the service singleton with default dependencies."""
    global _service
    if _service is None:
        _service = create_default_service()
    return _service


@mcp.tool(annotations={"readOnlyHint": True})
def list_videos() -> list[dict]:
    """List all videos in the catalog."""
    return [_video_summary(v) for v in _get_service().list_videos()]


@mcp.tool(annotations={"readOnlyHint": True})
def get_video(video_id: int) -> dict:
    """Get a single video by its numeric id.

    Args:
        video_id: Catalog id of the video.
    """
    try:
        return _video_summary(_get_service().get_video(video_id))
    except VideoNotFoundError as e:
        return {"error": str(e)}


@mcp.tool(annotations={"readOnlyHint": False, "idempotentHint": False})
def add_video(name: str, url: str, duration: int) -> dict:
    """Register a video in the catalog. The catalog assigns its id.

    Args:
        name: Video title.
        url: Where the video can be watched.
        duration: Length in seconds.
    """
    video = _get_service().add_video(Video(name=name, url=url, duration=duration))
    return _video_summary(video)


@mcp.tool(annotations={"readOnlyHint": True})
def find_by_name(title: str) -> list[dict]:
    """Find videos whose title matches exactly (case-sensitive).

    Args:
        title: Exact title to look for.
    """
    return [_video_summary(v) for v in _get_service().find_by_name(title)]


@mcp.tool(annotations={"readOnlyHint": True})
def find_by_duration_less_than(duration: int) -> list[dict]:
    """Find videos strictly shorter than a duration.

    Args:
        duration: Upper bound in seconds (exclusive).
    """
    return [_video_summary(v) for v in _get_service().find_by_duration_less_than(duration)]


@mcp.tool(annotations={"readOnlyHint": False, "idempotentHint": True})
def like_video(video_id: int, username: str) -> dict:
    """Record that a user likes a video.

    Args:
        video_id: Catalog id of the video.
        username: The user liking it.
    """
    try:
        if not _get_service().like_video(video_id, username):
            return {"error": f"Video {video_id} already liked by {username}"}
        return {"status": "liked", "video_id": video_id, "username": username}
    except VideoNotFoundError as e:
        return {"error": str(e)}


@mcp.tool(annotations={"readOnlyHint": False, "idempotentHint": True})
def unlike_video(video_id: int, username: str) -> dict:
    """Withdraw a user's like from a video.

    Args:
        video_id: Catalog id of the video.
        username: The user withdrawing the like.
    """
    try:
        if not _get_service().unlike_video(video_id, username):
            return {"error": f"Video {video_id} not liked by {username}"}
        return {"status": "unliked", "video_id": video_id, "username": username}
    except VideoNotFoundError as e:
        return {"error": str(e)}


@mcp.tool(annotations={"readOnlyHint": True})
def get_likers(video_id: int) -> dict:
    """List the users who like a video.

    Args:
        video_id: Catalog id of the video.
    """
    try:
        return {"video_id": video_id, "liked_by": _get_service().get_likers(video_id)}
    except VideoNotFoundError as e:
        return {"error": str(e)}


def _video_summary(video: Video) -> dict:
    """JSON-ready dict for tool responses (liker set excluded)."""
    return video.model_dump(mode="json")
