"""CLI interface — thin wrapper over CatalogService, REST API and MCP server."""

import logging

import typer

from vidcatalog.config import settings
from vidcatalog.models import Video
from vidcatalog.service import CatalogService, VideoNotFoundError, create_default_service


app = typer.Typer(
    name="vidcatalog",
    help="Manage a video catalog and serve it over REST or MCP.",
    no_args_is_help=True,
)


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", help="Log at DEBUG level."),
) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _get_service() -> CatalogService:
    """Create a service instance with default dependencies."""
    return create_default_service()


def _get_or_exit(svc: CatalogService, video_id: int) -> Video:
    """Look up a video or exit with error."""
    try:
        return svc.get_video(video_id)
    except VideoNotFoundError as e:
        typer.echo(f"❌ {e}", err=True)
        raise typer.Exit(code=1)


def _print_videos(videos: list[Video]) -> None:
    for v in videos:
        typer.echo(f"  {v.id:>4d}  {v.duration:>6d}s  {v.likes:>3d}♥  {v.name}  {v.url}")


@app.command()
def add(
    name: str = typer.Argument(..., help="Video title."),
    url: str = typer.Argument(..., help="Where the video can be watched."),
    duration: int = typer.Argument(..., min=0, help="Length in seconds."),
) -> None:
    """Register a video in the catalog."""
    svc = _get_service()
    video = svc.add_video(Video(name=name, url=url, duration=duration))
    typer.echo(f"✅ Added: {video.name}")
    typer.echo(f"   ID:       {video.id}")
    typer.echo(f"   Duration: {video.duration}s")


@app.command(name="list")
def list_videos() -> None:
    """List all videos in the catalog."""
    videos = _get_service().list_videos()
    if not videos:
        typer.echo("Catalog is empty. Use 'vidcatalog add <name> <url> <duration>' to add a video.")
        return
    _print_videos(videos)


@app.command()
def info(video_id: int = typer.Argument(..., help="Video ID.")) -> None:
    """Show full details for a video."""
    svc = _get_service()
    video = _get_or_exit(svc, video_id)
    typer.echo(f"ID:          {video.id}")
    typer.echo(f"Name:        {video.name}")
    typer.echo(f"URL:         {video.url}")
    typer.echo(f"Duration:    {video.duration}s")
    typer.echo(f"Likes:       {video.likes}")
    typer.echo(f"Liked by:    {', '.join(sorted(video.liked_by)) or '(nobody)'}")


@app.command()
def search(
    name: str | None = typer.Option(None, "--name", "-n", help="Exact title to match."),
    max_duration: int | None = typer.Option(
        None, "--max-duration", "-d", help="Only videos shorter than this many seconds."
    ),
) -> None:
    """Find videos by exact title or by duration."""
    if (name is None) == (max_duration is None):
        typer.echo("❌ Give exactly one of --name or --max-duration.", err=True)
        raise typer.Exit(code=1)

    svc = _get_service()
    if name is not None:
        videos = svc.find_by_name(name)
    else:
        videos = svc.find_by_duration_less_than(max_duration)

    if not videos:
        typer.echo("No results found.")
        return
    _print_videos(videos)


@app.command()
def like(
    video_id: int = typer.Argument(..., help="Video ID."),
    username: str = typer.Argument(..., help="User liking the video."),
) -> None:
    """Like a video on behalf of a user."""
    svc = _get_service()
    try:
        if not svc.like_video(video_id, username):
            typer.echo(f"⚠️  {username} already likes video {video_id}", err=True)
            raise typer.Exit(code=1)
    except VideoNotFoundError as e:
        typer.echo(f"❌ {e}", err=True)
        raise typer.Exit(code=1)
    typer.echo(f"👍 {username} likes video {video_id}")


@app.command()
def unlike(
    video_id: int = typer.Argument(..., help="Video ID."),
    username: str = typer.Argument(..., help="User withdrawing the like."),
) -> None:
    """Withdraw a user's like from a video."""
    svc = _get_service()
    try:
        if not svc.unlike_video(video_id, username):
            typer.echo(f"⚠️  {username} does not like video {video_id}", err=True)
            raise typer.Exit(code=1)
    except VideoNotFoundError as e:
        typer.echo(f"❌ {e}", err=True)
        raise typer.Exit(code=1)
    typer.echo(f"👎 {username} no longer likes video {video_id}")


@app.command()
def likers(video_id: int = typer.Argument(..., help="Video ID.")) -> None:
    """List the users who like a video."""
    svc = _get_service()
    video = _get_or_exit(svc, video_id)
    if not video.liked_by:
        typer.echo("Nobody likes this video yet.")
        return
    for username in sorted(video.liked_by):
        typer.echo(f"  {username}")


@app.command()
def serve(
    host: str = typer.Option(settings.host, "--host", help="Host to bind to."),
    port: int = typer.Option(settings.port, "--port", help="Port to bind to."),
) -> None:
    """Start the REST API server."""
    import uvicorn

    from vidcatalog.api.app import create_app

    typer.echo(f"Starting vidcatalog REST API on http://{host}:{port}/video")
    uvicorn.run(create_app(), host=host, port=port)


@app.command()
def mcp(
    stdio: bool = typer.Option(False, "--stdio", help="Use stdio transport instead of HTTP."),
    host: str = typer.Option(settings.host, "--host", help="Host to bind to."),
    port: int = typer.Option(settings.mcp_port, "--port", help="Port to bind to."),
) -> None:
    """Start the vidcatalog MCP server."""
    from vidcatalog.server import mcp as mcp_server

    if stdio:
        typer.echo("Starting vidcatalog MCP server (stdio)...", err=True)
        mcp_server.run(transport="stdio")
    else:
        typer.echo(f"Starting vidcatalog MCP server on http://{host}:{port}/mcp")
        mcp_server.run(transport="streamable-http", host=host, port=port)
