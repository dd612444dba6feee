"""Video API routes — catalog, payload upload/download, search, likes."""

from fastapi import APIRouter, Depends, File, HTTPException, Request, UploadFile, status
from fastapi.responses import FileResponse

from vidcatalog.api.dependencies import Principal, get_service, require_role
from vidcatalog.api.schemas import VideoCreate
from vidcatalog.config import settings
from vidcatalog.models import Role, Video, VideoStatus
from vidcatalog.service import VIDEO_SVC_PATH, CatalogService

router = APIRouter(prefix=VIDEO_SVC_PATH, tags=["videos"])

require_user = require_role(Role.USER)
require_admin = require_role(Role.ADMIN)


@router.get("/search/findByName", response_model=list[Video])
def find_by_title(
    title: str,
    _: Principal = Depends(require_user),
    service: CatalogService = Depends(get_service),
):
    return service.find_by_name(title)


@router.get("/search/findByDurationLessThan", response_model=list[Video])
def find_by_duration_less_than(
    duration: int,
    _: Principal = Depends(require_user),
    service: CatalogService = Depends(get_service),
):
    return service.find_by_duration_less_than(duration)


@router.get("", response_model=list[Video])
def list_videos(
    _: Principal = Depends(require_user),
    service: CatalogService = Depends(get_service),
):
    return service.list_videos()


@router.post("", response_model=Video)
def add_video(
    body: VideoCreate,
    request: Request,
    _: Principal = Depends(require_admin),
    service: CatalogService = Depends(get_service),
):
    server_base = str(request.base_url) if settings.derive_data_url else None
    return service.add_video(body.to_video(), server_base=server_base)


@router.get("/{video_id}", response_model=Video)
def get_video(
    video_id: int,
    _: Principal = Depends(require_user),
    service: CatalogService = Depends(get_service),
):
    return service.get_video(video_id)


@router.post("/{video_id}/data", response_model=VideoStatus)
def set_video_data(
    video_id: int,
    data: UploadFile = File(...),
    _: Principal = Depends(require_admin),
    service: CatalogService = Depends(get_service),
):
    return service.save_video_data(video_id, data.file)


@router.get("/{video_id}/data")
def get_video_data(
    video_id: int,
    _: Principal = Depends(require_user),
    service: CatalogService = Depends(get_service),
):
    path = service.get_video_data_path(video_id)
    return FileResponse(path, media_type="video/mpeg")


@router.post("/{video_id}/like")
def like_video(
    video_id: int,
    user: Principal = Depends(require_user),
    service: CatalogService = Depends(get_service),
):
    if not service.like_video(video_id, user.username):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Video {video_id} already liked by {user.username}",
        )
    return {"message": "Video liked"}


@router.post("/{video_id}/unlike")
def unlike_video(
    video_id: int,
    user: Principal = Depends(require_user),
    service: CatalogService = Depends(get_service),
):
    if not service.unlike_video(video_id, user.username):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Video {video_id} not liked by {user.username}",
        )
    return {"message": "Video unliked"}


@router.get("/{video_id}/likedby", response_model=list[str])
def get_users_who_liked_video(
    video_id: int,
    _: Principal = Depends(require_user),
    service: CatalogService = Depends(get_service),
):
    return service.get_likers(video_id)
