"""FastAPI dependency injection — get_service, get_current_user, require_role."""

import secrets
from collections.abc import Callable

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPBasic, HTTPBasicCredentials
from pydantic import BaseModel

from vidcatalog.config import settings
from vidcatalog.models import Role
from vidcatalog.service import CatalogService

security_scheme = HTTPBasic(auto_error=False)


class Principal(BaseModel):
    """The authenticated caller of a request."""

    username: str
    roles: list[Role]


def get_service(request: Request) -> CatalogService:
    """The CatalogService built once in create_app()."""
    return request.app.state.service


def get_current_user(
    credentials: HTTPBasicCredentials | None = Depends(security_scheme),
) -> Principal:
    """Check HTTP Basic credentials against the configured accounts."""
    unauthorized = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Not authenticated",
        headers={"WWW-Authenticate": "Basic"},
    )
    if credentials is None:
        raise unauthorized

    account = settings.users.get(credentials.username)
    if account is None or not secrets.compare_digest(
        credentials.password.encode(), account.password.encode()
    ):
        raise unauthorized

    return Principal(username=credentials.username, roles=account.roles)


def require_role(role: Role) -> Callable[..., Principal]:
    """Dependency factory: reject callers lacking ``role`` with 403."""

    def checker(user: Principal = Depends(get_current_user)) -> Principal:
        if role not in user.roles:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"Requires role {role.value}",
            )
        return user

    return checker
