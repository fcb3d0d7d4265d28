"""FastAPI dependency utilities."""

from fastapi import Depends, Header, HTTPException, Request, status

from notifier.application.use_cases import NotificationEngine
from notifier.infrastructure.cache import ConfigurationCache

ADMIN_ROLE = "admin"


def get_engine(request: Request) -> NotificationEngine:
    """Return the notification engine created by the application lifespan."""

    return request.app.state.notification_engine


def get_config_cache(engine: NotificationEngine = Depends(get_engine)) -> ConfigurationCache:
    return engine.cache


def get_current_user_id(x_user_id: str | None = Header(default=None)) -> str:
    """Return the caller identity forwarded by the authentication layer."""

    user_id = (x_user_id or "").strip()
    if not user_id:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Missing X-User-Id header",
        )
    return user_id


def require_admin(
    user_id: str = Depends(get_current_user_id),
    engine: NotificationEngine = Depends(get_engine),
) -> str:
    """Ensure the caller holds the administrator role."""

    if engine.role_directory.role_of(user_id) != ADMIN_ROLE:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Not authorized",
        )
    return user_id
