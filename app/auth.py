import logging
import secrets
from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPBasic, HTTPBasicCredentials

from app.config import settings
from app.exceptions import AuthenticationError

# Initialize logging
logger = logging.getLogger(__name__)

# auto_error is off so an unconfigured admin stays reachable without credentials
basic_scheme = HTTPBasic(auto_error=False)


def verify_credentials(username: str, password: str) -> bool:
    """Constant-time comparison against the configured admin account."""
    user_ok = secrets.compare_digest(username.encode("utf-8"), (settings.admin_user or "").encode("utf-8"))
    pass_ok = secrets.compare_digest(password.encode("utf-8"), (settings.admin_password or "").encode("utf-8"))
    return user_ok and pass_ok


async def require_admin(credentials: Optional[HTTPBasicCredentials] = Depends(basic_scheme)) -> Optional[str]:
    """
    Dependency guarding the admin routes with HTTP Basic.

    When ADMIN_USER or ADMIN_PASSWORD is not configured the admin is open
    and None is returned; otherwise the authenticated username.
    """
    if not settings.admin_auth_enabled:
        return None
    if credentials is None or not verify_credentials(credentials.username, credentials.password):
        logger.warning("Admin authentication failed")
        raise AuthenticationError()
    return credentials.username
