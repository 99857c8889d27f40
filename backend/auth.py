"""Admin authentication for the management endpoints."""

import secrets

from fastapi import Request

from config import ADMIN_ENABLED, SHARE_ADMIN_PASS, SHARE_ADMIN_USER


def is_admin(request: Request) -> bool:
    """Check admin via the X-Admin-User / X-Admin-Pass headers."""
    if not ADMIN_ENABLED:
        return True

    user = request.headers.get("X-Admin-User", "")
    password = request.headers.get("X-Admin-Pass", "")
    if not (user and password):
        return False
    return (
        secrets.compare_digest(user.encode(), SHARE_ADMIN_USER.encode())
        and secrets.compare_digest(password.encode(), SHARE_ADMIN_PASS.encode())
    )
