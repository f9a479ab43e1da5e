"""
Bearer-token privilege checks for the write endpoints.

Two levels: editors may compile and preview CSS, admins may also clear the
cache. An admin token satisfies the editor check. A level whose token is
unset in settings is open, which is the development default.
"""
from __future__ import annotations

import hmac
import logging
from typing import Optional

from fastapi import Depends, Header, HTTPException, status

from shogun_slogans.context import AppContext, get_context

logger = logging.getLogger(__name__)


def _bearer_token(authorization: Optional[str]) -> str:
    if not authorization:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Missing Authorization header",
            headers={"WWW-Authenticate": "Bearer"},
        )
    parts = authorization.split()
    if len(parts) != 2 or parts[0].lower() != "bearer":
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid Authorization header format. Expected: Bearer <token>",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return parts[1]


def _matches(token: str, expected: str) -> bool:
    return bool(expected) and hmac.compare_digest(token.encode(), expected.encode())


def require_editor(
    authorization: Optional[str] = Header(None),
    ctx: AppContext = Depends(get_context),
) -> str:
    editor_token = ctx.settings.editor_token
    admin_token = ctx.settings.admin_token
    if not editor_token:
        return "editor"
    token = _bearer_token(authorization)
    if _matches(token, admin_token):
        return "admin"
    if _matches(token, editor_token):
        return "editor"
    logger.warning("Rejected editor request with unknown token")
    raise HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Invalid token",
        headers={"WWW-Authenticate": "Bearer"},
    )


def require_admin(
    authorization: Optional[str] = Header(None),
    ctx: AppContext = Depends(get_context),
) -> str:
    admin_token = ctx.settings.admin_token
    if not admin_token:
        return "admin"
    token = _bearer_token(authorization)
    if _matches(token, admin_token):
        return "admin"
    if _matches(token, ctx.settings.editor_token):
        logger.warning("Editor token used on an admin endpoint")
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Admin privilege required")
    raise HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Invalid token",
        headers={"WWW-Authenticate": "Bearer"},
    )
