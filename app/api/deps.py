"""
Shared API dependencies: caller identity and role checks

Authentication happens upstream; the gateway forwards the authenticated
user's id in the X-User-Id header.
"""
import logging
from typing import Optional
from uuid import UUID

from fastapi import Depends, Header, HTTPException, status
from sqlalchemy.orm import Session

from app.database import get_db
from app.exceptions import NotFoundError, PermissionDeniedError
from app.models import User, UserRole

logger = logging.getLogger(__name__)


async def get_current_user(
    x_user_id: Optional[str] = Header(None),
    db: Session = Depends(get_db)
) -> User:
    """
    Resolve the calling user from the X-User-Id header

    Raises:
        HTTPException: 401 if the header is missing or malformed
        NotFoundError: no such user
    """
    if not x_user_id:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Missing X-User-Id header"
        )

    try:
        user_id = UUID(x_user_id)
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid X-User-Id header"
        )

    user = db.query(User).filter(User.id == user_id).first()
    if not user:
        raise NotFoundError("User not found")

    return user


def require_roles(*roles: UserRole):
    """Dependency factory allowing only the given roles"""
    allowed = {role.value for role in roles}

    async def checker(user: User = Depends(get_current_user)) -> User:
        if user.role not in allowed:
            logger.warning(f"Access denied for user {user.id} with role {user.role}")
            raise PermissionDeniedError(
                f"Access denied. Requires role: {' or '.join(sorted(allowed))}"
            )
        return user

    return checker


require_staff = require_roles(UserRole.TEACHER, UserRole.ADMIN)
require_admin = require_roles(UserRole.ADMIN)
require_student = require_roles(UserRole.STUDENT)
