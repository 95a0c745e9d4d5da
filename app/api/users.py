"""
User registration and profile endpoints
"""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
import logging

from app.api.deps import get_current_user
from app.database import get_db
from app.exceptions import ConflictError
from app.models import User
from app.schemas.user import UserCreate, UserUpdate, UserResponse

router = APIRouter(prefix="/api/users", tags=["users"])
logger = logging.getLogger(__name__)


@router.post("/", response_model=UserResponse, status_code=201)
async def register_user(payload: UserCreate, db: Session = Depends(get_db)):
    """Register a user; literacy level starts as not-tested"""

    if db.query(User).filter(User.email == payload.email).first():
        raise ConflictError("A user with this email already exists")

    user = User(email=payload.email, name=payload.name, role=payload.role.value)
    db.add(user)
    db.commit()
    db.refresh(user)

    logger.info(f"User registered: {user.id} ({user.role})")

    return user


@router.get("/me", response_model=UserResponse)
async def get_me(user: User = Depends(get_current_user)):
    """Current user profile"""
    return user


@router.put("/me", response_model=UserResponse)
async def update_me(
    payload: UserUpdate,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Update the current user's name or profile picture"""

    for field, value in payload.model_dump(exclude_unset=True).items():
        setattr(user, field, value)

    db.commit()
    db.refresh(user)

    return user
