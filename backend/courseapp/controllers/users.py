"""Endpoints describing users: the caller's own profile and, for admins, everyone."""

from typing import List

from fastapi import APIRouter, Depends
from sqlmodel import Session

from .. import models
from ..auth import require_admin, require_user
from ..database import get_session
from ..repositories import UserRepository
from ..schemas import CurrentUserOut, UserOut
from ..services import roles_for

router = APIRouter(prefix="/api", tags=["Users"])


@router.get("/currentUser", response_model=CurrentUserOut)
def current_user(user: models.User = Depends(require_user)):
    """Return the authenticated user and the roles resolved for this request."""
    return {"user": user, "roles": [role.value for role in roles_for(user)]}


@router.get("/admin/users", response_model=List[UserOut])
def all_users(user: models.User = Depends(require_admin), db: Session = Depends(get_session)):
    return UserRepository(db).find_all()
