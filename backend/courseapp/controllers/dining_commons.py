"""CRUD endpoints for dining commons under `/api/ucsbdiningcommons`, keyed by `code`."""

import logging
from typing import List

from fastapi import APIRouter, Depends, Query
from sqlmodel import Session

from .. import models
from ..auth import require_admin, require_user
from ..database import get_session
from ..repositories import UCSBDiningCommonsRepository
from ..schemas import MessageOut, UCSBDiningCommonsIn, UCSBDiningCommonsOut
from .common import admin_json_body, deleted_message, find_or_404, replace_fields

ENTITY = "UCSBDiningCommons"

router = APIRouter(prefix="/api/ucsbdiningcommons", tags=["UCSBDiningCommons"])
logger = logging.getLogger("courseapp.controllers")


def get_repository(db: Session = Depends(get_session)) -> UCSBDiningCommonsRepository:
    return UCSBDiningCommonsRepository(db)


@router.get("/all", response_model=List[UCSBDiningCommonsOut])
def all_dining_commons(
    user: models.User = Depends(require_user),
    repo: UCSBDiningCommonsRepository = Depends(get_repository),
):
    return repo.find_all()


@router.get("", response_model=UCSBDiningCommonsOut)
def get_dining_commons(
    user: models.User = Depends(require_user),
    code: str = Query(),
    repo: UCSBDiningCommonsRepository = Depends(get_repository),
):
    return find_or_404(repo, code, ENTITY)


@router.post("/post", response_model=UCSBDiningCommonsOut)
def post_dining_commons(
    user: models.User = Depends(require_admin),
    code: str = Query(min_length=1),
    name: str = Query(),
    has_sack_meal: bool = Query(alias="hasSackMeal"),
    has_take_out_meal: bool = Query(alias="hasTakeOutMeal"),
    has_dining_cam: bool = Query(alias="hasDiningCam"),
    latitude: float = Query(),
    longitude: float = Query(),
    repo: UCSBDiningCommonsRepository = Depends(get_repository),
):
    commons = models.UCSBDiningCommons(
        code=code,
        name=name,
        has_sack_meal=has_sack_meal,
        has_take_out_meal=has_take_out_meal,
        has_dining_cam=has_dining_cam,
        latitude=latitude,
        longitude=longitude,
    )
    saved = repo.save(commons)
    logger.info("saved %s id=%s by user=%s", ENTITY, saved.code, user.id)
    return saved


@router.put("", response_model=UCSBDiningCommonsOut)
def update_dining_commons(
    user: models.User = Depends(require_admin),
    incoming: UCSBDiningCommonsIn = Depends(admin_json_body(UCSBDiningCommonsIn)),
    code: str = Query(),
    repo: UCSBDiningCommonsRepository = Depends(get_repository),
):
    commons = find_or_404(repo, code, ENTITY)
    saved = repo.save(replace_fields(commons, incoming, exclude=("code",)))
    logger.info("updated %s id=%s by user=%s", ENTITY, code, user.id)
    return saved


@router.delete("", response_model=MessageOut)
def delete_dining_commons(
    user: models.User = Depends(require_admin),
    code: str = Query(),
    repo: UCSBDiningCommonsRepository = Depends(get_repository),
):
    commons = find_or_404(repo, code, ENTITY)
    repo.delete(commons)
    logger.info("deleted %s id=%s by user=%s", ENTITY, code, user.id)
    return deleted_message(ENTITY, code)
