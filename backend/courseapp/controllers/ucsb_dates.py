"""CRUD endpoints for quarter dates under `/api/ucsbdates`.

`quarterYYYYQ` is a four-digit year followed by a quarter digit
(1 winter, 2 spring, 3 summer, 4 fall); anything else is rejected
with 400 before reaching the database.
"""

from datetime import datetime
import logging
from typing import List

from fastapi import APIRouter, Depends, Query
from sqlmodel import Session

from .. import models
from ..auth import require_admin, require_user
from ..database import get_session
from ..repositories import UCSBDateRepository
from ..schemas import QUARTER_PATTERN, MessageOut, UCSBDateIn, UCSBDateOut
from .common import admin_json_body, deleted_message, find_or_404, id_query, replace_fields

ENTITY = "UCSBDate"

router = APIRouter(prefix="/api/ucsbdates", tags=["UCSBDate"])
logger = logging.getLogger("courseapp.controllers")


def get_repository(db: Session = Depends(get_session)) -> UCSBDateRepository:
    return UCSBDateRepository(db)


@router.get("/all", response_model=List[UCSBDateOut])
def all_ucsb_dates(
    user: models.User = Depends(require_user),
    repo: UCSBDateRepository = Depends(get_repository),
):
    return repo.find_all()


@router.get("", response_model=UCSBDateOut)
def get_ucsb_date(
    user: models.User = Depends(require_user),
    date_id: int = id_query(),
    repo: UCSBDateRepository = Depends(get_repository),
):
    return find_or_404(repo, date_id, ENTITY)


@router.post("/post", response_model=UCSBDateOut)
def post_ucsb_date(
    user: models.User = Depends(require_admin),
    quarter_yyyyq: str = Query(alias="quarterYYYYQ", pattern=QUARTER_PATTERN),
    name: str = Query(),
    local_date_time: datetime = Query(alias="localDateTime"),
    repo: UCSBDateRepository = Depends(get_repository),
):
    date = models.UCSBDate(quarter_yyyyq=quarter_yyyyq, name=name, local_date_time=local_date_time)
    saved = repo.save(date)
    logger.info("created %s id=%s by user=%s", ENTITY, saved.id, user.id)
    return saved


@router.put("", response_model=UCSBDateOut)
def update_ucsb_date(
    user: models.User = Depends(require_admin),
    incoming: UCSBDateIn = Depends(admin_json_body(UCSBDateIn)),
    date_id: int = id_query(),
    repo: UCSBDateRepository = Depends(get_repository),
):
    date = find_or_404(repo, date_id, ENTITY)
    saved = repo.save(replace_fields(date, incoming))
    logger.info("updated %s id=%s by user=%s", ENTITY, date_id, user.id)
    return saved


@router.delete("", response_model=MessageOut)
def delete_ucsb_date(
    user: models.User = Depends(require_admin),
    date_id: int = id_query(),
    repo: UCSBDateRepository = Depends(get_repository),
):
    date = find_or_404(repo, date_id, ENTITY)
    repo.delete(date)
    logger.info("deleted %s id=%s by user=%s", ENTITY, date_id, user.id)
    return deleted_message(ENTITY, date_id)
