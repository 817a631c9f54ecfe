"""CRUD endpoints for student organizations under `/api/ucsborganization`.

Organizations are keyed by `orgCode`. Posting an existing code replaces
that organization; PUT never changes the code even if the body names
a different one.
"""

import logging
from typing import List

from fastapi import APIRouter, Depends, Query
from sqlmodel import Session

from .. import models
from ..auth import require_admin, require_user
from ..database import get_session
from ..repositories import UCSBOrganizationRepository
from ..schemas import MessageOut, UCSBOrganizationIn, UCSBOrganizationOut
from .common import admin_json_body, deleted_message, find_or_404, replace_fields

ENTITY = "UCSBOrganization"

router = APIRouter(prefix="/api/ucsborganization", tags=["UCSBOrganization"])
logger = logging.getLogger("courseapp.controllers")


def get_repository(db: Session = Depends(get_session)) -> UCSBOrganizationRepository:
    return UCSBOrganizationRepository(db)


@router.get("/all", response_model=List[UCSBOrganizationOut])
def all_organizations(
    user: models.User = Depends(require_user),
    repo: UCSBOrganizationRepository = Depends(get_repository),
):
    return repo.find_all()


@router.get("", response_model=UCSBOrganizationOut)
def get_organization(
    user: models.User = Depends(require_user),
    org_code: str = Query(alias="orgCode"),
    repo: UCSBOrganizationRepository = Depends(get_repository),
):
    return find_or_404(repo, org_code, ENTITY)


@router.post("/post", response_model=UCSBOrganizationOut)
def post_organization(
    user: models.User = Depends(require_admin),
    org_code: str = Query(alias="orgCode", min_length=1),
    org_translation_short: str = Query(alias="orgTranslationShort"),
    org_translation: str = Query(alias="orgTranslation"),
    inactive: bool = Query(),
    repo: UCSBOrganizationRepository = Depends(get_repository),
):
    org = models.UCSBOrganization(
        org_code=org_code,
        org_translation_short=org_translation_short,
        org_translation=org_translation,
        inactive=inactive,
    )
    saved = repo.save(org)
    logger.info("saved %s id=%s by user=%s", ENTITY, saved.org_code, user.id)
    return saved


@router.put("", response_model=UCSBOrganizationOut)
def update_organization(
    user: models.User = Depends(require_admin),
    incoming: UCSBOrganizationIn = Depends(admin_json_body(UCSBOrganizationIn)),
    org_code: str = Query(alias="orgCode"),
    repo: UCSBOrganizationRepository = Depends(get_repository),
):
    org = find_or_404(repo, org_code, ENTITY)
    saved = repo.save(replace_fields(org, incoming, exclude=("org_code",)))
    logger.info("updated %s id=%s by user=%s", ENTITY, org_code, user.id)
    return saved


@router.delete("", response_model=MessageOut)
def delete_organization(
    user: models.User = Depends(require_admin),
    org_code: str = Query(alias="orgCode"),
    repo: UCSBOrganizationRepository = Depends(get_repository),
):
    org = find_or_404(repo, org_code, ENTITY)
    repo.delete(org)
    logger.info("deleted %s id=%s by user=%s", ENTITY, org_code, user.id)
    return deleted_message(ENTITY, org_code)
