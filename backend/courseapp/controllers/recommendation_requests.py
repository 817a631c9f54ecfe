"""CRUD endpoints for recommendation requests under `/api/RecommendationRequest`."""

from datetime import datetime
import logging
from typing import List

from fastapi import APIRouter, Depends, Query
from sqlmodel import Session

from .. import models
from ..auth import require_admin, require_user
from ..database import get_session
from ..repositories import RecommendationRequestRepository
from ..schemas import MessageOut, RecommendationRequestIn, RecommendationRequestOut
from .common import admin_json_body, deleted_message, find_or_404, id_query, replace_fields

ENTITY = "RecommendationRequest"

router = APIRouter(prefix="/api/RecommendationRequest", tags=["RecommendationRequest"])
logger = logging.getLogger("courseapp.controllers")


def get_repository(db: Session = Depends(get_session)) -> RecommendationRequestRepository:
    return RecommendationRequestRepository(db)


@router.get("/all", response_model=List[RecommendationRequestOut])
def all_recommendation_requests(
    user: models.User = Depends(require_user),
    repo: RecommendationRequestRepository = Depends(get_repository),
):
    return repo.find_all()


@router.get("", response_model=RecommendationRequestOut)
def get_recommendation_request(
    user: models.User = Depends(require_user),
    request_id: int = id_query(),
    repo: RecommendationRequestRepository = Depends(get_repository),
):
    return find_or_404(repo, request_id, ENTITY)


@router.post("/post", response_model=RecommendationRequestOut)
def post_recommendation_request(
    user: models.User = Depends(require_admin),
    requester_email: str = Query(alias="requesterEmail"),
    professor_email: str = Query(alias="professorEmail"),
    explanation: str = Query(),
    date_requested: datetime = Query(alias="dateRequested"),
    date_needed: datetime = Query(alias="dateNeeded"),
    done: bool = Query(),
    repo: RecommendationRequestRepository = Depends(get_repository),
):
    """Create a recommendation request from query parameters."""
    request = models.RecommendationRequest(
        requester_email=requester_email,
        professor_email=professor_email,
        explanation=explanation,
        date_requested=date_requested,
        date_needed=date_needed,
        done=done,
    )
    saved = repo.save(request)
    logger.info("created %s id=%s by user=%s", ENTITY, saved.id, user.id)
    return saved


@router.put("", response_model=RecommendationRequestOut)
def update_recommendation_request(
    user: models.User = Depends(require_admin),
    incoming: RecommendationRequestIn = Depends(admin_json_body(RecommendationRequestIn)),
    request_id: int = id_query(),
    repo: RecommendationRequestRepository = Depends(get_repository),
):
    request = find_or_404(repo, request_id, ENTITY)
    saved = repo.save(replace_fields(request, incoming))
    logger.info("updated %s id=%s by user=%s", ENTITY, request_id, user.id)
    return saved


@router.delete("", response_model=MessageOut)
def delete_recommendation_request(
    user: models.User = Depends(require_admin),
    request_id: int = id_query(),
    repo: RecommendationRequestRepository = Depends(get_repository),
):
    request = find_or_404(repo, request_id, ENTITY)
    repo.delete(request)
    logger.info("deleted %s id=%s by user=%s", ENTITY, request_id, user.id)
    return deleted_message(ENTITY, request_id)
