"""CRUD endpoints for menu item reviews under `/api/menuitemreview`.

Reads require a logged-in user; writes require an admin.
"""

from datetime import datetime
import logging
from typing import List

from fastapi import APIRouter, Depends, Query
from sqlmodel import Session

from .. import models
from ..auth import require_admin, require_user
from ..database import get_session
from ..repositories import MenuItemReviewRepository
from ..schemas import MenuItemReviewIn, MenuItemReviewOut, MessageOut
from .common import admin_json_body, deleted_message, find_or_404, id_query, replace_fields

ENTITY = "MenuItemReview"

router = APIRouter(prefix="/api/menuitemreview", tags=["MenuItemReview"])
logger = logging.getLogger("courseapp.controllers")


def get_repository(db: Session = Depends(get_session)) -> MenuItemReviewRepository:
    return MenuItemReviewRepository(db)


@router.get("/all", response_model=List[MenuItemReviewOut])
def all_menu_item_reviews(
    user: models.User = Depends(require_user),
    repo: MenuItemReviewRepository = Depends(get_repository),
):
    """List every review."""
    return repo.find_all()


@router.get("", response_model=MenuItemReviewOut)
def get_menu_item_review(
    user: models.User = Depends(require_user),
    review_id: int = id_query(),
    repo: MenuItemReviewRepository = Depends(get_repository),
):
    """Return a single review by id."""
    return find_or_404(repo, review_id, ENTITY)


@router.post("/post", response_model=MenuItemReviewOut)
def post_menu_item_review(
    user: models.User = Depends(require_admin),
    item_id: int = Query(alias="itemId"),
    reviewer_email: str = Query(alias="email"),
    stars: int = Query(),
    comments: str = Query(),
    date_reviewed: datetime = Query(alias="timestamp"),
    repo: MenuItemReviewRepository = Depends(get_repository),
):
    """Create a review from query parameters.

    `email` and `timestamp` become `reviewerEmail` and `dateReviewed`.
    """
    review = models.MenuItemReview(
        item_id=item_id,
        reviewer_email=reviewer_email,
        stars=stars,
        comments=comments,
        date_reviewed=date_reviewed,
    )
    saved = repo.save(review)
    logger.info("created %s id=%s by user=%s", ENTITY, saved.id, user.id)
    return saved


@router.put("", response_model=MenuItemReviewOut)
def update_menu_item_review(
    user: models.User = Depends(require_admin),
    incoming: MenuItemReviewIn = Depends(admin_json_body(MenuItemReviewIn)),
    review_id: int = id_query(),
    repo: MenuItemReviewRepository = Depends(get_repository),
):
    """Replace every field of an existing review with the request body."""
    review = find_or_404(repo, review_id, ENTITY)
    saved = repo.save(replace_fields(review, incoming))
    logger.info("updated %s id=%s by user=%s", ENTITY, review_id, user.id)
    return saved


@router.delete("", response_model=MessageOut)
def delete_menu_item_review(
    user: models.User = Depends(require_admin),
    review_id: int = id_query(),
    repo: MenuItemReviewRepository = Depends(get_repository),
):
    review = find_or_404(repo, review_id, ENTITY)
    repo.delete(review)
    logger.info("deleted %s id=%s by user=%s", ENTITY, review_id, user.id)
    return deleted_message(ENTITY, review_id)
