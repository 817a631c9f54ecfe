"""SQLModel data models.

This module defines the application's database tables using SQLModel.
Attributes are snake_case; the camelCase JSON shapes live in
`courseapp.schemas`.
"""

from typing import Optional
from sqlalchemy import Column, DateTime
from sqlmodel import SQLModel, Field
from datetime import datetime, timezone


def _local_datetime_column() -> Column:
    """A timezone-less DATETIME column; these fields hold wall-clock local times."""
    return Column(DateTime(timezone=False), nullable=False)


class User(SQLModel, table=True):
    """A registered user.

    Fields:
    - `email`: unique login name
    - `password_hash`: hashed password string (never store plaintext)
    - `admin`: grants the ADMIN role in addition to USER
    """
    id: Optional[int] = Field(default=None, primary_key=True)
    email: str = Field(index=True, nullable=False, unique=True)
    full_name: Optional[str] = None
    password_hash: str
    admin: bool = False
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        sa_column=Column(DateTime(timezone=True), nullable=False),
    )


class UCSBDate(SQLModel, table=True):
    """A named date within an academic quarter, e.g. `20221` / `Noon on January 3`."""
    id: Optional[int] = Field(default=None, primary_key=True)
    quarter_yyyyq: str = Field(index=True)
    name: str
    local_date_time: datetime = Field(sa_column=_local_datetime_column())


class MenuItemReview(SQLModel, table=True):
    """A diner's review of a single dining-commons menu item."""
    id: Optional[int] = Field(default=None, primary_key=True)
    item_id: int = Field(index=True)
    reviewer_email: str
    stars: int
    comments: str
    date_reviewed: datetime = Field(sa_column=_local_datetime_column())


class RecommendationRequest(SQLModel, table=True):
    """A student's request for a letter of recommendation from a professor."""
    id: Optional[int] = Field(default=None, primary_key=True)
    requester_email: str = Field(index=True)
    professor_email: str
    explanation: str
    date_requested: datetime = Field(sa_column=_local_datetime_column())
    date_needed: datetime = Field(sa_column=_local_datetime_column())
    done: bool = False


class UCSBOrganization(SQLModel, table=True):
    """A student organization, keyed by its short organization code."""
    org_code: str = Field(primary_key=True)
    org_translation_short: str
    org_translation: str
    inactive: bool = False


class UCSBDiningCommons(SQLModel, table=True):
    """A dining commons and the services it offers, keyed by `code`."""
    code: str = Field(primary_key=True)
    name: str
    has_sack_meal: bool = False
    has_take_out_meal: bool = False
    has_dining_cam: bool = False
    latitude: float
    longitude: float
