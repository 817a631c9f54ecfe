"""Pydantic request/response schemas used by the API.

Schemas keep API input/output shapes stable and provide validation for
controller handlers and tests. Every schema speaks camelCase on the
wire while keeping snake_case attribute names, so the same class can be
built from a table row (`from_attributes`) or from a JSON body.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

QUARTER_PATTERN = r"^\d{4}[1-4]$"


class CamelModel(BaseModel):
    """Base schema: camelCase aliases, accepts either naming on input."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


class RegisterIn(CamelModel):
    """Payload for the registration endpoint."""
    email: str = Field(min_length=3)
    password: str = Field(min_length=1)
    full_name: Optional[str] = None


class LoginIn(CamelModel):
    """Payload for the login endpoint."""
    email: str
    password: str


class TokenOut(CamelModel):
    """Authentication response containing an access token."""
    access_token: str


class UserOut(CamelModel):
    id: int
    email: str
    full_name: Optional[str] = None
    admin: bool


class CurrentUserOut(CamelModel):
    """The authenticated user together with the roles granted for this request."""
    user: UserOut
    roles: List[str]


class MessageOut(CamelModel):
    message: str


# UCSBDate

class UCSBDateIn(CamelModel):
    quarter_yyyyq: str = Field(alias="quarterYYYYQ", pattern=QUARTER_PATTERN)
    name: str
    local_date_time: datetime


class UCSBDateOut(CamelModel):
    id: int
    quarter_yyyyq: str = Field(alias="quarterYYYYQ")
    name: str
    local_date_time: datetime


# MenuItemReview

class MenuItemReviewIn(CamelModel):
    item_id: int
    reviewer_email: str
    stars: int
    comments: str
    date_reviewed: datetime


class MenuItemReviewOut(CamelModel):
    id: int
    item_id: int
    reviewer_email: str
    stars: int
    comments: str
    date_reviewed: datetime


# RecommendationRequest

class RecommendationRequestIn(CamelModel):
    requester_email: str
    professor_email: str
    explanation: str
    date_requested: datetime
    date_needed: datetime
    done: bool


class RecommendationRequestOut(CamelModel):
    id: int
    requester_email: str
    professor_email: str
    explanation: str
    date_requested: datetime
    date_needed: datetime
    done: bool


# UCSBOrganization

class UCSBOrganizationIn(CamelModel):
    """PUT body; `orgCode` is accepted but the row keeps the key from the query."""
    org_code: Optional[str] = None
    org_translation_short: str
    org_translation: str
    inactive: bool


class UCSBOrganizationOut(CamelModel):
    org_code: str
    org_translation_short: str
    org_translation: str
    inactive: bool


# UCSBDiningCommons

class UCSBDiningCommonsIn(CamelModel):
    """PUT body; `code` is accepted but the row keeps the key from the query."""
    code: Optional[str] = None
    name: str
    has_sack_meal: bool
    has_take_out_meal: bool
    has_dining_cam: bool
    latitude: float
    longitude: float


class UCSBDiningCommonsOut(CamelModel):
    code: str
    name: str
    has_sack_meal: bool
    has_take_out_meal: bool
    has_dining_cam: bool
    latitude: float
    longitude: float
