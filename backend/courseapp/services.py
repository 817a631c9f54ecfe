"""Business logic services used by HTTP controllers.

This module holds small service classes that coordinate repositories:
authentication (password hashing, token issuing, role resolution) and
fixture loading for seeding a database. Entity controllers talk to
their repositories directly since there is no logic between the two.
"""

from datetime import datetime, timedelta, timezone
from enum import Enum
import logging
from typing import Dict, List, Optional

from passlib.context import CryptContext
import jwt
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session

from . import models, repositories, schemas
from .config import settings

PWD_CTX = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")
logger = logging.getLogger("courseapp.services")


class Role(str, Enum):
    USER = "ROLE_USER"
    ADMIN = "ROLE_ADMIN"


def roles_for(user: models.User) -> List[Role]:
    """Return the roles granted to `user`.

    Every user holds USER; ADMIN comes from the `admin` column or from
    the `ADMIN_EMAILS` setting.
    """
    roles = [Role.USER]
    if user.admin or user.email.lower() in settings.ADMIN_EMAILS:
        roles.append(Role.ADMIN)
    return roles


class AuthService:
    """Authentication related operations (register + authenticate)."""
    def __init__(self, session: Session):
        self.session = session
        self.user_repo = repositories.UserRepository(session)

    def register(self, email: str, password: str, full_name: Optional[str] = None, admin: bool = False) -> models.User:
        """Create a new user with a hashed password.

        Returns the persisted `User` instance.
        """
        hashed = PWD_CTX.hash(password)
        u = models.User(email=email.strip().lower(), full_name=full_name, password_hash=hashed, admin=admin)
        user = self.user_repo.create(u)
        logger.info("registered user %s", user.id)
        return user

    def authenticate(self, email: str, password: str) -> Optional[str]:
        """Verify credentials and return a signed JWT token on success.

        Returns `None` if authentication fails.
        """
        user = self.user_repo.get_by_email(email)
        if not user:
            return None
        if not PWD_CTX.verify(password, user.password_hash):
            return None
        return issue_token(user)

    def set_admin(self, email: str, admin: bool = True) -> models.User:
        """Grant or revoke the `admin` flag; raises `LookupError` for unknown emails."""
        user = self.user_repo.get_by_email(email)
        if not user:
            raise LookupError(f"no user registered with email {email}")
        user.admin = admin
        return self.user_repo.save(user)


def issue_token(user: models.User, expires_in: Optional[timedelta] = None) -> str:
    """Sign a token naming `user`. Roles are not embedded; they are resolved per request."""
    expire = datetime.now(timezone.utc) + (expires_in or timedelta(hours=settings.JWT_EXPIRE_HOURS))
    payload = {"user_id": user.id, "email": user.email, "exp": int(expire.timestamp())}
    return jwt.encode(payload, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)


# collection name -> (repository class, input schema, key attribute or None for surrogate keys)
FIXTURE_COLLECTIONS = {
    "ucsbdates": (repositories.UCSBDateRepository, schemas.UCSBDateIn, None),
    "menuitemreview": (repositories.MenuItemReviewRepository, schemas.MenuItemReviewIn, None),
    "recommendationrequest": (repositories.RecommendationRequestRepository, schemas.RecommendationRequestIn, None),
    "ucsborganization": (repositories.UCSBOrganizationRepository, schemas.UCSBOrganizationIn, "org_code"),
    "ucsbdiningcommons": (repositories.UCSBDiningCommonsRepository, schemas.UCSBDiningCommonsIn, "code"),
}


class FixtureService:
    """Seed entity tables from a JSON document keyed by collection name."""
    def __init__(self, session: Session):
        self.session = session

    def load(self, data: Dict[str, list]) -> Dict[str, int]:
        """Validate and persist every item in `data`.

        Returns the number of rows saved per collection. Raises
        `ValueError` for unknown collections, malformed items, or
        natural-key items missing their key. Rows are written in a single
        transaction, so nothing is saved when validation or the database
        write fails.
        """
        unknown = sorted(set(data) - set(FIXTURE_COLLECTIONS))
        if unknown:
            raise ValueError(f"unknown fixture collections: {', '.join(unknown)}")
        pending = []
        for name, items in data.items():
            repo_cls, schema, key = FIXTURE_COLLECTIONS[name]
            model = repo_cls.model
            for idx, item in enumerate(items):
                parsed = schema.model_validate(item)
                if key is not None and not getattr(parsed, key):
                    raise ValueError(f"{name}[{idx}] is missing its key")
                fields = parsed.model_dump()
                pending.append((name, model(**fields)))
        counts = {name: 0 for name in data}
        try:
            for name, entity in pending:
                self.session.merge(entity)
                counts[name] += 1
            self.session.commit()
        except SQLAlchemyError:
            self.session.rollback()
            logger.exception("fixture load failed; rolled back")
            raise
        logger.info("loaded fixtures %s", counts)
        return counts
