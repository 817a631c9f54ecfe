"""Repository classes encapsulating database operations.

Every repository wraps one table. `CrudRepository` provides the shared
find/save/delete contract; the concrete classes only name their model
and add the odd extra lookup. Repositories return SQLModel objects and
commit/refresh where appropriate.
"""

from typing import Generic, List, Optional, Type, TypeVar

from sqlalchemy import inspect
from sqlmodel import Session, SQLModel, select

from . import models

ModelT = TypeVar("ModelT", bound=SQLModel)
IdT = TypeVar("IdT")


class CrudRepository(Generic[ModelT, IdT]):
    """Key-based lookup and persistence for a single SQLModel table."""
    model: Type[ModelT]

    def __init__(self, session: Session):
        self.session = session

    def find_all(self) -> List[ModelT]:
        """Return every row, ordered by primary key."""
        stmt = select(self.model).order_by(*inspect(self.model).primary_key)
        return list(self.session.exec(stmt).all())

    def find_by_id(self, key: IdT) -> Optional[ModelT]:
        """Return the row with primary key `key` or `None` if absent."""
        return self.session.get(self.model, key)

    def save(self, entity: ModelT) -> ModelT:
        """Insert or replace `entity` and return the managed instance.

        `merge` makes this an upsert: a row whose key already exists is
        overwritten, a new key (or an unset surrogate key) is inserted.
        """
        managed = self.session.merge(entity)
        self.session.commit()
        self.session.refresh(managed)
        return managed

    def delete(self, entity: ModelT) -> None:
        """Delete `entity` and commit."""
        self.session.delete(entity)
        self.session.commit()


class UserRepository(CrudRepository[models.User, int]):
    """Persistence for `User` objects."""
    model = models.User

    def create(self, user: models.User) -> models.User:
        """Persist a new user and return the managed instance."""
        self.session.add(user)
        self.session.commit()
        self.session.refresh(user)
        return user

    def get_by_email(self, email: str) -> Optional[models.User]:
        """Return a `User` by email (case-insensitive) or `None` if not found."""
        stmt = select(models.User).where(models.User.email == email.strip().lower())
        return self.session.exec(stmt).first()


class UCSBDateRepository(CrudRepository[models.UCSBDate, int]):
    model = models.UCSBDate


class MenuItemReviewRepository(CrudRepository[models.MenuItemReview, int]):
    model = models.MenuItemReview


class RecommendationRequestRepository(CrudRepository[models.RecommendationRequest, int]):
    model = models.RecommendationRequest


class UCSBOrganizationRepository(CrudRepository[models.UCSBOrganization, str]):
    model = models.UCSBOrganization


class UCSBDiningCommonsRepository(CrudRepository[models.UCSBDiningCommons, str]):
    model = models.UCSBDiningCommons
