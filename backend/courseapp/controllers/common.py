"""Helpers shared by the entity controllers."""

import json
from typing import Type, TypeVar

from fastapi import Depends, Query, Request
from fastapi.exceptions import RequestValidationError
from pydantic import BaseModel, ValidationError

from .. import models
from ..auth import require_admin
from ..errors import EntityNotFoundException
from ..repositories import CrudRepository

SchemaT = TypeVar("SchemaT", bound=BaseModel)

# surrogate keys are SQLite INTEGER columns
MIN_ID = -(2**63)
MAX_ID = 2**63 - 1


def id_query():
    """`?id=` parameter for surrogate-keyed entities, bounded to a 64-bit integer."""
    return Query(alias="id", ge=MIN_ID, le=MAX_ID)


def admin_json_body(schema: Type[SchemaT]):
    """Return a dependency that parses the JSON request body into `schema`.

    The body is only read after `require_admin` has passed, so callers
    without the ADMIN role get 403 whatever they send.
    """

    async def parse_body(request: Request, user: models.User = Depends(require_admin)) -> SchemaT:
        raw = await request.body()
        try:
            payload = json.loads(raw)
        except ValueError as exc:
            raise RequestValidationError([
                {"type": "json_invalid", "loc": ("body",), "msg": "JSON decode error", "input": {}, "ctx": {"error": str(exc)}}
            ])
        try:
            return schema.model_validate(payload)
        except ValidationError as exc:
            raise RequestValidationError([
                {**err, "loc": ("body",) + tuple(err["loc"])}
                for err in exc.errors(include_url=False, include_context=False)
            ])

    return parse_body


def find_or_404(repo: CrudRepository, key, entity_name: str):
    """Return the row keyed by `key` or raise `EntityNotFoundException`."""
    entity = repo.find_by_id(key)
    if entity is None:
        raise EntityNotFoundException(entity_name, key)
    return entity


def replace_fields(entity, incoming: BaseModel, exclude=()):
    """Overwrite every attribute of `entity` with the values from `incoming`.

    Key attributes listed in `exclude` keep their stored value.
    """
    for name, value in incoming.model_dump(exclude=set(exclude)).items():
        setattr(entity, name, value)
    return entity


def deleted_message(entity_name: str, key) -> dict:
    return {"message": f"{entity_name} with id {key} deleted"}
