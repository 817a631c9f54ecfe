"""Exceptions and global exception handlers.

`EntityNotFoundException` is raised by controllers when a lookup by id
misses; its handler renders the `{type, message}` body clients expect.
Request validation failures are reported as 400 with per-field details.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger("courseapp.errors")


class EntityNotFoundException(Exception):
    """No `entity_name` row exists with the requested id."""

    def __init__(self, entity_name: str, key):
        self.entity_name = entity_name
        self.key = key
        super().__init__(f"{entity_name} with id {key} not found")

    @property
    def message(self) -> str:
        return str(self)


def register_error_handlers(app: FastAPI) -> None:
    """Register the application's exception handlers on `app`."""

    @app.exception_handler(EntityNotFoundException)
    async def entity_not_found_handler(request: Request, exc: EntityNotFoundException):
        logger.info("not_found %s %s", request.url.path, exc.message)
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND,
            content={"type": type(exc).__name__, "message": exc.message},
        )

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        logger.warning("validation_error %s %s", request.url.path, exc.errors())
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={
                "type": "ValidationError",
                "message": "Invalid request data",
                "details": [
                    {
                        "field": ".".join(str(loc) for loc in e["loc"]),
                        "message": e["msg"],
                        "type": e["type"],
                    }
                    for e in exc.errors()
                ],
            },
        )
