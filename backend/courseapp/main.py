"""FastAPI application entrypoint.

This module builds the application: logging, CORS, the request-context
middleware, exception handlers, the auth endpoints and the entity
controllers from `courseapp.controllers`. Controllers are thin: they
check roles, call a repository and return JSON.

Endpoints implemented here:
- POST /auth/register
- POST /auth/login
- GET /health

Entity endpoints (each with /all, ?<key>=, /post, PUT and DELETE):
- /api/ucsbdates
- /api/menuitemreview
- /api/RecommendationRequest
- /api/ucsborganization
- /api/ucsbdiningcommons
"""

from fastapi import FastAPI, Depends, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import Response
from sqlmodel import Session
import json
import logging
import time
import uuid
from .database import create_db_and_tables, get_session
from . import services, repositories
from .config import settings
from .controllers import ROUTERS
from .errors import register_error_handlers
from .schemas import LoginIn, RegisterIn, TokenOut, UserOut

app = FastAPI(title="Course Management API")
logger = logging.getLogger("courseapp.api")
if not logger.handlers:
    logging.basicConfig(level=settings.LOG_LEVEL)

_LOGGED_PREFIXES = ("/api", "/auth")

if settings.ALLOW_DEV_CORS:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

register_error_handlers(app)
for router in ROUTERS:
    app.include_router(router)

create_db_and_tables()


@app.middleware("http")
async def request_context_middleware(request: Request, call_next):
    req_id = request.headers.get("X-Request-ID", uuid.uuid4().hex)
    request.state.request_id = req_id
    started = time.perf_counter()
    logged = request.url.path.startswith(_LOGGED_PREFIXES)
    response: Response
    try:
        response = await call_next(request)
    except Exception:
        elapsed_ms = round((time.perf_counter() - started) * 1000.0, 2)
        if logged:
            logger.exception(
                "request_failed %s",
                json.dumps(
                    {
                        "request_id": req_id,
                        "path": request.url.path,
                        "method": request.method,
                        "duration_ms": elapsed_ms,
                        "client": request.client.host if request.client else "unknown",
                    },
                    ensure_ascii=True,
                ),
            )
        raise
    response.headers["X-Request-ID"] = req_id
    elapsed_ms = round((time.perf_counter() - started) * 1000.0, 2)
    if logged:
        logger.info(
            "request_done %s",
            json.dumps(
                {
                    "request_id": req_id,
                    "path": request.url.path,
                    "method": request.method,
                    "status_code": response.status_code,
                    "duration_ms": elapsed_ms,
                    "client": request.client.host if request.client else "unknown",
                },
                ensure_ascii=True,
            ),
        )
    return response


@app.post('/auth/register', response_model=UserOut)
def register(payload: RegisterIn, db: Session = Depends(get_session)):
    """Register a new user (idempotent).

    Returns the existing user if the email is already registered, which
    keeps repeated setup scripts harmless. The password is not checked
    in that case and no token is issued; use /auth/login for that.
    """
    existing = repositories.UserRepository(db).get_by_email(payload.email)
    if existing:
        return existing
    return services.AuthService(db).register(payload.email, payload.password, payload.full_name)


@app.post('/auth/login', response_model=TokenOut)
def login(payload: LoginIn, db: Session = Depends(get_session)):
    """Authenticate a user and return a short-lived JWT token.

    The token names the user only; roles are looked up on every request.
    """
    token = services.AuthService(db).authenticate(payload.email, payload.password)
    if not token:
        raise HTTPException(status_code=401, detail='invalid credentials')
    return {'access_token': token}


@app.get("/health")
def health():
    """Lightweight health check for uptime monitoring."""
    return {"status": "ok"}
