"""
Portfolio Site API

JSON endpoints behind the static portfolio page and its admin panel.
Public endpoints read through the fallback chain (API, local store,
defaults). Admin endpoints pass the validation gate before anything is
written to the configured backing store.
"""
import base64
import copy
import logging
from typing import Any, Optional

import httpx
from fastapi import FastAPI, APIRouter, Body, Depends, File, HTTPException, Query, Request, UploadFile
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse, Response

from portfolio.profile.constants import DEFAULT_PROFILE
from portfolio.projects.constants import CATEGORY_LABELS
from portfolio.shared.auth import get_api_key
from portfolio.shared.config import ENVIRONMENT
from portfolio.shared.cors import setup_cors
from portfolio.shared.database import check_db_connection
from portfolio.shared.errors import (
    NotFoundError,
    StorageError,
    TransportError,
    ValidationError,
    log_and_sanitize_error,
)
from portfolio.shared.security_headers import setup_security_headers
from portfolio.site.schemas import FeaturedUpdate, ImageUploadResponse
from portfolio.site.state import PortfolioState, build_state

logger = logging.getLogger(__name__)

ALLOWED_TYPES = {"image/jpeg", "image/png", "image/webp", "image/gif"}
MAX_FILE_SIZE = 10 * 1024 * 1024  # 10 MB

HSTS_HEADER = {"Strict-Transport-Security": "max-age=31536000; includeSubDomains; preload"}

router = APIRouter(prefix="/portfolio", tags=["portfolio"])
admin_router = APIRouter(prefix="/portfolio/admin", tags=["admin"])


def get_state(request: Request) -> PortfolioState:
    """Repositories for this app, built from the environment on first use."""
    state = getattr(request.app.state, "portfolio", None)
    if state is None:
        state = build_state()
        request.app.state.portfolio = state
    return state


def require_confirmation(confirm: bool) -> None:
    if not confirm:
        raise HTTPException(status_code=400, detail="Deletion must be confirmed with confirm=true")


# ──────────────────────────────────────────────────────────────────────────────
# Public endpoints (no auth required)
# ──────────────────────────────────────────────────────────────────────────────

async def probe_api(url: str) -> str:
    try:
        async with httpx.AsyncClient(timeout=5.0) as client:
            response = await client.get(url)
        return "reachable" if response.status_code < 500 else "degraded"
    except httpx.HTTPError as e:
        logger.error(f"Portfolio API health check failed: {str(e)}")
        return "unreachable"


@router.get("/health")
async def health(state: PortfolioState = Depends(get_state)):
    """Health check endpoint."""
    store_connected = await run_in_threadpool(check_db_connection, state.store.bind)
    result = {
        "status": "ok" if store_connected else "degraded",
        "service": "portfolio",
        "mode": "api" if state.settings.api_backed else "local",
        "local_store": "connected" if store_connected else "disconnected",
    }
    if state.settings.api_backed:
        result["api"] = await probe_api(state.settings.api_url)
        if result["api"] != "reachable":
            result["status"] = "degraded"
    return result


@router.get("/categories")
def list_categories():
    """Category keys and the labels shown on the portfolio grid."""
    return CATEGORY_LABELS


@router.get("/projects")
def list_projects(
    category: Optional[str] = None,
    featured: bool = False,
    page: int = Query(1, ge=1),
    limit: int = Query(100, ge=1, le=1000),
    search: str = "",
    state: PortfolioState = Depends(get_state),
):
    """
    List projects for the portfolio grid.

    category and featured are filtered client-side from the first page, so
    limit must cover the whole collection for those views to be complete.
    """
    if category:
        projects = state.projects.by_category(category, limit=limit)
    elif featured:
        projects = state.projects.featured(limit=limit)
    else:
        return state.projects.list(page=page, limit=limit, search=search).to_dict()
    return {"data": projects, "total": len(projects), "page": 1, "limit": limit}


@router.get("/projects/{project_id}")
def get_project(project_id: str, state: PortfolioState = Depends(get_state)):
    return state.projects.get(project_id)


@router.get("/profile")
def get_profile(state: PortfolioState = Depends(get_state)):
    """Current profile, or the default profile when none has been saved."""
    profile = state.profile.get()
    if profile is None:
        return copy.deepcopy(DEFAULT_PROFILE)
    return profile


@router.post("/contact", status_code=201)
def submit_contact_message(
    payload: dict[str, Any] = Body(...),
    state: PortfolioState = Depends(get_state),
):
    """Contact form submission. The message is always stored with status 'new'."""
    return state.messages.create(payload)


# ──────────────────────────────────────────────────────────────────────────────
# Admin endpoints (API key required)
# ──────────────────────────────────────────────────────────────────────────────

@admin_router.post("/projects", status_code=201)
def create_project(
    payload: dict[str, Any] = Body(...),
    api_key: str = Depends(get_api_key),
    state: PortfolioState = Depends(get_state),
):
    return state.projects.create(payload)


@admin_router.put("/projects/{project_id}")
def update_project(
    project_id: str,
    payload: dict[str, Any] = Body(...),
    api_key: str = Depends(get_api_key),
    state: PortfolioState = Depends(get_state),
):
    return state.projects.update(project_id, payload)


@admin_router.post("/projects/{project_id}/featured")
def set_project_featured(
    project_id: str,
    body: FeaturedUpdate,
    api_key: str = Depends(get_api_key),
    state: PortfolioState = Depends(get_state),
):
    return state.projects.toggle_featured(project_id, body.featured)


@admin_router.delete("/projects/{project_id}", status_code=204)
def delete_project(
    project_id: str,
    confirm: bool = False,
    api_key: str = Depends(get_api_key),
    state: PortfolioState = Depends(get_state),
):
    require_confirmation(confirm)
    state.projects.delete(project_id)
    return Response(status_code=204)


@admin_router.put("/profile")
def update_profile(
    payload: dict[str, Any] = Body(...),
    api_key: str = Depends(get_api_key),
    state: PortfolioState = Depends(get_state),
):
    """Create the profile if none exists, otherwise update it."""
    return state.profile.update(payload)


@admin_router.get("/messages")
def list_messages(
    page: int = Query(1, ge=1),
    limit: int = Query(50, ge=1, le=1000),
    api_key: str = Depends(get_api_key),
    state: PortfolioState = Depends(get_state),
):
    return state.messages.list(page=page, limit=limit).to_dict()


@admin_router.get("/messages/{message_id}")
def get_message(
    message_id: str,
    api_key: str = Depends(get_api_key),
    state: PortfolioState = Depends(get_state),
):
    return state.messages.get(message_id)


@admin_router.patch("/messages/{message_id}")
def update_message_status(
    message_id: str,
    payload: dict[str, Any] = Body(...),
    api_key: str = Depends(get_api_key),
    state: PortfolioState = Depends(get_state),
):
    return state.messages.update_status(message_id, payload.get("status", ""))


@admin_router.delete("/messages/{message_id}", status_code=204)
def delete_message(
    message_id: str,
    confirm: bool = False,
    api_key: str = Depends(get_api_key),
    state: PortfolioState = Depends(get_state),
):
    require_confirmation(confirm)
    state.messages.delete(message_id)
    return Response(status_code=204)


@admin_router.post("/upload-image", response_model=ImageUploadResponse)
async def upload_image(
    file: UploadFile = File(...),
    api_key: str = Depends(get_api_key),
):
    """
    Encode an uploaded image as a data URL.
    The result can be stored directly as a project thumbnail or profile photo_url.
    """
    if file.content_type not in ALLOWED_TYPES:
        raise HTTPException(
            status_code=400,
            detail=f"Invalid file type. Allowed: {', '.join(sorted(ALLOWED_TYPES))}",
        )

    contents = await file.read()
    if len(contents) > MAX_FILE_SIZE:
        raise HTTPException(
            status_code=400,
            detail=f"File too large. Max size: {MAX_FILE_SIZE // (1024*1024)} MB",
        )

    encoded = base64.b64encode(contents).decode()
    logger.info(f"Encoded uploaded image: {file.filename} ({len(contents)} bytes)")

    return ImageUploadResponse(
        url=f"data:{file.content_type};base64,{encoded}",
        filename=file.filename or "upload",
        size=len(contents),
    )


# ──────────────────────────────────────────────────────────────────────────────
# Error mapping
# ──────────────────────────────────────────────────────────────────────────────

def register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        return JSONResponse(
            status_code=422,
            content={"detail": exc.message, "missing_fields": exc.missing_fields},
        )

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError):
        return JSONResponse(status_code=404, content={"detail": str(exc)})

    @app.exception_handler(TransportError)
    async def handle_transport_error(request: Request, exc: TransportError):
        sanitized_msg, _ = log_and_sanitize_error(
            exc, f"{request.method} {request.url.path}", "The portfolio API is unavailable"
        )
        return JSONResponse(status_code=502, content={"detail": sanitized_msg})

    @app.exception_handler(StorageError)
    async def handle_storage_error(request: Request, exc: StorageError):
        sanitized_msg, _ = log_and_sanitize_error(exc, "Local store write")
        return JSONResponse(status_code=500, content={"detail": sanitized_msg})


def create_app(state: Optional[PortfolioState] = None) -> FastAPI:
    app = FastAPI(
        title="Portfolio Site API",
        version="1.0.0",
        description="Portfolio projects, profile and contact messages with API/local fallback",
        docs_url="/portfolio/docs",
        openapi_url="/portfolio/openapi.json",
    )
    app.state.portfolio = state

    setup_cors(app)
    setup_security_headers(app, HSTS_HEADER if ENVIRONMENT == "production" else None)
    register_error_handlers(app)

    app.include_router(router)
    app.include_router(admin_router)
    return app


app = create_app()
