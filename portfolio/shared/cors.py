"""Sentralisert CORS-konfigurasjon for portfolio-siden."""

from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from portfolio.shared.config import ENVIRONMENT, FRONTEND_URL

# Lokale dev-servere for den statiske siden og admin-panelet
DEV_ORIGINS = (
    "http://localhost:5173",
    "http://localhost:3000",
    "http://127.0.0.1:5500",
)

# Admin-panelet leser og skriver, resten er offentlig lesing
ALLOWED_METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE"]


def get_allowed_origins(frontend_url: Optional[str] = FRONTEND_URL, environment: str = ENVIRONMENT) -> list[str]:
    """Tillatte origins: frontend-URL, pluss dev-servere utenfor produksjon."""
    origins = [frontend_url.rstrip("/")] if frontend_url else []
    if environment != "production":
        origins.extend(o for o in DEV_ORIGINS if o not in origins)
    return origins


def setup_cors(app: FastAPI) -> None:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=get_allowed_origins(),
        allow_credentials=True,
        allow_methods=ALLOWED_METHODS,
        allow_headers=["Content-Type", "X-API-Key"],
    )
