"""Sikkerhetsheaders for portfolio-API-et."""

from typing import Optional

from fastapi import FastAPI, Request
from fastapi.responses import Response


API_HEADERS = {
    "X-Frame-Options": "DENY",
    "X-Content-Type-Options": "nosniff",
    "Cache-Control": "no-cache, no-store, must-revalidate",
}


def setup_security_headers(app: FastAPI, extra_headers: Optional[dict[str, str]] = None) -> None:
    """Legg til standard sikkerhetsheaders uten å overskrive headers satt av endepunktet."""
    headers = {**API_HEADERS, **(extra_headers or {})}

    @app.middleware("http")
    async def add_security_headers(request: Request, call_next) -> Response:
        response = await call_next(request)
        for name, value in headers.items():
            response.headers.setdefault(name, value)
        return response
