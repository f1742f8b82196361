"""
Language Detection Middleware

Sets request.state.locale from:
  1. ``lang`` query parameter
  2. X-Language request header
  3. Accept-Language header (quality-weighted, best-match)
  4. settings.default_language (fallback)

Explicit values must be exact members of SUPPORTED_LANGUAGES.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from starlette.middleware.base import BaseHTTPMiddleware

from app.config import settings
from app.i18n.locale import SUPPORTED_LANGUAGES, normalize_language, parse_accept_language

if TYPE_CHECKING:
    from collections.abc import Callable

    from fastapi import Request
    from starlette.responses import Response


def detect_language(request: Request) -> str:
    for explicit in (request.query_params.get("lang"), request.headers.get("X-Language")):
        if explicit and explicit.strip().lower() in SUPPORTED_LANGUAGES:
            return explicit.strip().lower()
    accepted = parse_accept_language(request.headers.get("Accept-Language", ""), SUPPORTED_LANGUAGES)
    return accepted or normalize_language(settings.default_language)


class LanguageMiddleware(BaseHTTPMiddleware):
    """Detect the request locale and attach it to request.state.locale."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request.state.locale = detect_language(request)
        response = await call_next(request)
        response.headers["Content-Language"] = request.state.locale
        return response
