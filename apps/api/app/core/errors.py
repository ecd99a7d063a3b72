from __future__ import annotations

from typing import Any, Dict, Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from loguru import logger
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.utils.values import is_blank


class GatewayError(Exception):
    """Base for every failure the gateway turns into an `{ok: false}` envelope."""

    kind = "gateway"
    status_code = 500

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        body: Any = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code
        self.body = body

    def to_body(self) -> Dict[str, Any]:
        # upstream keys win over our own `ok`, same as spreading them last
        if isinstance(self.body, dict):
            return {"ok": False, **self.body}
        if not is_blank(self.body):
            return {"ok": False, "error": self.body}
        return {"ok": False, "error": self.message or "Unknown error"}


class ValidationError(GatewayError):
    kind = "validation"
    status_code = 400


class ConfigError(GatewayError):
    kind = "config"
    status_code = 500


class UpstreamError(GatewayError):
    kind = "upstream"
    status_code = 500


def error_envelope(message: str) -> Dict[str, Any]:
    return {"ok": False, "error": message}


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    detail = exc.detail if isinstance(exc.detail, str) else str(exc.detail)
    return JSONResponse(
        status_code=exc.status_code,
        content=error_envelope(detail),
        headers=getattr(exc, "headers", None),
    )


async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.opt(exception=exc).error(
        "Unhandled exception on {} {}", request.method, request.url.path
    )
    return JSONResponse(status_code=500, content=error_envelope("Internal server error"))


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
