from __future__ import annotations

import time
from typing import Dict

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from loguru import logger

from app.core.config import Settings
from app.core.errors import error_envelope
from app.core.rate_limit import RateLimitMiddleware, SlidingWindowRateLimiter

SECURITY_HEADERS: Dict[str, str] = {
    "Content-Security-Policy": (
        "default-src 'self';base-uri 'self';font-src 'self' https: data:;"
        "form-action 'self';frame-ancestors 'self';img-src 'self' data:;"
        "object-src 'none';script-src 'self';script-src-attr 'none';"
        "style-src 'self' https: 'unsafe-inline';upgrade-insecure-requests"
    ),
    "Cross-Origin-Opener-Policy": "same-origin",
    "Cross-Origin-Resource-Policy": "same-origin",
    "Origin-Agent-Cluster": "?1",
    "Referrer-Policy": "no-referrer",
    "Strict-Transport-Security": "max-age=31536000; includeSubDomains",
    "X-Content-Type-Options": "nosniff",
    "X-DNS-Prefetch-Control": "off",
    "X-Download-Options": "noopen",
    "X-Frame-Options": "SAMEORIGIN",
    "X-Permitted-Cross-Domain-Policies": "none",
    "X-XSS-Protection": "0",
}

BODY_TOO_LARGE = "Request body too large"


def build_rate_limiters(settings: Settings) -> Dict[str, SlidingWindowRateLimiter]:
    window = settings.RATE_LIMIT_WINDOW_SECONDS
    return {
        "/ask": SlidingWindowRateLimiter(settings.ASK_RATE_LIMIT, window),
        "/upload-notes": SlidingWindowRateLimiter(settings.NOTES_RATE_LIMIT, window),
    }


def install_middleware(app: FastAPI, settings: Settings) -> None:
    # add_middleware wraps what is already installed, so the last one added
    # sees the request first: security headers -> CORS -> logging -> body size -> rate limit
    limiters = build_rate_limiters(settings)
    app.state.rate_limiters = limiters
    app.add_middleware(RateLimitMiddleware, limiters=limiters)

    @app.middleware("http")
    async def limit_body_size(request: Request, call_next):
        declared = request.headers.get("content-length")
        if declared is not None:
            try:
                too_large = int(declared) > settings.MAX_BODY_BYTES
            except ValueError:
                return JSONResponse(status_code=400, content=error_envelope("Invalid Content-Length"))
            if too_large:
                logger.warning(
                    "Rejected body of {} bytes on {} (limit {})",
                    declared, request.url.path, settings.MAX_BODY_BYTES,
                )
                return JSONResponse(status_code=413, content=error_envelope(BODY_TOO_LARGE))
        return await call_next(request)

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        client = request.client.host if request.client else "unknown"
        logger.debug("Request received {} {} client={}", request.method, request.url.path, client)
        start = time.perf_counter()
        response = await call_next(request)
        latency_ms = (time.perf_counter() - start) * 1000
        logger.info(
            "{} {} -> {} | latency_ms={:.2f}",
            request.method, request.url.path, response.status_code, latency_ms,
        )
        return response

    app.add_middleware(
        CORSMiddleware,
        allow_origins=[settings.ALLOWED_ORIGIN],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def add_security_headers(request: Request, call_next):
        response = await call_next(request)
        for name, value in SECURITY_HEADERS.items():
            response.headers.setdefault(name, value)
        return response
