from __future__ import annotations

import json
from typing import Any

from fastapi import HTTPException, Request

from app.core.middleware import BODY_TOO_LARGE
from app.services.forwarding.gateway import ForwardingGateway


def get_gateway(request: Request) -> ForwardingGateway:
    return request.app.state.gateway


async def read_json_body(request: Request) -> Any:
    """
    Parse the request body as JSON.

    Content-Length is already checked by middleware; this catches bodies sent
    without one (chunked uploads).
    """
    raw = await request.body()
    if len(raw) > request.app.state.settings.MAX_BODY_BYTES:
        raise HTTPException(status_code=413, detail=BODY_TOO_LARGE)
    if not raw.strip():
        return {}
    try:
        return json.loads(raw)
    except ValueError:
        raise HTTPException(status_code=400, detail="Invalid JSON body")
