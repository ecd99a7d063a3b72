from typing import Any
from fastapi import APIRouter, Depends, Response
from fastapi.responses import JSONResponse

from app.api.deps import get_gateway, read_json_body
from app.services.forwarding.gateway import ForwardingGateway, ForwardResult, Route

router = APIRouter(tags=["forward"])

def to_response(result: ForwardResult) -> Response:
    # 204/304 must not carry a body
    if result.status in (204, 304):
        return Response(status_code=result.status)
    return JSONResponse(status_code=result.status, content=result.body)

@router.post("/ask")
async def ask(
    payload: Any = Depends(read_json_body),
    gateway: ForwardingGateway = Depends(get_gateway),
):
    return to_response(await gateway.handle(Route.ASK, payload))

@router.post("/upload-notes")
async def upload_notes(
    payload: Any = Depends(read_json_body),
    gateway: ForwardingGateway = Depends(get_gateway),
):
    return to_response(await gateway.handle(Route.NOTES, payload))
