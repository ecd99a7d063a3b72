from fastapi import APIRouter
from fastapi.responses import PlainTextResponse

router = APIRouter(tags=["health"])

@router.get("/health")
async def health():
    return {"ok": True}

@router.get("/", response_class=PlainTextResponse)
async def root():
    return "API OK"
