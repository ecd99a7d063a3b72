from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional, Type, Union

from loguru import logger

from app.core.config import Settings
from app.core.errors import ConfigError, GatewayError, ValidationError
from app.schemas.forward import AskRequest, ForwardRequest, NotesRequest
from app.services.webhook.client import WebhookClient


class Route(str, Enum):
    ASK = "ask"
    NOTES = "upload-notes"


@dataclass(frozen=True)
class RouteTarget:
    schema: Type[ForwardRequest]
    url_setting: str


ROUTE_TARGETS: Dict[Route, RouteTarget] = {
    Route.ASK: RouteTarget(schema=AskRequest, url_setting="N8N_WEBHOOK_URL"),
    Route.NOTES: RouteTarget(schema=NotesRequest, url_setting="N8N_NOTES_WEBHOOK_URL"),
}


@dataclass(frozen=True)
class Success:
    status: int
    body: Any


@dataclass(frozen=True)
class Failure:
    kind: str  # validation | config | upstream
    status: int
    body: Dict[str, Any]


ForwardResult = Union[Success, Failure]


class ForwardingGateway:
    def __init__(self, settings: Settings, client: Optional[WebhookClient] = None) -> None:
        self.settings = settings
        self.client = client or WebhookClient(timeout=settings.UPSTREAM_TIMEOUT_SECONDS)

    def _validate(self, target: RouteTarget, payload: Any) -> ForwardRequest:
        if not isinstance(payload, dict):
            payload = {}
        req = target.schema.model_validate(payload)
        if req.missing_fields():
            raise ValidationError("Missing " + "/".join(target.schema.required_fields()))
        return req

    def _upstream_url(self, target: RouteTarget) -> str:
        url = getattr(self.settings, target.url_setting)
        if not url:
            raise ConfigError(f"{target.url_setting} not set")
        return url

    async def handle(self, route: Route, payload: Any) -> ForwardResult:
        target = ROUTE_TARGETS[route]
        try:
            req = self._validate(target, payload)
            url = self._upstream_url(target)
            status, body = await self.client.post_json(url, req.to_upstream())
        except GatewayError as e:
            logger.warning(
                "Forward /{} failed kind={} status={} error={}",
                route.value, e.kind, e.status_code, e.message,
            )
            return Failure(kind=e.kind, status=e.status_code, body=e.to_body())

        logger.info("Forward /{} ok status={}", route.value, status)
        return Success(status=status, body=body)
