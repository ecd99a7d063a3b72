from __future__ import annotations

from typing import Any, Dict, Optional, Tuple
import httpx

from app.core.errors import UpstreamError


class WebhookClient:
    """POSTs JSON to an upstream webhook once, no retries."""

    def __init__(
        self,
        timeout: float = 240.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.timeout = timeout
        self.transport = transport

    def _headers(self) -> Dict[str, str]:
        return {
            "Content-Type": "application/json",
            "User-Agent": "webhook-gateway/0.1",
        }

    @staticmethod
    def decode_body(resp: httpx.Response) -> Any:
        # upstream bodies are relayed verbatim; fall back to text when not JSON
        if not resp.content:
            return None
        try:
            return resp.json()
        except ValueError:
            return resp.text

    async def post_json(self, url: str, payload: Dict[str, Any]) -> Tuple[int, Any]:
        try:
            async with httpx.AsyncClient(
                timeout=self.timeout,
                transport=self.transport,
                follow_redirects=True,
            ) as client:
                resp = await client.post(url, json=payload, headers=self._headers())
        except httpx.TimeoutException as e:
            raise UpstreamError(f"Upstream timeout of {self.timeout:g}s exceeded") from e
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise UpstreamError(str(e) or type(e).__name__) from e

        body = self.decode_body(resp)
        if not resp.is_success:
            raise UpstreamError(
                f"Upstream returned status={resp.status_code}",
                status_code=resp.status_code,
                body=body,
            )

        return resp.status_code, body
