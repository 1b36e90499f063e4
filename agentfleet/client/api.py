"""
pump.studio API client.

Thin async wrapper over httpx. Every call makes exactly one request; there
is no retry here. Bodies are validated into typed models and anything the
client cannot interpret raises MalformedResponseError.
"""

import json
import logging
from typing import Optional, Dict, List, Any

import httpx
from pydantic import TypeAdapter, ValidationError

from ..config import ClientConfig, DEFAULT_API_BASE
from ..errors import RemoteServiceError, MalformedResponseError
from .models import MarketToken, Registration, DataPoint, AnalysisSubmission, Submission

logger = logging.getLogger("agentfleet.client")

_market_tokens = TypeAdapter(List[MarketToken])


class PumpStudioClient:
    """
    Client for the pump.studio agent API.

    Usage:
        async with PumpStudioClient() as client:
            tokens = await client.get_market("all", 10)
            reg = await client.register("Some Agent")
    """

    def __init__(
        self,
        base_url: str = DEFAULT_API_BASE,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport = None,
    ):
        self.base_url = base_url.rstrip("/")
        self._http = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=timeout,
            transport=transport,
            headers={"Accept": "application/json"},
        )

    @classmethod
    def from_config(cls, config: ClientConfig, transport: httpx.AsyncBaseTransport = None) -> "PumpStudioClient":
        return cls(base_url=config.base_url, timeout=config.timeout, transport=transport)

    async def aclose(self):
        await self._http.aclose()

    async def __aenter__(self) -> "PumpStudioClient":
        return self

    async def __aexit__(self, *args):
        await self.aclose()

    # =========================================================================
    # Plumbing
    # =========================================================================

    async def _request(
        self,
        method: str,
        path: str,
        key: Optional[str] = None,
        **kwargs,
    ) -> httpx.Response:
        headers = {}
        if key:
            headers["Authorization"] = f"Bearer {key}"
        try:
            return await self._http.request(method, path, headers=headers, **kwargs)
        except httpx.HTTPError as e:
            raise RemoteServiceError(f"{method} {path} failed: {e}") from e

    @staticmethod
    def _json(response: httpx.Response) -> Dict[str, Any]:
        try:
            body = response.json()
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise MalformedResponseError(
                f"{response.request.url.path}: expected JSON, got {response.status_code} "
                f"{response.text[:80]!r}",
                status_code=response.status_code,
            ) from e
        if not isinstance(body, dict):
            raise MalformedResponseError(
                f"{response.request.url.path}: expected a JSON object",
                status_code=response.status_code,
            )
        return body

    # =========================================================================
    # Discovery / provisioning
    # =========================================================================

    async def get_market(self, tab: str, limit: int, key: Optional[str] = None) -> List[MarketToken]:
        """List tokens for a market tab, in the service's order."""
        response = await self._request(
            "GET",
            "/api/v1/market",
            key=key,
            params={"tab": tab, "limit": limit, "format": "json"},
        )
        if response.status_code >= 400:
            raise RemoteServiceError(
                f"Market fetch failed: {response.status_code}", status_code=response.status_code
            )

        data = self._json(response).get("data") or []
        try:
            return _market_tokens.validate_python(data)
        except ValidationError as e:
            raise MalformedResponseError(f"Market listing did not validate: {e}") from e

    async def register(self, name: str) -> Registration:
        """Register a new agent key under `name`."""
        response = await self._request("POST", "/api/v1/keys/register", json={"name": name})
        body = self._json(response)

        if not body.get("ok"):
            return Registration(error=str(body.get("error") or json.dumps(body)))

        data = body.get("data")
        if not isinstance(data, dict):
            raise MalformedResponseError("Registration succeeded but data is not an object")
        key = data.get("key")
        if not isinstance(key, str) or not key:
            raise MalformedResponseError("Registration succeeded but no key was returned")
        return Registration(key=key)

    async def set_profile(self, key: str, name: str, description: str) -> bool:
        response = await self._request(
            "POST",
            "/api/v1/agent/profile",
            key=key,
            json={"name": name, "description": description},
        )
        return self._json(response).get("ok") is True

    async def set_avatar(self, key: str, image_url: str) -> Optional[str]:
        """Set the agent avatar; returns the stored URL or None."""
        response = await self._request(
            "POST", "/api/v1/agent/avatar", key=key, json={"url": image_url}
        )
        body = self._json(response)
        if not body.get("ok"):
            return None
        url = body.get("url")
        return url if isinstance(url, str) and url else image_url

    # =========================================================================
    # Ranking
    # =========================================================================

    async def get_data_point(self, mint: str, key: Optional[str] = None) -> DataPoint:
        response = await self._request(
            "GET", "/api/v1/datapoint", key=key, params={"mint": mint}
        )
        body = self._json(response)
        if response.status_code >= 400 or body.get("ok") is False:
            raise RemoteServiceError(
                body.get("error") or f"Data point fetch failed: {response.status_code}",
                status_code=response.status_code,
            )

        try:
            return DataPoint.model_validate(body.get("data"))
        except ValidationError as e:
            raise MalformedResponseError(f"Data point for {mint} did not validate: {e}") from e

    async def submit_analysis(self, key: str, submission: AnalysisSubmission) -> Submission:
        response = await self._request(
            "POST", "/api/v1/analysis", key=key, json=submission.model_dump(mode="json")
        )
        body = self._json(response)

        data = body.get("data") if isinstance(body.get("data"), dict) else {}
        xp = body.get("xpEarned", data.get("xpEarned")) or 0
        try:
            return Submission(
                ok=body.get("ok") is True,
                xpEarned=xp,
                error=body.get("error"),
            )
        except ValidationError as e:
            raise MalformedResponseError(f"Submission response did not validate: {e}") from e
