from __future__ import annotations

from decimal import Decimal
from typing import Any, Dict, Iterable, Optional

import httpx

from apps.common import get_logger

from .config import StorefrontSettings
from .exceptions import ApiError, NotAuthenticatedError

logger = get_logger(__name__).bind(component="storefront", layer="api")

Envelope = Dict[str, Any]


class StorefrontApi:
    """
    Async client for the template store REST API.

    Every call returns the decoded ``{"success": ..., ...}`` envelope, for
    failures too: callers inspect ``success`` and show ``message``. Only a
    401 or a response without an envelope raises.
    """

    def __init__(
        self,
        settings: StorefrontSettings,
        *,
        client: Optional[httpx.AsyncClient] = None,
        token: Optional[str] = None,
    ):
        self.settings = settings
        self.base_url = settings.base_url
        self._client = client or httpx.AsyncClient(timeout=settings.timeout)
        self._token = token
        self.log = logger.bind(base_url=self.base_url)

    @property
    def is_authenticated(self) -> bool:
        return bool(self._token)

    def set_token(self, token: Optional[str]) -> None:
        self._token = token or None

    def clear_token(self) -> None:
        self._token = None

    def _get_headers(self) -> Dict[str, str]:
        headers = {
            "Accept": "application/json",
            "Content-Type": "application/json",
        }
        if self._token:
            headers["Authorization"] = f"Bearer {self._token}"
        return headers

    async def _request(
        self,
        method: str,
        path: str,
        *,
        json_data: Optional[Dict[str, Any]] = None,
        params: Optional[Dict[str, Any]] = None,
    ) -> Envelope:
        url = f"{self.base_url}/{path.lstrip('/')}"
        try:
            response = await self._client.request(
                method, url, headers=self._get_headers(), json=json_data, params=params
            )
        except httpx.HTTPError as exc:
            self.log.warning("Request failed", method=method, path=path, error=str(exc))
            raise ApiError(str(exc) or type(exc).__name__) from exc

        if response.status_code == 401:
            self.log.info("Session rejected by server", method=method, path=path)
            self.clear_token()
            raise NotAuthenticatedError(
                "Not authenticated", status_code=401, payload=self._safe_json(response)
            )

        payload = self._safe_json(response)
        if not isinstance(payload, dict) or "success" not in payload:
            self.log.warning(
                "Response without envelope",
                method=method,
                path=path,
                status=response.status_code,
            )
            raise ApiError(
                f"Unexpected response ({response.status_code})",
                status_code=response.status_code,
            )
        self.log.debug(
            "Request completed",
            method=method,
            path=path,
            status=response.status_code,
            success=payload.get("success"),
        )
        return payload

    @staticmethod
    def _safe_json(response: httpx.Response) -> Any:
        try:
            return response.json()
        except ValueError:
            return None

    async def login(self, username: str, password: str) -> Envelope:
        """Obtain a JWT pair and keep the access token for later calls."""
        payload = await self._request(
            "POST", "/auth/login/", json_data={"username": username, "password": password}
        )
        data = payload.get("data") or {}
        if payload.get("success") and data.get("access"):
            self.set_token(data["access"])
        return payload

    async def list_templates(
        self, *, page: int = 1, limit: Optional[int] = None, template_type: Optional[str] = None
    ) -> Envelope:
        params: Dict[str, Any] = {"page": page}
        if limit is not None:
            params["limit"] = limit
        if template_type:
            params["type"] = template_type
        return await self._request("GET", "/templates/", params=params)

    async def get_template(self, identifier: str) -> Envelope:
        return await self._request("GET", f"/templates/{identifier}/")

    async def validate_coupon(self, code: str, order_total: Decimal) -> Envelope:
        return await self._request(
            "POST",
            "/coupons/validate",
            json_data={"code": code, "order_total": str(order_total)},
        )

    async def toggle_wishlist(self, template_id: str) -> Envelope:
        return await self._request("POST", f"/wishlist/toggle/{template_id}")

    async def get_wishlist_ids(self) -> Envelope:
        return await self._request("GET", "/wishlist/ids")

    async def create_order(
        self, items: Iterable[Dict[str, str]], *, coupon_code: Optional[str] = None
    ) -> Envelope:
        body: Dict[str, Any] = {"items": list(items)}
        if coupon_code:
            body["coupon_code"] = coupon_code
        return await self._request("POST", "/orders", json_data=body)

    async def pay_order(self, order_id: str) -> Envelope:
        return await self._request("POST", f"/orders/{order_id}/pay", json_data={})

    async def aclose(self) -> None:
        await self._client.aclose()
