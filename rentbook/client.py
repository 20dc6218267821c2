"""HTTP client for the Rentbook API and an explicit client-side cache.

A RentbookCache holds the dashboard's tenant and notice lists. Every mutation
made through it is followed by a refetch.
"""

import logging
from typing import Any

import httpx

logger = logging.getLogger(__name__)


class ApiError(Exception):
    """Non-2xx response from the API."""

    def __init__(self, status_code: int, message: str):
        self.status_code = status_code
        self.message = message
        super().__init__(f"{status_code}: {message}")


class RentbookClient:
    """Thin JSON client over an httpx.Client.

    Args:
        http: Configured client whose base_url points at the API server
            (a fastapi TestClient works too)
    """

    def __init__(self, http: httpx.Client):
        self.http = http

    @classmethod
    def connect(cls, base_url: str, timeout: float = 10.0) -> "RentbookClient":
        return cls(httpx.Client(base_url=base_url, timeout=timeout))

    def close(self) -> None:
        self.http.close()

    def _request(
        self,
        method: str,
        path: str,
        json: dict[str, Any] | None = None,
        params: dict[str, Any] | None = None,
    ) -> Any:
        if params:
            params = {key: value for key, value in params.items() if value is not None}
        response = self.http.request(method, path, json=json, params=params or None)
        payload = None
        if "application/json" in response.headers.get("content-type", ""):
            payload = response.json()

        if response.is_error:
            message = payload.get("error") if isinstance(payload, dict) else None
            message = message or f"HTTP error {response.status_code}"
            logger.error("API %s %s failed: %s", method, path, message)
            raise ApiError(response.status_code, message)
        return payload

    # Tenants

    def list_tenants(self) -> list[dict[str, Any]]:
        return self._request("GET", "/api/tenants")

    def list_all_tenants(self) -> list[dict[str, Any]]:
        return self._request("GET", "/api/tenants/all")

    def get_tenant(self, tenant_id: str) -> dict[str, Any]:
        return self._request("GET", f"/api/tenants/{tenant_id}")

    def create_tenant(self, data: dict[str, Any]) -> dict[str, Any]:
        return self._request("POST", "/api/tenants", json=data)

    def update_tenant(self, tenant_id: str, data: dict[str, Any]) -> dict[str, Any]:
        return self._request("PUT", f"/api/tenants/{tenant_id}", json=data)

    def delete_tenant(self, tenant_id: str) -> dict[str, Any]:
        return self._request("DELETE", f"/api/tenants/{tenant_id}")

    def record_payment(self, tenant_id: str, data: dict[str, Any]) -> dict[str, Any]:
        return self._request("POST", f"/api/tenants/{tenant_id}/payment", json=data)

    # Notices

    def list_notices(self, category: str | None = None) -> list[dict[str, Any]]:
        return self._request("GET", "/api/notices", params={"category": category})

    def get_notice(self, notice_id: str) -> dict[str, Any]:
        return self._request("GET", f"/api/notices/{notice_id}")

    def create_notice(self, data: dict[str, Any]) -> dict[str, Any]:
        return self._request("POST", "/api/notices", json=data)

    def update_notice(self, notice_id: str, data: dict[str, Any]) -> dict[str, Any]:
        return self._request("PUT", f"/api/notices/{notice_id}", json=data)

    def delete_notice(self, notice_id: str) -> dict[str, Any]:
        return self._request("DELETE", f"/api/notices/{notice_id}")

    # Rent report

    def list_records(self, month: str | None = None, status: str | None = None) -> list[dict[str, Any]]:
        return self._request("GET", "/api/records", params={"month": month, "status": status})

    def get_summary(self) -> dict[str, Any]:
        return self._request("GET", "/api/records/summary")

    def list_month_options(self, count: int | None = None) -> list[dict[str, Any]]:
        return self._request("GET", "/api/records/months", params={"count": count})

    def health(self) -> dict[str, Any]:
        return self._request("GET", "/health")


class RentbookCache:
    """Cached active tenants and notices with refetch-after-mutation.

    Reads return the cached lists, refreshing first if the cache is stale.
    Mutations go to the server, then refresh; a failed mutation leaves the
    cache untouched and re-raises the ApiError.
    """

    def __init__(self, client: RentbookClient):
        self.client = client
        self._tenants: list[dict[str, Any]] = []
        self._notices: list[dict[str, Any]] = []
        self.stale = True

    def refresh(self) -> None:
        """Refetch tenants and notices from the server."""
        self._tenants = self.client.list_tenants()
        self._notices = self.client.list_notices()
        self.stale = False
        logger.debug("Cache refreshed: tenants=%d notices=%d", len(self._tenants), len(self._notices))

    def invalidate(self) -> None:
        self.stale = True

    @property
    def tenants(self) -> list[dict[str, Any]]:
        if self.stale:
            self.refresh()
        return self._tenants

    @property
    def notices(self) -> list[dict[str, Any]]:
        if self.stale:
            self.refresh()
        return self._notices

    def find_tenant(self, tenant_id: str) -> dict[str, Any] | None:
        return next((tenant for tenant in self.tenants if tenant["id"] == tenant_id), None)

    def _mutate(self, operation, *args) -> Any:
        result = operation(*args)
        self.refresh()
        return result

    def create_tenant(self, data: dict[str, Any]) -> dict[str, Any]:
        return self._mutate(self.client.create_tenant, data)

    def update_tenant(self, tenant_id: str, data: dict[str, Any]) -> dict[str, Any]:
        return self._mutate(self.client.update_tenant, tenant_id, data)

    def delete_tenant(self, tenant_id: str) -> dict[str, Any]:
        return self._mutate(self.client.delete_tenant, tenant_id)

    def record_payment(self, tenant_id: str, data: dict[str, Any]) -> dict[str, Any]:
        return self._mutate(self.client.record_payment, tenant_id, data)

    def create_notice(self, data: dict[str, Any]) -> dict[str, Any]:
        return self._mutate(self.client.create_notice, data)

    def update_notice(self, notice_id: str, data: dict[str, Any]) -> dict[str, Any]:
        return self._mutate(self.client.update_notice, notice_id, data)

    def delete_notice(self, notice_id: str) -> dict[str, Any]:
        return self._mutate(self.client.delete_notice, notice_id)


__all__ = ["ApiError", "RentbookCache", "RentbookClient"]
