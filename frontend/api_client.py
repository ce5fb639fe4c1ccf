"""
HTTP client for the property catalog API.

Thin wrapper over httpx used by the Streamlit frontend. All requests go
through one configured client with an explicit timeout.
"""

import logging
from typing import Any, Dict, List, Optional

import httpx

logger = logging.getLogger(__name__)


class ApiError(Exception):
    """Raised when the API cannot be reached or answers with an error."""

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code


def _error_detail(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return response.text or response.reason_phrase
    if isinstance(body, dict):
        return body.get("message") or body.get("detail") or str(body)
    return str(body)


class PropertyApiClient:
    """Client for the /api/Properties endpoints."""

    def __init__(
        self,
        base_url: str,
        timeout: float = 10.0,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        """
        Initialize the API client.

        Args:
            base_url: API root, e.g. ``http://localhost:8000/api``.
            timeout: Seconds before a request is abandoned.
            transport: Optional transport override (used by tests).
        """
        self.base_url = base_url.rstrip("/")
        self.client = httpx.Client(
            base_url=self.base_url,
            timeout=timeout,
            transport=transport,
            headers={"Accept": "application/json"},
        )

    def close(self) -> None:
        """Close the HTTP client."""
        self.client.close()

    def _request(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        try:
            return self.client.request(method, path, **kwargs)
        except httpx.TimeoutException as e:
            raise ApiError(f"Request to {self.base_url}{path} timed out") from e
        except httpx.RequestError as e:
            raise ApiError(
                f"Cannot connect to the API server at {self.base_url}: {e}"
            ) from e

    def _raise_for_status(self, response: httpx.Response) -> None:
        if response.is_error:
            detail = _error_detail(response)
            logger.error("API error %s: %s", response.status_code, detail)
            raise ApiError(
                f"HTTP error {response.status_code}: {detail}",
                status_code=response.status_code,
            )

    def list_properties(
        self,
        name: Optional[str] = None,
        address: Optional[str] = None,
        min_price: Optional[float] = None,
        max_price: Optional[float] = None,
        page_number: Optional[int] = None,
        page_size: Optional[int] = None,
    ) -> Dict[str, Any]:
        """
        Fetch one page of properties from the server.

        Blank strings and non-positive numbers are left out of the query.

        Returns:
            Paged envelope: data, totalCount, pageNumber, pageSize, totalPages.
        """
        params: Dict[str, Any] = {}
        if name and name.strip():
            params["name"] = name.strip()
        if address and address.strip():
            params["address"] = address.strip()
        if min_price is not None and min_price > 0:
            params["minPrice"] = min_price
        if max_price is not None and max_price > 0:
            params["maxPrice"] = max_price
        if page_number is not None and page_number > 0:
            params["pageNumber"] = page_number
        if page_size is not None and page_size > 0:
            params["pageSize"] = page_size

        response = self._request("GET", "/Properties", params=params)
        self._raise_for_status(response)
        data = response.json()

        # Older deployments answer with a bare array
        if isinstance(data, list):
            return {
                "data": data,
                "totalCount": len(data),
                "pageNumber": page_number or 1,
                "pageSize": page_size or len(data),
                "totalPages": 1,
            }
        return data

    def get_property(self, property_id: str) -> Optional[Dict[str, Any]]:
        """Fetch a single property with timestamps, or None if it does not exist."""
        response = self._request("GET", f"/Properties/{property_id}")
        if response.status_code == 404:
            return None
        self._raise_for_status(response)
        return response.json()

    def create_property(self, body: Dict[str, Any]) -> Dict[str, Any]:
        response = self._request("POST", "/Properties", json=body)
        self._raise_for_status(response)
        return response.json()

    def update_property(self, property_id: str, body: Dict[str, Any]) -> bool:
        """Replace a property. Returns False if it does not exist."""
        response = self._request("PUT", f"/Properties/{property_id}", json=body)
        if response.status_code == 404:
            return False
        self._raise_for_status(response)
        return True

    def delete_property(self, property_id: str) -> bool:
        """Delete a property. Returns False if it does not exist."""
        response = self._request("DELETE", f"/Properties/{property_id}")
        if response.status_code == 404:
            return False
        self._raise_for_status(response)
        return True

    def test_connection(self) -> bool:
        """Check that the listing endpoint answers successfully."""
        try:
            response = self._request("GET", "/Properties", params={"pageSize": 1})
        except ApiError as e:
            logger.warning("Connection test failed: %s", e)
            return False
        return response.is_success

    def fetch_snapshot(self, page_size: int) -> List[Dict[str, Any]]:
        """
        Fetch the bulk snapshot the frontend browses locally.

        Checks the connection first so an unreachable backend surfaces as a
        clear error instead of a raw transport failure.

        Raises:
            ApiError: If the server cannot be reached or the fetch fails.
        """
        if not self.test_connection():
            raise ApiError(
                f"Cannot connect to server. Please check if the backend is running at {self.base_url}"
            )
        return self.list_properties(page_size=page_size)["data"]
