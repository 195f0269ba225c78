"""
Thin synchronous client over the REST API.

Each method performs one request. A non-2xx response raises APIError with
the decoded body so callers can show the server's own messages.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

import httpx

logger = logging.getLogger(__name__)


class APIError(Exception):
    """An error response from the API."""

    def __init__(self, status_code: int, body: Any) -> None:
        self.status_code = status_code
        self.body = body
        super().__init__(f"API request failed with status {status_code}: {self.message}")

    @property
    def message(self) -> str:
        """
        The server's error messages joined with spaces.
        Field errors ({"name": [...], ...}) are flattened in order; a plain
        list of errors is joined as-is. Falls back to `detail` or the status.
        """
        if not isinstance(self.body, dict):
            return str(self.body) if self.body else f"HTTP {self.status_code}"

        errors = self.body.get("errors")
        if isinstance(errors, dict):
            messages: list[str] = []
            for value in errors.values():
                if isinstance(value, list):
                    messages.extend(str(v) for v in value)
                else:
                    messages.append(str(value))
            return " ".join(messages)
        if isinstance(errors, list):
            return " ".join(str(e) for e in errors)
        if self.body.get("detail"):
            return str(self.body["detail"])
        return f"HTTP {self.status_code}"


class TacoTuesdayAPI:
    """One method per endpoint; pass token to act as a signed-in user."""

    def __init__(self, http: httpx.Client, token: Optional[str] = None) -> None:
        self.http = http
        self.token = token

    def _headers(self) -> dict[str, str]:
        if self.token:
            return {"Authorization": f"Bearer {self.token}"}
        return {}

    def _send(self, method: str, url: str, **kwargs: Any) -> Any:
        response = self.http.request(method, url, headers=self._headers(), **kwargs)
        if response.is_success:
            if response.status_code == 204 or not response.content:
                return None
            return response.json()

        try:
            body = response.json()
        except ValueError:
            body = response.text
        logger.debug("%s %s -> %s %s", method, url, response.status_code, body)
        raise APIError(response.status_code, body)

    # ── Restaurants ──────────────────────────────────────────────────────────

    def list_restaurants(self, name_filter: Optional[str] = None) -> list[dict]:
        params = {"filter": name_filter} if name_filter is not None else None
        return self._send("GET", "/api/Restaurants", params=params)

    def get_restaurant(self, restaurant_id: int) -> dict:
        return self._send("GET", f"/api/Restaurants/{restaurant_id}")

    def create_restaurant(self, restaurant: dict) -> dict:
        return self._send("POST", "/api/Restaurants", json=restaurant)

    def update_restaurant(self, restaurant: dict) -> dict:
        return self._send("PUT", f"/api/Restaurants/{restaurant['id']}", json=restaurant)

    def delete_restaurant(self, restaurant_id: int) -> dict:
        return self._send("DELETE", f"/api/Restaurants/{restaurant_id}")

    # ── Reviews ──────────────────────────────────────────────────────────────

    def get_review(self, review_id: int) -> dict:
        return self._send("GET", f"/api/Reviews/{review_id}")

    def create_review(self, review: dict) -> dict:
        return self._send("POST", "/api/Reviews", json=review)

    def update_review(self, review: dict) -> dict:
        return self._send("PUT", f"/api/Reviews/{review['id']}", json=review)

    def delete_review(self, review_id: int) -> None:
        return self._send("DELETE", f"/api/Reviews/{review_id}")
