"""
Page flows of the web client, expressed as plain objects.

Each page loads what it shows, keeps a local draft while the user edits,
and submits it in one request. Failures leave the draft untouched and put
the server's messages in `error_message`. Nothing is retried.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from tacotuesday.client.api import APIError, TacoTuesdayAPI

logger = logging.getLogger(__name__)

HOME = "/"


def _blank_restaurant() -> dict[str, Any]:
    return {"name": "", "description": "", "address": "", "telephone": ""}


class _Page:
    def __init__(self, api: TacoTuesdayAPI) -> None:
        self.api = api
        self.error_message = ""

    def _fail(self, exc: APIError) -> None:
        logger.info("%s: request failed (%s)", type(self).__name__, exc.status_code)
        self.error_message = exc.message


class RestaurantsPage(_Page):
    """The home page: every restaurant, optionally narrowed by name."""

    def __init__(self, api: TacoTuesdayAPI) -> None:
        super().__init__(api)
        self.restaurants: list[dict] = []
        self.filter_text = ""

    def load(self, filter_text: Optional[str] = None) -> list[dict]:
        if filter_text is not None:
            self.filter_text = filter_text
        self.restaurants = self.api.list_restaurants(self.filter_text or None)
        return self.restaurants


class RestaurantPage(_Page):
    """One restaurant, its reviews, and a form for a new review."""

    def __init__(self, api: TacoTuesdayAPI, restaurant_id: int) -> None:
        super().__init__(api)
        self.restaurant_id = restaurant_id
        self.restaurant: dict = {**_blank_restaurant(), "id": None, "reviews": []}
        self.new_review = self._blank_review()

    def _blank_review(self) -> dict[str, Any]:
        return {"summary": "", "body": "", "stars": 5, "restaurantId": self.restaurant_id}

    def load(self) -> dict:
        self.restaurant = self.api.get_restaurant(self.restaurant_id)
        return self.restaurant

    def update_review_field(self, name: str, value: Any) -> None:
        self.new_review = {**self.new_review, name: value}

    def set_stars(self, stars: int) -> None:
        self.update_review_field("stars", stars)

    def submit_review(self) -> bool:
        """Post the draft; on success refetch the restaurant and clear the draft."""
        try:
            self.api.create_review(self.new_review)
        except APIError as exc:
            self._fail(exc)
            return False

        self.error_message = ""
        self.load()
        self.new_review = self._blank_review()
        return True


class NewRestaurantPage(_Page):
    """Form for adding a restaurant."""

    def __init__(self, api: TacoTuesdayAPI) -> None:
        super().__init__(api)
        self.draft = _blank_restaurant()

    def update_field(self, name: str, value: Any) -> None:
        self.draft = {**self.draft, name: value}

    def submit(self) -> Optional[str]:
        """Create the restaurant. Returns where to navigate, or None on failure."""
        try:
            self.api.create_restaurant(self.draft)
        except APIError as exc:
            self._fail(exc)
            return None
        self.error_message = ""
        return HOME


class EditRestaurantPage(_Page):
    """Form for changing a restaurant the caller owns."""

    def __init__(self, api: TacoTuesdayAPI, restaurant_id: int) -> None:
        super().__init__(api)
        self.restaurant_id = restaurant_id
        self.draft: dict[str, Any] = {**_blank_restaurant(), "id": restaurant_id}

    def load(self) -> dict:
        restaurant = self.api.get_restaurant(self.restaurant_id)
        self.draft = {
            "id": restaurant["id"],
            "name": restaurant["name"],
            "description": restaurant.get("description") or "",
            "address": restaurant["address"],
            "telephone": restaurant.get("telephone") or "",
        }
        return self.draft

    def update_field(self, name: str, value: Any) -> None:
        self.draft = {**self.draft, name: value}

    def submit(self) -> Optional[str]:
        """Save the draft. Returns where to navigate, or None on failure."""
        try:
            self.api.update_restaurant(self.draft)
        except APIError as exc:
            self._fail(exc)
            return None
        self.error_message = ""
        return HOME
