"""Python client for the Taco Tuesday API and the page flows built on it."""

from tacotuesday.client.api import APIError, TacoTuesdayAPI
from tacotuesday.client.pages import (
    EditRestaurantPage,
    NewRestaurantPage,
    RestaurantPage,
    RestaurantsPage,
)

__all__ = [
    "APIError",
    "TacoTuesdayAPI",
    "EditRestaurantPage",
    "NewRestaurantPage",
    "RestaurantPage",
    "RestaurantsPage",
]
