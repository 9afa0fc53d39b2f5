from __future__ import annotations

from typing import Any


class RecommendationError(Exception):
    """Base class for failures raised by the recommendation engine."""

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)


class InvalidInput(RecommendationError):
    """Malformed preference profile or dish-id arguments."""


class DishNotFound(RecommendationError):
    """A referenced dish id is not in the catalog."""

    def __init__(self, dish_id: str, message: str | None = None) -> None:
        super().__init__(
            message or f"Dish {dish_id!r} not found",
            details={"dish_id": dish_id},
        )
        self.dish_id = dish_id


class CatalogUnavailable(RecommendationError):
    """The dish catalog could not be read."""
