"""
Helpers that start from dishes a diner has already picked.

- ``optimize_meal`` suggests swaps for a selection towards a goal.
- ``complete_meal`` fills the vegetable / protein / starch gaps of a selection.
"""
from __future__ import annotations

from typing import Any, Mapping, Sequence

from .data_store import CatalogProvider
from .errors import DishNotFound, InvalidInput
from .models import (
    CurrentMeal,
    Dish,
    DishCategory,
    MealCompletion,
    MealGaps,
    MealNutrition,
    MealOptimization,
    PreferenceProfile,
)
from .retrieval import coerce_profile
from .scoring import round_half_up

MAX_SUGGESTIONS = 5
DEFAULT_BUDGET_PRICE = 5.0


def _require_ids(dish_ids: Sequence[str] | None, message: str) -> list[str]:
    ids = [str(i) for i in (dish_ids or []) if str(i).strip()]
    if not ids:
        raise InvalidInput(message)
    return ids


def _meal_nutrition(dishes: Sequence[Dish]) -> MealNutrition:
    return MealNutrition(
        calories=round_half_up(sum(d.nutrition.calories for d in dishes)),
        protein=round_half_up(sum(d.nutrition.protein for d in dishes)),
        carbs=round_half_up(sum(d.nutrition.carbs for d in dishes)),
        fat=round_half_up(sum(d.nutrition.fat for d in dishes)),
        price=round_half_up(sum(d.average_price for d in dishes), 2),
    )


def _suggest(
    selected: Sequence[Dish],
    others: Sequence[Dish],
    goal: str | None,
    max_price: float | None,
) -> list[Dish]:
    if goal == "lower-calories":
        categories = {d.category for d in selected}
        ceiling = min(d.nutrition.calories for d in selected)
        return [
            d for d in others
            if d.category in categories and d.nutrition.calories < ceiling
        ][:MAX_SUGGESTIONS]

    if goal == "higher-protein":
        matches = [
            d for d in others
            if d.category == DishCategory.protein and d.nutrition.protein > 15
        ]
        return sorted(matches, key=lambda d: d.nutrition.protein, reverse=True)[:MAX_SUGGESTIONS]

    if goal == "budget-friendly":
        limit = max_price if max_price else DEFAULT_BUDGET_PRICE
        matches = [d for d in others if d.average_price < limit]
        return sorted(matches, key=lambda d: d.average_price)[:MAX_SUGGESTIONS]

    return sorted(others, key=lambda d: d.health_score, reverse=True)[:MAX_SUGGESTIONS]


def optimize_meal(
    dish_ids: Sequence[str],
    goal: str | None,
    max_price: float | None,
    catalog: CatalogProvider,
) -> MealOptimization:
    """
    Summarise the selected dishes and suggest alternatives for ``goal``.

    Supported goals are ``lower-calories``, ``higher-protein`` and
    ``budget-friendly``; anything else suggests the healthiest dishes.
    """
    ids = _require_ids(dish_ids, "Please provide dish IDs to optimize")

    selected = catalog.fetch_dishes_by_ids(ids)
    if not selected:
        raise DishNotFound(ids[0], message="None of the selected dishes exist")

    others = catalog.fetch_eligible_catalog(ids)
    suggestions = _suggest(selected, others, goal, max_price)

    return MealOptimization(
        current_meal=CurrentMeal(dishes=selected, nutrition=_meal_nutrition(selected)),
        suggestions=suggestions,
        message=f"Suggestions for {goal or 'balanced meal'}",
    )


def complete_meal(
    selected_ids: Sequence[str],
    profile: PreferenceProfile | Mapping[str, Any] | None,
    catalog: CatalogProvider,
) -> MealCompletion:
    ids = _require_ids(selected_ids, "Please provide at least one selected dish")
    resolved = coerce_profile(profile) if profile is not None else None

    selected = catalog.fetch_dishes_by_ids(ids)
    categories = {d.category for d in selected}
    gaps = MealGaps(
        needs_vegetable=DishCategory.vegetable not in categories,
        needs_protein=DishCategory.protein not in categories,
        needs_starch=DishCategory.starch not in categories,
    )

    suggestions: list[Dish] = []
    if gaps.needs_vegetable:
        vegetables = catalog.fetch_dishes_by_category(DishCategory.vegetable)
        suggestions.extend(sorted(vegetables, key=lambda d: d.health_score, reverse=True)[:3])

    if gaps.needs_protein:
        proteins = catalog.fetch_dishes_by_category(DishCategory.protein)
        suggestions.extend(sorted(proteins, key=lambda d: d.nutrition.protein, reverse=True)[:3])

    composition = resolved.meal_composition if resolved is not None else None
    wants_starch = composition is None or composition.include_starch
    if gaps.needs_starch and wants_starch:
        starches = catalog.fetch_dishes_by_category(DishCategory.starch)
        suggestions.extend(sorted(starches, key=lambda d: d.health_score, reverse=True)[:2])

    return MealCompletion(selected_dishes=selected, suggestions=suggestions, analysis=gaps)
