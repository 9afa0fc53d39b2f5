from __future__ import annotations

from .models import DietaryRestrictions, Dish, PreferenceProfile, TastePreferences


def _passes_dietary(dish: Dish, restrictions: DietaryRestrictions) -> bool:
    traits = dish.characteristics
    if restrictions.vegan and not traits.is_vegan:
        return False
    if restrictions.vegetarian and not traits.is_vegetarian:
        return False
    if restrictions.gluten_free and not traits.is_gluten_free:
        return False
    return True


def _has_disliked_ingredient(dish: Dish, disliked_lower: list[str]) -> bool:
    return any(
        disliked in ingredient.lower()
        for ingredient in dish.ingredients
        for disliked in disliked_lower
    )


def filter_by_dietary_restrictions(dishes: list[Dish], profile: PreferenceProfile) -> list[Dish]:
    restrictions = profile.dietary_restrictions
    if restrictions is None:
        return list(dishes)
    return [d for d in dishes if _passes_dietary(d, restrictions)]


def filter_by_taste_preferences(dishes: list[Dish], profile: PreferenceProfile) -> list[Dish]:
    """Drop dishes that are too spicy or contain a disliked ingredient (substring, any case)."""
    taste: TastePreferences | None = profile.taste_preferences
    if taste is None:
        return list(dishes)

    disliked_lower = [d.lower() for d in taste.disliked_ingredients]
    return [
        d
        for d in dishes
        if d.characteristics.spicy_level <= taste.max_spicy_level
        and not _has_disliked_ingredient(d, disliked_lower)
    ]


def filter_eligible(dishes: list[Dish], profile: PreferenceProfile) -> list[Dish]:
    """Return the dishes that pass both the dietary and the taste filters."""
    return filter_by_taste_preferences(
        filter_by_dietary_restrictions(dishes, profile), profile
    )
