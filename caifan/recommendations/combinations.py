from __future__ import annotations

from typing import Sequence

import numpy as np

from .models import Dish, DishCategory, MealComposition, PreferenceProfile

Combination = list[Dish]

DEFAULT_TRIALS = 50


def random_select(items: Sequence[Dish], count: int, rng: np.random.Generator) -> list[Dish]:
    """Draw ``min(count, len(items))`` dishes without replacement."""
    if not items or count <= 0:
        return []
    order = rng.permutation(len(items))
    return [items[i] for i in order[: min(count, len(items))]]


def partition_by_category(dishes: Sequence[Dish]) -> dict[DishCategory, list[Dish]]:
    groups: dict[DishCategory, list[Dish]] = {c: [] for c in DishCategory}
    for dish in dishes:
        groups[dish.category].append(dish)
    return groups


def generate_combinations(
    dishes: Sequence[Dish],
    profile: PreferenceProfile,
    rng: np.random.Generator,
    trials: int = DEFAULT_TRIALS,
) -> list[Combination]:
    """
    Sample category-balanced dish sets from the eligible dishes.

    Each trial independently draws the preferred number of vegetables and
    proteins and, when wanted and available, one starch. Empty draws are
    skipped; duplicates are left for ``remove_duplicate_combinations``.
    """
    composition = profile.meal_composition or MealComposition()
    groups = partition_by_category(dishes)
    vegetables = groups[DishCategory.vegetable]
    proteins = groups[DishCategory.protein]
    starches = groups[DishCategory.starch]

    combinations: list[Combination] = []
    for _ in range(trials):
        combination: Combination = []
        combination.extend(random_select(vegetables, composition.preferred_vegetable_count, rng))
        combination.extend(random_select(proteins, composition.preferred_protein_count, rng))
        if composition.include_starch and starches:
            combination.extend(random_select(starches, 1, rng))

        if combination:
            combinations.append(combination)

    return combinations


def canonical_key(combination: Combination) -> str:
    return ",".join(sorted(d.id for d in combination))


def remove_duplicate_combinations(combinations: list[Combination]) -> list[Combination]:
    """Keep the first combination seen for each canonical key, in order."""
    seen: set[str] = set()
    unique: list[Combination] = []
    for combination in combinations:
        key = canonical_key(combination)
        if key not in seen:
            seen.add(key)
            unique.append(combination)
    return unique
