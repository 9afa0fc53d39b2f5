from __future__ import annotations

import logging

from .config import DEFAULT_ENGINE_CONFIG, EngineConfig
from .data_store import CatalogProvider
from .errors import InvalidInput
from .models import Dish

logger = logging.getLogger(__name__)


def calculate_similarity(reference: Dish, candidate: Dish) -> float:
    """
    Heuristic closeness of ``candidate`` to ``reference``.

    Category and subcategory matches dominate, followed by calorie and protein
    proximity and matching vegetarian / vegan flags.
    """
    similarity = 0.0

    if reference.category == candidate.category:
        similarity += 30
    if reference.subcategory == candidate.subcategory:
        similarity += 20

    calories_diff = abs(reference.nutrition.calories - candidate.nutrition.calories)
    similarity += max(0.0, 20 - calories_diff / 20)

    protein_diff = abs(reference.nutrition.protein - candidate.nutrition.protein)
    similarity += max(0.0, 15 - protein_diff)

    ref_traits = reference.characteristics
    cand_traits = candidate.characteristics
    if ref_traits.is_vegetarian == cand_traits.is_vegetarian:
        similarity += 10
    if ref_traits.is_vegan == cand_traits.is_vegan:
        similarity += 5

    return similarity


def get_similar_dishes(
    dish_id: str,
    limit: int,
    catalog: CatalogProvider,
    config: EngineConfig = DEFAULT_ENGINE_CONFIG,
) -> list[Dish]:
    """
    Return up to ``limit`` same-category dishes, most similar first.

    Raises ``DishNotFound`` when ``dish_id`` is not in the catalog.
    """
    if not dish_id or not str(dish_id).strip():
        raise InvalidInput("A reference dish id is required")
    if limit < 1:
        raise InvalidInput("limit must be at least 1", details={"limit": limit})

    reference = catalog.fetch_dish_by_id(dish_id)
    candidates = catalog.fetch_dishes_by_category(
        reference.category,
        exclude_id=reference.id,
        limit=limit * config.similar_candidate_factor,
    )

    scored = [(dish, calculate_similarity(reference, dish)) for dish in candidates]
    scored.sort(key=lambda item: item[1], reverse=True)

    logger.debug(
        "Similarity for %s: %d candidates, returning %d",
        reference.id, len(candidates), min(limit, len(scored)),
    )
    return [dish for dish, _ in scored[:limit]]
