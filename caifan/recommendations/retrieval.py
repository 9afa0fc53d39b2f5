from __future__ import annotations

import logging
from typing import Any, Iterable, Mapping

import numpy as np
from pydantic import ValidationError

from .combinations import Combination, generate_combinations, remove_duplicate_combinations
from .config import DEFAULT_ENGINE_CONFIG, EngineConfig
from .data_store import CatalogProvider
from .errors import InvalidInput
from .filters import filter_eligible
from .models import PreferenceProfile, Recommendation, ScoreBreakdown
from .scoring import calculate_nutrition, calculate_price, round_half_up, score_breakdown

logger = logging.getLogger(__name__)


def coerce_profile(profile: PreferenceProfile | Mapping[str, Any]) -> PreferenceProfile:
    """Accept a ready profile or validate a raw mapping into one."""
    if isinstance(profile, PreferenceProfile):
        return profile
    if not isinstance(profile, Mapping):
        raise InvalidInput("Preference profile must be an object")
    try:
        return PreferenceProfile.model_validate(profile)
    except ValidationError as exc:
        raise InvalidInput(
            "Invalid preference profile",
            details={
                "errors": [
                    {"loc": list(e["loc"]), "msg": e["msg"], "type": e["type"]}
                    for e in exc.errors()
                ]
            },
        ) from exc


def _to_recommendation(combination: Combination, profile: PreferenceProfile) -> Recommendation:
    breakdown = score_breakdown(combination, profile)
    return Recommendation(
        dishes=list(combination),
        score=round_half_up(breakdown.total),
        score_breakdown=ScoreBreakdown(
            **{k: round_half_up(v) for k, v in breakdown.model_dump().items()}
        ),
        nutrition_totals=calculate_nutrition(combination),
        estimated_price=calculate_price(combination),
    )


def rank_recommendations(
    recommendations: list[Recommendation], top_k: int
) -> list[Recommendation]:
    """Stable descending sort by score; ties keep generation order."""
    return sorted(recommendations, key=lambda r: r.score, reverse=True)[:top_k]


def generate_recommendations(
    profile: PreferenceProfile | Mapping[str, Any],
    exclude_dish_ids: Iterable[str],
    catalog: CatalogProvider,
    rng: np.random.Generator | None = None,
    config: EngineConfig = DEFAULT_ENGINE_CONFIG,
) -> list[Recommendation]:
    """
    Recommend up to ``config.top_k`` dish combinations for ``profile``.

    Pipeline: catalog snapshot -> dietary/taste filter -> random sampling ->
    de-duplication -> scoring -> ranking. No eligible dishes is not an error;
    the result is simply empty.
    """
    resolved = coerce_profile(profile)
    rng = rng if rng is not None else np.random.default_rng(config.random_seed)

    # --- Catalog snapshot ---
    dishes = catalog.fetch_eligible_catalog(list(exclude_dish_ids or []))

    # --- Filters ---
    eligible = filter_eligible(dishes, resolved)
    if not eligible:
        logger.debug("No eligible dishes out of %d in catalog", len(dishes))
        return []

    # --- Sampling + de-duplication ---
    sampled = generate_combinations(eligible, resolved, rng, trials=config.trials)
    unique = remove_duplicate_combinations(sampled)

    # --- Scoring + ranking ---
    scored = [_to_recommendation(c, resolved) for c in unique]
    ranked = rank_recommendations(scored, config.top_k)

    logger.debug(
        "Recommendations: %d eligible, %d sampled, %d unique, %d returned",
        len(eligible), len(sampled), len(unique), len(ranked),
    )
    return ranked
