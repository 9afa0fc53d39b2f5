"""
Multi-factor objective for dish combinations.

Every term is additive and the total is unbounded in both directions: an
over-budget meal can score below zero. Scoring reads exact sums; rounding
only happens on the values handed back to callers.
"""
from __future__ import annotations

import math
from typing import Sequence

from .models import (
    Dish,
    GoalType,
    NutritionTotals,
    PreferenceProfile,
    ScoreBreakdown,
)

MEALS_PER_DAY = 3


def round_half_up(value: float, digits: int = 1) -> float:
    """Round to ``digits`` decimals with halves going up (15.25 -> 15.3)."""
    scale = 10 ** digits
    return math.floor(value * scale + 0.5) / scale


def sum_nutrition(combination: Sequence[Dish]) -> NutritionTotals:
    """Exact nutrient sums across the combination."""
    totals = NutritionTotals()
    for dish in combination:
        n = dish.nutrition
        totals.total_calories += n.calories
        totals.total_protein += n.protein
        totals.total_carbs += n.carbs
        totals.total_fat += n.fat
        totals.total_fiber += n.fiber
        totals.total_sodium += n.sodium
    return totals


def calculate_nutrition(combination: Sequence[Dish]) -> NutritionTotals:
    """Nutrient sums rounded to one decimal place for output."""
    exact = sum_nutrition(combination)
    return NutritionTotals(**{k: round_half_up(v) for k, v in exact.model_dump().items()})


def sum_price(combination: Sequence[Dish]) -> float:
    return sum(d.average_price for d in combination)


def calculate_price(combination: Sequence[Dish]) -> float:
    return round_half_up(sum_price(combination), 2)


def score_breakdown(combination: Sequence[Dish], profile: PreferenceProfile) -> ScoreBreakdown:
    """Compute each additive score term for ``combination`` under ``profile``."""
    breakdown = ScoreBreakdown()
    if not combination:
        return breakdown

    nutrition = sum_nutrition(combination)

    # --- Nutritional goals ---
    goals = profile.nutritional_goals
    if goals is not None:
        calorie_target = goals.daily_calorie_target / MEALS_PER_DAY
        calorie_diff = abs(nutrition.total_calories - calorie_target)
        breakdown.calorie_alignment = max(0.0, 30 - calorie_diff / 50)

        protein_target = goals.protein_target / MEALS_PER_DAY
        protein_diff = abs(nutrition.total_protein - protein_target)
        breakdown.protein_alignment = max(0.0, 20 - protein_diff)

        # Goal bonuses compare against the per-meal targets.
        if goals.goal_type == GoalType.weight_loss:
            if nutrition.total_calories < calorie_target:
                breakdown.goal_bonus += 10
            if nutrition.total_fiber > 5:
                breakdown.goal_bonus += 5
        elif goals.goal_type == GoalType.muscle_gain:
            if nutrition.total_protein > protein_target:
                breakdown.goal_bonus += 15

    # --- Health priorities ---
    # prioritize_low_sodium is not scored.
    priorities = profile.health_priorities
    if priorities is not None:
        if priorities.prioritize_high_protein and nutrition.total_protein > 20:
            breakdown.health_priorities += 10
        if priorities.prioritize_low_calorie and nutrition.total_calories < 500:
            breakdown.health_priorities += 10
        if priorities.prioritize_high_fiber and nutrition.total_fiber > 7:
            breakdown.health_priorities += 10

    # --- Budget ---
    budget = profile.budget_preferences
    if budget is not None:
        total_price = sum_price(combination)
        if total_price <= budget.max_price_per_meal:
            breakdown.budget = 15
        else:
            breakdown.budget = -(total_price - budget.max_price_per_meal) * 2

    # --- Variety, health and popularity ---
    breakdown.variety = len({d.category for d in combination}) * 5
    breakdown.health_score = sum(d.health_score for d in combination) / len(combination) / 5
    breakdown.popularity = sum(d.popularity_score for d in combination) / len(combination) / 10

    return breakdown


def score_combination(combination: Sequence[Dish], profile: PreferenceProfile) -> float:
    return round_half_up(score_breakdown(combination, profile).total)
