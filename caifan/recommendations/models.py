from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class DishCategory(str, Enum):
    vegetable = "vegetable"
    protein = "protein"
    starch = "starch"
    combination = "combination"


class GoalType(str, Enum):
    weight_loss = "weight-loss"
    muscle_gain = "muscle-gain"
    maintenance = "maintenance"
    balanced = "balanced"


# ---------------------------------------------------------------------------
# Catalog records
# ---------------------------------------------------------------------------


class Nutrition(_CamelModel):
    model_config = ConfigDict(frozen=True)

    calories: float = Field(..., ge=0)
    protein: float = Field(..., ge=0, description="grams")
    carbs: float = Field(..., ge=0, description="grams")
    fat: float = Field(..., ge=0, description="grams")
    fiber: float = Field(default=0.0, ge=0, description="grams")
    sodium: float = Field(default=0.0, ge=0, description="milligrams")


class Characteristics(_CamelModel):
    model_config = ConfigDict(frozen=True)

    is_vegetarian: bool = False
    is_vegan: bool = False
    is_gluten_free: bool = False
    spicy_level: float = Field(default=0, ge=0, le=5)


class Dish(_CamelModel):
    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1)
    name: str
    category: DishCategory
    subcategory: str | None = None
    nutrition: Nutrition
    characteristics: Characteristics = Field(default_factory=Characteristics)
    average_price: float = Field(..., ge=0)
    health_score: float = Field(default=50, ge=0, le=100)
    popularity_score: float = Field(default=0, ge=0, le=100)
    ingredients: list[str] = Field(default_factory=list)


# ---------------------------------------------------------------------------
# Preference profile
# ---------------------------------------------------------------------------


class DietaryRestrictions(_CamelModel):
    vegetarian: bool = False
    vegan: bool = False
    gluten_free: bool = False
    # No dish attribute backs this flag, so it never filters anything.
    halal: bool = False


class NutritionalGoals(_CamelModel):
    goal_type: GoalType = GoalType.balanced
    daily_calorie_target: float = Field(default=2000, ge=1000, le=5000)
    protein_target: float = Field(default=50, ge=0, le=300, description="grams per day")
    carb_target: float = Field(default=250, ge=0, le=500, description="grams per day")
    fat_target: float = Field(default=65, ge=0, le=150, description="grams per day")


class BudgetPreferences(_CamelModel):
    max_price_per_meal: float = Field(default=10, ge=0)
    prefer_budget_options: bool = False


class TastePreferences(_CamelModel):
    max_spicy_level: float = Field(default=5, ge=0, le=5)
    preferred_categories: list[DishCategory] = Field(default_factory=list)
    disliked_ingredients: list[str] = Field(default_factory=list)

    @field_validator("disliked_ingredients")
    @classmethod
    def _drop_blank_ingredients(cls, value: list[str]) -> list[str]:
        return [v.strip() for v in value if v and v.strip()]


class HealthPriorities(_CamelModel):
    prioritize_high_protein: bool = False
    prioritize_low_calorie: bool = False
    # Collected but not read by the scorer.
    prioritize_low_sodium: bool = False
    prioritize_high_fiber: bool = False


class MealComposition(_CamelModel):
    preferred_vegetable_count: int = Field(default=2, ge=0, le=5)
    preferred_protein_count: int = Field(default=1, ge=0, le=3)
    include_starch: bool = True


class PreferenceProfile(_CamelModel):
    """
    Consumer constraints and goals for one request.

    A section left as ``None`` switches off the filters and score terms it
    drives; ``meal_composition=None`` means the default 2 / 1 / starch split.
    """

    dietary_restrictions: DietaryRestrictions | None = None
    nutritional_goals: NutritionalGoals | None = None
    budget_preferences: BudgetPreferences | None = None
    taste_preferences: TastePreferences | None = None
    health_priorities: HealthPriorities | None = None
    meal_composition: MealComposition | None = None


DEFAULT_PROFILE = PreferenceProfile(
    dietary_restrictions=DietaryRestrictions(),
    nutritional_goals=NutritionalGoals(goal_type=GoalType.balanced, daily_calorie_target=2000),
    budget_preferences=BudgetPreferences(max_price_per_meal=10),
    taste_preferences=TastePreferences(max_spicy_level=5),
    meal_composition=MealComposition(
        preferred_vegetable_count=2, preferred_protein_count=1, include_starch=True,
    ),
)


# ---------------------------------------------------------------------------
# Engine output
# ---------------------------------------------------------------------------


class NutritionTotals(_CamelModel):
    total_calories: float = 0.0
    total_protein: float = 0.0
    total_carbs: float = 0.0
    total_fat: float = 0.0
    total_fiber: float = 0.0
    total_sodium: float = 0.0


class ScoreBreakdown(_CamelModel):
    calorie_alignment: float = 0.0
    protein_alignment: float = 0.0
    goal_bonus: float = 0.0
    health_priorities: float = 0.0
    budget: float = 0.0
    variety: float = 0.0
    health_score: float = 0.0
    popularity: float = 0.0

    @property
    def total(self) -> float:
        return sum(self.model_dump().values())


class Recommendation(_CamelModel):
    dishes: list[Dish]
    score: float
    score_breakdown: ScoreBreakdown
    nutrition_totals: NutritionTotals
    estimated_price: float


class MealNutrition(_CamelModel):
    calories: float
    protein: float
    carbs: float
    fat: float
    price: float


class CurrentMeal(_CamelModel):
    dishes: list[Dish]
    nutrition: MealNutrition


class MealOptimization(_CamelModel):
    current_meal: CurrentMeal
    suggestions: list[Dish]
    message: str


class MealGaps(_CamelModel):
    needs_vegetable: bool
    needs_protein: bool
    needs_starch: bool


class MealCompletion(_CamelModel):
    selected_dishes: list[Dish]
    suggestions: list[Dish]
    analysis: MealGaps


# ---------------------------------------------------------------------------
# HTTP request / response bodies
# ---------------------------------------------------------------------------


class RecommendationRequest(_CamelModel):
    preferences: PreferenceProfile | None = Field(
        default=None, description="Omit to use the default balanced profile"
    )
    exclude_dish_ids: list[str] = Field(default_factory=list)


class RecommendationResponse(_CamelModel):
    count: int
    recommendations: list[Recommendation]


class DishListResponse(_CamelModel):
    count: int
    total: int
    page: int
    pages: int
    dishes: list[Dish]


class DishSearchResponse(_CamelModel):
    query: str
    count: int
    dishes: list[Dish]


class SimilarDishesResponse(_CamelModel):
    dish_id: str
    count: int
    dishes: list[Dish]


class OptimizeMealRequest(_CamelModel):
    dish_ids: list[str] = Field(default_factory=list)
    goal: str | None = None
    max_price: float | None = Field(default=None, ge=0)


class CompleteMealRequest(_CamelModel):
    selected_dishes: list[str] = Field(default_factory=list)
    preferences: PreferenceProfile | None = None
