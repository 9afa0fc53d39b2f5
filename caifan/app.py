from __future__ import annotations

import logging
import math

from fastapi import Depends, FastAPI, Query, Request
from fastapi.responses import JSONResponse

from .recommendations.data_store import DataFrameCatalog, get_catalog
from .recommendations.errors import (
    CatalogUnavailable,
    DishNotFound,
    InvalidInput,
    RecommendationError,
)
from .recommendations.meal_builder import complete_meal, optimize_meal
from .recommendations.models import (
    DEFAULT_PROFILE,
    CompleteMealRequest,
    Dish,
    DishCategory,
    DishListResponse,
    DishSearchResponse,
    MealCompletion,
    MealOptimization,
    OptimizeMealRequest,
    RecommendationRequest,
    RecommendationResponse,
    SimilarDishesResponse,
)
from .recommendations.retrieval import generate_recommendations
from .recommendations.similarity import get_similar_dishes

logger = logging.getLogger(__name__)

app = FastAPI(title="Cai Fan Meal Recommendation API", version="1.0.0")

_STATUS_BY_ERROR: dict[type[RecommendationError], int] = {
    InvalidInput: 422,
    DishNotFound: 404,
    CatalogUnavailable: 503,
}


@app.exception_handler(RecommendationError)
async def handle_recommendation_error(request: Request, exc: RecommendationError) -> JSONResponse:
    status_code = _STATUS_BY_ERROR.get(type(exc), 500)
    if status_code >= 500:
        logger.warning("%s on %s: %s", exc.error_code, request.url.path, exc.message)
    return JSONResponse(
        status_code=status_code,
        content={"detail": exc.message, "error_code": exc.error_code, "details": exc.details},
    )


# ── Public endpoints ─────────────────────────────────────────────────────


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


@app.get("/metadata")
def metadata(catalog: DataFrameCatalog = Depends(get_catalog)) -> dict:
    df = catalog.frame
    subcategories = sorted(
        s for s in df["subcategory"].dropna().astype(str).unique().tolist() if s
    )
    return {
        "categories": [c.value for c in DishCategory],
        "subcategories": subcategories,
        "total_dishes": len(catalog),
    }


@app.get("/dishes", response_model=DishListResponse)
def list_dishes(
    category: DishCategory | None = None,
    subcategory: str | None = None,
    vegetarian: bool = False,
    vegan: bool = False,
    min_protein: float | None = Query(default=None, alias="minProtein", ge=0),
    max_calories: float | None = Query(default=None, alias="maxCalories", ge=0),
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=50, ge=1, le=200),
    catalog: DataFrameCatalog = Depends(get_catalog),
) -> DishListResponse:
    matches = catalog.query_dishes(
        category=category,
        subcategory=subcategory,
        vegetarian=vegetarian,
        vegan=vegan,
        min_protein=min_protein,
        max_calories=max_calories,
    )
    start = (page - 1) * limit
    dishes = matches[start : start + limit]
    return DishListResponse(
        count=len(dishes),
        total=len(matches),
        page=page,
        pages=math.ceil(len(matches) / limit),
        dishes=dishes,
    )


@app.get("/dishes/search", response_model=DishSearchResponse)
def search_dishes(
    q: str = "",
    limit: int = Query(default=20, ge=1, le=100),
    catalog: DataFrameCatalog = Depends(get_catalog),
) -> DishSearchResponse:
    dishes = catalog.search_dishes(q, limit=limit)
    return DishSearchResponse(query=q, count=len(dishes), dishes=dishes)


@app.get("/dishes/{dish_id}", response_model=Dish)
def dish_detail(dish_id: str, catalog: DataFrameCatalog = Depends(get_catalog)) -> Dish:
    return catalog.fetch_dish_by_id(dish_id)


# ── Recommendation endpoints ─────────────────────────────────────────────


@app.post("/recommendations", response_model=RecommendationResponse)
def recommendations(
    body: RecommendationRequest,
    catalog: DataFrameCatalog = Depends(get_catalog),
) -> RecommendationResponse:
    profile = body.preferences or DEFAULT_PROFILE
    items = generate_recommendations(profile, body.exclude_dish_ids, catalog)
    return RecommendationResponse(count=len(items), recommendations=items)


@app.get("/recommendations/similar/{dish_id}", response_model=SimilarDishesResponse)
def similar_dishes(
    dish_id: str,
    limit: int = Query(default=5, ge=1, le=50),
    catalog: DataFrameCatalog = Depends(get_catalog),
) -> SimilarDishesResponse:
    dishes = get_similar_dishes(dish_id, limit, catalog)
    return SimilarDishesResponse(dish_id=dish_id, count=len(dishes), dishes=dishes)


@app.post("/recommendations/optimize", response_model=MealOptimization)
def optimize(
    body: OptimizeMealRequest,
    catalog: DataFrameCatalog = Depends(get_catalog),
) -> MealOptimization:
    return optimize_meal(body.dish_ids, body.goal, body.max_price, catalog)


@app.post("/recommendations/complete-meal", response_model=MealCompletion)
def complete(
    body: CompleteMealRequest,
    catalog: DataFrameCatalog = Depends(get_catalog),
) -> MealCompletion:
    return complete_meal(body.selected_dishes, body.preferences, catalog)
