from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, Protocol

import pandas as pd
from pydantic import ValidationError

from ..data_ingestion.config import catalog_path
from ..data_ingestion.ingest import CANONICAL_COLUMNS, read_dish_csv
from .errors import CatalogUnavailable, DishNotFound, InvalidInput
from .models import Characteristics, Dish, DishCategory, Nutrition

logger = logging.getLogger(__name__)

_INGREDIENT_SEP = "|"


class CatalogProvider(Protocol):
    """Read-only dish source consulted once per request."""

    def fetch_eligible_catalog(self, exclude_ids: Iterable[str] = ()) -> list[Dish]: ...

    def fetch_dish_by_id(self, dish_id: str) -> Dish: ...

    def fetch_dishes_by_category(
        self,
        category: DishCategory | str,
        exclude_id: str | None = None,
        limit: int | None = None,
    ) -> list[Dish]: ...

    def fetch_dishes_by_ids(self, dish_ids: Iterable[str]) -> list[Dish]: ...


def _split_ingredients(raw: object) -> list[str]:
    if not isinstance(raw, str):
        return []
    return [i.strip() for i in raw.split(_INGREDIENT_SEP) if i.strip()]


def _flag(value: object) -> bool:
    return bool(value) if pd.notna(value) else False


def _row_to_dish(row: pd.Series) -> Dish:
    subcategory = row.get("subcategory")
    return Dish(
        id=str(row["id"]),
        name=str(row["name"]),
        category=row["category"],
        subcategory=str(subcategory) if pd.notna(subcategory) and subcategory != "" else None,
        nutrition=Nutrition(
            calories=float(row["calories"]),
            protein=float(row["protein"]),
            carbs=float(row["carbohydrates"]),
            fat=float(row["fat"]),
            fiber=float(row["fiber"]) if pd.notna(row["fiber"]) else 0.0,
            sodium=float(row["sodium"]) if pd.notna(row["sodium"]) else 0.0,
        ),
        characteristics=Characteristics(
            is_vegetarian=_flag(row["is_vegetarian"]),
            is_vegan=_flag(row["is_vegan"]),
            is_gluten_free=_flag(row["is_gluten_free"]),
            spicy_level=float(row["spicy_level"]),
        ),
        average_price=float(row["average_price"]),
        health_score=float(row["health_score"]) if pd.notna(row["health_score"]) else 50.0,
        popularity_score=float(row["popularity_score"]) if pd.notna(row["popularity_score"]) else 0.0,
        ingredients=_split_ingredients(row.get("ingredients")),
    )


def _dish_to_row(dish: Dish) -> dict:
    return {
        "id": dish.id,
        "name": dish.name,
        "category": dish.category.value,
        "subcategory": dish.subcategory or "",
        "calories": dish.nutrition.calories,
        "protein": dish.nutrition.protein,
        "carbohydrates": dish.nutrition.carbs,
        "fat": dish.nutrition.fat,
        "fiber": dish.nutrition.fiber,
        "sodium": dish.nutrition.sodium,
        "is_vegetarian": dish.characteristics.is_vegetarian,
        "is_vegan": dish.characteristics.is_vegan,
        "is_gluten_free": dish.characteristics.is_gluten_free,
        "spicy_level": dish.characteristics.spicy_level,
        "average_price": dish.average_price,
        "health_score": dish.health_score,
        "popularity_score": dish.popularity_score,
        "ingredients": _INGREDIENT_SEP.join(dish.ingredients),
    }


class DataFrameCatalog:
    """
    Catalog snapshot backed by a pandas DataFrame in ``CANONICAL_COLUMNS``.

    Rows are converted to ``Dish`` values once, at construction; queries
    filter the frame and hand back those values in catalog order.
    """

    def __init__(self, df: pd.DataFrame) -> None:
        missing = [c for c in CANONICAL_COLUMNS if c not in df.columns]
        if missing:
            raise CatalogUnavailable(
                f"Catalog is missing columns: {', '.join(missing)}",
                details={"missing_columns": missing},
            )

        self._df = df.reset_index(drop=True).copy()
        self._df["id"] = self._df["id"].astype(str)

        try:
            self._dishes = [_row_to_dish(row) for _, row in self._df.iterrows()]
        except (ValidationError, ValueError, TypeError) as exc:
            raise CatalogUnavailable("Catalog contains malformed dish rows") from exc

    @classmethod
    def from_dishes(cls, dishes: Iterable[Dish]) -> "DataFrameCatalog":
        rows = [_dish_to_row(d) for d in dishes]
        return cls(pd.DataFrame(rows, columns=CANONICAL_COLUMNS))

    def __len__(self) -> int:
        return len(self._dishes)

    @property
    def frame(self) -> pd.DataFrame:
        return self._df

    def _select(self, mask: pd.Series, limit: int | None = None) -> list[Dish]:
        positions = self._df.index[mask.to_numpy()].tolist()
        if limit is not None:
            positions = positions[:limit]
        return [self._dishes[p] for p in positions]

    def fetch_eligible_catalog(self, exclude_ids: Iterable[str] = ()) -> list[Dish]:
        excluded = {str(i) for i in exclude_ids}
        return self._select(~self._df["id"].isin(excluded))

    def fetch_dish_by_id(self, dish_id: str) -> Dish:
        matches = self._select(self._df["id"] == str(dish_id), limit=1)
        if not matches:
            raise DishNotFound(str(dish_id))
        return matches[0]

    def fetch_dishes_by_category(
        self,
        category: DishCategory | str,
        exclude_id: str | None = None,
        limit: int | None = None,
    ) -> list[Dish]:
        value = category.value if isinstance(category, DishCategory) else str(category)
        mask = self._df["category"] == value
        if exclude_id is not None:
            mask = mask & (self._df["id"] != str(exclude_id))
        return self._select(mask, limit=limit)

    def fetch_dishes_by_ids(self, dish_ids: Iterable[str]) -> list[Dish]:
        wanted = {str(i) for i in dish_ids}
        return self._select(self._df["id"].isin(wanted))

    # --- Browsing ---

    def query_dishes(
        self,
        category: DishCategory | str | None = None,
        subcategory: str | None = None,
        vegetarian: bool = False,
        vegan: bool = False,
        min_protein: float | None = None,
        max_calories: float | None = None,
    ) -> list[Dish]:
        """Dishes matching every given filter, ordered by name."""
        df = self._df
        mask = pd.Series(True, index=df.index)
        if category is not None:
            value = category.value if isinstance(category, DishCategory) else str(category)
            mask &= df["category"] == value
        if subcategory:
            mask &= df["subcategory"] == subcategory
        if vegetarian:
            mask &= df["is_vegetarian"].eq(True)
        if vegan:
            mask &= df["is_vegan"].eq(True)
        if min_protein is not None:
            mask &= df["protein"] >= min_protein
        if max_calories is not None:
            mask &= df["calories"] <= max_calories

        ordered = df.loc[mask].sort_values("name", kind="stable").index
        return [self._dishes[p] for p in ordered]

    def search_dishes(self, query: str, limit: int | None = None) -> list[Dish]:
        """Case-insensitive substring match on dish name or ingredients."""
        needle = query.strip()
        if not needle:
            raise InvalidInput("Search query is required")
        df = self._df
        mask = df["name"].astype(str).str.contains(needle, case=False, regex=False) | df[
            "ingredients"
        ].fillna("").astype(str).str.contains(needle, case=False, regex=False)
        return self._select(mask, limit=limit)


def load_catalog(path: Path | None = None) -> DataFrameCatalog:
    """Read the processed catalog CSV into a ``DataFrameCatalog``."""
    source = path or catalog_path()
    try:
        df = read_dish_csv(source)
    except (OSError, ValueError) as exc:
        logger.warning("Dish catalog at %s could not be read", source, exc_info=True)
        raise CatalogUnavailable(
            f"Dish catalog could not be read from {source}",
            details={"path": str(source)},
        ) from exc
    return DataFrameCatalog(df)


_catalog: DataFrameCatalog | None = None


def get_catalog() -> DataFrameCatalog:
    """Return the process-wide catalog, loading it on first call."""
    global _catalog
    if _catalog is None:
        _catalog = load_catalog()
    return _catalog


def reset_catalog() -> None:
    global _catalog
    _catalog = None
