from __future__ import annotations

import logging
from pathlib import Path
from typing import List

import pandas as pd

from .config import DEFAULT_INGESTION_CONFIG, IngestionConfig

logger = logging.getLogger(__name__)


CANONICAL_COLUMNS: List[str] = [
    "id",
    "name",
    "category",
    "subcategory",
    "calories",
    "protein",
    "carbohydrates",
    "fat",
    "fiber",
    "sodium",
    "is_vegetarian",
    "is_vegan",
    "is_gluten_free",
    "spicy_level",
    "average_price",
    "health_score",
    "popularity_score",
    "ingredients",
]

REQUIRED_COLUMNS: List[str] = [
    "id",
    "name",
    "category",
    "calories",
    "protein",
    "carbohydrates",
    "fat",
    "average_price",
]

# Defaults for optional columns absent from the raw file.
_OPTIONAL_DEFAULTS: dict[str, object] = {
    "subcategory": "",
    "fiber": 0.0,
    "sodium": 0.0,
    "is_vegetarian": False,
    "is_vegan": False,
    "is_gluten_free": False,
    "spicy_level": 0,
    "popularity_score": 0,
    "ingredients": "",
}


def compute_health_score(
    calories: float,
    protein: float,
    fiber: float,
    fat: float,
    sodium: float,
    is_vegan: bool = False,
    is_vegetarian: bool = False,
) -> int:
    """
    Heuristic 0-100 health score for one serving.

    Lower calories, fat and sodium and higher protein and fiber score better,
    with a bonus for vegan (or, failing that, vegetarian) dishes.
    """
    score = 50

    if calories < 100:
        score += 10
    elif calories < 200:
        score += 5
    elif calories > 300:
        score -= 10

    if protein > 15:
        score += 15
    elif protein > 10:
        score += 10
    elif protein > 5:
        score += 5

    if fiber > 5:
        score += 10
    elif fiber > 3:
        score += 5

    if fat > 20:
        score -= 10
    elif fat < 5:
        score += 5

    if sodium > 800:
        score -= 10
    elif sodium < 300:
        score += 5

    if is_vegan:
        score += 10
    elif is_vegetarian:
        score += 5

    return max(0, min(100, score))


def _health_score_for_row(row: pd.Series) -> int:
    return compute_health_score(
        calories=float(row["calories"]),
        protein=float(row["protein"]),
        fiber=float(row["fiber"]),
        fat=float(row["fat"]),
        sodium=float(row["sodium"]),
        is_vegan=bool(row["is_vegan"]),
        is_vegetarian=bool(row["is_vegetarian"]),
    )


def read_dish_csv(path: Path) -> pd.DataFrame:
    return pd.read_csv(
        path,
        true_values=["true", "True", "TRUE"],
        false_values=["false", "False", "FALSE"],
    )


def normalize_dishes(raw: pd.DataFrame) -> pd.DataFrame:
    """Map a raw dish table onto ``CANONICAL_COLUMNS``."""
    missing = [c for c in REQUIRED_COLUMNS if c not in raw.columns]
    if missing:
        raise ValueError(f"Raw dish data is missing columns: {', '.join(missing)}")

    df = raw.copy()
    for column, default in _OPTIONAL_DEFAULTS.items():
        if column not in df.columns:
            df[column] = default
        else:
            df[column] = df[column].fillna(default)

    for column in ("is_vegetarian", "is_vegan", "is_gluten_free"):
        df[column] = df[column].astype(bool)

    computed = df.apply(_health_score_for_row, axis=1)
    if "health_score" in df.columns:
        df["health_score"] = df["health_score"].fillna(computed)
    else:
        df["health_score"] = computed

    df["id"] = df["id"].astype(str).str.strip()
    df["category"] = df["category"].astype(str).str.strip().str.lower()

    return df[CANONICAL_COLUMNS]


def run_ingestion(config: IngestionConfig = DEFAULT_INGESTION_CONFIG) -> Path:
    """
    Execute the catalog ingestion pipeline.

    Steps:
    - Read the raw dish CSV.
    - Map raw fields into the canonical Dish schema.
    - Persist the processed catalog as CSV for the engine.
    """
    config.processed_data_dir.mkdir(parents=True, exist_ok=True)

    canonical = normalize_dishes(read_dish_csv(config.raw_path))

    output_path = config.processed_path
    canonical.to_csv(output_path, index=False)
    logger.info("Wrote %d dishes to %s", len(canonical), output_path)
    return output_path


if __name__ == "__main__":
    path = run_ingestion()
    print(f"Ingestion complete. Processed catalog saved to: {path}")
