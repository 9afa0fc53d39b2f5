from pathlib import Path

import pandas as pd
import pytest

from caifan.data_ingestion.config import IngestionConfig
from caifan.data_ingestion.ingest import (
    CANONICAL_COLUMNS,
    compute_health_score,
    normalize_dishes,
    run_ingestion,
)
from caifan.recommendations.data_store import load_catalog


def test_run_ingestion_creates_non_empty_processed_file(tmp_path: Path):
    """
    End-to-end ingestion from the shipped raw dish list.

    Uses a temporary output directory so we don't overwrite the shipped catalog.
    """
    cfg = IngestionConfig(processed_data_dir=tmp_path / "processed")

    output_path = run_ingestion(config=cfg)

    assert output_path.is_file(), "Processed CSV should be created"

    df = pd.read_csv(output_path)
    assert not df.empty, "Processed catalog should not be empty"
    assert list(df.columns) == CANONICAL_COLUMNS
    assert df["health_score"].notna().all()


def test_ingested_catalog_matches_shipped_catalog(tmp_path: Path):
    cfg = IngestionConfig(processed_data_dir=tmp_path / "processed")
    fresh = load_catalog(run_ingestion(config=cfg))
    shipped = load_catalog()
    assert fresh.fetch_eligible_catalog() == shipped.fetch_eligible_catalog()


def test_health_score_examples():
    # Stir-fried bok choy: light, low fat, low sodium, vegan.
    assert compute_health_score(45, 2.5, 2.5, 1.2, 250, is_vegan=True, is_vegetarian=True) == 80
    # Braised pork belly: heavy and fatty.
    assert compute_health_score(320, 15, 0.5, 24, 680) == 40


def test_health_score_is_clamped():
    assert compute_health_score(50, 30, 10, 1, 10, is_vegan=True) == 100
    # Lowest score the heuristic can reach.
    assert compute_health_score(900, 0, 0, 50, 2000) == 20


def test_normalize_fills_optional_columns():
    raw = pd.DataFrame([{
        "id": " x1 ",
        "name": "Plain Rice",
        "category": "Starch",
        "calories": 130,
        "protein": 2.7,
        "carbohydrates": 28,
        "fat": 0.3,
        "average_price": 0.5,
    }])

    df = normalize_dishes(raw)

    row = df.iloc[0]
    assert list(df.columns) == CANONICAL_COLUMNS
    assert row["id"] == "x1"
    assert row["category"] == "starch"
    assert row["fiber"] == 0
    assert row["popularity_score"] == 0
    # 50 + 5 (calories) + 5 (fat) + 5 (sodium)
    assert row["health_score"] == 65


def test_normalize_rejects_missing_required_columns():
    with pytest.raises(ValueError, match="average_price"):
        normalize_dishes(pd.DataFrame([{"id": "1", "name": "x", "category": "starch",
                                        "calories": 1, "protein": 1, "carbohydrates": 1, "fat": 1}]))
