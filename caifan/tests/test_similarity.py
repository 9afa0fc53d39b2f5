import pytest

from caifan.recommendations.data_store import DataFrameCatalog
from caifan.recommendations.errors import DishNotFound, InvalidInput
from caifan.recommendations.models import Characteristics, Dish, Nutrition
from caifan.recommendations.similarity import calculate_similarity, get_similar_dishes


def _dish(dish_id, category, subcategory, calories, protein, vegetarian=False, vegan=False):
    return Dish(
        id=dish_id,
        name=f"Dish {dish_id}",
        category=category,
        subcategory=subcategory,
        nutrition=Nutrition(calories=calories, protein=protein, carbs=10, fat=5),
        characteristics=Characteristics(is_vegetarian=vegetarian, is_vegan=vegan),
        average_price=2.5,
    )


X = _dish("X", "protein", "chicken", calories=200, protein=20)
Y = _dish("Y", "protein", "chicken", calories=210, protein=19)
Z = _dish("Z", "protein", "fish", calories=400, protein=5)
GREENS = _dish("G", "vegetable", "leafy-green", calories=200, protein=20, vegetarian=True, vegan=True)

CATALOG = DataFrameCatalog.from_dishes([Z, X, GREENS, Y])


def test_identical_dish_scores_maximum():
    assert calculate_similarity(X, X) == 100


def test_similarity_components():
    assert calculate_similarity(X, Y) == pytest.approx(98.5)
    assert calculate_similarity(X, Z) == pytest.approx(55.0)
    # Different category, subcategory and dietary flags.
    assert calculate_similarity(X, GREENS) == pytest.approx(35.0)


def test_returns_only_same_category_sorted_by_similarity():
    result = get_similar_dishes("X", 3, CATALOG)
    assert [d.id for d in result] == ["Y", "Z"]


def test_limit_truncates_results():
    result = get_similar_dishes("X", 1, CATALOG)
    assert [d.id for d in result] == ["Y"]


def test_candidates_capped_before_scoring():
    close = _dish("close", "protein", "chicken", calories=200, protein=20)
    far = [_dish(f"far{i}", "protein", "pork", calories=600, protein=2) for i in range(2)]
    catalog = DataFrameCatalog.from_dishes([X] + far + [close])

    # limit 1 fetches at most 2 candidates, so "close" is never considered.
    result = get_similar_dishes("X", 1, catalog)
    assert [d.id for d in result] == ["far0"]


def test_unknown_reference_raises_not_found():
    with pytest.raises(DishNotFound) as exc_info:
        get_similar_dishes("missing", 5, CATALOG)
    assert exc_info.value.dish_id == "missing"


def test_reference_alone_in_category_returns_empty():
    assert get_similar_dishes("G", 5, CATALOG) == []


@pytest.mark.parametrize("dish_id,limit", [("", 5), ("   ", 5), ("X", 0)])
def test_invalid_arguments(dish_id, limit):
    with pytest.raises(InvalidInput):
        get_similar_dishes(dish_id, limit, CATALOG)
