from caifan.recommendations.filters import (
    filter_by_dietary_restrictions,
    filter_by_taste_preferences,
    filter_eligible,
)
from caifan.recommendations.models import (
    Characteristics,
    DietaryRestrictions,
    Dish,
    Nutrition,
    PreferenceProfile,
    TastePreferences,
)


def _dish(dish_id, vegan=False, vegetarian=False, gluten_free=False, spicy=0, ingredients=()):
    return Dish(
        id=dish_id,
        name=f"Dish {dish_id}",
        category="vegetable",
        nutrition=Nutrition(calories=100, protein=5, carbs=10, fat=2),
        characteristics=Characteristics(
            is_vegan=vegan,
            is_vegetarian=vegetarian,
            is_gluten_free=gluten_free,
            spicy_level=spicy,
        ),
        average_price=1.5,
        ingredients=list(ingredients),
    )


CATALOG = [
    _dish("vegan", vegan=True, vegetarian=True, gluten_free=True),
    _dish("veggie", vegetarian=True),
    _dish("meat", spicy=4, ingredients=["Minced Pork", "chili"]),
]


def test_no_restrictions_keeps_everything():
    assert filter_eligible(CATALOG, PreferenceProfile()) == CATALOG


def test_vegan_filter():
    profile = PreferenceProfile(dietary_restrictions=DietaryRestrictions(vegan=True))
    result = filter_by_dietary_restrictions(CATALOG, profile)
    assert [d.id for d in result] == ["vegan"]


def test_vegetarian_filter():
    profile = PreferenceProfile(dietary_restrictions=DietaryRestrictions(vegetarian=True))
    result = filter_by_dietary_restrictions(CATALOG, profile)
    assert [d.id for d in result] == ["vegan", "veggie"]


def test_gluten_free_filter():
    profile = PreferenceProfile(dietary_restrictions=DietaryRestrictions(gluten_free=True))
    result = filter_by_dietary_restrictions(CATALOG, profile)
    assert [d.id for d in result] == ["vegan"]


def test_halal_does_not_filter():
    profile = PreferenceProfile(dietary_restrictions=DietaryRestrictions(halal=True))
    assert filter_by_dietary_restrictions(CATALOG, profile) == CATALOG


def test_spicy_level_filter():
    profile = PreferenceProfile(taste_preferences=TastePreferences(max_spicy_level=3))
    result = filter_by_taste_preferences(CATALOG, profile)
    assert "meat" not in [d.id for d in result]


def test_spicy_level_equal_to_max_is_kept():
    profile = PreferenceProfile(taste_preferences=TastePreferences(max_spicy_level=4))
    result = filter_by_taste_preferences(CATALOG, profile)
    assert "meat" in [d.id for d in result]


def test_disliked_ingredient_is_case_insensitive_substring():
    profile = PreferenceProfile(
        taste_preferences=TastePreferences(disliked_ingredients=["PORK"])
    )
    result = filter_by_taste_preferences(CATALOG, profile)
    assert [d.id for d in result] == ["vegan", "veggie"]


def test_blank_disliked_ingredients_are_ignored():
    profile = PreferenceProfile(
        taste_preferences=TastePreferences(disliked_ingredients=["", "   "])
    )
    assert profile.taste_preferences.disliked_ingredients == []
    assert filter_by_taste_preferences(CATALOG, profile) == CATALOG


def test_filter_can_return_empty():
    profile = PreferenceProfile(dietary_restrictions=DietaryRestrictions(vegan=True))
    assert filter_eligible(CATALOG[1:], profile) == []
