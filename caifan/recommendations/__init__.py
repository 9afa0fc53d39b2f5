"""
Meal recommendation engine.

Responsibilities:
- Filter the dish catalog by dietary restrictions and taste preferences.
- Sample category-balanced dish combinations and drop duplicates.
- Score combinations with a multi-factor heuristic and keep the best ones.
- Rank dishes by similarity to a reference dish.
"""
