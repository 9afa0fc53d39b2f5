"""
Dish catalog ingestion package.

Responsibilities:
- Read the raw dish list shipped with the project.
- Normalize it into the canonical Dish schema, filling in health scores.
- Persist the processed catalog locally for the recommendation engine.
"""
