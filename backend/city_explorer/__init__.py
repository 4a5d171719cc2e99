"""
City Explorer Backend — Application Package
============================================

What: Marks `city_explorer` as a Python package.
Who:  Imported by uvicorn (`city_explorer.main:app`), Alembic and pytest.

Layout:

    ┌─────────────────────────────────────┐
    │        Routes (Query Gateway)       │  ← query params in, JSON out
    ├─────────────────────────────────────┤
    │  Services (resolver, explorer,      │  ← cache-aside lookup,
    │  provider client, normalizers)      │    provider calls, mapping
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │        Database (Persistence)       │  ← Async SQLAlchemy sessions
    └─────────────────────────────────────┘

Only the `location` table is persisted. Weather, parks, movies and
restaurants are fetched and normalized per request.
"""

__version__ = "1.0.0"
