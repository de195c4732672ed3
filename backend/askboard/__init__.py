"""
AskBoard Backend: Application Package Initializer
==================================================

What: Marks the `askboard` directory as a Python package.
Who:  Imported by uvicorn (`askboard.main:app`), Alembic and pytest.

Architecture Note:
    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │         Services (Business Logic)   │  ← aggregation, search, karma
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← SQLAlchemy ORM + Pydantic records
    ├─────────────────────────────────────┤
    │        Store (Persistence)          │  ← one pooled session per query
    └─────────────────────────────────────┘
"""

__version__ = "1.0.0"
