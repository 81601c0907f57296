"""
vps-back — Application Package Initializer
===========================================

What: Marks the `vps_back` directory as a Python package.
Who:  Imported by uvicorn (`uvicorn vps_back.main:app`), Alembic, and pytest.

Architecture Note:
    The backend keeps the same layering for all three resource areas
    (sources, stickers, Homebrew downloads):

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns, envelopes, auth
    ├─────────────────────────────────────┤
    │         Services (Business Logic)   │  ← Parsing, upserts, aggregation
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │        Database (Persistence)       │  ← Async SQLAlchemy sessions
    └─────────────────────────────────────┘
"""

__version__ = "0.3.0"
