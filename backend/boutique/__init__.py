"""
Boutique Backend — Application Package Initializer
===================================================

What: Marks the `boutique` directory as a Python package.
Who:  Used by uvicorn, Alembic, pytest and the `python -m boutique` entrypoint.

Architecture Note:
    The backend follows a layered architecture:

    ┌─────────────────────────────────────┐
    │    Routes + Access Control (HTTP)   │  ← status codes, auth dependencies
    ├─────────────────────────────────────┤
    │   Services (Auth, Catalog, Images)  │  ← validation, hashing, tokens
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │        Database (Persistence)       │  ← Async SQLAlchemy sessions
    └─────────────────────────────────────┘

    Routes translate HTTP into service calls; services never see a Request.
"""

__version__ = "1.0.0"
