"""
Inkpost Backend — Application Package Initializer
==================================================

What: Marks the `inkpost` directory as a Python package.
Who:  Used implicitly by Python's import system and explicitly by Alembic, pytest, and uvicorn.

Architecture Note:
    The backend is split into thin layers:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only (cookies, forms, status codes)
    ├─────────────────────────────────────┤
    │         Services (Business Logic)   │  ← Users, posts, uploads
    ├─────────────────────────────────────┤
    │   Security (Passwords & Tokens)     │  ← bcrypt hashing, JWT identity cookie
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │        Database (Persistence)       │  ← Async SQLAlchemy sessions
    └─────────────────────────────────────┘
"""

__version__ = "1.0.0"
