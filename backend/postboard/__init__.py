"""
Postboard Backend — Application Package Initializer
====================================================

What: Marks the `postboard` directory as a Python package.
Who:  Imported by uvicorn (`postboard.main:app`), Alembic, pytest and
      `postboard/init_db.py`.

Architecture Note:
    ┌─────────────────────────────────────┐
    │   Routes (users, posts, health)     │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │   Services (UserService, Post...)   │  ← Business rules, ownership
    ├─────────────────────────────────────┤
    │   Models & Schemas                  │  ← SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │   Database (injected handle)        │  ← Async SQLAlchemy sessions
    └─────────────────────────────────────┘

    Routes never touch SQL; services never touch HTTP status codes. The
    error layer (error_handlers.py) is the single place where the two meet.
"""

__version__ = "1.0.0"
