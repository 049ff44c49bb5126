"""
Notes Backend: Application Package
===================================

What: CRUD service for short text notes with tagging, paginated listing and
      per-note word statistics.

Layers:
    ┌─────────────────────────────────────┐
    │        Routes + Schemas (HTTP)      │  ← FastAPI handlers, pydantic views
    ├─────────────────────────────────────┤
    │       Services (Business Logic)     │  ← NoteService, word statistics
    ├─────────────────────────────────────┤
    │        Store (Persistence API)      │  ← NoteStore contract + SQL adapter
    ├─────────────────────────────────────┤
    │     Models + Database (SQLAlchemy)  │  ← ORM tables, async sessions
    └─────────────────────────────────────┘

The service layer only talks to the store contract, so it can be exercised
with any store implementation (tests use AsyncMock doubles).
"""

__version__ = "1.0.0"
