"""
CampusHub Backend — Application Package
=========================================

Campus community backend: accounts and sessions, project listings, club
listings with posters, and member profiles.

Layers:

    ┌─────────────────────────────────────┐
    │        Routes (HTTP boundary)       │  ← status codes, cookies, forms
    ├─────────────────────────────────────┤
    │   Auth gate         │   Services    │  ← sessions, credentials, CRUD
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │        Database (Persistence)       │  ← Async SQLAlchemy sessions
    └─────────────────────────────────────┘

Routes never touch credentials or session rows directly; they receive a
Principal from the auth dependencies.
"""

__version__ = "1.0.0"
