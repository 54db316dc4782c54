"""
CampusHub Backend — Pydantic Request/Response Schemas
=======================================================

Schemas are separate from the ORM models so the API controls exactly what is
exposed: no schema in this package has a password or session-token field.
JSON field names are camelCase to match the existing frontend.
"""
