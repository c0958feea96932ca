"""
Pydantic schema definitions for API payloads.

Schemas are separated from the database layer to decouple the JSON
representation (``prix``, ``img``) from the column and attribute names.
"""
