"""API Layer — FastAPI routes, dependencies and error handlers.

Invariants:
    - Routes registered explicitly in main.py (no auto-discovery)
    - All endpoints return structured JSON responses (camelCase keys)

Design Decisions:
    - Thin routes delegate to services; auth and profile resolution live in deps.py
"""
