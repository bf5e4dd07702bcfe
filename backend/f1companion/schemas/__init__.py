"""Pydantic Schemas — request/response validation for API endpoints.

Invariants:
    - Schemas validate at system boundary (user input, API responses)
    - Wire format is camelCase; request bodies also accept snake_case names

Design Decisions:
    - Separate from models: schemas are API contracts, models are persistence
    - Responses built explicitly by services, never by serializing ORM rows directly
"""
