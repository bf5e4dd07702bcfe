"""Services Layer — the imperative shell around core/ rules.

Invariants:
    - One service class per aggregate, constructed per request with an AsyncSession
    - Services commit their own writes; routes never touch the session directly

Design Decisions:
    - Response models are built here so routes stay thin wiring
"""
