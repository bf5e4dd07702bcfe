"""Core Layer — roster and league rules, invite tokens, errors. No IO, no DB.

Invariants:
    - No module in core/ imports from services/, api/, infrastructure/, or db/
    - Rule checks are pure: they raise domain errors and never mutate
"""
