"""Database Infrastructure — declarative Base, standalone session factory and catalog seed.

Invariants:
    - Single async engine per process in the app (initialized via init_db)
    - All sessions are async (AsyncSession)
"""
