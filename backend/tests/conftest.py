"""Root conftest — shared test configuration."""

import os

# Deterministic secrets so tests can mint tokens and invites
os.environ.setdefault("SUPABASE_JWT_SECRET", "test-jwt-secret-0123456789abcdef0123")
os.environ.setdefault(
    "INVITE_TOKEN_KEY", "dGVzdC1pbnZpdGUta2V5LTAxMjM0NTY3ODlhYmNkZWY=",
)
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("LOG_FORMAT", "text")
os.environ.setdefault(
    "DATABASE_URL",
    "sqlite+aiosqlite:///test.db",
)
