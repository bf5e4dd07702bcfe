"""Route Modules — one file per resource.

Invariants:
    - Each module defines its own APIRouter with prefix and tags, all under /api
    - Routes never contain business logic (delegate to services/)
"""
