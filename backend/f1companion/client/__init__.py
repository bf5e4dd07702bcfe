"""Client Layer — typed API client plus the route-guard and lineup-picker state logic
used by the web frontend.

Invariants:
    - Nothing here imports the server packages (api/, services/, models/)
    - Payloads are the server's camelCase JSON, passed through as dicts
"""
