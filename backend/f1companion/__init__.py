"""F1 Companion API Package — fantasy F1 teams, leagues and invites.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)
"""
