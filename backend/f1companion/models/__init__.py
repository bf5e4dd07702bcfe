"""ORM Models — SQLAlchemy declarative models for all domain entities.

Invariants:
    - All models inherit from Base (db/base.py)
    - UserProfile is the owner of Teams, Leagues and audit trails

Design Decisions:
    - One file per aggregate for locality
    - All models imported here so SQLAlchemy resolves string-based relationship()
      references before any query runs
"""

from f1companion.models.account import Account  # noqa: F401
from f1companion.models.user_profile import UserProfile  # noqa: F401
from f1companion.models.catalog import Driver, Constructor  # noqa: F401
from f1companion.models.team import Team, TeamDriver, TeamConstructor  # noqa: F401
from f1companion.models.league import League, LeagueTeam, LeagueInvite  # noqa: F401
