"""Error Hierarchy — typed, categorized exceptions for all F1 Companion failure modes.

Invariants:
    - Every error has a code (str), title (str), category (ErrorCategory), severity (ErrorSeverity)
    - Domain errors (400-level) are recoverable; infrastructure errors (500-level) are critical
    - to_response() produces the REST envelope used by every error handler
    - No internal details leaked in user-facing messages

Design Decisions:
    - Single hierarchy with F1CompanionError base: one FastAPI handler catches all
    - Offending ids kept as attributes (team_id, league_id, ...) for logs and tests,
      while the message stays safe to show to the user
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any
from datetime import datetime, timezone


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    AUTHENTICATION = "authentication"
    PERMISSION = "permission"
    BUSINESS_RULE = "business_rule"
    RESOURCE_NOT_FOUND = "resource_not_found"
    CONFLICT = "conflict"
    DATABASE = "database"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    user_id: int | None = None
    team_id: int | None = None
    league_id: int | None = None
    debug_info: dict[str, Any] | None = None


class F1CompanionError(Exception):
    """Base exception for all F1 Companion errors."""

    def __init__(
        self,
        message: str,
        code: str,
        title: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
        http_status: int = 500,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.title = title
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()
        self.http_status = http_status

    def to_response(self) -> dict:
        """Convert to standardized REST error response."""
        return {
            "error": {
                "code": self.code,
                "title": self.title,
                "message": self.message,
                "category": self.category.value,
                "severity": self.severity.value,
                "timestamp": self.context.timestamp.isoformat(),
                "context": {
                    "user_id": self.context.user_id,
                    "team_id": self.context.team_id,
                    "league_id": self.context.league_id,
                },
            }
        }


# ─── Authentication & Accounts ──────────────────────────────────

class AuthenticationRequiredError(F1CompanionError):
    """Bearer token missing, malformed, expired, or signed with the wrong key."""
    def __init__(self, reason: str = "missing token", context: ErrorContext | None = None):
        super().__init__(
            "Valid authentication token is required.",
            "AUTHENTICATION_REQUIRED", "Authentication Required",
            ErrorCategory.AUTHENTICATION, ErrorSeverity.WARNING, context, 401,
        )
        self.reason = reason


class UserProfileRequiredError(F1CompanionError):
    """Authenticated account has not registered a profile yet."""
    def __init__(self, account_id: str, context: ErrorContext | None = None):
        super().__init__(
            "Please complete your registration before accessing this resource.",
            "USER_PROFILE_REQUIRED", "User Profile Required",
            ErrorCategory.BUSINESS_RULE, ErrorSeverity.WARNING, context, 400,
        )
        self.account_id = account_id


class UserAlreadyRegisteredError(F1CompanionError):
    """Account already has a profile."""
    def __init__(self, account_id: str, context: ErrorContext | None = None):
        super().__init__(
            "User already registered",
            "USER_ALREADY_REGISTERED", "Already Registered",
            ErrorCategory.CONFLICT, ErrorSeverity.WARNING, context, 409,
        )
        self.account_id = account_id


# ─── Teams & Rosters ────────────────────────────────────────────

class TeamRequiredError(F1CompanionError):
    """User needs a team before this operation."""
    def __init__(
        self, user_id: int,
        message: str = "Please create a team before continuing.",
        context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.user_id = user_id
        super().__init__(
            message, "TEAM_REQUIRED", "Team Required",
            ErrorCategory.BUSINESS_RULE, ErrorSeverity.WARNING, ctx, 400,
        )
        self.user_id = user_id


class DuplicateTeamError(F1CompanionError):
    """User tried to create a second team."""
    def __init__(self, user_id: int, existing_team_id: int, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.user_id = user_id
        ctx.team_id = existing_team_id
        super().__init__(
            "You already have a team. Each user can only create one team.",
            "DUPLICATE_TEAM", "Duplicate Team",
            ErrorCategory.CONFLICT, ErrorSeverity.WARNING, ctx, 409,
        )
        self.user_id = user_id
        self.existing_team_id = existing_team_id


class TeamOwnershipError(F1CompanionError):
    """Caller is not the owner of the team being modified."""
    def __init__(
        self, team_id: int, owner_id: int, attempted_user_id: int,
        context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.user_id = attempted_user_id
        ctx.team_id = team_id
        super().__init__(
            "You do not have permission to modify this team.",
            "TEAM_OWNERSHIP", "Permission Denied",
            ErrorCategory.PERMISSION, ErrorSeverity.WARNING, ctx, 403,
        )
        self.team_id = team_id
        self.owner_id = owner_id
        self.attempted_user_id = attempted_user_id


class InvalidSlotPositionError(F1CompanionError):
    """Slot index outside 0..max_position for the entity type."""
    def __init__(
        self, position: int, max_position: int, entity_type: str,
        context: ErrorContext | None = None,
    ):
        super().__init__(
            f"Slot position {position} is invalid for {entity_type}s. "
            f"Position must be between 0 and {max_position}.",
            "INVALID_SLOT_POSITION", "Invalid Slot Position",
            ErrorCategory.VALIDATION, ErrorSeverity.WARNING, context, 400,
        )
        self.position = position
        self.max_position = max_position
        self.entity_type = entity_type


class TeamFullError(F1CompanionError):
    """Roster already holds the maximum number of drivers/constructors."""
    def __init__(
        self, team_id: int, max_slots: int, entity_type: str,
        context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.team_id = team_id
        super().__init__(
            f"Team {team_id} cannot have more than {max_slots} {entity_type}s",
            "TEAM_FULL", "Team Full",
            ErrorCategory.BUSINESS_RULE, ErrorSeverity.WARNING, ctx, 400,
        )
        self.team_id = team_id
        self.max_slots = max_slots
        self.entity_type = entity_type


class SlotOccupiedError(F1CompanionError):
    """Another entry already sits in the requested slot."""
    def __init__(self, position: int, team_id: int, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.team_id = team_id
        super().__init__(
            f"Slot position {position} is already occupied on team {team_id}",
            "SLOT_OCCUPIED", "Slot Already Occupied",
            ErrorCategory.CONFLICT, ErrorSeverity.WARNING, ctx, 409,
        )
        self.position = position
        self.team_id = team_id


class EntityAlreadyOnTeamError(F1CompanionError):
    """Driver or constructor already occupies a different slot on this team."""
    def __init__(
        self, entity_id: int, entity_type: str, team_id: int,
        context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.team_id = team_id
        super().__init__(
            f"{entity_type.capitalize()} {entity_id} is already on team {team_id}",
            "ENTITY_ALREADY_ON_TEAM", "Entity Already on Team",
            ErrorCategory.CONFLICT, ErrorSeverity.WARNING, ctx, 409,
        )
        self.entity_id = entity_id
        self.entity_type = entity_type
        self.team_id = team_id


# ─── Leagues & Invites ──────────────────────────────────────────

class LeagueNotFoundError(F1CompanionError):
    def __init__(self, league_id: int, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.league_id = league_id
        super().__init__(
            f"League {league_id} not found",
            "LEAGUE_NOT_FOUND", "League Not Found",
            ErrorCategory.RESOURCE_NOT_FOUND, ErrorSeverity.WARNING, ctx, 404,
        )
        self.league_id = league_id


class LeagueIsPrivateError(F1CompanionError):
    def __init__(self, league_id: int, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.league_id = league_id
        super().__init__(
            f"League {league_id} is private and requires an invitation",
            "LEAGUE_IS_PRIVATE", "Private League",
            ErrorCategory.PERMISSION, ErrorSeverity.WARNING, ctx, 403,
        )
        self.league_id = league_id


class LeagueFullError(F1CompanionError):
    def __init__(self, league_id: int, max_teams: int, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.league_id = league_id
        super().__init__(
            f"League {league_id} is full (max {max_teams} teams)",
            "LEAGUE_FULL", "League Full",
            ErrorCategory.CONFLICT, ErrorSeverity.WARNING, ctx, 409,
        )
        self.league_id = league_id
        self.max_teams = max_teams


class AlreadyInLeagueError(F1CompanionError):
    def __init__(self, league_id: int, team_id: int, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.league_id = league_id
        ctx.team_id = team_id
        super().__init__(
            f"Team {team_id} is already a member of league {league_id}",
            "ALREADY_IN_LEAGUE", "Already in League",
            ErrorCategory.CONFLICT, ErrorSeverity.WARNING, ctx, 409,
        )
        self.league_id = league_id
        self.team_id = team_id


class LeagueOwnershipError(F1CompanionError):
    """Only the league owner can manage invites."""
    def __init__(self, league_id: int, requester_id: int, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.league_id = league_id
        ctx.user_id = requester_id
        super().__init__(
            "Only league owner can create invites",
            "LEAGUE_OWNERSHIP", "Permission Denied",
            ErrorCategory.PERMISSION, ErrorSeverity.WARNING, ctx, 403,
        )
        self.league_id = league_id
        self.requester_id = requester_id


class InvalidLeagueInviteTokenError(F1CompanionError):
    """Token could not be decrypted or points at a league that no longer exists."""
    def __init__(self, reason: str, context: ErrorContext | None = None):
        super().__init__(
            "The invite link is invalid",
            "INVALID_INVITE_TOKEN", "Invalid Invite",
            ErrorCategory.VALIDATION, ErrorSeverity.WARNING, context, 400,
        )
        self.reason = reason


# ─── Generic ────────────────────────────────────────────────────

class InvalidOperationError(F1CompanionError):
    """Business rule violated with no dedicated error type."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "INVALID_OPERATION", "Invalid Operation",
            ErrorCategory.BUSINESS_RULE, ErrorSeverity.WARNING, context, 400,
        )


class ResourceNotFoundError(F1CompanionError):
    """Requested resource does not exist."""
    def __init__(
        self, resource_type: str, resource_id: Any, context: ErrorContext | None = None,
    ):
        super().__init__(
            f"{resource_type} not found",
            "RESOURCE_NOT_FOUND", f"{resource_type} Not Found",
            ErrorCategory.RESOURCE_NOT_FOUND, ErrorSeverity.WARNING, context, 404,
        )
        self.resource_type = resource_type
        self.resource_id = resource_id


# ─── Infrastructure Errors ──────────────────────────────────────

class DatabaseError(F1CompanionError):
    """Database operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATABASE_ERROR", "Database Error",
            ErrorCategory.DATABASE, ErrorSeverity.CRITICAL, context, 503,
        )
        self.operation = operation


class DuplicateResourceError(F1CompanionError):
    """Unique constraint rejected the write (SQLSTATE 23505)."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "This resource already exists.",
            "DUPLICATE_RESOURCE", "Duplicate Resource",
            ErrorCategory.CONFLICT, ErrorSeverity.WARNING, context, 409,
        )


class InvalidReferenceError(F1CompanionError):
    """Foreign key constraint rejected the write (SQLSTATE 23503)."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "The referenced resource does not exist.",
            "INVALID_REFERENCE", "Invalid Reference",
            ErrorCategory.VALIDATION, ErrorSeverity.WARNING, context, 400,
        )


class MissingFieldError(F1CompanionError):
    """Not-null constraint rejected the write (SQLSTATE 23502)."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "A required field is missing.",
            "MISSING_REQUIRED_FIELD", "Missing Required Field",
            ErrorCategory.VALIDATION, ErrorSeverity.WARNING, context, 400,
        )


_SQLSTATE_ERRORS: dict[str, type[F1CompanionError]] = {
    "23505": DuplicateResourceError,
    "23503": InvalidReferenceError,
    "23502": MissingFieldError,
}


def error_for_sqlstate(sqlstate: str | None) -> F1CompanionError:
    """Map a constraint-violation SQLSTATE to its domain error.

    Unknown or absent codes (SQLite reports none) are treated as a uniqueness
    conflict, the only integrity failure the roster and league writes can hit.
    """
    if sqlstate == "42P01":
        return DatabaseError("schema is not migrated", "query")
    error_cls = _SQLSTATE_ERRORS.get(sqlstate or "", DuplicateResourceError)
    return error_cls()
