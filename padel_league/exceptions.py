"""
Exceptions for the padel league system.

Every error is a recoverable rejection of a single operation: it is raised
before any state is mutated, so the caller's data is left exactly as it was.
"""


# ========== Base Exception ==========


class LeagueError(Exception):
    """Base exception for all padel league errors."""

    pass


# ========== Validation Errors ==========


class ValidationError(LeagueError):
    """Raised when a submission is rejected before any mutation."""

    pass


class IncompleteMatchError(ValidationError):
    """Raised when a participant slot or a score is missing."""

    pass


class DuplicatePlayerError(ValidationError):
    """Raised when the same player appears more than once in a match."""

    pass


class InvalidScoreError(ValidationError):
    """Raised when a score is not a non-negative integer."""

    pass


class TiedScoreError(ValidationError):
    """Raised when both teams have the same score."""

    pass


class InsufficientScoreError(ValidationError):
    """Raised when the winning score is below the completion threshold."""

    pass


class UnknownPlayerError(ValidationError):
    """Raised when a match references a player that is not on the roster."""

    pass


class InvalidPlayerNameError(ValidationError):
    """Raised when a player or tournament name is empty."""

    pass


class DuplicatePlayerNameError(ValidationError):
    """Raised when a player name is already taken on the roster."""

    pass


class CsvFileError(ValidationError):
    """Raised when an import file cannot be opened or parsed."""

    pass


class MissingColumnsError(ValidationError):
    """Raised when an import file lacks required columns."""

    pass


# ========== Integrity Errors ==========


class IntegrityError(LeagueError):
    """Raised when an operation would break references between records."""

    pass


class PlayerInUseError(IntegrityError):
    """Raised when deleting a player that still has recorded matches."""

    pass


class MissingPlayerError(IntegrityError):
    """Raised when deleting a match whose participant no longer exists."""

    pass


# ========== Lookup Errors ==========


class NotFoundError(LeagueError):
    """Base exception for records that cannot be found."""

    pass


class PlayerNotFoundError(NotFoundError):
    """Raised when a requested player cannot be found."""

    pass


class MatchNotFoundError(NotFoundError):
    """Raised when a requested match or game cannot be found."""

    pass


class TournamentNotFoundError(NotFoundError):
    """Raised when a requested tournament cannot be found."""

    pass


# ========== Tournament Errors ==========


class TournamentStateError(LeagueError):
    """Raised when a tournament is in the wrong state for the operation."""

    pass
