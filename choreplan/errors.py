"""Exceptions raised by the chore scheduling core."""


class ChoreplanError(Exception):
    """Base class for choreplan errors."""

    pass


class ChoreConfigurationError(ChoreplanError, ValueError):
    """Raised when a chore's recurrence or assignment rules cannot be resolved."""

    def __init__(self, message: str, chore_id: str | None = None):
        super().__init__(message)
        self.chore_id = chore_id


class HouseholdAccessError(ChoreplanError, PermissionError):
    """Raised when household data is missing or the caller is not a member."""

    pass
