class ClaimCheckError(Exception):
    """Base class for claim checker errors."""


class InvalidQueryError(ClaimCheckError, ValueError):
    """Raised when the item query is empty after normalization."""


class PolicyConfigurationError(ClaimCheckError):
    """
    The policy document is unreadable or structurally invalid.
    Fatal: the caller gets this as-is, nothing is evaluated.
    """

    def __init__(self, message: str, source: str = ""):
        self.source = source
        super().__init__(f"{source}: {message}" if source else message)
