class ClanboardError(Exception):
    """Base exception for conditions surfaced to API callers."""

    condition = "Internal"
    status_code = 500

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class NotFoundError(ClanboardError):
    """Referenced season, member or date does not exist."""

    condition = "NotFound"
    status_code = 404


class InvalidArgumentError(ClanboardError):
    """Malformed metric kind, query parameter or payload."""

    condition = "InvalidArgument"
    status_code = 400


class AuthenticationError(ClanboardError):
    """Missing or invalid bearer credentials."""

    condition = "Unauthenticated"
    status_code = 401


class StoreUnavailableError(ClanboardError):
    """Document store unreachable or failing."""

    condition = "Unavailable"
    status_code = 503


class StoreTimeoutError(StoreUnavailableError):
    """Document store did not answer within the deadline."""

    condition = "Timeout"
