"""Error types raised by the repository and booking layers."""


class AuthenticationRequired(Exception):
    """The visitor must log in before doing this."""


class BranchNotFound(LookupError):
    """No branch exists with the requested id."""


class DataFetchError(Exception):
    """A read query for a page failed or returned malformed rows."""


class ReservationInsertError(Exception):
    """The reservation insert was rejected or failed.

    ``public_message`` is safe to show to the visitor; the exception text may
    carry raw database output and is only meant for the log.
    """

    GENERIC_MESSAGE = "Please try again later."

    def __init__(self, message, public_message=None):
        super().__init__(message)
        self.public_message = public_message or self.GENERIC_MESSAGE
