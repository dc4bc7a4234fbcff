"""Domain errors raised by the data-access layer."""


class DatabaseOperationError(Exception):
    """A statement sent to the database failed.

    Connectivity loss, constraint violations and malformed statements are not
    distinguished. The driver error is kept as ``__cause__``.
    """

    def __init__(self, message: str, *, operation: str | None = None) -> None:
        super().__init__(message)
        self.operation = operation
