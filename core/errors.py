"""Errors raised while looking up acronyms."""


class LookupDecodeError(ValueError):
    """The response body is not a JSON array of records."""


class TransferCancelled(Exception):
    """The transfer was cancelled before it finished."""


class AcronymError(Exception):
    """Base class for errors shown to the user, each with a title and a message."""

    title = "Error"
    message = "Request failed with unknown error."

    def __init__(self, message: str | None = None) -> None:
        if message is not None:
            self.message = message
        super().__init__(self.message)


class NoResultError(AcronymError):
    title = "Not Found Error"
    message = "There are no result for this search."


class MissingTermError(AcronymError):
    title = "Missing Term Error"
    message = "A valid acronym or initial is required."


class InvalidFormatError(AcronymError):
    title = "Format Error"
    message = "The correct format for searches is 'param=<term>'."


class InvalidParameterError(AcronymError):
    title = "Parameter Error"
    message = (
        "Valid parameters are 'sf' for the abbreviation for which definitions are to be "
        "retrieved or 'lf' for fullforms for which abbreviations are to be retrieved."
    )


class LookupFailedError(AcronymError):
    """Wraps the transport error of a failed lookup."""

    def __init__(self, error: BaseException | None = None) -> None:
        self.error = error
        super().__init__(str(error) if error is not None and str(error) else None)
