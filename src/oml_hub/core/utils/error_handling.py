"""Custom exception classes for oml_hub error handling."""

# Standard
from typing import Optional


class OMLHubError(Exception):
    """Base exception class for all oml_hub errors."""

    def __init__(self, message: str, details: Optional[str] = None):
        """Initialize OMLHubError.

        Parameters
        ----------
        message : str
            The main error message.
        details : str, optional
            Additional details about the error.
        """
        self.message = message
        self.details = details
        full_message = message
        if details:
            full_message = f"{message}\nDetails: {details}"
        super().__init__(full_message)


class InvalidArgumentError(OMLHubError, ValueError):
    """Raised when a caller passes a malformed id or flag."""

    def __init__(self, argument: str, value: object, expected: str):
        """Initialize InvalidArgumentError.

        Parameters
        ----------
        argument : str
            Name of the offending argument.
        value : object
            The value that was passed.
        expected : str
            Human-readable description of what was expected.
        """
        self.argument = argument
        self.value = value

        message = f"Invalid value for '{argument}': {value!r}"
        details = f"Expected {expected}"

        super().__init__(message, details)


class NotCachedError(OMLHubError):
    """Raised when cache-only retrieval finds no local copy."""

    def __init__(self, kind: str, object_id: int, cache_dir: Optional[str] = None):
        self.kind = kind
        self.object_id = object_id

        message = f"{kind.capitalize()} {object_id} is not available in the cache"
        details = f"Cache directory: {cache_dir}" if cache_dir else None

        super().__init__(message, details)


class MalformedDocumentError(OMLHubError):
    """Raised when a document violates the expected structure or cardinality."""

    pass


class TypeMismatchError(OMLHubError, TypeError):
    """Raised when a function receives a record of the wrong kind."""

    def __init__(self, expected: str, received: object):
        self.expected = expected
        self.received = received

        message = f"Expected {expected}, got {type(received).__name__}"

        super().__init__(message)


class ServerError(OMLHubError):
    """Raised when the repository server answers with an error."""

    def __init__(
        self, message: str, code: Optional[int] = None, details: Optional[str] = None
    ):
        """Initialize ServerError.

        Parameters
        ----------
        message : str
            The error message reported by the server.
        code : int, optional
            Server error code or HTTP status.
        details : str, optional
            Additional information sent along with the error.
        """
        self.code = code
        if code is not None:
            message = f"Server error {code}: {message}"
        super().__init__(message, details)
