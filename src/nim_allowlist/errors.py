"""Exception taxonomy for nim-allowlist.

Every error raised here is fatal for a run: the CLI reports it and exits
with a non-zero status without touching the remaining documents.
"""

from pathlib import Path


class AllowlistError(Exception):
    """Base exception for all fatal nim-allowlist errors."""

    pass


class NotFoundError(AllowlistError):
    """Raised when a target document does not exist at its expected location."""

    def __init__(self, path: Path, message: str | None = None):
        self.path = path
        super().__init__(message or f"Document not found: {path}")


class ParseError(AllowlistError):
    """Raised when a target document is not valid JSON or not a JSON object."""

    def __init__(self, path: Path | None, message: str):
        self.path = path
        super().__init__(message)


class DocumentStructureError(ParseError):
    """Raised when the provider path of a document holds an unexpected type.

    For example ``providers`` being a list, or a provider's ``models`` value
    not being a list.
    """

    pass
