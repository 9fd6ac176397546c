"""
Shared exceptions for the extraction engine.
"""


class ExtractionError(Exception):
    """Raised when a document cannot be turned into an extraction result."""

    pass


class InsufficientTextError(ExtractionError):
    """Raised when neither extraction tier recovered usable text."""

    default_message = (
        "Could not extract text from PDF. The file may be a scanned image, "
        "corrupted, or in an unsupported format."
    )

    def __init__(
        self,
        acquired_length: int = 0,
        recoverable_length: int = 0,
        message: str | None = None,
    ):
        self.acquired_length = acquired_length
        self.recoverable_length = recoverable_length
        super().__init__(message or self.default_message)
