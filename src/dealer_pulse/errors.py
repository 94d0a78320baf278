"""Errors raised by the import pipeline. Each one ends the import attempt."""


class IngestError(Exception):
    """Base class for import failures; str(exc) is shown to the user."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class UnrecognizedFormatError(IngestError):
    """No header row was found, or the header matched no known report type."""


class EmptyPayloadError(IngestError):
    """The report was recognised but no row carried a natural key."""

    def __init__(self, message: str, report_type: str | None = None):
        super().__init__(message)
        self.report_type = report_type


class PersistenceError(IngestError):
    """The store rejected the upsert (network, permission, schema mismatch)."""
