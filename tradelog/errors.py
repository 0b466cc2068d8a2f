"""Ingestion and dataset errors."""


class IngestionError(Exception):
    """Base class for every failure while reading a trade export."""


class TradeFileNotFoundError(IngestionError, FileNotFoundError):
    """The configured trade export does not exist."""


class ParseError(IngestionError):
    """A row or field of the export does not have the expected shape."""

    def __init__(self, message: str, line: int | None = None, column: str | None = None):
        self.line = line
        self.column = column
        location = []
        if line is not None:
            location.append(f"line {line}")
        if column is not None:
            location.append(f"column '{column}'")
        if location:
            message = f"{message} ({', '.join(location)})"
        super().__init__(message)


class DuplicateColumnError(IngestionError):
    """Two export headers normalize to the same column name."""


class MissingColumnError(IngestionError):
    """A column the pipeline needs is absent from the export."""


class DatasetNotLoadedError(RuntimeError):
    """Raised when trades are requested before any ingestion succeeded."""
