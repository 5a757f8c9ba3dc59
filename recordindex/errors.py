class RecordIndexError(Exception):
    """Base error for this package."""


class ConfigurationError(RecordIndexError):
    """Raised when a setting or record layout cannot be used."""


class MalformedRecordError(RecordIndexError):
    """Raised when one data line cannot be parsed into a record."""

    def __init__(self, reason: str, line: str, line_number: int | None = None) -> None:
        self.reason = reason
        self.line = line
        self.line_number = line_number
        where = f"line {line_number}" if line_number is not None else "line"
        super().__init__(f"{where}: {reason}: {line!r}")


class SourceUnavailableError(RecordIndexError):
    """Raised when the record source cannot be opened or read."""

    def __init__(self, source: str, reason: str) -> None:
        self.source = source
        self.reason = reason
        super().__init__(f"record source unavailable: {source}: {reason}")
