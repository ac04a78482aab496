"""Custom exception hierarchy for the trade journal."""


class JournalError(Exception):
    """Base exception for all journal errors."""


# --- Configuration ---
class ConfigError(JournalError):
    """Invalid or unreadable configuration."""


# --- Import / Export ---
class CsvImportError(JournalError):
    """CSV import aborted before any trade was produced."""


class MissingHeadersError(CsvImportError):
    """Required CSV headers are absent from the header row."""

    def __init__(self, missing: list[str]):
        self.missing = list(missing)
        super().__init__(f"Missing headers: {', '.join(self.missing)}")


class ExportError(JournalError):
    """Unsupported export request."""
