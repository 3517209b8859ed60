from __future__ import annotations


class CsvFormatterError(Exception):
    """Base class for failures of the host layer (reading files, persisting settings)."""


class DocumentError(CsvFormatterError):
    def __init__(self, path, reason: str) -> None:
        super().__init__(f"Cannot read {path}: {reason}")
        self.path = path
        self.reason = reason


class ConfigError(CsvFormatterError):
    pass


class OutputError(CsvFormatterError):
    def __init__(self, path, reason: str) -> None:
        super().__init__(f"Cannot write {path}: {reason}")
        self.path = path
        self.reason = reason
