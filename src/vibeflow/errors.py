"""Error types shared by the resolver and the extractor."""


class VibeflowError(Exception):
    """Base class for every error raised by vibeflow."""


class ParseError(VibeflowError):
    """Raised when CSS or component source cannot be parsed."""

    def __init__(
        self, message: str, line: int | None = None, column: int | None = None
    ):
        self.line = line
        self.column = column
        super().__init__(message)


class ConfigError(VibeflowError):
    """Raised when a theme or service configuration value is invalid."""
