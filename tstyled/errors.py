"""Error types."""


class ConfigurationError(RuntimeError):
    """Raised when a styled component is rendered before a renderer was bound."""
