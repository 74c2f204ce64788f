class ConfigurationError(RuntimeError):
    """Raised when the service cannot start with the current configuration."""
