class ConfigurationError(ValueError):
    """Raised when a configuration value cannot be parsed."""
