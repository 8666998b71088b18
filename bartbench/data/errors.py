class InvalidConfigurationError(ValueError):
    """Raised when an experiment parameter cannot produce a valid dataset or prior."""
