class ConfigurationError(ValueError):
    """Raised when a configuration value is missing, out of range or inconsistent"""
