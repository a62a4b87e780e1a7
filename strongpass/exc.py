"""strongpass.exc"""


class ConfigError(ValueError):
    """Raised when a PasswordConfig cannot be built from the given values."""
