"""Errors raised by the configuration use cases."""


class ConfigurationNotFoundError(ValueError):
    """The referenced event type, routing rule or policy does not exist."""


class ConfigurationConflictError(ValueError):
    """The change would break a uniqueness or reference constraint."""


__all__ = ["ConfigurationConflictError", "ConfigurationNotFoundError"]
