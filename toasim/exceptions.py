"""
Exceptions raised by the simulation core.
"""


class ConfigError(ValueError):
    """
    A parameter required by the selected movement model or ping type is missing.

    Raised before any random draw is made; the invocation produces no result.
    """
