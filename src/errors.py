"""
Strength Engine — Error taxonomy

"No data" is not an error: lookups that find nothing return None and
aggregations skip them. Only the two exceptions below are ever raised.
"""


class InvalidInput(ValueError):
    """A value passed to the engine is out of its accepted domain."""


class ConfigurationError(Exception):
    """A benchmark dataset or engine setting is malformed."""
