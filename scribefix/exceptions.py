"""
Exception classes for scribefix.

All scribefix exceptions inherit from ScribeFixError,
making it easy to catch all library errors.

Example:
    >>> try:
    ...     rules = scribefix.load_rule_table("rules.yaml")
    ... except scribefix.RuleTableError as e:
    ...     print(f"Bad rule table: {e}")
    ... except scribefix.ScribeFixError as e:
    ...     print(f"scribefix error: {e}")
"""


class ScribeFixError(Exception):
    """
    Base exception for all scribefix errors.

    Catch this to handle any scribefix-specific error.
    """

    pass


class InvalidInputError(ScribeFixError, TypeError):
    """
    Raised when a public entry point receives input it cannot work with.

    The engine never coerces: passing bytes or None where text is expected
    fails here instead of producing a silently wrong result.

    Example:
        >>> scribefix.correct_text(b"teh cat")
        InvalidInputError: text must be str, got bytes
    """

    pass


class RuleTableError(ScribeFixError):
    """
    Raised when a rule table cannot be loaded or compiled.

    Covers unreadable YAML, missing keys, invalid regular expressions and
    contextual patterns that lack their target group.
    """

    pass


class ConfigurationError(ScribeFixError, ValueError):
    """
    Raised for invalid configuration.

    Example:
        >>> CorrectionConfig(order="alphabetical")
        ConfigurationError: order must be one of ('rule', 'offset'), got 'alphabetical'
    """

    pass


def ensure_text(value: object, name: str = "text") -> str:
    """Return value if it is a str, otherwise raise InvalidInputError."""
    if not isinstance(value, str):
        raise InvalidInputError(f"{name} must be str, got {type(value).__name__}")
    return value
