"""Bakery exception hierarchy.

Shared across Cookie, Request, and config so every module raises and
catches the same types. Each concrete error also subclasses the matching
builtin, so callers can catch ``TypeError`` or ``ValueError`` without
importing bakery.
"""


class BakeryError(Exception):
    """Base for all bakery-specific errors."""


class ConfigurationError(BakeryError):
    """Raised when a ``CookieConfig`` is invalid.

    Raised from ``CookieConfig.__post_init__``, so a bad config never
    reaches a cookie.
    """


class CookieTypeError(BakeryError, TypeError):
    """An argument has the wrong shape.

    For example, a request context that cannot receive response headers,
    or an attribute bundle that is not a mapping.
    """


class ArgumentError(BakeryError, ValueError):
    """An argument is structurally wrong.

    Unknown attribute keys, attribute pairs of the wrong length, and
    empty value collections.
    """


class StateError(BakeryError, RuntimeError):
    """An operation was invoked in the wrong lifecycle state.

    Re-initializing a cookie, or serializing one that has no name.
    """
