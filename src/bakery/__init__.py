"""Bakery: outbound HTTP cookies, bound to the request that sends them.

Build a cookie, set its attributes, and bake it into the response::

    from bakery import Request

    request = Request("GET", "/app/login")
    cookie = request.new_cookie({"name": "session", "value": token})
    cookie.expires = "+1h"
    cookie.secure = True
    cookie.bake()

    request.headers_out.get_list("Set-Cookie")
    # ['session=...; Path=/app/; Expires=...; Secure']
"""

__version__ = "0.1.0-dev"
__all__ = [
    "DATE_FORMAT",
    "ArgumentError",
    "Attribute",
    "BakeryError",
    "ConfigurationError",
    "Cookie",
    "CookieConfig",
    "CookieTypeError",
    "Request",
    "RequestContext",
    "ResponseHeaders",
    "StateError",
    "compute_expiry",
    "format_http_date",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import bakery`` fast while providing a clean top-level API.
    """
    if name in ("Cookie", "Attribute"):
        from bakery import cookies as _cookies

        return getattr(_cookies, name)

    if name == "CookieConfig":
        from bakery.config import CookieConfig

        return CookieConfig

    if name in ("Request", "RequestContext"):
        from bakery.http import request as _request

        return getattr(_request, name)

    if name == "ResponseHeaders":
        from bakery.http.headers import ResponseHeaders

        return ResponseHeaders

    if name in ("DATE_FORMAT", "compute_expiry", "format_http_date"):
        from bakery import expiry as _expiry

        return getattr(_expiry, name)

    if name in ("ArgumentError", "BakeryError", "ConfigurationError", "CookieTypeError", "StateError"):
        from bakery import errors as _errors

        return getattr(_errors, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
