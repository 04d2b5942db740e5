"""Outbound cookie model and Set-Cookie serialization.

A ``Cookie`` is bound to the request it will be sent with. Attributes are
set through properties or in bulk through ``update()``; ``to_string()``
renders the header value and ``bake()`` appends it to the request's
response headers.

    cookie = Cookie(request, {"name": "session", "value": token, "path": "/"})
    cookie.expires = "+1h"
    cookie.secure = True
    cookie.bake()
"""

import logging
from collections.abc import Callable, Iterable, Mapping
from datetime import datetime
from enum import StrEnum
from typing import Any
from urllib.parse import quote

from bakery.config import CookieConfig
from bakery.errors import ArgumentError, CookieTypeError, StateError
from bakery.expiry import format_http_date
from bakery.http.request import RequestContext

logger = logging.getLogger("bakery.cookies")


class Attribute(StrEnum):
    """Attribute keys accepted by ``Cookie(...)`` and ``Cookie.update()``.

    ``value`` is an alias for the ``values`` setter.
    """

    NAME = "name"
    VALUE = "value"
    EXPIRES = "expires"
    DOMAIN = "domain"
    PATH = "path"
    SECURE = "secure"


def stringify(value: object) -> str:
    """Coerce *value* for a string-typed cookie field.

    ``bytes`` are decoded as UTF-8 with ``surrogateescape``, so undecodable
    bytes survive and escape back to the same octets (``b"\\xe9"`` bakes
    as ``%E9``). Everything else goes through ``str()``.
    """
    if isinstance(value, str):
        return value
    if isinstance(value, bytes | bytearray):
        return bytes(value).decode("utf-8", "surrogateescape")
    return str(value)


def resolve_values(raw: object) -> tuple[str, ...]:
    """Resolve a ``values`` input to a tuple of strings.

    Strings, bytes, and non-iterables are a single value. Any other
    iterable is many values, stringified in iteration order.
    """
    if isinstance(raw, str | bytes | bytearray) or not isinstance(raw, Iterable):
        return (stringify(raw),)
    return tuple(stringify(item) for item in raw)


def _resolve_key(key: object) -> Attribute:
    if isinstance(key, Attribute):
        return key
    if isinstance(key, str):
        try:
            return Attribute(key)
        except ValueError:
            pass
    msg = f"Unknown attribute {key!r}"
    raise ArgumentError(msg)


class Cookie:
    """A single outbound cookie.

    Construct with the owning request and optional attributes::

        Cookie(request, {"name": "tags", "value": ["a", "b"], "secure": True})

    Every key is checked before any value is applied, so an unknown key
    leaves the cookie untouched. A cookie cannot be re-initialized.
    """

    __slots__ = ("_config", "_domain", "_expires", "_name", "_path", "_request", "_secure", "_values")

    def __init__(
        self,
        request: RequestContext,
        attributes: Mapping[str, Any] | None = None,
        *,
        config: CookieConfig | None = None,
    ) -> None:
        if getattr(self, "_request", None) is not None:
            msg = "Cannot re-initialize Cookie object."
            raise StateError(msg)
        if attributes is not None and not isinstance(attributes, Mapping):
            msg = f"wrong argument type {type(attributes).__name__}: expected a Mapping of attributes"
            raise CookieTypeError(msg)
        if not isinstance(request, RequestContext):
            msg = f"wrong argument type {type(request).__name__}: expected a request context"
            raise CookieTypeError(msg)

        self._config = config if config is not None else CookieConfig()
        self._name: str | None = None
        self._values: tuple[str, ...] = ()
        self._domain: str | None = None
        self._path: str | None = None
        self._expires: str | None = None
        self._secure = False
        self._request = request

        if attributes:
            self.update(attributes)

    def __repr__(self) -> str:
        return f"Cookie(name={self._name!r}, values={list(self._values)!r})"

    def __str__(self) -> str:
        return self.to_string()

    @property
    def request(self) -> RequestContext:
        """The request this cookie will be baked into."""
        return self._request

    @property
    def config(self) -> CookieConfig:
        return self._config

    # -- Attributes --

    @property
    def name(self) -> str | None:
        return self._name

    @name.setter
    def name(self, value: object) -> None:
        if value is None:
            msg = "wrong argument type NoneType: a cookie name cannot be unset"
            raise CookieTypeError(msg)
        self._name = stringify(value)

    @property
    def value(self) -> str:
        """The first (primary) value.

        Raises ``StateError`` if no values have been set.
        """
        if not self._values:
            msg = f"Cookie {self._name!r} has no values"
            raise StateError(msg)
        return self._values[0]

    @property
    def values(self) -> tuple[str, ...]:
        return self._values

    @values.setter
    def values(self, raw: object) -> None:
        values = resolve_values(raw)
        if not values:
            msg = f"Cannot set an empty value collection on cookie {self._name!r}"
            raise ArgumentError(msg)
        self._values = values

    @property
    def domain(self) -> str | None:
        return self._domain

    @domain.setter
    def domain(self, value: object) -> None:
        self._domain = None if value is None else stringify(value)

    @property
    def path(self) -> str | None:
        return self._path

    @path.setter
    def path(self, value: object) -> None:
        self._path = None if value is None else stringify(value)

    @property
    def expires(self) -> str | None:
        """The expiration: a cookie date, or ``None`` for a session cookie.

        ``datetime`` values are converted to UTC and formatted. Strings go
        through ``config.expiry_calculator``, which resolves relative
        offsets and passes anything else through unchanged:

        - ``+30s``: 30 seconds from now
        - ``+10m``: ten minutes from now
        - ``+1h``: one hour from now
        - ``-1d``: yesterday (expire immediately)
        - ``now``: immediately
        - ``+3M``: in three months
        - ``+10y``: in ten years
        - ``Sun, 25-Apr-1999 00:40:33 GMT``: at the indicated time

        ``None`` clears the expiration.
        """
        return self._expires

    @expires.setter
    def expires(self, expiration: object) -> None:
        if expiration is None:
            self._expires = None
        elif isinstance(expiration, datetime):
            self._expires = format_http_date(expiration)
        elif isinstance(expiration, str | bytes):
            self._expires = self._config.expiry_calculator(stringify(expiration))
        else:
            msg = f"wrong argument type {type(expiration).__name__}: expected a str or datetime"
            raise CookieTypeError(msg)

    @property
    def secure(self) -> bool:
        return self._secure

    @secure.setter
    def secure(self, value: object) -> None:
        self._secure = bool(value)

    # -- Bulk assignment --

    def update(self, attributes: Mapping[Any, Any] | Iterable[Any]) -> None:
        """Set several attributes at once.

        Accepts a mapping or an iterable of ``(key, value)`` pairs. Keys
        are validated before anything is applied; values are applied in
        order and the first failing setter propagates.
        """
        if isinstance(attributes, Mapping):
            pairs = list(attributes.items())
        elif isinstance(attributes, Iterable) and not isinstance(attributes, str | bytes):
            pairs = []
            for pair in attributes:
                if isinstance(pair, str | bytes) or not isinstance(pair, Iterable):
                    msg = f"wrong argument type {type(pair).__name__}: expected a (key, value) pair"
                    raise CookieTypeError(msg)
                items = tuple(pair)
                if len(items) != 2:
                    msg = f"Expected a pair of 2 elements, not {len(items)}"
                    raise ArgumentError(msg)
                pairs.append(items)
        else:
            msg = f"wrong argument type {type(attributes).__name__}: expected a Mapping or pairs"
            raise CookieTypeError(msg)

        resolved = [(_resolve_key(key), value) for key, value in pairs]
        for attribute, value in resolved:
            _SETTERS[attribute](self, value)

    # -- Serialization --

    def to_string(self) -> str:
        """Serialize to a ``Set-Cookie`` header value.

        ``name=v1&v2; Domain=...; Path=...; Expires=...; Secure``, with
        unset attributes left out.

        Raises ``ArgumentError`` naming the attribute when unescaped text
        cannot be encoded as latin-1, the header encoding.
        """
        if self._name is None:
            msg = "Cannot serialize a cookie without a name"
            raise StateError(msg)

        escape = _escape if self._config.escape_values else _header_text
        joined = self._config.value_separator.join(escape("value", v) for v in self._values)
        parts = [f"{escape('name', self._name)}={joined}"]
        if self._domain is not None:
            parts.append(f"Domain={_header_text('domain', self._domain)}")
        if self._path is not None:
            parts.append(f"Path={_header_text('path', self._path)}")
        if self._expires is not None:
            parts.append(f"Expires={_header_text('expires', self._expires)}")
        if self._secure:
            parts.append("Secure")
        return "; ".join(parts)

    def bake(self) -> None:
        """Append this cookie to the owning request's response headers.

        Each call appends another header; nothing is deduplicated.
        """
        if self._name is None:
            msg = "Cannot bake a cookie without a name"
            raise StateError(msg)
        if not self._values:
            msg = f"Cannot bake cookie {self._name!r} without values"
            raise StateError(msg)

        header = self.to_string()
        logger.debug("Baking cookie %r: %s: %s", self._name, self._config.header_name, header)
        self._request.append_response_header(self._config.header_name, header)


def _escape(attribute: str, text: str) -> str:
    return quote(text, safe="", errors="surrogateescape")


def _header_text(attribute: str, text: str) -> str:
    try:
        text.encode("latin-1")
    except UnicodeEncodeError:
        msg = f"Cookie {attribute} {text!r} cannot be encoded in a header"
        raise ArgumentError(msg) from None
    return text


# Attribute → setter. ``value`` feeds the ``values`` setter.
_SETTERS: dict[Attribute, Callable[[Cookie, Any], None]] = {
    Attribute.NAME: Cookie.name.fset,  # type: ignore[dict-item]
    Attribute.VALUE: Cookie.values.fset,  # type: ignore[dict-item]
    Attribute.EXPIRES: Cookie.expires.fset,  # type: ignore[dict-item]
    Attribute.DOMAIN: Cookie.domain.fset,  # type: ignore[dict-item]
    Attribute.PATH: Cookie.path.fset,  # type: ignore[dict-item]
    Attribute.SECURE: Cookie.secure.fset,  # type: ignore[dict-item]
}
