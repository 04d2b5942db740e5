"""Request context that outbound cookies are bound to.

``RequestContext`` is the only capability a ``Cookie`` needs from the
host server: somewhere to append a response header. ``Request`` is a
small in-memory implementation for hosts that don't bring their own.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

from bakery.config import CookieConfig
from bakery.http.headers import ResponseHeaders

if TYPE_CHECKING:
    from bakery.cookies import Cookie


@runtime_checkable
class RequestContext(Protocol):
    """Anything that can receive outgoing response headers.

    Checked structurally when a ``Cookie`` is created. No base class
    required::

        class HostRequest:
            def append_response_header(self, name: str, value: str) -> None:
                self.outgoing.append((name, value))
    """

    def append_response_header(self, name: str, value: str) -> None: ...


@dataclass(slots=True)
class Request:
    """A request being handled, and the headers it will send back.

    ``method`` and ``path`` describe the inbound request; ``headers_out``
    collects what the handler adds, including baked cookies.
    """

    method: str
    path: str
    headers_out: ResponseHeaders = field(default_factory=ResponseHeaders)
    config: CookieConfig = field(default_factory=CookieConfig)

    def append_response_header(self, name: str, value: str) -> None:
        """Add a header to the response without replacing existing ones."""
        self.headers_out.append(name, value)

    @property
    def cookie_path(self) -> str:
        """Default cookie path: the parent directory of the request path.

        ``/app/login`` gives ``/app/``; ``/`` and ``/index`` give ``/``.
        """
        parent, slash, _ = self.path.rpartition("/")
        if not slash:
            return "/"
        return f"{parent}/"

    def new_cookie(self, attributes: Mapping[str, Any] | None = None) -> Cookie:
        """Create a cookie bound to this request.

        Uses this request's ``config``. When ``config.derive_path`` is set
        and *attributes* has no ``path``, the path defaults to
        ``cookie_path``.
        """
        from bakery.cookies import Cookie

        cookie = Cookie(self, attributes, config=self.config)
        if self.config.derive_path and cookie.path is None:
            cookie.path = self.cookie_path
        return cookie
