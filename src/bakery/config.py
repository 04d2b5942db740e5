"""Cookie configuration.

CookieConfig is a frozen dataclass: immutable after creation, validated
once, no string-key dict lookups.
"""

from collections.abc import Callable
from dataclasses import dataclass

from bakery.errors import ConfigurationError
from bakery.expiry import compute_expiry


@dataclass(frozen=True, slots=True)
class CookieConfig:
    """Cookie configuration. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = CookieConfig(value_separator="|", escape_values=False)
    """

    # Header written by Cookie.bake()
    header_name: str = "Set-Cookie"

    # Serialization
    value_separator: str = "&"
    escape_values: bool = True  # Percent-encode name and values

    # Request.new_cookie() fills in a path from the request URI when unset
    derive_path: bool = True

    # Resolves string expirations (relative offsets) to HTTP dates
    expiry_calculator: Callable[[str], str] = compute_expiry

    def __post_init__(self) -> None:
        if not self.header_name:
            msg = "header_name must be a non-empty string"
            raise ConfigurationError(msg)
        if not self.value_separator:
            msg = "value_separator must be a non-empty string"
            raise ConfigurationError(msg)
        if ";" in self.value_separator or "=" in self.value_separator:
            msg = f"value_separator {self.value_separator!r} would corrupt the header"
            raise ConfigurationError(msg)
        if not callable(self.expiry_calculator):
            msg = f"expiry_calculator must be callable, got {type(self.expiry_calculator).__name__}"
            raise ConfigurationError(msg)
