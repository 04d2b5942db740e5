"""Outgoing response headers, as baked cookies land in them."""


class ResponseHeaders:
    """Ordered header lines a handler adds to its response.

    Lines are only ever appended, so two baked cookies give two
    ``Set-Cookie`` lines. Names match case-insensitively on lookup.
    """

    __slots__ = ("_lines",)

    def __init__(self) -> None:
        self._lines: list[tuple[str, str]] = []

    def append(self, name: str, value: str) -> None:
        self._lines.append((name, value))

    def get_list(self, name: str) -> list[str]:
        """Return every value appended under *name*, oldest first."""
        key = name.lower()
        return [value for line_name, value in self._lines if line_name.lower() == key]
