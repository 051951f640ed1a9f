"""Options accepted by ``Object.open``, passed to the remote as request headers."""

from __future__ import annotations

import abc
import dataclasses


class OpenOption(abc.ABC):
    """An option that becomes one HTTP header on the download request."""

    @abc.abstractmethod
    def header(self) -> tuple[str, str]:
        """Return the ``(name, value)`` header pair for this option."""


@dataclasses.dataclass(frozen=True)
class RangeOption(OpenOption):
    """Read bytes ``start`` to ``end`` inclusive.

    A negative ``start`` reads the last ``end`` bytes; a negative ``end``
    reads to the end of the file.
    """

    start: int
    end: int = -1

    def header(self) -> tuple[str, str]:
        if self.start < 0:
            return "Range", f"bytes=-{self.end}"
        if self.end < 0:
            return "Range", f"bytes={self.start}-"
        return "Range", f"bytes={self.start}-{self.end}"


@dataclasses.dataclass(frozen=True)
class SeekOption(OpenOption):
    """Read from ``offset`` to the end of the file."""

    offset: int

    def header(self) -> tuple[str, str]:
        return "Range", f"bytes={self.offset}-"


@dataclasses.dataclass(frozen=True)
class HTTPOption(OpenOption):
    """Arbitrary header sent unchanged."""

    key: str
    value: str

    def header(self) -> tuple[str, str]:
        return self.key, self.value


def option_headers(options: tuple[OpenOption, ...]) -> dict[str, str]:
    """Collect option headers; later options win on conflicts."""
    headers: dict[str, str] = {}
    for option in options:
        key, value = option.header()
        headers[key] = value
    return headers
