"""Path normalization and the bucket/root prefix."""

from __future__ import annotations

from typing import Final
from urllib.parse import quote

from pixeldrain_fs._errors import InvalidPath


def normalize(raw: str) -> str:
    """Normalize a slash-delimited filesystem path.

    Leading, trailing and repeated slashes are dropped, as are ``.`` segments.
    The empty string denotes the configured root.

    :param raw: The raw path string.
    :raises InvalidPath: If the path contains a null byte or a ``..`` segment.
    """
    if "\0" in raw:
        raise InvalidPath("Path contains null byte", path=raw)
    parts: list[str] = []
    for segment in raw.split("/"):
        if segment == "" or segment == ".":
            continue
        if segment == "..":
            raise InvalidPath("Path contains '..' segment", path=raw)
        parts.append(segment)
    return "/".join(parts)


def base_name(path: str) -> str:
    """Final component of a normalized path."""
    return path.rsplit("/", 1)[-1]


class PathPrefix:
    """The ``/<bucket>/<root>/`` segment in front of every remote path.

    Paths handed to the rest of the package never contain it: :meth:`add`
    puts it back when a request is issued and :meth:`strip` removes it from
    every path the API returns.

    :param bucket_id: Bucket identifier; ``"me"`` is the personal filesystem.
    :param root: Sub-root inside the bucket (may be empty).
    :raises InvalidPath: If the bucket id is empty or contains a slash.
    """

    __slots__ = ("_prefix",)
    _prefix: Final[str]  # type: ignore[misc]

    def __init__(self, bucket_id: str, root: str = "") -> None:
        if not bucket_id or "/" in bucket_id:
            raise InvalidPath("Bucket id must be a single non-empty segment", path=bucket_id)
        prefix = f"/{bucket_id}/"
        root = normalize(root)
        if root:
            prefix += root + "/"
        object.__setattr__(self, "_prefix", prefix)

    @property
    def value(self) -> str:
        """The prefix including its leading and trailing slash."""
        return self._prefix

    def add(self, path: str) -> str:
        """Prefix a filesystem path, e.g. ``"a/b"`` -> ``"/me/root/a/b"``."""
        rel = normalize(path)
        if not rel:
            return self._prefix.rstrip("/")
        return self._prefix + rel

    def strip(self, remote_path: str) -> str | None:
        """Remove the prefix from a path returned by the API.

        :returns: The filesystem path (``""`` for the root itself), or ``None``
            if the remote path lies above the configured root.
        """
        if remote_path.rstrip("/") == self._prefix.rstrip("/"):
            return ""
        if remote_path.startswith(self._prefix):
            return remote_path[len(self._prefix) :].strip("/")
        return None

    def escape(self, path: str) -> str:
        """Prefixed path with every segment percent-escaped for use in a URL."""
        return quote(self.add(path), safe="/")

    def __str__(self) -> str:
        return self._prefix

    def __repr__(self) -> str:
        return f"PathPrefix({self._prefix!r})"

    def __eq__(self, other: object) -> bool:
        if isinstance(other, PathPrefix):
            return self._prefix == other._prefix
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._prefix)

    def __setattr__(self, name: str, value: object) -> None:
        raise AttributeError(f"PathPrefix is immutable: cannot set '{name}'")

    def __delattr__(self, name: str) -> None:
        raise AttributeError(f"PathPrefix is immutable: cannot delete '{name}'")
