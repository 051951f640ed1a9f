"""Node model and the other values parsed from API responses."""

from __future__ import annotations

import dataclasses
import enum
import re
from datetime import datetime, timezone
from typing import Any

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
_FRACTION = re.compile(r"\.(\d+)")


def parse_time(raw: str | None) -> datetime:
    """Parse an RFC 3339 timestamp into an aware UTC datetime truncated to milliseconds.

    Go-style nanosecond fractions and a trailing ``Z`` are accepted. Missing
    values map to the Unix epoch.
    """
    if not raw:
        return _EPOCH
    text = raw.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    # fromisoformat() only takes up to six fractional digits before 3.11
    text = _FRACTION.sub(lambda m: "." + m.group(1)[:6].ljust(6, "0"), text, count=1)
    parsed = datetime.fromisoformat(text)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return truncate_time(parsed.astimezone(timezone.utc))


def format_time(value: datetime) -> str:
    """Format a datetime as RFC 3339 UTC with millisecond precision."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    text = value.astimezone(timezone.utc).isoformat(timespec="milliseconds")
    return text.replace("+00:00", "Z")


def truncate_time(value: datetime) -> datetime:
    """Drop sub-millisecond precision, which the remote does not store."""
    return value.replace(microsecond=value.microsecond // 1000 * 1000)


class NodeType(enum.Enum):
    """Kind of a filesystem node."""

    FILE = "file"
    DIR = "dir"


@dataclasses.dataclass(frozen=True)
class FilesystemNode:
    """One file or directory in the remote tree.

    :param type: File or directory.
    :param path: Slash path relative to the bucket/root prefix (``""`` is the root).
    :param name: Leaf name as reported by the remote.
    :param modified: Last modification time, millisecond precision.
    :param created: Creation time.
    :param file_size: Content length in bytes; ``0`` for directories.
    :param file_type: MIME type; empty for directories.
    :param sha256_sum: Lowercase hex SHA-256 computed by the remote; empty for directories.
    :param id: Remote identifier, only present on some nodes (e.g. buckets).
    """

    type: NodeType
    path: str
    name: str = ""
    modified: datetime = _EPOCH
    created: datetime = _EPOCH
    file_size: int = 0
    file_type: str = ""
    sha256_sum: str = ""
    id: str = ""

    @property
    def is_dir(self) -> bool:
        return self.type is NodeType.DIR

    @classmethod
    def from_api(cls, data: dict[str, Any], path: str) -> FilesystemNode:
        """Build a node from its JSON form, using an already prefix-stripped ``path``."""
        node_type = NodeType.DIR if data.get("type") == "dir" else NodeType.FILE
        return cls(
            type=node_type,
            path=path,
            name=str(data.get("name", "")),
            modified=parse_time(data.get("modified")),
            created=parse_time(data.get("created")),
            file_size=int(data.get("file_size") or 0),
            file_type=str(data.get("file_type") or ""),
            sha256_sum=str(data.get("sha256_sum") or "").lower(),
            id=str(data.get("id") or ""),
        )


@dataclasses.dataclass(frozen=True)
class StatResult:
    """A resolved path: the ancestor trace down to the target, plus its children.

    :param path: Nodes from the root down to and including the target.
    :param base_index: Position of the target within ``path``.
    :param children: Immediate children when the target is a directory.
    :raises ValueError: If ``base_index`` does not point into ``path``.
    """

    path: tuple[FilesystemNode, ...]
    base_index: int
    children: tuple[FilesystemNode, ...] = ()

    def __post_init__(self) -> None:
        if not 0 <= self.base_index < len(self.path):
            raise ValueError(f"base_index {self.base_index} outside a trace of {len(self.path)} nodes")

    @property
    def base(self) -> FilesystemNode:
        """The target node."""
        return self.path[self.base_index]

    @property
    def ancestors(self) -> tuple[FilesystemNode, ...]:
        return self.path[: self.base_index]

    def child_result(self, child: FilesystemNode) -> StatResult:
        """Stat result for one of ``children``, carrying this trace as its ancestors."""
        trace = (*self.path[: self.base_index + 1], child)
        return StatResult(path=trace, base_index=len(trace) - 1)

    def with_base(self, node: FilesystemNode) -> StatResult:
        """Copy of this result with the target replaced by ``node``."""
        trace = list(self.path)
        trace[self.base_index] = node
        return dataclasses.replace(self, path=tuple(trace))


@dataclasses.dataclass
class ItemMeta:
    """Metadata cached per remote item identifier.

    Filled in from stat results; nothing reads it yet. It is the slot an
    incremental listing would use to detect stale entries.

    :param sequence_id: The most recent change event seen for this item.
    :param parent_id: Identifier of the parent directory.
    :param name: Leaf name of the item.
    """

    sequence_id: int = 0
    parent_id: str = ""
    name: str = ""


@dataclasses.dataclass(frozen=True)
class UserInfo:
    """Account details returned by the user endpoint.

    :param storage_space: Storage limit in bytes; ``-1`` means unlimited.
    """

    username: str
    subscription_name: str
    storage_space: int
    storage_space_used: int

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> UserInfo:
        subscription = data.get("subscription") or {}
        return cls(
            username=str(data.get("username", "")),
            subscription_name=str(subscription.get("name", "")),
            storage_space=int(subscription.get("storage_space", 0)),
            storage_space_used=int(data.get("storage_space_used", 0)),
        )


@dataclasses.dataclass(frozen=True)
class Usage:
    """Quota information in bytes."""

    used: int
    total: int
    free: int
