"""Optional features and supported hash types."""

from __future__ import annotations

import dataclasses
import enum
from typing import TYPE_CHECKING, Optional

from pixeldrain_fs._errors import CapabilityNotSupported

if TYPE_CHECKING:
    from collections.abc import Iterator


class Capability(enum.Enum):
    """Optional features a filesystem may offer beyond the basic contract."""

    READ_MIME_TYPE = "read_mime_type"
    EMPTY_DIRECTORIES = "empty_directories"
    PURGE = "purge"
    MOVE = "move"
    DIR_MOVE = "dir_move"
    ABOUT = "about"


class HashType(enum.Enum):
    """Content hash algorithms a caller may ask an object for."""

    MD5 = "md5"
    SHA1 = "sha1"
    SHA256 = "sha256"


@dataclasses.dataclass(frozen=True)
class CapabilitySet:
    """Immutable description of what a filesystem supports.

    :param features: Optional features on top of the basic contract.
    :param hashes: Hash types objects can report.
    """

    features: frozenset[Capability] = frozenset()
    hashes: frozenset[HashType] = frozenset()

    def supports(self, cap: Capability) -> bool:
        """Check whether a feature is supported."""
        return cap in self.features

    def require_hash(self, hash_type: HashType, *, path: Optional[str] = None, backend: str = "") -> None:
        """Raise if objects cannot report ``hash_type``.

        :raises CapabilityNotSupported: If the hash type is not offered.
        """
        if hash_type not in self.hashes:
            raise CapabilityNotSupported(
                f"Hash type '{hash_type.value}' is not supported",
                path=path,
                backend=backend or None,
                capability=f"hash:{hash_type.value}",
            )

    def __contains__(self, cap: object) -> bool:
        return cap in self.features

    def __iter__(self) -> Iterator[Capability]:
        return iter(self.features)

    def __len__(self) -> int:
        return len(self.features)
