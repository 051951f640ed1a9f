"""Generic filesystem/object contract that adapters implement."""

from __future__ import annotations

import abc
from typing import TYPE_CHECKING, BinaryIO

from pixeldrain_fs._errors import CapabilityNotSupported

if TYPE_CHECKING:
    from datetime import datetime, timedelta

    from pixeldrain_fs._capabilities import CapabilitySet, HashType
    from pixeldrain_fs._models import Usage
    from pixeldrain_fs._options import OpenOption
    from pixeldrain_fs._types import WritableContent


class DirEntry(abc.ABC):
    """A file or directory returned by :meth:`Fs.list`."""

    @property
    @abc.abstractmethod
    def remote(self) -> str:
        """Path relative to the root of the filesystem."""

    @abc.abstractmethod
    def mod_time(self) -> datetime:
        """Last modification time."""

    def __str__(self) -> str:
        return self.remote


class ObjectInfo(DirEntry):
    """Read-only description of a file, e.g. the source of an upload."""

    @property
    @abc.abstractmethod
    def size(self) -> int:
        """Size in bytes, or ``-1`` if unknown."""

    def hash(self, hash_type: HashType) -> str:
        """Content hash of the given type.

        :raises CapabilityNotSupported: If the hash type is not offered.
        """
        raise CapabilityNotSupported(
            f"{type(self).__name__} does not provide hashes",
            path=self.remote,
            capability=f"hash:{hash_type.value}",
        )

    @property
    def storable(self) -> bool:
        return True


class Object(ObjectInfo):
    """A file stored in a filesystem, with operations acting on it."""

    @abc.abstractmethod
    def open(self, *options: OpenOption) -> BinaryIO:
        """Open the content for reading."""

    @abc.abstractmethod
    def update(self, content: WritableContent, src: ObjectInfo) -> None:
        """Replace the content and metadata of this object."""

    @abc.abstractmethod
    def remove(self) -> None:
        """Delete this object."""

    @abc.abstractmethod
    def set_mod_time(self, mod_time: datetime) -> None:
        """Change the modification time of this object."""


class StaticObjectInfo(ObjectInfo):
    """Fixed description of content to upload.

    :param remote: Destination path relative to the filesystem root.
    :param mod_time: Modification time to record.
    :param size: Size in bytes, ``-1`` if unknown.
    """

    def __init__(self, remote: str, mod_time: datetime, size: int = -1) -> None:
        self._remote = remote
        self._mod_time = mod_time
        self._size = size

    @property
    def remote(self) -> str:
        return self._remote

    def mod_time(self) -> datetime:
        return self._mod_time

    @property
    def size(self) -> int:
        return self._size

    def __repr__(self) -> str:
        return f"StaticObjectInfo(remote={self._remote!r}, size={self._size!r})"


class Fs(abc.ABC):
    """Abstract hierarchical filesystem.

    Paths are slash-delimited and relative to the filesystem root; ``""``
    is the root itself. Implementations map native failures onto
    ``pixeldrain_fs`` errors.
    """

    @property
    @abc.abstractmethod
    def name(self) -> str:
        """Name of this remote."""

    @property
    @abc.abstractmethod
    def root(self) -> str:
        """Root path the filesystem was created with."""

    @property
    @abc.abstractmethod
    def precision(self) -> timedelta:
        """Precision of stored modification times."""

    @property
    @abc.abstractmethod
    def capabilities(self) -> CapabilitySet:
        """Optional features and hash types."""

    @abc.abstractmethod
    def list(self, path: str) -> list[DirEntry]:
        """List the entries of a directory, in no particular order.

        :raises DirNotFound: If the directory does not exist.
        """

    @abc.abstractmethod
    def new_object(self, remote: str) -> Object:
        """Look up an existing object.

        :raises ObjectNotFound: If nothing exists at ``remote``.
        :raises IsDirectory: If ``remote`` is a directory.
        """

    @abc.abstractmethod
    def put(self, content: WritableContent, src: ObjectInfo) -> Object:
        """Upload content to ``src.remote`` and return the new object."""

    @abc.abstractmethod
    def mkdir(self, path: str) -> None:
        """Create a directory; succeeds if it already exists.

        :raises DirNotFound: If the parent does not exist.
        """

    @abc.abstractmethod
    def rmdir(self, path: str) -> None:
        """Remove an empty directory.

        :raises DirNotFound: If the directory does not exist.
        """

    def purge(self, path: str) -> None:
        """Remove a directory and everything below it.

        :raises CapabilityNotSupported: Unless overridden.
        """
        raise CapabilityNotSupported(f"{self.name} cannot purge", path=path, backend=self.name, capability="purge")

    def move(self, src: Object, remote: str) -> Object:
        """Move an object server-side.

        :raises CapabilityNotSupported: Unless overridden.
        """
        raise CapabilityNotSupported(f"{self.name} cannot move", path=remote, backend=self.name, capability="move")

    def dir_move(self, src: Fs, src_remote: str, dst_remote: str) -> None:
        """Move a directory server-side.

        :raises CapabilityNotSupported: Unless overridden.
        """
        raise CapabilityNotSupported(
            f"{self.name} cannot move directories", path=src_remote, backend=self.name, capability="dir_move"
        )

    def about(self) -> Usage:
        """Quota information.

        :raises CapabilityNotSupported: Unless overridden.
        """
        raise CapabilityNotSupported(f"{self.name} has no quota information", backend=self.name, capability="about")

    def close(self) -> None:  # noqa: B027
        """Release resources. Default is a no-op."""
