"""Facade entities: files as objects, directories as plain entries."""

from __future__ import annotations

import dataclasses
import logging
from typing import TYPE_CHECKING, BinaryIO

from pixeldrain_fs._contract import DirEntry, Object
from pixeldrain_fs._errors import NotFound, ObjectNotFound
from pixeldrain_fs._options import option_headers
from pixeldrain_fs._path import base_name

if TYPE_CHECKING:
    from datetime import datetime

    from pixeldrain_fs._capabilities import HashType
    from pixeldrain_fs._contract import ObjectInfo
    from pixeldrain_fs._fs import PixeldrainFs
    from pixeldrain_fs._models import FilesystemNode, StatResult
    from pixeldrain_fs._options import OpenOption
    from pixeldrain_fs._types import WritableContent

log = logging.getLogger(__name__)


class PixeldrainObject(Object):
    """A file in a :class:`PixeldrainFs`.

    The handle is a cached view of one remote node together with the stat
    result it was resolved from, so the ancestor trace is available without
    another request. Operations that change the remote node (``set_mod_time``,
    ``update``, a move) refresh the handle by swapping in a new stat result;
    fields are never patched one by one. A handle is not safe for concurrent
    mutation.

    :param fs: The filesystem this object belongs to.
    :param stat: Stat result whose target is this file.
    """

    def __init__(self, fs: PixeldrainFs, stat: StatResult) -> None:
        self._fs = fs
        self._stat = stat

    @property
    def fs(self) -> PixeldrainFs:
        return self._fs

    @property
    def stat(self) -> StatResult:
        """The stat result backing this handle."""
        return self._stat

    @property
    def base(self) -> FilesystemNode:
        return self._stat.base

    @property
    def remote(self) -> str:
        return self.base.path

    def mod_time(self) -> datetime:
        return self.base.modified

    @property
    def size(self) -> int:
        return self.base.file_size

    def mime_type(self) -> str:
        return self.base.file_type

    def hash(self, hash_type: HashType) -> str:
        """Lowercase hex digest computed by the remote.

        :raises CapabilityNotSupported: For any hash type other than SHA-256.
        """
        self._fs.capabilities.require_hash(hash_type, path=self.remote, backend=self._fs.name)
        return self.base.sha256_sum

    def open(self, *options: OpenOption) -> BinaryIO:
        """Stream the content; range options are sent to the remote unchanged."""
        log.debug("Open '%s'", self.remote)
        response = self._fs.translator.read(self.remote, headers=option_headers(options))
        response.raw.decode_content = True
        return response.raw  # type: ignore[no-any-return]

    def set_mod_time(self, mod_time: datetime) -> None:
        log.debug("SetModTime '%s'", self.remote)
        node = self._fs.translator.update(self.remote, modified=mod_time)
        self._stat = self._stat.with_base(node)

    def update(self, content: WritableContent, src: ObjectInfo) -> None:
        """Re-upload this object and adopt the state of the result.

        Follows the two-step protocol of :meth:`PixeldrainFs.put`; on any
        failure, including :class:`PartialWrite`, the handle is left as it was.
        """
        log.debug("Update '%s' '%d'", self.remote, src.size)
        new = self._fs.upload(self.remote, content, src.mod_time())
        self._adopt(new)

    def remove(self) -> None:
        """Delete this file.

        :raises ObjectNotFound: If the file no longer exists.
        """
        log.debug("Remove '%s'", self.remote)
        try:
            self._fs.translator.delete(self.remote, recursive=False)
        except NotFound:
            raise ObjectNotFound(f"Object not found: {self.remote}", path=self.remote, backend=self._fs.name) from None

    def _adopt(self, other: PixeldrainObject) -> None:
        self._fs = other._fs
        self._stat = other._stat

    def _moved_to(self, fs: PixeldrainFs, remote: str) -> None:
        self._fs = fs
        self._stat = self._stat.with_base(dataclasses.replace(self.base, path=remote, name=base_name(remote)))

    def __repr__(self) -> str:
        return f"PixeldrainObject(remote={self.remote!r}, size={self.size!r})"


class Directory(DirEntry):
    """A directory entry returned by :meth:`PixeldrainFs.list`.

    :param stat: Stat result whose target is this directory.
    """

    def __init__(self, stat: StatResult) -> None:
        self._stat = stat

    @property
    def stat(self) -> StatResult:
        return self._stat

    @property
    def remote(self) -> str:
        return self._stat.base.path

    def mod_time(self) -> datetime:
        return self._stat.base.modified

    @property
    def size(self) -> int:
        return -1

    @property
    def items(self) -> int:
        """Number of entries, ``-1`` as listings do not report it."""
        return -1

    def __repr__(self) -> str:
        return f"Directory(remote={self.remote!r})"
