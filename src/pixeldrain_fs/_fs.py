"""PixeldrainFs — the filesystem facade over the pixeldrain API."""

from __future__ import annotations

import logging
from datetime import timedelta
from typing import TYPE_CHECKING

from pixeldrain_fs._capabilities import Capability, CapabilitySet, HashType
from pixeldrain_fs._client import FILESYSTEM_ENDPOINT, ApiClient
from pixeldrain_fs._config import DEFAULT_API_URL, DEFAULT_BUCKET_ID, DEFAULT_TIMEOUT, PixeldrainConfig
from pixeldrain_fs._contract import Fs
from pixeldrain_fs._errors import (
    AlreadyExists,
    ApiError,
    AuthenticationRequired,
    BackendUnavailable,
    CantMove,
    DirExists,
    DirNotFound,
    IsDirectory,
    NotFound,
    ObjectNotFound,
    PartialWrite,
    PixeldrainError,
)
from pixeldrain_fs._models import StatResult, Usage
from pixeldrain_fs._mutations import MutationTranslator
from pixeldrain_fs._object import Directory, PixeldrainObject
from pixeldrain_fs._path import PathPrefix, normalize
from pixeldrain_fs._resolver import PathResolver

if TYPE_CHECKING:
    from datetime import datetime
    from types import TracebackType

    import requests

    from pixeldrain_fs._contract import DirEntry, Object, ObjectInfo
    from pixeldrain_fs._models import ItemMeta, UserInfo
    from pixeldrain_fs._types import WritableContent

log = logging.getLogger(__name__)

_PERSONAL_BUCKET = "me"
_UNLIMITED_STORAGE = -1
_STORAGE_CEILING = 10**15  # 1 PB
_CAPABILITIES = CapabilitySet(features=frozenset(Capability), hashes=frozenset({HashType.SHA256}))


class PixeldrainFs(Fs):
    """Hierarchical filesystem backed by a pixeldrain bucket.

    Every operation is one to three synchronous requests. Paths are
    relative to ``root`` inside the bucket. The instance itself is
    read-only after construction and can be shared between threads;
    returned objects cannot.

    :param root: Sub-directory of the bucket to use as the root (may be empty).
    :param api_key: API key of the account.
    :param bucket_id: ``"me"`` for the personal filesystem (requires ``api_key``)
        or the ID of a shared directory.
    :param api_url: Base URL of the API.
    :param timeout: Per-request timeout in seconds.
    :param name: Name of this remote, used in logs and errors.
    :param session: ``requests`` session to send requests through.
    :raises AuthenticationRequired: If the API key is rejected, or bucket ``"me"``
        is used without one.
    :raises BackendUnavailable: If the API cannot be reached while logging in.
    """

    def __init__(
        self,
        root: str = "",
        *,
        api_key: str | None = None,
        bucket_id: str = DEFAULT_BUCKET_ID,
        api_url: str = DEFAULT_API_URL,
        timeout: float = DEFAULT_TIMEOUT,
        name: str = "pixeldrain",
        session: requests.Session | None = None,
    ) -> None:
        PixeldrainConfig(api_key=api_key, bucket_id=bucket_id, api_url=api_url, timeout=timeout).validate()
        self._name = name
        self._root = normalize(root)
        self._bucket_id = bucket_id
        self._prefix = PathPrefix(bucket_id, self._root)
        self._client = ApiClient(api_url, api_key=api_key, timeout=timeout, session=session, backend=name)
        self._resolver = PathResolver(self._client, self._prefix)
        self._translator = MutationTranslator(self._client, self._resolver)
        self._logged_in = False

        if self._client.has_credentials:
            user = self._login()
            self._logged_in = True
            log.info(
                "Logged in as '%s', subscription '%s', storage limit %d",
                user.username,
                user.subscription_name,
                user.storage_space,
            )

        if not self._logged_in and bucket_id == _PERSONAL_BUCKET:
            self._client.close()
            raise AuthenticationRequired(
                "authentication required: the 'me' directory can only be accessed while logged in",
                backend=name,
            )

        log.info(
            "Created filesystem with name '%s', root '%s', bucket '%s', endpoint '%s'",
            name,
            self._root,
            bucket_id,
            self._client.api_url + FILESYSTEM_ENDPOINT + self._prefix.value,
        )

    @classmethod
    def from_config(
        cls,
        config: PixeldrainConfig,
        root: str = "",
        *,
        name: str = "pixeldrain",
        session: requests.Session | None = None,
    ) -> PixeldrainFs:
        """Construct from a :class:`PixeldrainConfig`."""
        return cls(
            root,
            api_key=config.api_key,
            bucket_id=config.bucket_id,
            api_url=config.api_url,
            timeout=config.timeout,
            name=name,
            session=session,
        )

    def _login(self) -> UserInfo:
        """Read the user info to check the credentials, retrying connection failures."""
        from tenacity import before_sleep_log, retry, retry_if_exception_type, stop_after_attempt, wait_exponential

        @retry(
            retry=retry_if_exception_type(BackendUnavailable),
            stop=stop_after_attempt(3),
            wait=wait_exponential(multiplier=1, min=2, max=10),
            before_sleep=before_sleep_log(log, logging.WARNING),  # type: ignore[arg-type,unused-ignore]
            reraise=True,
        )
        def _fetch() -> UserInfo:
            return self._translator.user_info()

        try:
            return _fetch()
        except ApiError as exc:
            self._client.close()
            raise AuthenticationRequired(f"failed to get user data: {exc}", backend=self._name) from exc
        except PixeldrainError:
            self._client.close()
            raise

    # region: info

    @property
    def name(self) -> str:
        return self._name

    @property
    def root(self) -> str:
        return self._root

    @property
    def bucket_id(self) -> str:
        return self._bucket_id

    @property
    def precision(self) -> timedelta:
        return timedelta(milliseconds=1)

    @property
    def capabilities(self) -> CapabilitySet:
        return _CAPABILITIES

    @property
    def hashes(self) -> frozenset[HashType]:
        return _CAPABILITIES.hashes

    @property
    def logged_in(self) -> bool:
        return self._logged_in

    @property
    def prefix(self) -> PathPrefix:
        return self._prefix

    @property
    def translator(self) -> MutationTranslator:
        return self._translator

    @property
    def item_meta(self) -> dict[str, ItemMeta]:
        """Per-item metadata gathered from stat results, keyed by remote ID."""
        return self._resolver.item_meta

    def __str__(self) -> str:
        return f"pixeldrain root '{self._root}'"

    def __repr__(self) -> str:
        return f"PixeldrainFs(name={self._name!r}, bucket_id={self._bucket_id!r}, root={self._root!r})"

    # endregion

    # region: lookups

    def stat(self, path: str) -> StatResult:
        """Resolve ``path`` into its ancestor trace and children.

        :raises NotFound: If nothing exists at ``path``.
        """
        return self._resolver.stat(path)

    def list(self, path: str) -> list[DirEntry]:
        """List the children of ``path`` in the order the remote returns them.

        Listing a file yields no entries.

        :raises DirNotFound: If nothing exists at ``path``.
        """
        log.debug("List '%s'", path)
        try:
            stat = self._resolver.stat(path)
        except NotFound:
            raise DirNotFound(f"Directory not found: {path}", path=path, backend=self._name) from None
        return [self._entry(stat.child_result(child)) for child in stat.children]

    def new_object(self, remote: str) -> PixeldrainObject:
        """Look up the file at ``remote``.

        :raises ObjectNotFound: If nothing exists at ``remote``.
        :raises IsDirectory: If ``remote`` is a directory.
        """
        log.debug("NewObject '%s'", remote)
        try:
            stat = self._resolver.stat(remote)
        except NotFound:
            log.debug("Object '%s' does not exist", remote)
            raise ObjectNotFound(f"Object not found: {remote}", path=remote, backend=self._name) from None
        if stat.base.is_dir:
            raise IsDirectory(f"Path is a directory: {remote}", path=remote, backend=self._name)
        return PixeldrainObject(self, stat)

    def _entry(self, stat: StatResult) -> DirEntry:
        if stat.base.is_dir:
            return Directory(stat)
        return PixeldrainObject(self, stat)

    # endregion

    # region: writes

    def put(self, content: WritableContent, src: ObjectInfo) -> PixeldrainObject:
        """Upload ``content`` to ``src.remote``, replacing any existing file.

        :raises PartialWrite: If the content was stored but its modification time could not be set.
        """
        log.debug("Put '%s'", src.remote)
        return self.upload(src.remote, content, src.mod_time())

    def upload(self, remote: str, content: WritableContent, mod_time: datetime) -> PixeldrainObject:
        """Store content and then its modification time, in two requests.

        The remote cannot take the modification time together with the
        content. The upload must succeed before the metadata update is
        attempted, and a failed upload leaves nothing to report. A failed
        metadata update does not remove the content: it raises
        :class:`PartialWrite` carrying the uploaded node.

        The returned object holds the node from the metadata update, with a
        trace consisting of that node alone.
        """
        uploaded = self._translator.create(remote, content)
        try:
            node = self._translator.update(remote, modified=mod_time)
        except PixeldrainError as exc:
            raise PartialWrite(
                f"content uploaded but setting the modification time failed: {exc}",
                path=remote,
                backend=self._name,
                uploaded=uploaded,
            ) from exc
        return PixeldrainObject(self, StatResult(path=(node,), base_index=0))

    def mkdir(self, path: str) -> None:
        """Create the directory ``path``; an existing directory is not an error.

        :raises DirNotFound: If the parent directory does not exist.
        """
        log.debug("Mkdir '%s'", path)
        try:
            self._translator.mkdir(path)
        except NotFound:
            raise DirNotFound(f"Parent directory not found: {path}", path=path, backend=self._name) from None
        except AlreadyExists:
            log.debug("Directory '%s' already exists", path)

    def rmdir(self, path: str) -> None:
        """Remove ``path`` if it is empty; a non-empty directory fails with the remote's error.

        :raises DirNotFound: If ``path`` does not exist.
        """
        log.debug("Rmdir '%s'", path)
        self._delete_dir(path, recursive=False)

    def purge(self, path: str) -> None:
        """Remove ``path`` and everything below it in a single request.

        :raises DirNotFound: If ``path`` does not exist.
        """
        log.debug("Purge '%s'", path)
        self._delete_dir(path, recursive=True)

    def _delete_dir(self, path: str, *, recursive: bool) -> None:
        try:
            self._translator.delete(path, recursive=recursive)
        except NotFound:
            raise DirNotFound(f"Directory not found: {path}", path=path, backend=self._name) from None

    # endregion

    # region: moves

    def move(self, src: Object, remote: str) -> PixeldrainObject:
        """Rename ``src`` to ``remote`` with one server-side call.

        ``src`` is updated in place and returned; size, hash and modification
        time carry over unchanged.

        :raises CantMove: If ``src`` is not a pixeldrain object or no longer exists.
        """
        log.debug("Move '%s' '%s'", src.remote, remote)
        if not isinstance(src, PixeldrainObject):
            log.debug("Can't move '%s' - not same remote type", src)
            raise CantMove(f"Can't move {type(src).__name__} to pixeldrain", path=src.remote, backend=self._name)
        try:
            self._translator.rename(src.remote, remote, source_prefix=src.fs.prefix)
        except NotFound:
            raise CantMove(f"Source not found: {src.remote}", path=src.remote, backend=self._name) from None
        src._moved_to(self, normalize(remote))
        return src

    def dir_move(self, src: Fs, src_remote: str, dst_remote: str) -> None:
        """Rename the directory ``src_remote`` of ``src`` to ``dst_remote`` here.

        :raises CantMove: If ``src`` is not a pixeldrain filesystem.
        :raises DirNotFound: If the source does not exist.
        :raises DirExists: If the destination already exists.
        """
        log.debug("DirMove '%s' '%s'", src_remote, dst_remote)
        if not isinstance(src, PixeldrainFs):
            raise CantMove(f"Can't move directories from {src.name}", path=src_remote, backend=self._name)
        try:
            self._translator.rename(src_remote, dst_remote, source_prefix=src.prefix)
        except NotFound:
            raise DirNotFound(f"Directory not found: {src_remote}", path=src_remote, backend=self._name) from None
        except AlreadyExists:
            raise DirExists(f"Destination exists: {dst_remote}", path=dst_remote, backend=self._name) from None

    # endregion

    def about(self) -> Usage:
        """Quota of the account; an unlimited plan reports a 1 PB total."""
        log.debug("About")
        user = self._translator.user_info()
        total = user.storage_space
        if total == _UNLIMITED_STORAGE:
            total = _STORAGE_CEILING
        used = user.storage_space_used
        return Usage(used=used, total=total, free=max(total - used, 0))

    def close(self) -> None:
        """Close the HTTP session if this filesystem created it."""
        self._client.close()

    def __enter__(self) -> PixeldrainFs:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        self.close()
