"""Mutation translator: each state change as the minimal set of API calls."""

from __future__ import annotations

from typing import TYPE_CHECKING

from pixeldrain_fs._client import FILESYSTEM_ENDPOINT, USER_ENDPOINT
from pixeldrain_fs._models import UserInfo, format_time
from pixeldrain_fs._path import normalize

if TYPE_CHECKING:
    from collections.abc import Mapping
    from datetime import datetime

    import requests

    from pixeldrain_fs._client import ApiClient
    from pixeldrain_fs._models import FilesystemNode
    from pixeldrain_fs._path import PathPrefix
    from pixeldrain_fs._resolver import PathResolver
    from pixeldrain_fs._types import WritableContent


class MutationTranslator:
    """Issues create/update/mkdir/delete/rename calls and reads content.

    Errors are those of :meth:`ApiClient.request`: :class:`NotFound` and
    :class:`AlreadyExists` are classified, everything else is an
    :class:`ApiError`. Callers re-map them to the contract of their operation.

    :param client: Transport used for requests.
    :param resolver: Resolver providing the prefix and response parsing.
    """

    def __init__(self, client: ApiClient, resolver: PathResolver) -> None:
        self._client = client
        self._resolver = resolver

    def create(self, path: str, content: WritableContent) -> FilesystemNode:
        """Upload ``content`` to ``path``, replacing any file there and creating missing parents."""
        rel = normalize(path)
        body = self._client.request_json(
            "PUT",
            self._resolver.endpoint(rel),
            path=rel,
            params={"make_parents": "true"},
            data=content,
        )
        return self._resolver.parse_node(body, rel)

    def update(self, path: str, *, modified: datetime) -> FilesystemNode:
        """Set the modification time of ``path`` and return the updated node."""
        rel = normalize(path)
        body = self._client.request_json(
            "POST",
            self._resolver.endpoint(rel),
            path=rel,
            data={"action": "update", "modified": format_time(modified)},
        )
        return self._resolver.parse_node(body, rel)

    def mkdir(self, path: str) -> None:
        """Create one directory; its parent must exist."""
        rel = normalize(path)
        self._client.request("POST", self._resolver.endpoint(rel), path=rel, data={"action": "mkdir"}).close()

    def delete(self, path: str, *, recursive: bool = False) -> None:
        """Delete ``path``; a non-recursive delete of a non-empty directory fails remotely."""
        rel = normalize(path)
        params = {"recursive": ""} if recursive else None
        self._client.request("DELETE", self._resolver.endpoint(rel), path=rel, params=params).close()

    def rename(self, src: str, dst: str, *, source_prefix: PathPrefix | None = None) -> None:
        """Rename ``src`` to ``dst`` in a single call.

        :param source_prefix: Prefix ``src`` is relative to, when it comes from
            another filesystem on the same account.
        """
        src_rel = normalize(src)
        prefix = source_prefix or self._resolver.prefix
        target = self._resolver.prefix.add(dst)
        self._client.request(
            "POST",
            FILESYSTEM_ENDPOINT + prefix.escape(src_rel),
            path=src_rel,
            data={"action": "rename", "target": target},
        ).close()

    def read(self, path: str, headers: Mapping[str, str] | None = None) -> requests.Response:
        """Open a streaming download of ``path``; the caller closes the response."""
        rel = normalize(path)
        return self._client.request("GET", self._resolver.endpoint(rel), path=rel, headers=headers, stream=True)

    def user_info(self) -> UserInfo:
        """Read the account details of the configured API key."""
        return UserInfo.from_api(self._client.request_json("GET", USER_ENDPOINT))
