"""Path resolution: one stat request per path, returning the whole branch."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from pixeldrain_fs._client import FILESYSTEM_ENDPOINT
from pixeldrain_fs._errors import ApiError
from pixeldrain_fs._models import FilesystemNode, ItemMeta, StatResult
from pixeldrain_fs._path import normalize

if TYPE_CHECKING:
    from collections.abc import Iterable

    from pixeldrain_fs._client import ApiClient
    from pixeldrain_fs._path import PathPrefix

log = logging.getLogger(__name__)


class PathResolver:
    """Resolves filesystem paths into :class:`StatResult` values.

    This is the only place that decides whether a path exists and what it is.

    :param client: Transport used for requests.
    :param prefix: Bucket/root prefix, stripped from every returned path.
    """

    def __init__(self, client: ApiClient, prefix: PathPrefix) -> None:
        self._client = client
        self._prefix = prefix
        self.item_meta: dict[str, ItemMeta] = {}

    @property
    def prefix(self) -> PathPrefix:
        return self._prefix

    def endpoint(self, path: str) -> str:
        """Escaped filesystem endpoint for a normalized path."""
        return FILESYSTEM_ENDPOINT + self._prefix.escape(path)

    def stat(self, path: str) -> StatResult:
        """Resolve ``path`` into its ancestor trace and, for directories, its children.

        :raises NotFound: If nothing exists at ``path``.
        :raises ApiError: For any other error response, or a response without a target node.
        """
        rel = normalize(path)
        body = self._client.request_json("GET", self.endpoint(rel), path=rel, params={"stat": ""})
        result = self.parse_stat(body, rel)
        self._remember(result.path)
        return result

    def parse_stat(self, body: dict[str, Any], path: str = "") -> StatResult:
        """Build a :class:`StatResult` from a stat response body.

        Trace nodes above the configured root are dropped, so the trace
        starts at the root of this filesystem.
        """
        raw_trace = body.get("path") or []
        base_index = int(body.get("base_index", len(raw_trace) - 1))

        trace: list[FilesystemNode] = []
        target = -1
        for i, item in enumerate(raw_trace):
            rel = self._prefix.strip(str(item.get("path", "")))
            if rel is None:
                continue
            if i == base_index:
                target = len(trace)
            trace.append(FilesystemNode.from_api(item, rel))
        if target < 0:
            raise ApiError("stat response has no target node inside the root", path=path, backend="pixeldrain")

        children: tuple[FilesystemNode, ...] = ()
        if trace[target].is_dir:
            children = tuple(self._nodes(body.get("children") or []))
        return StatResult(path=tuple(trace), base_index=target, children=children)

    def parse_node(self, body: dict[str, Any], path: str) -> FilesystemNode:
        """Build a single node from a mutation response; ``path`` is used if the body has none inside the root."""
        rel = self._prefix.strip(str(body.get("path", "")))
        return FilesystemNode.from_api(body, path if rel is None else rel)

    def _nodes(self, items: Iterable[dict[str, Any]]) -> Iterable[FilesystemNode]:
        for item in items:
            rel = self._prefix.strip(str(item.get("path", "")))
            if rel is None:
                log.debug("Skipping child outside root: %s", item.get("path"))
                continue
            yield FilesystemNode.from_api(item, rel)

    def _remember(self, trace: tuple[FilesystemNode, ...]) -> None:
        parent_id = ""
        for node in trace:
            if not node.id:
                continue
            meta = self.item_meta.setdefault(node.id, ItemMeta())
            meta.parent_id = parent_id
            meta.name = node.name
            parent_id = node.id
