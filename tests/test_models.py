"""Tests for the node model and timestamp handling."""

from __future__ import annotations

import dataclasses
from datetime import datetime, timedelta, timezone

import pytest

from pixeldrain_fs._models import (
    FilesystemNode,
    ItemMeta,
    NodeType,
    StatResult,
    UserInfo,
    format_time,
    parse_time,
    truncate_time,
)

NOW = datetime(2024, 5, 6, 7, 8, 9, 123456, tzinfo=timezone.utc)


def _dir(path: str) -> FilesystemNode:
    return FilesystemNode(type=NodeType.DIR, path=path, name=path.rsplit("/", 1)[-1])


def _file(path: str) -> FilesystemNode:
    return FilesystemNode(type=NodeType.FILE, path=path, name=path.rsplit("/", 1)[-1], file_size=3)


class TestTimes:
    def test_parse_go_nanoseconds(self) -> None:
        assert parse_time("2024-05-06T07:08:09.123456789Z") == datetime(2024, 5, 6, 7, 8, 9, 123000, tzinfo=timezone.utc)

    def test_parse_offset(self) -> None:
        assert parse_time("2024-05-06T09:08:09+02:00") == datetime(2024, 5, 6, 7, 8, 9, tzinfo=timezone.utc)

    def test_parse_short_fraction(self) -> None:
        assert parse_time("2024-05-06T07:08:09.5Z").microsecond == 500000

    def test_parse_missing_is_epoch(self) -> None:
        assert parse_time(None) == datetime(1970, 1, 1, tzinfo=timezone.utc)
        assert parse_time("") == datetime(1970, 1, 1, tzinfo=timezone.utc)

    def test_format_milliseconds(self) -> None:
        assert format_time(NOW) == "2024-05-06T07:08:09.123Z"

    def test_format_converts_to_utc(self) -> None:
        local = NOW.astimezone(timezone(timedelta(hours=5)))
        assert format_time(local) == "2024-05-06T07:08:09.123Z"

    def test_format_naive_as_utc(self) -> None:
        assert format_time(NOW.replace(tzinfo=None)) == "2024-05-06T07:08:09.123Z"

    def test_truncate(self) -> None:
        assert truncate_time(NOW).microsecond == 123000

    def test_format_parse_keeps_milliseconds(self) -> None:
        assert parse_time(format_time(NOW)) == truncate_time(NOW)


class TestFilesystemNode:
    def test_from_api_file(self) -> None:
        node = FilesystemNode.from_api(
            {
                "type": "file",
                "path": "/me/docs/a.txt",
                "name": "a.txt",
                "modified": "2024-05-06T07:08:09.123456789Z",
                "created": "2024-01-01T00:00:00Z",
                "file_size": 42,
                "file_type": "text/plain",
                "sha256_sum": "ABCDEF",
            },
            "docs/a.txt",
        )
        assert node.type is NodeType.FILE
        assert node.path == "docs/a.txt"
        assert node.name == "a.txt"
        assert node.file_size == 42
        assert node.file_type == "text/plain"
        assert node.sha256_sum == "abcdef"
        assert node.modified.microsecond == 123000
        assert not node.is_dir

    def test_from_api_dir(self) -> None:
        node = FilesystemNode.from_api({"type": "dir", "path": "/me", "name": "me", "id": "me"}, "")
        assert node.is_dir
        assert node.file_size == 0
        assert node.id == "me"

    def test_frozen(self) -> None:
        node = _file("a")
        with pytest.raises(dataclasses.FrozenInstanceError):
            node.path = "b"  # type: ignore[misc]


class TestStatResult:
    def test_base(self) -> None:
        root, docs = _dir(""), _dir("docs")
        stat = StatResult(path=(root, docs), base_index=1, children=(_file("docs/a"),))
        assert stat.base is docs
        assert stat.ancestors == (root,)

    @pytest.mark.parametrize("index", [-1, 2])
    def test_base_index_must_point_into_trace(self, index: int) -> None:
        with pytest.raises(ValueError, match="base_index"):
            StatResult(path=(_dir(""), _dir("docs")), base_index=index)

    def test_empty_trace_rejected(self) -> None:
        with pytest.raises(ValueError):
            StatResult(path=(), base_index=0)

    def test_child_result(self) -> None:
        root, docs, child = _dir(""), _dir("docs"), _file("docs/a")
        stat = StatResult(path=(root, docs), base_index=1, children=(child,))
        sub = stat.child_result(child)
        assert sub.path == (root, docs, child)
        assert sub.base is child
        assert sub.children == ()

    def test_with_base(self) -> None:
        root, a = _dir(""), _file("a")
        stat = StatResult(path=(root, a), base_index=1)
        moved = dataclasses.replace(a, path="b")
        updated = stat.with_base(moved)
        assert updated.base.path == "b"
        assert updated.path[0] is root
        assert stat.base.path == "a"


class TestOtherModels:
    def test_item_meta_defaults(self) -> None:
        meta = ItemMeta()
        assert meta.sequence_id == 0
        assert meta.parent_id == ""
        assert meta.name == ""

    def test_user_info(self) -> None:
        user = UserInfo.from_api(
            {"username": "u", "subscription": {"name": "Free", "storage_space": -1}, "storage_space_used": 10}
        )
        assert user == UserInfo(username="u", subscription_name="Free", storage_space=-1, storage_space_used=10)

    def test_user_info_missing_subscription(self) -> None:
        user = UserInfo.from_api({"username": "u"})
        assert user.storage_space == 0
        assert user.subscription_name == ""
