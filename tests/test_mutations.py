"""Tests for MutationTranslator: the requests behind each state change."""

from __future__ import annotations

import io
from datetime import datetime, timezone

import pytest
import requests

from pixeldrain_fs._client import ApiClient
from pixeldrain_fs._errors import AlreadyExists, ApiError, NotFound
from pixeldrain_fs._mutations import MutationTranslator
from pixeldrain_fs._path import PathPrefix
from pixeldrain_fs._resolver import PathResolver
from tests.fake_pixeldrain import DEFAULT_API_KEY, DEFAULT_API_URL, FakePixeldrain

MTIME = datetime(2023, 3, 4, 5, 6, 7, 891234, tzinfo=timezone.utc)


@pytest.fixture
def client(session: requests.Session) -> ApiClient:
    return ApiClient(DEFAULT_API_URL, api_key=DEFAULT_API_KEY, session=session)


@pytest.fixture
def translator(client: ApiClient) -> MutationTranslator:
    return MutationTranslator(client, PathResolver(client, PathPrefix("me")))


class TestCreate:
    def test_creates_parents(self, translator: MutationTranslator, server: FakePixeldrain) -> None:
        node = translator.create("a/b/c.txt", b"data")
        assert node.path == "a/b/c.txt"
        assert node.file_size == 4
        assert server.nodes["/me/a/b/c.txt"].content == b"data"
        assert server.nodes["/me/a/b"].type == "dir"

    def test_stream_content(self, translator: MutationTranslator, server: FakePixeldrain) -> None:
        translator.create("s.bin", io.BytesIO(b"streamed"))
        assert server.nodes["/me/s.bin"].content == b"streamed"

    def test_replaces_existing(self, translator: MutationTranslator, server: FakePixeldrain) -> None:
        server.write_file("/me/a.txt", b"old")
        translator.create("a.txt", b"new")
        assert server.nodes["/me/a.txt"].content == b"new"

    def test_onto_directory(self, translator: MutationTranslator, server: FakePixeldrain) -> None:
        server.make_dir("/me/dir")
        with pytest.raises(ApiError) as exc_info:
            translator.create("dir", b"x")
        assert exc_info.value.value == "node_is_a_directory"


class TestUpdate:
    def test_sets_modified_in_milliseconds(self, translator: MutationTranslator, server: FakePixeldrain) -> None:
        server.write_file("/me/a.txt", b"a")
        node = translator.update("a.txt", modified=MTIME)
        assert node.modified == MTIME.replace(microsecond=891000)
        assert server.nodes["/me/a.txt"].modified == MTIME.replace(microsecond=891000)

    def test_missing(self, translator: MutationTranslator) -> None:
        with pytest.raises(NotFound):
            translator.update("missing", modified=MTIME)


class TestMkdir:
    def test_creates(self, translator: MutationTranslator, server: FakePixeldrain) -> None:
        translator.mkdir("new")
        assert server.nodes["/me/new"].type == "dir"

    def test_existing(self, translator: MutationTranslator, server: FakePixeldrain) -> None:
        server.make_dir("/me/new")
        with pytest.raises(AlreadyExists):
            translator.mkdir("new")

    def test_missing_parent(self, translator: MutationTranslator) -> None:
        with pytest.raises(NotFound):
            translator.mkdir("a/b")


class TestDelete:
    def test_file(self, translator: MutationTranslator, server: FakePixeldrain) -> None:
        server.write_file("/me/a.txt", b"a")
        translator.delete("a.txt")
        assert not server.exists("/me/a.txt")

    def test_non_recursive_leaves_contents(self, translator: MutationTranslator, server: FakePixeldrain) -> None:
        server.write_file("/me/dir/a.txt", b"a")
        with pytest.raises(ApiError):
            translator.delete("dir")
        assert server.exists("/me/dir/a.txt")

    def test_recursive(self, translator: MutationTranslator, server: FakePixeldrain) -> None:
        server.write_file("/me/dir/sub/a.txt", b"a")
        translator.delete("dir", recursive=True)
        assert not server.exists("/me/dir")
        assert not server.exists("/me/dir/sub/a.txt")
        assert server.calls_to("DELETE") == ["/filesystem/me/dir"]


class TestRename:
    def test_single_call(self, translator: MutationTranslator, server: FakePixeldrain) -> None:
        server.write_file("/me/a.txt", b"a")
        translator.rename("a.txt", "b.txt")
        assert server.exists("/me/b.txt")
        assert not server.exists("/me/a.txt")
        assert server.calls_to("POST") == ["/filesystem/me/a.txt"]

    def test_from_other_prefix(self, translator: MutationTranslator, server: FakePixeldrain) -> None:
        server.write_file("/me/other/a.txt", b"a")
        translator.rename("a.txt", "moved.txt", source_prefix=PathPrefix("me", "other"))
        assert server.exists("/me/moved.txt")

    def test_destination_exists(self, translator: MutationTranslator, server: FakePixeldrain) -> None:
        server.write_file("/me/a.txt", b"a")
        server.write_file("/me/b.txt", b"b")
        with pytest.raises(AlreadyExists):
            translator.rename("a.txt", "b.txt")


class TestRead:
    def test_streams_content(self, translator: MutationTranslator, server: FakePixeldrain) -> None:
        server.write_file("/me/a.txt", b"hello world")
        response = translator.read("a.txt")
        try:
            assert response.raw.read() == b"hello world"
        finally:
            response.close()

    def test_headers_forwarded(self, translator: MutationTranslator, server: FakePixeldrain) -> None:
        server.write_file("/me/a.txt", b"hello world")
        response = translator.read("a.txt", headers={"Range": "bytes=6-"})
        try:
            assert response.status_code == 206
            assert response.raw.read() == b"world"
        finally:
            response.close()


class TestUserInfo:
    def test_user_info(self, translator: MutationTranslator, server: FakePixeldrain) -> None:
        server.write_file("/me/a.txt", b"abc")
        user = translator.user_info()
        assert user.username == "tester"
        assert user.storage_space == -1
        assert user.storage_space_used == 3
