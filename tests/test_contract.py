"""Tests for the generic filesystem contract and its default behaviour."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from pixeldrain_fs._capabilities import CapabilitySet, HashType
from pixeldrain_fs._contract import DirEntry, Fs, Object, ObjectInfo, StaticObjectInfo
from pixeldrain_fs._errors import CapabilityNotSupported

MTIME = datetime(2020, 1, 1, tzinfo=timezone.utc)


class MinimalFs(Fs):
    """Implements only the required operations."""

    @property
    def name(self) -> str:
        return "minimal"

    @property
    def root(self) -> str:
        return ""

    @property
    def precision(self) -> timedelta:
        return timedelta(seconds=1)

    @property
    def capabilities(self) -> CapabilitySet:
        return CapabilitySet()

    def list(self, path: str) -> list[DirEntry]:
        return []

    def new_object(self, remote: str) -> Object:
        raise NotImplementedError

    def put(self, content: object, src: ObjectInfo) -> Object:  # type: ignore[override]
        raise NotImplementedError

    def mkdir(self, path: str) -> None:
        pass

    def rmdir(self, path: str) -> None:
        pass


class TestStaticObjectInfo:
    def test_fields(self) -> None:
        info = StaticObjectInfo("a/b.txt", MTIME, 42)
        assert info.remote == "a/b.txt"
        assert info.mod_time() == MTIME
        assert info.size == 42
        assert info.storable
        assert str(info) == "a/b.txt"
        assert repr(info) == "StaticObjectInfo(remote='a/b.txt', size=42)"

    def test_unknown_size(self) -> None:
        assert StaticObjectInfo("a", MTIME).size == -1

    def test_no_hashes(self) -> None:
        with pytest.raises(CapabilityNotSupported) as exc_info:
            StaticObjectInfo("a", MTIME).hash(HashType.SHA256)
        assert exc_info.value.capability == "hash:sha256"


class TestFsDefaults:
    @pytest.fixture
    def fs(self) -> MinimalFs:
        return MinimalFs()

    def test_purge(self, fs: MinimalFs) -> None:
        with pytest.raises(CapabilityNotSupported) as exc_info:
            fs.purge("dir")
        assert exc_info.value.capability == "purge"

    def test_move(self, fs: MinimalFs) -> None:
        with pytest.raises(CapabilityNotSupported) as exc_info:
            fs.move(None, "b")  # type: ignore[arg-type]
        assert exc_info.value.capability == "move"

    def test_dir_move(self, fs: MinimalFs) -> None:
        with pytest.raises(CapabilityNotSupported) as exc_info:
            fs.dir_move(fs, "a", "b")
        assert exc_info.value.capability == "dir_move"

    def test_about(self, fs: MinimalFs) -> None:
        with pytest.raises(CapabilityNotSupported) as exc_info:
            fs.about()
        assert exc_info.value.capability == "about"

    def test_close_is_noop(self, fs: MinimalFs) -> None:
        fs.close()

    def test_abstract(self) -> None:
        with pytest.raises(TypeError):
            Fs()  # type: ignore[abstract]
