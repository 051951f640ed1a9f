"""Tests for Capability, HashType and CapabilitySet."""

from __future__ import annotations

import dataclasses

import pytest

from pixeldrain_fs._capabilities import Capability, CapabilitySet, HashType
from pixeldrain_fs._errors import CapabilityNotSupported


@pytest.fixture
def caps() -> CapabilitySet:
    return CapabilitySet(
        features=frozenset({Capability.PURGE, Capability.MOVE}),
        hashes=frozenset({HashType.SHA256}),
    )


class TestCapabilitySet:
    def test_supports(self, caps: CapabilitySet) -> None:
        assert caps.supports(Capability.PURGE)
        assert not caps.supports(Capability.ABOUT)

    def test_contains(self, caps: CapabilitySet) -> None:
        assert Capability.MOVE in caps
        assert Capability.DIR_MOVE not in caps

    def test_iter_and_len(self, caps: CapabilitySet) -> None:
        assert set(caps) == {Capability.PURGE, Capability.MOVE}
        assert len(caps) == 2

    def test_empty(self) -> None:
        assert len(CapabilitySet()) == 0

    def test_frozen(self, caps: CapabilitySet) -> None:
        with pytest.raises(dataclasses.FrozenInstanceError):
            caps.features = frozenset()  # type: ignore[misc]


class TestRequireHash:
    def test_supported(self, caps: CapabilitySet) -> None:
        caps.require_hash(HashType.SHA256)

    def test_unsupported(self, caps: CapabilitySet) -> None:
        with pytest.raises(CapabilityNotSupported) as exc_info:
            caps.require_hash(HashType.MD5, path="a.txt", backend="pixeldrain")
        assert exc_info.value.capability == "hash:md5"
        assert exc_info.value.path == "a.txt"
        assert exc_info.value.backend == "pixeldrain"
