"""Shared test fixtures: an in-memory API and filesystems mounted on it."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from pixeldrain_fs._fs import PixeldrainFs
from tests.fake_pixeldrain import DEFAULT_API_KEY, DEFAULT_API_URL, FakePixeldrain

if TYPE_CHECKING:
    from collections.abc import Iterator

    import requests


@pytest.fixture
def server() -> FakePixeldrain:
    return FakePixeldrain()


@pytest.fixture
def session(server: FakePixeldrain) -> Iterator[requests.Session]:
    s = server.session()
    yield s
    s.close()


@pytest.fixture
def fs(session: requests.Session) -> Iterator[PixeldrainFs]:
    """Filesystem on the personal bucket, logged in."""
    f = PixeldrainFs(api_key=DEFAULT_API_KEY, api_url=DEFAULT_API_URL, session=session)
    yield f
    f.close()


@pytest.fixture
def rooted_fs(server: FakePixeldrain, session: requests.Session) -> Iterator[PixeldrainFs]:
    """Filesystem rooted at ``/me/base``."""
    server.make_dir("/me/base")
    f = PixeldrainFs("base", api_key=DEFAULT_API_KEY, api_url=DEFAULT_API_URL, session=session)
    yield f
    f.close()
