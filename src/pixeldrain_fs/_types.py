"""Type aliases used throughout pixeldrain_fs."""

from __future__ import annotations

from typing import BinaryIO

WritableContent = BinaryIO | bytes
