"""Configuration model — immutable options describing how to reach the API."""

from __future__ import annotations

import dataclasses
import os
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Mapping

DEFAULT_API_URL = "https://pixeldrain.com/api"
DEFAULT_BUCKET_ID = "me"
DEFAULT_TIMEOUT = 60.0

_ENV_PREFIX = "PIXELDRAIN_"


@dataclasses.dataclass(frozen=True)
class PixeldrainConfig:
    """Connection options.

    :param api_key: API key of the account; ``None`` for anonymous access.
    :param bucket_id: Root of the filesystem. ``"me"`` is the personal
        filesystem and requires an API key; any other value is the ID of a
        shared directory.
    :param api_url: Base URL of the API. Only meant to change for testing.
    :param timeout: Per-request timeout in seconds.
    """

    api_key: str | None = dataclasses.field(default=None, repr=False)
    bucket_id: str = DEFAULT_BUCKET_ID
    api_url: str = DEFAULT_API_URL
    timeout: float = DEFAULT_TIMEOUT

    def validate(self) -> None:
        """Check option values.

        :raises ValueError: If an option is empty or out of range.
        """
        if not self.bucket_id or not self.bucket_id.strip():
            raise ValueError("bucket_id must be a non-empty string")
        if not self.api_url or not self.api_url.strip():
            raise ValueError("api_url must be a non-empty string")
        if self.timeout <= 0:
            raise ValueError(f"timeout must be positive, got {self.timeout!r}")

    @classmethod
    def from_dict(cls, data: Mapping[str, object]) -> PixeldrainConfig:
        """Construct from a plain dict (e.g. parsed TOML/JSON).

        :raises TypeError: If a value has the wrong type.
        """
        unknown = set(data) - {f.name for f in dataclasses.fields(cls)}
        if unknown:
            msg = f"Unknown config keys: {sorted(unknown)}"
            raise TypeError(msg)

        api_key = data.get("api_key")
        if api_key is not None and not isinstance(api_key, str):
            msg = "'api_key' must be a string"
            raise TypeError(msg)
        timeout = data.get("timeout", DEFAULT_TIMEOUT)
        if isinstance(timeout, bool) or not isinstance(timeout, (int, float, str)):
            msg = "'timeout' must be a number"
            raise TypeError(msg)

        config = cls(
            api_key=api_key or None,
            bucket_id=str(data.get("bucket_id", DEFAULT_BUCKET_ID)),
            api_url=str(data.get("api_url", DEFAULT_API_URL)),
            timeout=float(timeout),
        )
        config.validate()
        return config

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> PixeldrainConfig:
        """Construct from ``PIXELDRAIN_*`` environment variables."""
        env = os.environ if environ is None else environ
        data: dict[str, object] = {}
        for field in dataclasses.fields(cls):
            value = env.get(_ENV_PREFIX + field.name.upper())
            if value:
                data[field.name] = value
        return cls.from_dict(data)
