"""Configuration — config-as-code, from_dict() and environment variables.

Demonstrates the ways to create a PixeldrainConfig and open a filesystem
from it, for the personal bucket and for a shared directory.
"""

from __future__ import annotations

import os

from pixeldrain_fs import PixeldrainConfig, PixeldrainFs

if __name__ == "__main__":
    # --- Option 1: Config-as-code ---
    personal = PixeldrainConfig(api_key=os.environ.get("PIXELDRAIN_API_KEY"), timeout=30)
    print(f"Personal: {personal!r}")

    # --- Option 2: from_dict(), e.g. loaded from TOML or JSON ---
    raw = {"bucket_id": "abc123", "timeout": 10}
    shared = PixeldrainConfig.from_dict(raw)
    print(f"Shared: {shared!r}")

    # --- Option 3: PIXELDRAIN_* environment variables ---
    from_env = PixeldrainConfig.from_env()
    print(f"From environment: bucket={from_env.bucket_id}, url={from_env.api_url}")

    # The API key never shows up in the repr
    assert "api_key" not in repr(personal)

    # --- Open a filesystem below a sub-directory of the bucket ---
    if personal.api_key:
        with PixeldrainFs.from_config(personal, "photos/2024", name="photos") as fs:
            print(f"\nOpened {fs} (logged in: {fs.logged_in})")
            usage = fs.about()
            print(f"Used {usage.used} of {usage.total} bytes, {usage.free} free")

    print("\nDone!")
