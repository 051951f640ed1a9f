"""Quickstart — connect, upload, list and read back with pixeldrain-fs.

Demonstrates:
- Building a PixeldrainConfig from PIXELDRAIN_* environment variables
- Uploading a file with a modification time
- Listing a directory and reading the file back

Requires PIXELDRAIN_API_KEY to be set.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone

from pixeldrain_fs import HashType, PixeldrainConfig, PixeldrainFs, StaticObjectInfo

if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    config = PixeldrainConfig.from_env()

    with PixeldrainFs.from_config(config, "pixeldrain-fs-quickstart") as fs:
        fs.mkdir("")

        # Upload a file
        content = b"Hello, world!"
        src = StaticObjectInfo("hello.txt", datetime.now(timezone.utc), len(content))
        obj = fs.put(content, src)
        print(f"Uploaded {obj.remote}: {obj.size} bytes, modified {obj.mod_time()}")
        print(f"SHA-256: {obj.hash(HashType.SHA256)}")

        # List the root
        for entry in fs.list(""):
            print(f"  {entry.remote}")

        # Read it back
        with obj.open() as stream:
            print(f"Content: {stream.read()!r}")

        fs.purge("")

    print("Done!")
