"""Streaming I/O — upload from a stream and read ranges of a file.

Demonstrates:
- Uploading from a file-like object
- Reading a byte range, a suffix, and from an offset
- Replacing the content of an existing object

Requires PIXELDRAIN_API_KEY to be set.
"""

from __future__ import annotations

import io
from datetime import datetime, timezone

from pixeldrain_fs import PixeldrainConfig, PixeldrainFs, RangeOption, SeekOption, StaticObjectInfo

if __name__ == "__main__":
    config = PixeldrainConfig.from_env()

    with PixeldrainFs.from_config(config, "pixeldrain-fs-streaming") as fs:
        fs.mkdir("")

        data = b"0123456789" * 1000
        obj = fs.put(io.BytesIO(data), StaticObjectInfo("digits.bin", datetime.now(timezone.utc), len(data)))
        print(f"Uploaded {obj.size} bytes")

        with obj.open(RangeOption(0, 9)) as stream:
            print(f"First 10 bytes: {stream.read()!r}")

        with obj.open(RangeOption(-1, 5)) as stream:
            print(f"Last 5 bytes: {stream.read()!r}")

        with obj.open(SeekOption(9995)) as stream:
            print(f"From offset 9995: {stream.read()!r}")

        # Replace the content in place
        obj.update(io.BytesIO(b"short"), StaticObjectInfo(obj.remote, datetime.now(timezone.utc), 5))
        print(f"After update: {obj.size} bytes")

        fs.purge("")

    print("Done!")
