"""Error handling — catching ObjectNotFound, DirNotFound, PartialWrite, etc.

Demonstrates the normalized error hierarchy and how to handle errors
programmatically using structured attributes.

Requires PIXELDRAIN_API_KEY to be set.
"""

from __future__ import annotations

from datetime import datetime, timezone

from pixeldrain_fs import (
    AuthenticationRequired,
    CapabilityNotSupported,
    DirNotFound,
    HashType,
    InvalidPath,
    NotFound,
    ObjectNotFound,
    PartialWrite,
    PixeldrainConfig,
    PixeldrainError,
    PixeldrainFs,
    StaticObjectInfo,
)

if __name__ == "__main__":
    config = PixeldrainConfig.from_env()

    # --- AuthenticationRequired ---
    try:
        PixeldrainFs(api_key=None, api_url=config.api_url)
    except AuthenticationRequired as exc:
        print(f"AuthenticationRequired: {exc}")

    with PixeldrainFs.from_config(config, "pixeldrain-fs-errors") as fs:
        fs.mkdir("")

        # --- ObjectNotFound (also a NotFound) ---
        try:
            fs.new_object("nonexistent.txt")
        except ObjectNotFound as exc:
            print(f"\nObjectNotFound: {exc}")
            print(f"  path={exc.path}, backend={exc.backend}, is NotFound: {isinstance(exc, NotFound)}")

        # --- DirNotFound ---
        try:
            fs.list("missing-dir")
        except DirNotFound as exc:
            print(f"\nDirNotFound: {exc}")

        # --- InvalidPath (path traversal attempt) ---
        try:
            fs.new_object("../../etc/passwd")
        except InvalidPath as exc:
            print(f"\nInvalidPath: {exc}")

        # --- CapabilityNotSupported ---
        obj = fs.put(b"data", StaticObjectInfo("a.txt", datetime.now(timezone.utc), 4))
        try:
            obj.hash(HashType.MD5)
        except CapabilityNotSupported as exc:
            print(f"\nCapabilityNotSupported: {exc} (capability={exc.capability})")

        # --- PartialWrite: content stored, modification time not ---
        try:
            fs.put(b"more", StaticObjectInfo("b.txt", datetime.now(timezone.utc), 4))
        except PartialWrite as exc:
            print(f"\nPartialWrite: {exc}, uploaded={exc.uploaded}")

        # --- Catch any pixeldrain-fs error with the base class ---
        for path in ["missing.txt", "../../escape"]:
            try:
                fs.new_object(path)
            except PixeldrainError as exc:
                print(f"\nPixeldrainError ({type(exc).__name__}): {exc}")

        fs.purge("")

    print("\nDone!")
