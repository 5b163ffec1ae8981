"""Error handling — catching PathError, FilesystemError, remote errors.

Demonstrates the error hierarchy and how to handle errors programmatically
using structured attributes.
"""

from __future__ import annotations

import asyncio

from cloudfs import (
    CloudFilesystem,
    CloudFsError,
    DestinationExists,
    FolderNotEmpty,
    InvalidPath,
    NoSuchFolderOrFile,
    NotFound,
)
from cloudfs.connections import MemoryConnection


async def main() -> None:
    fs = CloudFilesystem(MemoryConnection(buckets=["files"]), "files")

    # --- InvalidPath (raised synchronously) ---
    try:
        fs.entry("relative/path.txt")
    except InvalidPath as exc:
        print(f"InvalidPath: {exc}")

    # --- NoSuchFolderOrFile ---
    try:
        await fs.folder("/a/b/").create()
    except NoSuchFolderOrFile as exc:
        print(f"\nNoSuchFolderOrFile: {exc}")
        print(f"  missing parent={exc.path}")

    # --- FolderNotEmpty ---
    await fs.folder("/a/").create()
    await fs.file("/a/keep.txt").write(b"data", "text/plain")
    try:
        await fs.folder("/a/").delete()
    except FolderNotEmpty as exc:
        print(f"\nFolderNotEmpty: {exc}")

    # --- DestinationExists ---
    try:
        await fs.file("/a/keep.txt").copy_to(fs.file("/a/keep.txt"))
    except DestinationExists as exc:
        print(f"\nDestinationExists: {exc}")

    # --- NotFound from the connection ---
    try:
        await fs.file("/missing.txt").read_bytes()
    except NotFound as exc:
        print(f"\nNotFound: {exc}")
        print(f"  status={exc.status_code}, backend={exc.backend}")

    # --- Catch any cloudfs error with the base class ---
    for path in ("/missing.txt", "/also-missing.txt"):
        try:
            await fs.file(path).delete()
        except CloudFsError as exc:
            print(f"\nCloudFsError ({type(exc).__name__}): {exc}")

    # --- Range errors are ValueErrors ---
    try:
        fs.file("/a/keep.txt").read(5, 5)
    except ValueError as exc:
        print(f"\nValueError: {exc}")

    print("\nDone!")


if __name__ == "__main__":
    asyncio.run(main())
