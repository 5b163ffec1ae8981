"""Folder and file operations — the full entry API demonstrated.

Covers: create (recursive), list, is_empty, write, ranged read, copy_to,
move_to, properties, and recursive delete, using the memory connection.
"""

from __future__ import annotations

import asyncio

from cloudfs import CloudFilesystem, RemoteFolder
from cloudfs.connections import MemoryConnection


async def main() -> None:
    connection = MemoryConnection(buckets=["workspace", "archive"])
    fs = CloudFilesystem(connection, "workspace")
    archive = CloudFilesystem(connection, "archive")

    # --- Create folders ---
    await fs.folder("/docs/2024/").create(recursive=True)
    await fs.folder("/data/").create()
    print("Created /docs/, /docs/2024/ and /data/.\n")

    # --- Write ---
    await fs.file("/docs/readme.txt").write(b"First file", "text/plain")
    await fs.file("/docs/2024/changelog.txt").write(b"v0.1.0 - initial release", "text/plain")
    report = await fs.file("/data/report.csv").write(b"col1,col2\n1,2\n3,4", "text/csv")

    # --- List ---
    print("Entries in /docs/:")
    async for entry in fs.folder("/docs/").list():
        kind = "folder" if isinstance(entry, RemoteFolder) else "file"
        print(f"  {entry.path} ({kind})")

    # --- Ranged read ---
    print(f"\nFirst line of report.csv: {await report.read_bytes(9)!r}")
    print(f"report.csv is {await report.length()} bytes")

    # --- Properties ---
    await report.set_property("owner", "data-team")
    print(f"owner: {await fs.file('/data/report.csv').get_property('owner')}")

    # --- Copy across buckets, then move ---
    backup = await report.copy_to(archive.file("/2024/report.csv"))
    print(f"\nBacked up to {backup.filesystem.bucket}:{backup.path}")
    moved = await report.move_to(fs.file("/data/report-final.csv"))
    print(f"Moved to {moved.path}; original exists: {await report.exists()}")

    # --- Recursive delete ---
    await fs.folder("/docs/").delete(recursive=True)
    print(f"\n/docs/ exists after recursive delete: {await fs.folder('/docs/').exists()}")
    print(f"/data/ is empty: {await fs.folder('/data/').is_empty()}")


if __name__ == "__main__":
    asyncio.run(main())
