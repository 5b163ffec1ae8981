"""Quickstart — minimal config, write, and read with cloudfs.

Demonstrates:
- Building a RegistryConfig from a plain dict with compact profiles
- Getting a CloudFilesystem and resolving ``<name>:<path>`` locations
- Creating a folder, writing and reading a file
- Copying a file between profiles
"""

from __future__ import annotations

import asyncio

from cloudfs import Registry, RegistryConfig


async def main() -> None:
    config = RegistryConfig.from_dict(
        {
            "connections": {"mem": {"type": "memory", "options": {"buckets": ["data", "backup"]}}},
            "filesystems": {"data": "mem:data", "greetings": "mem:data/greetings/", "backup": "mem:backup"},
        }
    )

    async with Registry(config) as registry:
        fs = registry.get_filesystem("data")

        # Create a folder and write a file into it
        folder = await fs.folder("/greetings/").create()
        hello = await registry.file("greetings:/hello.txt").write(b"Hello, world!", "text/plain")
        print(f"Folder exists: {await folder.exists()}")
        print(f"Written to: {hello.path}")

        # Read it back
        content = await hello.read_bytes()
        print(f"Content: {content!r}")

        # Check metadata
        info = await hello.metadata()
        assert info is not None
        print(f"Size: {info.size} bytes")
        print(f"Content type: {info.content_type}")

        # Copy into another bucket
        copied = await registry.copy("greetings:/hello.txt", "backup:/hello.txt")
        print(f"Backup: {copied.filesystem.bucket}{copied.path}")


if __name__ == "__main__":
    asyncio.run(main())
