"""Connection implementations."""

from cloudfs.connections._memory import MemoryConnection
from cloudfs.connections._s3 import S3Connection

__all__ = ["MemoryConnection", "S3Connection"]
