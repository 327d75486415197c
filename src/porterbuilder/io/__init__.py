"""
Porter Builder IO Module

- FileSystem: Abstract file system interface, relative paths resolve against its root
- DiskFileSystem: Local disk file system (fsspec)
- MemoryFileSystem: In-memory file system (morefs) for tests and scratch builds

Usage:
    from porterbuilder.io import DiskFileSystem

    fs = DiskFileSystem(root="/workspace")
    content = fs.read_text("porter.yaml")
"""

from .fs import (
    FileSystem,
    GenericFileSystem,
    DiskFileSystem,
    MemoryFileSystem,
    PathLike,
)

__all__ = [
    'FileSystem',
    'GenericFileSystem',
    'DiskFileSystem',
    'MemoryFileSystem',
    'PathLike',
]
