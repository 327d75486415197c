from abc import ABC, abstractmethod
from typing import IO, Union
from pathlib import Path, PurePath, PurePosixPath
import functools
import logging
import shutil

import fsspec
from morefs.memory import MemFS
from typing_extensions import override

from ..exceptions import (
    PathExistsError,
    PathNotFoundError,
    NotAFileError,
    NotADirError,
)

logger = logging.getLogger(__name__)

PathLike = Union[str, PurePath]


def wrap_io_error(func):
    """Decorator to wrap IO errors into porterbuilder exceptions."""

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except FileExistsError as e:
            raise PathExistsError(e) from e
        except FileNotFoundError as e:
            raise PathNotFoundError(e) from e
        except IsADirectoryError as e:
            raise NotAFileError(e) from e
        except NotADirectoryError as e:
            raise NotADirError(e) from e

    return wrapper

# --------------------
#
# Abstract FileSystem
#
# --------------------

class FileSystem(ABC):
    """Porter Builder File System Abstract Base Class.

    Relative paths are resolved against the file system's ``root``, which is
    the working directory of the build.
    """

    root: PurePath

    @abstractmethod
    def read_text(self, path: PathLike) -> str:
        """Read text from a file"""
        pass

    @abstractmethod
    def read_bytes(self, path: PathLike) -> bytes:
        """Read bytes from a file"""
        pass

    @abstractmethod
    def write_text(self, path: PathLike, content: str):
        """Write text to a file"""
        pass

    @abstractmethod
    def write_bytes(self, path: PathLike, content: bytes):
        """Write bytes to a file"""
        pass

    @abstractmethod
    def copy(self, src: PathLike, dst: PathLike):
        """Copy a file from src to dst"""
        pass

    @abstractmethod
    def exists(self, path: PathLike) -> bool:
        """Check if a path exists"""
        pass

    @abstractmethod
    def is_dir(self, path: PathLike) -> bool:
        """Check if a path is a directory"""
        pass

    @abstractmethod
    def is_file(self, path: PathLike) -> bool:
        """Check if a path is a file"""
        pass

    @abstractmethod
    def mkdir(self, path: PathLike, parents: bool = False, exist_ok: bool = False):
        """Create a directory"""
        pass

    @abstractmethod
    def rmtree(self, path: PathLike):
        """Remove a directory recursively"""
        pass

    @abstractmethod
    def open(self, path: PathLike, mode: str = "rb", **kwargs) -> IO:
        """Open a file"""
        pass

# --------------------
#
# Generic FileSystem
#
# --------------------

class GenericFileSystem(FileSystem, ABC):
    """Shared implementation for fsspec and morefs backed file systems"""

    def __init__(self, fs_instance, root: PathLike, name=None):
        """
        Initialize with a filesystem instance

        Args:
            fs_instance: The underlying filesystem instance (fsspec or morefs)
            root: Directory that relative paths are resolved against
            name: Optional name for logging purposes
        """
        self.fs = fs_instance
        self.root = PurePosixPath(PurePath(root).as_posix())
        self.name = name or f"{type(fs_instance).__name__}"

    def path2str(self, path: PathLike) -> str:
        """Resolve a path against root and convert it to string"""
        posix = PurePosixPath(PurePath(path).as_posix())
        if not posix.is_absolute():
            posix = self.root / posix
        return str(posix)

    def _parent(self, path: PathLike) -> str:
        return str(PurePosixPath(self.path2str(path)).parent)

    @override
    @wrap_io_error
    def read_text(self, path: PathLike, encoding: str = "utf-8") -> str:
        logger.debug(f"[{self.name}] Reading from: {path}")
        with self.fs.open(self.path2str(path), "r", encoding=encoding) as f:
            return f.read()

    @override
    @wrap_io_error
    def read_bytes(self, path: PathLike) -> bytes:
        logger.debug(f"[{self.name}] Reading bytes from: {path}")
        with self.fs.open(self.path2str(path), "rb") as f:
            return f.read()

    @override
    @wrap_io_error
    def write_text(self, path: PathLike, content: str, encoding: str = "utf-8"):
        logger.debug(f"[{self.name}] Writing to: {path}")
        self.fs.mkdirs(self._parent(path), exist_ok=True)
        with self.fs.open(self.path2str(path), "w", encoding=encoding) as f:
            f.write(content)

    @override
    @wrap_io_error
    def write_bytes(self, path: PathLike, content: bytes):
        logger.debug(f"[{self.name}] Writing bytes to: {path}")
        self.fs.mkdirs(self._parent(path), exist_ok=True)
        with self.fs.open(self.path2str(path), "wb") as f:
            f.write(content)

    @override
    @wrap_io_error
    def copy(self, src: PathLike, dst: PathLike):
        logger.debug(f"[{self.name}] Copying path '{src}' to '{dst}'")
        self.fs.mkdirs(self._parent(dst), exist_ok=True)
        self.fs.copy(self.path2str(src), self.path2str(dst))

    @override
    def exists(self, path: PathLike) -> bool:
        return self.fs.exists(self.path2str(path))

    @override
    def is_dir(self, path: PathLike) -> bool:
        return self.fs.isdir(self.path2str(path))

    @override
    def is_file(self, path: PathLike) -> bool:
        return self.fs.isfile(self.path2str(path))

    @override
    @wrap_io_error
    def mkdir(self, path: PathLike, parents: bool = False, exist_ok: bool = False):
        self.fs.mkdirs(self.path2str(path), exist_ok=exist_ok)

    @override
    @wrap_io_error
    def rmtree(self, path: PathLike):
        if self.fs.exists(self.path2str(path)):
            self.fs.rm(self.path2str(path), recursive=True)
        else:
            logger.debug(f"Path {path} does not exist, skipping rmtree.")

    @override
    @wrap_io_error
    def open(self, path: PathLike, mode: str = "rb", **kwargs) -> IO:
        """Open a file"""
        logger.debug(f"[{self.name}] Opening: {path} with mode '{mode}'")

        if "w" in mode or "a" in mode:
            parent_path_str = self._parent(path)
            if parent_path_str and parent_path_str != "/":
                self.fs.mkdirs(parent_path_str, exist_ok=True)

        return self.fs.open(self.path2str(path), mode=mode, **kwargs)

# --------------------
#
# Disk FileSystem
#
# --------------------

class DiskFileSystem(GenericFileSystem):
    """Local disk file system using fsspec"""

    def __init__(self, root: PathLike = None):
        root = Path(root).expanduser().resolve() if root is not None else Path.cwd()
        super().__init__(fsspec.filesystem("file"), root=root, name="fileFS")

    @override
    @wrap_io_error
    def copy(self, src: PathLike, dst: PathLike):
        super().copy(src, dst)
        # runtimes and mixins must stay executable inside the image
        shutil.copymode(self.path2str(src), self.path2str(dst))

    @override
    @wrap_io_error
    def open(self, path: PathLike, mode: str = "rb", **kwargs) -> IO:
        """Open a file"""
        return open(self.path2str(path), mode, **kwargs)

# --------------------
#
# Memory FileSystem
#
# --------------------

class MemoryFileSystem(GenericFileSystem):
    """
    In-memory filesystem backed by morefs
    """

    def __init__(self, root: PathLike = "/"):
        super().__init__(MemFS(skip_instance_cache=True), root=root, name="MemFS")
