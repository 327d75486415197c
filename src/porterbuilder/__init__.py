"""
Porter Builder

Builds a bundle from a declarative application manifest (porter.yaml):
stages the runtime and mixins, generates the invocation image Dockerfile,
builds the image, and writes the bundle descriptor (bundle.json).

Main modules:
- builder: Build orchestration, Dockerfile generation, build context preparation
- bundle: Manifest to bundle conversion and bundle.json writing
- manifest: Manifest loading and validation
- config: Tool home directory layout
- io: File system access (disk and in-memory)
- datacls: Type-safe data classes and models
- utils: Utility functions

Quick start example:
```python
from porterbuilder import Builder, DockerBuilder, DiskFileSystem

fs = DiskFileSystem(root=".")
bundle = Builder(fs, DockerBuilder(fs.root)).run()
```
"""

__version__ = "0.1.0"

from .protocols import ImageBuilderProtocol, BundleConverterProtocol
from .config import ToolConfig
from .manifest import Manifest, load_manifest
from .builder import Builder, BuildStage, DockerBuilder, DockerfileGenerator, DockerfileTrailer
from .bundle import ManifestConverter, BundleWriter
from .datacls import Bundle, BuildContext
from .io import FileSystem, DiskFileSystem, MemoryFileSystem
from .exceptions import (
    PorterBuilderError,
    ConfigurationError,
    ManifestLoadError,
    BuildError,
    FilesystemPrepError,
    TemplateReadError,
    GenerationError,
    ExternalBuildError,
    ConversionError,
    BundleWriteError,
)

__all__ = [
    # Version
    '__version__',
    # Protocols
    'ImageBuilderProtocol',
    'BundleConverterProtocol',
    # Config
    'ToolConfig',
    'Manifest',
    'load_manifest',
    # Builder
    'Builder',
    'BuildStage',
    'DockerBuilder',
    'DockerfileGenerator',
    'DockerfileTrailer',
    # Bundle
    'ManifestConverter',
    'BundleWriter',
    'Bundle',
    'BuildContext',
    # IO
    'FileSystem',
    'DiskFileSystem',
    'MemoryFileSystem',
    # Exceptions
    'PorterBuilderError',
    'ConfigurationError',
    'ManifestLoadError',
    'BuildError',
    'FilesystemPrepError',
    'TemplateReadError',
    'GenerationError',
    'ExternalBuildError',
    'ConversionError',
    'BundleWriteError',
]
