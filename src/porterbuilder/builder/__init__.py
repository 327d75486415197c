"""
Porter Builder Builder Module

- Builder: Build orchestration, from porter.yaml to bundle.json
- BuildContextPreparer: Stages runtime and mixin binaries into cnab/
- DockerfileGenerator: Renders the invocation image Dockerfile
- DockerBuilder: Builds the invocation image with Docker

Usage:
    from porterbuilder.builder import Builder, DockerBuilder
    from porterbuilder.io import DiskFileSystem

    fs = DiskFileSystem(root=".")
    bundle = Builder(fs, DockerBuilder(fs.root)).run()
"""

from .build import Builder, BuildStage
from .prepare import BuildContextPreparer
from .dockerfile import DockerfileGenerator, DockerfileTrailer
from .docker import DockerBuilder

__all__ = [
    'Builder',
    'BuildStage',
    'BuildContextPreparer',
    'DockerfileGenerator',
    'DockerfileTrailer',
    'DockerBuilder',
]
