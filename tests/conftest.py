import pytest
import yaml
from pathlib import Path

from porterbuilder.config import ToolConfig
from porterbuilder.datacls import BuildContext
from porterbuilder.io import DiskFileSystem, MemoryFileSystem
from porterbuilder.manifest import load_manifest
from porterbuilder.scaffold import manifest_template

TESTDATA = Path(__file__).parent / "testdata"
HOME = "/home/tester/.porter"


@pytest.fixture
def fs():
    """An in-memory working directory at /work"""
    return MemoryFileSystem(root="/work")


@pytest.fixture
def tool():
    return ToolConfig(home=HOME)


@pytest.fixture
def installed_home(fs, tool):
    """Puts a runtime and the exec and helm mixins into the home directory"""
    fs.write_bytes(tool.runtime_path, b"#!/bin/sh\necho runtime\n")
    for mixin in ("exec", "helm"):
        fs.write_bytes(tool.mixin_runtime_path(mixin), f"#!/bin/sh\necho {mixin}\n".encode())
    return tool


@pytest.fixture
def write_manifest(fs):
    """A pytest fixture to write porter.yaml into the working directory."""
    def _write(data=None, text: str = None):
        if text is None:
            text = manifest_template() if data is None else yaml.safe_dump(data, sort_keys=False)
        fs.write_text("porter.yaml", text)
        return "porter.yaml"
    return _write


@pytest.fixture
def make_context(fs, tool, write_manifest):
    """Loads a manifest and wraps it into a build context"""
    def _make(data=None, text: str = None):
        write_manifest(data, text)
        return BuildContext(fs=fs, manifest=load_manifest(fs), tool=tool)
    return _make


@pytest.fixture
def disk_fs(tmp_path: Path):
    workdir = tmp_path / "work"
    workdir.mkdir()
    return DiskFileSystem(root=workdir)


@pytest.fixture
def disk_home(tmp_path: Path):
    """A home directory on disk with an executable runtime and exec mixin"""
    home = tmp_path / "home"
    tool = ToolConfig(home=home)
    for path in (tool.runtime_path, tool.mixin_runtime_path("exec")):
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text("#!/bin/sh\n")
        path.chmod(0o755)
    return tool


class StubImageBuilder:
    """Records build requests instead of talking to Docker"""

    def __init__(self, error: Exception = None):
        self.error = error
        self.built = []

    def build_invocation_image(self, manifest) -> None:
        self.built.append(manifest.image)
        if self.error is not None:
            raise self.error


@pytest.fixture
def stub_builder():
    return StubImageBuilder()


@pytest.fixture
def failing_builder():
    """Image builder that raises the given error"""
    return lambda error: StubImageBuilder(error=error)
