import logging
from enum import Enum
from typing import IO, Dict, Optional

from .. import constants
from ..config import ToolConfig
from ..datacls import BuildContext, Bundle
from ..io import FileSystem
from ..manifest import Manifest, load_manifest
from ..protocols import BundleConverterProtocol, ImageBuilderProtocol
from ..bundle import BundleWriter, ManifestConverter
from ..exceptions import ExternalBuildError, PorterBuilderError
from .prepare import BuildContextPreparer
from .dockerfile import DockerfileGenerator, DockerfileTrailer

logger = logging.getLogger(__name__)


class BuildStage(str, Enum):
    START = "start"
    MANIFEST_LOADED = "manifest-loaded"
    FILESYSTEM_PREPARED = "filesystem-prepared"
    BUILD_FILE_GENERATED = "build-file-generated"
    IMAGE_BUILT = "image-built"
    CONVERTED = "converted"
    WRITTEN = "written"
    DONE = "done"
    FAILED = "failed"


class Builder:
    """
    Runs one build in the working directory of ``fs``:

        load manifest -> prepare filesystem -> generate Dockerfile
        -> build invocation image -> convert to bundle -> write bundle.json

    The first error stops the run, leaves the builder in ``FAILED`` with the
    error in ``self.error``, and is raised to the caller as is. Artifacts
    written by earlier stages stay on disk.
    """

    def __init__(
        self,
        fs: FileSystem,
        image_builder: ImageBuilderProtocol,
        converter: Optional[BundleConverterProtocol] = None,
        tool: Optional[ToolConfig] = None,
        manifest_path: str = constants.MANIFEST_FILENAME,
        trailer: Optional[DockerfileTrailer] = None,
        out: Optional[IO[str]] = None,
    ):
        self.fs = fs
        self.image_builder = image_builder
        self.converter = converter or ManifestConverter()
        self.tool = tool or ToolConfig.load()
        self.manifest_path = manifest_path
        self.trailer = trailer
        self.out = out

        self.stage = BuildStage.START
        self.error: Optional[Exception] = None
        self.manifest: Optional[Manifest] = None
        self.bundle: Optional[Bundle] = None

    def run(self) -> Bundle:
        """Orchestrates the entire build process step by step."""
        logger.info(f"[Builder] Starting build in '{self.fs.root}'...")
        try:
            self.load()
            context = self._context()

            logger.debug("[Builder] Invoking BuildContextPreparer...")
            BuildContextPreparer(context).prepare()
            self._advance(BuildStage.FILESYSTEM_PREPARED)

            logger.debug("[Builder] Invoking DockerfileGenerator...")
            DockerfileGenerator(context, trailer=self.trailer, out=self.out).generate()
            self._advance(BuildStage.BUILD_FILE_GENERATED)

            self._build_image()
            self._advance(BuildStage.IMAGE_BUILT)

            bundle = self.build_bundle(self.manifest.image, "")
        except Exception as e:
            self._fail(e)
            raise

        self._advance(BuildStage.DONE)
        logger.info(f"[Builder] Build finished. Bundle written to '{constants.LOCAL_BUNDLE}'")
        return bundle

    def load(self) -> Manifest:
        """Loads the manifest once per builder"""
        if self.manifest is None:
            self.manifest = load_manifest(self.fs, self.manifest_path)
            self._advance(BuildStage.MANIFEST_LOADED)
        return self.manifest

    def build_bundle(self, invocation_image: str, digest: str) -> Bundle:
        """Converts the manifest into a bundle for an already built image and writes it."""
        try:
            manifest = self.load()
            image_digests: Dict[str, str] = {invocation_image: digest}

            logger.debug("[Builder] Invoking converter...")
            bundle = self.converter.to_bundle(manifest, image_digests)
            self._advance(BuildStage.CONVERTED)

            BundleWriter(self.fs).write(bundle)
            self._advance(BuildStage.WRITTEN)
        except Exception as e:
            self._fail(e)
            raise

        self.bundle = bundle
        return bundle

    def _context(self) -> BuildContext:
        return BuildContext(
            fs=self.fs,
            manifest=self.manifest,
            tool=self.tool,
            manifest_path=self.manifest_path,
        )

    def _build_image(self):
        logger.debug("[Builder] Invoking image builder...")
        try:
            self.image_builder.build_invocation_image(self.manifest)
        except PorterBuilderError:
            raise
        except Exception as e:
            raise ExternalBuildError(f"unable to build CNAB invocation image: {e}") from e

    def _advance(self, stage: BuildStage):
        logger.debug(f"[Builder] {self.stage.value} -> {stage.value}")
        self.stage = stage

    def _fail(self, error: Exception):
        if self.stage is BuildStage.FAILED:
            return
        logger.debug(f"[Builder] Failed after '{self.stage.value}': {error}")
        self.stage = BuildStage.FAILED
        self.error = error
