import logging
from pathlib import Path
from typing import Optional, Union

from python_on_whales import DockerClient, docker
from python_on_whales.exceptions import DockerException

from .. import constants
from ..manifest import Manifest
from ..exceptions import ExternalBuildError

logger = logging.getLogger(__name__)


class DockerBuilder:
    """
    Builds the invocation image with the local Docker engine.

    The working directory is the build context; the generated Dockerfile in
    it is the build file and the manifest's ``image`` is the tag.
    """

    def __init__(self, workdir: Union[str, Path], client: Optional[DockerClient] = None):
        self.workdir = Path(workdir)
        self.client = client or docker

    def build_invocation_image(self, manifest: Manifest) -> None:
        dockerfile = self.workdir / constants.DOCKERFILE_NAME
        logger.info(f"[DockerBuilder] Building invocation image '{manifest.image}'...")
        try:
            self.client.build(
                context_path=self.workdir,
                file=dockerfile,
                tags=[manifest.image],
            )
        except DockerException as e:
            raise ExternalBuildError(f"unable to build CNAB invocation image '{manifest.image}': {e}") from e
        logger.info(f"[DockerBuilder] Invocation image '{manifest.image}' built.")
