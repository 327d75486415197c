import json
import logging
from importlib import resources
from pathlib import PurePosixPath
from typing import IO, List, Optional

import click
from pydantic import BaseModel, ConfigDict, Field

from .. import constants
from ..datacls import BuildContext
from ..exceptions import GenerationError, PorterIOError, TemplateReadError

logger = logging.getLogger(__name__)


def load_default_template() -> str:
    """Reads the built-in Dockerfile template shipped with the package."""
    return (
        resources.files('porterbuilder')
        .joinpath('resources')
        .joinpath('templates')
        .joinpath(constants.DEFAULT_TEMPLATE)
        .read_text(encoding='utf-8')
    )


def split_template_lines(content: str) -> List[str]:
    """Splits on newlines only, so form feeds and other separators stay inside their line"""
    lines = content.split("\n")
    if lines[-1] == "":
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]


class DockerfileTrailer(BaseModel):
    """
    Lines appended to every generated Dockerfile, whatever the template.

    ``manifest_file`` is relative to the working directory and always lands
    in /cnab/app under its base name.
    """
    model_config = ConfigDict(frozen=True)

    context_dir: str = constants.BUILD_CONTEXT_DIR
    manifest_file: str = constants.MANIFEST_FILENAME
    command: List[str] = Field(default_factory=lambda: [constants.RUN_SCRIPT])

    def lines(self) -> List[str]:
        return [
            f"COPY {self.context_dir}/ {constants.IMAGE_CNAB_ROOT}",
            f"COPY {self.manifest_file} {constants.IMAGE_APP_ROOT}/{PurePosixPath(self.manifest_file).name}",
            f"CMD {json.dumps(self.command)}",
        ]


class DockerfileGenerator:
    """
    Renders the invocation image Dockerfile for a manifest.

    Without a custom template the built-in template is formatted with the
    manifest's base image and followed by the manifest's ``build``
    instructions. A custom template is copied line for line. The trailer is
    appended in both cases.
    """

    def __init__(self, context: BuildContext, trailer: Optional[DockerfileTrailer] = None, out: Optional[IO[str]] = None):
        self.fs = context.fs
        self.manifest = context.manifest
        self.trailer = trailer or DockerfileTrailer(manifest_file=PurePosixPath(context.manifest_path).as_posix())
        self.out = out

    def build_lines(self) -> List[str]:
        """Builds the Dockerfile as an ordered list of lines"""
        if self.manifest.dockerfile:
            lines = self._read_custom_template(self.manifest.dockerfile)
        else:
            lines = self._render_default_template()
        lines.extend(self.trailer.lines())
        return lines

    def generate(self) -> List[str]:
        """Builds the Dockerfile, echoes it to the output stream and writes it to the working directory"""
        lines = self.build_lines()

        click.echo("", file=self.out)
        click.echo(constants.DOCKERFILE_BANNER, file=self.out)
        for line in lines:
            click.echo(line, file=self.out)

        try:
            self.fs.write_text(constants.DOCKERFILE_NAME, "\n".join(lines) + "\n")
        except (PorterIOError, OSError) as e:
            raise GenerationError(f"error writing {constants.DOCKERFILE_NAME}: {e}") from e
        logger.info(f"[Generator] {constants.DOCKERFILE_NAME} written with {len(lines)} lines")
        return lines

    def _render_default_template(self) -> List[str]:
        logger.debug(f"[Generator] Using the default template with base image '{self.manifest.base_image}'")
        template = load_default_template()
        lines = template.format(base_image=self.manifest.base_image).splitlines()
        lines.extend(self.manifest.build)
        return lines

    def _read_custom_template(self, path: str) -> List[str]:
        logger.debug(f"[Generator] Using the custom template '{path}'")
        try:
            content = self.fs.read_bytes(path).decode("utf-8")
        except (PorterIOError, OSError, UnicodeDecodeError) as e:
            raise TemplateReadError(f"error reading the Dockerfile template '{path}': {e}") from e
        return split_template_lines(content)
