import logging
from importlib import resources

from . import constants
from .io import FileSystem
from .exceptions import PathExistsError

logger = logging.getLogger(__name__)


def manifest_template() -> str:
    """The starter porter.yaml shipped with the package"""
    return (
        resources.files('porterbuilder')
        .joinpath('resources')
        .joinpath('manifests')
        .joinpath(constants.MANIFEST_FILENAME)
        .read_text(encoding='utf-8')
    )


def create_manifest(fs: FileSystem, force: bool = False) -> str:
    """Writes the starter manifest into the working directory, returning its path"""
    path = constants.MANIFEST_FILENAME
    if fs.exists(path) and not force:
        raise PathExistsError(f"'{path}' already exists, use --force to overwrite it")
    fs.write_text(path, manifest_template())
    logger.info(f"Created '{path}'")
    return path
