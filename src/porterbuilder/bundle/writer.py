import logging

from .. import constants
from ..datacls import Bundle
from ..io import FileSystem, PathLike
from ..exceptions import BundleWriteError, PorterIOError

logger = logging.getLogger(__name__)


class BundleWriter:
    """
    Writes the bundle descriptor to its well-known location in the working
    directory, truncating any previous version.
    """

    def __init__(self, fs: FileSystem, path: PathLike = constants.LOCAL_BUNDLE):
        self.fs = fs
        self.path = path

    def write(self, bundle: Bundle) -> None:
        try:
            f = self.fs.open(self.path, "w", encoding="utf-8")
        except (PorterIOError, OSError) as e:
            raise BundleWriteError(f"error creating {self.path}: {e}") from e

        try:
            with f:
                bundle.write_to(f)
        except (PorterIOError, OSError) as e:
            raise BundleWriteError(f"error writing to {self.path}: {e}") from e
        logger.info(f"[Writer] Bundle written to '{self.path}'")
