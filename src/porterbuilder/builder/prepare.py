import logging
from pathlib import PurePosixPath
from typing import List

from .. import constants
from ..datacls import BuildContext
from ..io import PathLike
from ..exceptions import FilesystemPrepError, PorterIOError

logger = logging.getLogger(__name__)


class BuildContextPreparer:
    """
    Stages the shared runtime and every mixin runtime into the build context:

        cnab/app/porter-runtime
        cnab/app/mixins/<name>/<name>-runtime

    Existing files are overwritten, so re-running is safe.
    """

    def __init__(self, context: BuildContext):
        self.fs = context.fs
        self.tool = context.tool
        self.mixins = list(context.manifest.mixins)

    def prepare(self) -> List[str]:
        """Copy the binaries, returning the staged paths relative to the working directory"""
        staged = [self._stage(self.tool.runtime_path, self.runtime_destination())]
        for mixin in self.mixins:
            logger.debug(f"[Preparer] Staging mixin '{mixin}'")
            staged.append(self._stage(self.tool.mixin_runtime_path(mixin), self.mixin_destination(mixin)))
        logger.info(f"[Preparer] Staged {len(staged)} binaries into '{constants.BUILD_CONTEXT_DIR}/'")
        return staged

    @staticmethod
    def runtime_destination() -> str:
        return str(PurePosixPath(constants.APP_DIR) / constants.RUNTIME_BINARY)

    @staticmethod
    def mixin_destination(mixin: str) -> str:
        return str(PurePosixPath(constants.MIXINS_DIR) / mixin / f"{mixin}{constants.RUNTIME_SUFFIX}")

    def _stage(self, src: PathLike, dst: str) -> str:
        if not self.fs.is_file(src):
            raise FilesystemPrepError(f"could not locate '{src}'")
        try:
            self.fs.copy(src, dst)
        except (PorterIOError, OSError) as e:
            raise FilesystemPrepError(f"could not copy '{src}' to '{dst}': {e}") from e
        logger.debug(f"[Preparer] Copied '{src}' to '{dst}'")
        return dst
