import logging
from pathlib import Path
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from . import constants

logger = logging.getLogger(__name__)


class ToolConfig(BaseModel):
    """
    Location of the tool's home directory, where the shared runtime and the
    installed mixins live:

        <home>/porter-runtime
        <home>/mixins/<name>/<name>-runtime
    """
    model_config = ConfigDict(frozen=True)

    home: Path = Field(default_factory=lambda: Path(constants.DEFAULT_HOME).expanduser())

    @field_validator('home', mode='before')
    @classmethod
    def expand_home(cls, value: Union[str, Path]) -> Path:
        return Path(value).expanduser()

    @classmethod
    def load(cls, home: Optional[Union[str, Path]] = None) -> 'ToolConfig':
        config = cls(home=home) if home else cls()
        logger.debug(f"Using home directory '{config.home}'")
        return config

    @property
    def runtime_path(self) -> Path:
        return self.home / constants.RUNTIME_BINARY

    @property
    def mixins_dir(self) -> Path:
        return self.home / constants.HOME_MIXINS_DIR

    def mixin_dir(self, mixin: str) -> Path:
        return self.mixins_dir / mixin

    def mixin_runtime_path(self, mixin: str) -> Path:
        return self.mixin_dir(mixin) / f"{mixin}{constants.RUNTIME_SUFFIX}"
