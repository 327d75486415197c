"""
Porter Builder Build Context

This module contains the BuildContext data class, which holds all state
shared by the stages of a single build run.
"""

from pydantic import BaseModel, ConfigDict, Field

from .. import constants
from ..config import ToolConfig
from ..io import FileSystem
from ..manifest import Manifest


class BuildContext(BaseModel):
    """
    Holds the shared, immutable state and configuration for a build run.

    Paths inside the context are relative to the working directory, which is
    the root of ``fs``.
    """
    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    fs: FileSystem
    manifest: Manifest
    tool: ToolConfig = Field(default_factory=ToolConfig)
    manifest_path: str = constants.MANIFEST_FILENAME
