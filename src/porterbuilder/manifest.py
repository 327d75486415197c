import logging
from typing import Any, Dict, List, Optional

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from . import constants
from .io import FileSystem, PathLike
from .exceptions import (
    ManifestFileMissingError,
    ManifestLoadError,
    ManifestParsingError,
    ManifestValidationError,
    PathNotFoundError,
    PorterIOError,
)

logger = logging.getLogger(__name__)


class DestinationModel(BaseModel):
    """
        Where a parameter is delivered inside the invocation image
    """
    model_config = ConfigDict(frozen=True)

    env: Optional[str] = None
    path: Optional[str] = None

    @model_validator(mode='after')
    def check_single_target(self) -> 'DestinationModel':
        if self.env and self.path:
            raise ManifestValidationError("A destination cannot declare both 'env' and 'path'.")
        return self


class ParameterModel(BaseModel):
    """
        Class Manifest-Validation Model describe `parameters`
    """
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str
    data_type: str = Field('string', alias='type')
    default: Optional[Any] = None
    required: Optional[bool] = None
    description: Optional[str] = None
    destination: Optional[DestinationModel] = None


class CredentialModel(BaseModel):
    """
        Class Manifest-Validation Model describe `credentials`
    """
    model_config = ConfigDict(frozen=True)

    name: str
    env: Optional[str] = None
    path: Optional[str] = None
    description: Optional[str] = None

    @model_validator(mode='after')
    def check_single_target(self) -> 'CredentialModel':
        if self.env and self.path:
            raise ManifestValidationError(f"Credential '{self.name}' cannot declare both 'env' and 'path'.")
        return self


class CustomActionModel(BaseModel):
    """
        Class Manifest-Validation Model describe `customActions`
    """
    model_config = ConfigDict(frozen=True)

    description: Optional[str] = None
    modifies: bool = False
    stateless: bool = False
    steps: List[Dict[str, Any]] = Field(default_factory=list)


class Manifest(BaseModel):
    """
        Class Manifest-Validation Model describe top-level of porter.yaml
    """
    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="allow")

    name: str
    version: str
    description: Optional[str] = None
    image: str
    base_image: str = Field(constants.DEFAULT_BASE_IMAGE, alias='baseImage')
    dockerfile: Optional[str] = None
    mixins: List[str] = Field(default_factory=list)
    build: List[str] = Field(default_factory=list)
    install: List[Dict[str, Any]] = Field(default_factory=list)
    upgrade: List[Dict[str, Any]] = Field(default_factory=list)
    uninstall: List[Dict[str, Any]] = Field(default_factory=list)
    custom_actions: Dict[str, CustomActionModel] = Field(default_factory=dict, alias='customActions')
    parameters: List[ParameterModel] = Field(default_factory=list)
    credentials: List[CredentialModel] = Field(default_factory=list)

    @model_validator(mode='after')
    def validate_unique_names(self) -> 'Manifest':
        """Parameter and credential names are keys of the bundle, so they must be unique"""
        for kind, items in (("parameter", self.parameters), ("credential", self.credentials)):
            seen = set()
            for item in items:
                if item.name in seen:
                    raise ManifestValidationError(f"Duplicate {kind} name found: {item.name}")
                seen.add(item.name)
        return self

    @model_validator(mode='after')
    def validate_step_mixins(self) -> 'Manifest':
        """Every step must reference exactly one declared mixin"""
        declared = set(self.mixins)
        for action, steps in self.actions().items():
            for index, step in enumerate(steps):
                if len(step) != 1:
                    raise ManifestValidationError(
                        f"Step {index} of action '{action}' must have exactly one mixin key, found {sorted(step)}."
                    )
                mixin = next(iter(step))
                if mixin not in declared:
                    raise ManifestValidationError(
                        f"Action '{action}' uses mixin '{mixin}' which is not declared in 'mixins'."
                    )
        logger.debug("Manifest step validation completed successfully.")
        return self

    def actions(self) -> Dict[str, List[Dict[str, Any]]]:
        """Steps of every action, core actions first"""
        steps = {name: getattr(self, name) for name in constants.CORE_ACTIONS}
        for name, action in self.custom_actions.items():
            steps[name] = action.steps
        return steps


def load_manifest(fs: FileSystem, path: PathLike = constants.MANIFEST_FILENAME) -> Manifest:
    """
    Loads and validates the manifest using Pydantic models.
    It is the sole gatekeeper for the manifest.
    """
    logger.info(f"Loading manifest from '{path}'...")
    raw_data = _load_raw_manifest(fs, path)

    try:
        manifest = Manifest.model_validate(raw_data)
    except ValidationError as e:
        raise ManifestValidationError(f"Manifest validation failed:\n{e}") from e
    logger.debug(f"Manifest validated successfully: \n{manifest.model_dump_json(indent=2, by_alias=True)}")
    return manifest


def _load_raw_manifest(fs: FileSystem, path: PathLike) -> Dict[str, Any]:
    try:
        content = fs.read_text(path)
    except (PathNotFoundError, FileNotFoundError) as e:
        raise ManifestFileMissingError(f"Manifest file not found at: {path}") from e
    except (PorterIOError, OSError, UnicodeDecodeError) as e:
        raise ManifestLoadError(f"Error reading manifest '{path}': {e}") from e

    try:
        data = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise ManifestParsingError(f"Error parsing YAML file: {e}") from e

    if not isinstance(data, dict):
        raise ManifestParsingError("Manifest must be a YAML document containing a dictionary.")
    logger.debug(f"Successfully parsed YAML from '{path}'.")
    return data
