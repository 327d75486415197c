"""
Bundle descriptor data classes.

These models describe the portable ``bundle.json`` document. Field aliases
follow the bundle format's camelCase keys; the Python attributes use
snake_case.
"""

import json
from typing import IO, Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from .. import constants


class _BundleModel(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)


class Destination(_BundleModel):
    env: Optional[str] = None
    path: Optional[str] = None


class ParameterDefinition(_BundleModel):
    data_type: str = Field(alias='type')
    default_value: Optional[Any] = Field(None, alias='defaultValue')
    required: bool = False
    description: Optional[str] = None
    destination: Destination


class Credential(_BundleModel):
    env: Optional[str] = None
    path: Optional[str] = None
    description: Optional[str] = None


class InvocationImage(_BundleModel):
    image_type: str = Field(constants.INVOCATION_IMAGE_TYPE, alias='imageType')
    image: str
    content_digest: Optional[str] = Field(None, alias='contentDigest')


class Action(_BundleModel):
    modifies: bool = False
    stateless: bool = False
    description: Optional[str] = None


class Bundle(_BundleModel):
    """The portable output artifact of a build"""

    schema_version: str = Field(constants.CNAB_SCHEMA_VERSION, alias='schemaVersion')
    name: str
    version: str
    description: Optional[str] = None
    invocation_images: List[InvocationImage] = Field(default_factory=list, alias='invocationImages')
    images: Dict[str, InvocationImage] = Field(default_factory=dict)
    parameters: Dict[str, ParameterDefinition] = Field(default_factory=dict)
    credentials: Dict[str, Credential] = Field(default_factory=dict)
    actions: Dict[str, Action] = Field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)

    def to_json(self) -> str:
        """Canonical JSON: sorted keys, compact separators, no nulls"""
        return json.dumps(self.to_dict(), sort_keys=True, separators=(",", ":"))

    def write_to(self, stream: IO[str]) -> int:
        """Serialize into an open text stream, returning the number of characters written"""
        return stream.write(self.to_json())

    @classmethod
    def from_json(cls, content: str) -> 'Bundle':
        return cls.model_validate_json(content)
