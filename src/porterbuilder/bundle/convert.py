import logging
import re
from typing import Any, Dict

from .. import constants
from ..manifest import Manifest, ParameterModel, CredentialModel
from ..datacls import (
    Action,
    Bundle,
    Credential,
    Destination,
    InvocationImage,
    ParameterDefinition,
)
from ..exceptions import ConversionError

logger = logging.getLogger(__name__)


def env_name(name: str) -> str:
    """Environment variable a parameter or credential maps to when none is declared"""
    return re.sub(r"[^A-Za-z0-9]", "_", name).upper()


class ManifestConverter:
    """
    Converts a validated manifest into a bundle descriptor.

    Only the checks needed to produce a well-formed descriptor are made here:
    known parameter types and defaults that match them.
    """

    def to_bundle(self, manifest: Manifest, image_digests: Dict[str, str]) -> Bundle:
        logger.debug(f"[Converter] Converting manifest '{manifest.name}' with images {sorted(image_digests)}")
        bundle = Bundle(
            name=manifest.name,
            version=manifest.version,
            description=manifest.description,
            invocation_images=self._invocation_images(image_digests),
            parameters={p.name: self._parameter(p) for p in manifest.parameters},
            credentials={c.name: self._credential(c) for c in manifest.credentials},
            actions={
                name: Action(modifies=a.modifies, stateless=a.stateless, description=a.description)
                for name, a in manifest.custom_actions.items()
            },
        )
        logger.info(f"[Converter] Bundle '{bundle.name}' version '{bundle.version}' created.")
        return bundle

    @staticmethod
    def _invocation_images(image_digests: Dict[str, str]):
        return [
            InvocationImage(image=image, content_digest=digest or None)
            for image, digest in image_digests.items()
        ]

    def _parameter(self, param: ParameterModel) -> ParameterDefinition:
        data_type = self._parameter_type(param)
        if param.default is not None:
            self._check_default(param.name, data_type, param.default)

        dest = param.destination
        if dest is not None and dest.path:
            destination = Destination(path=dest.path)
        elif dest is not None and dest.env:
            destination = Destination(env=dest.env)
        else:
            destination = Destination(env=env_name(param.name))

        return ParameterDefinition(
            data_type=data_type.value,
            default_value=param.default,
            required=bool(param.required),
            description=param.description,
            destination=destination,
        )

    @staticmethod
    def _parameter_type(param: ParameterModel) -> constants.ParameterType:
        try:
            return constants.ParameterType(param.data_type)
        except ValueError as e:
            allowed = ", ".join(t.value for t in constants.ParameterType)
            raise ConversionError(
                f"Parameter '{param.name}' has unsupported type '{param.data_type}', must be one of: {allowed}"
            ) from e

    @staticmethod
    def _check_default(name: str, data_type: constants.ParameterType, default: Any):
        accepted = constants.PARAMETER_PY_TYPES[data_type]
        # bool is an int subclass, but a boolean is never a valid number
        is_bool = isinstance(default, bool)
        wants_bool = bool in accepted
        if not isinstance(default, accepted) or is_bool != wants_bool:
            raise ConversionError(
                f"Default value {default!r} of parameter '{name}' is not of type '{data_type.value}'"
            )

    @staticmethod
    def _credential(cred: CredentialModel) -> Credential:
        if cred.path:
            return Credential(path=cred.path, description=cred.description)
        return Credential(env=cred.env or env_name(cred.name), description=cred.description)
