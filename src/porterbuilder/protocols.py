"""
Porter Builder Protocol Definitions

The build orchestrator talks to the image builder and the manifest converter
only through these single-method protocols, so either can be swapped for a
stand-in without a container runtime.
"""

from typing import Dict, Protocol, runtime_checkable

from .manifest import Manifest
from .datacls.bundle import Bundle


@runtime_checkable
class ImageBuilderProtocol(Protocol):
    """
    Builds the invocation image from the prepared build context.
    """

    def build_invocation_image(self, manifest: Manifest) -> None:
        """
        Build the invocation image using the bundle in the working directory.

        Args:
            manifest: The manifest being built, used for naming and tagging

        Raises:
            ExternalBuildError: the builder reported a failure
        """
        ...


@runtime_checkable
class BundleConverterProtocol(Protocol):
    """
    Converts a manifest plus the built image digests into a bundle descriptor.
    """

    def to_bundle(self, manifest: Manifest, image_digests: Dict[str, str]) -> Bundle:
        """
        Args:
            manifest: The validated manifest
            image_digests: Image reference to content digest

        Returns:
            The bundle descriptor

        Raises:
            ConversionError: the manifest cannot be expressed as a bundle
        """
        ...
