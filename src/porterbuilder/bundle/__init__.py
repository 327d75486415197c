"""
Porter Builder Bundle Module

- ManifestConverter: Manifest + image digests to bundle descriptor
- BundleWriter: Writes bundle.json
"""

from .convert import ManifestConverter
from .writer import BundleWriter

__all__ = [
    'ManifestConverter',
    'BundleWriter',
]
