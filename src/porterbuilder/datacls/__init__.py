"""
Porter Builder Data Classes

- BuildContext: Shared state of one build run
- Bundle: The bundle descriptor and its parts
"""

from .contexts import BuildContext
from .bundle import (
    Bundle,
    ParameterDefinition,
    Destination,
    Credential,
    InvocationImage,
    Action,
)

__all__ = [
    'BuildContext',
    'Bundle',
    'ParameterDefinition',
    'Destination',
    'Credential',
    'InvocationImage',
    'Action',
]
