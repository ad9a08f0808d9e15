"""Class metadata reader.

This package reads constructor signatures and parent/interface relations of
classes for dependency injection containers.
"""

__version__ = "0.1.0"

from classmeta.cache import ParentsCache
from classmeta.errors import (
    ClassMetadataError,
    ParameterResolutionError,
    TypeResolutionError,
)
from classmeta.introspection import RuntimeIntrospector, qualified_name
from classmeta.protocols import (
    ClassReader,
    ParameterHandle,
    ServiceFactory,
    TypeIntrospector,
)
from classmeta.reader import ClassMetadataReader
from classmeta.types import (
    NO_PARENT,
    ConstructorSignature,
    DeclaredType,
    ParameterDescriptor,
    ParentsList,
)

__all__ = [
    # Version
    "__version__",
    # Reader
    "ClassMetadataReader",
    "ClassReader",
    "ParentsCache",
    # Introspection
    "ParameterHandle",
    "RuntimeIntrospector",
    "TypeIntrospector",
    "qualified_name",
    # Types
    "NO_PARENT",
    "ConstructorSignature",
    "DeclaredType",
    "ParameterDescriptor",
    "ParentsList",
    # Dependency Injection
    "ServiceFactory",
    # Errors
    "ClassMetadataError",
    "ParameterResolutionError",
    "TypeResolutionError",
]
