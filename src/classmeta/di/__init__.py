"""Dependency injection integration for the class metadata reader.

Components:
    - ClassReaderConfiguration: pydantic configuration with env fallback
    - ClassReaderFactory: ServiceFactory[ClassMetadataReader] implementation
"""

from .configuration import ClassReaderConfiguration
from .factory import ClassReaderFactory

__all__ = [
    "ClassReaderConfiguration",
    "ClassReaderFactory",
]
