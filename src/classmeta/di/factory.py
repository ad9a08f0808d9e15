"""Class reader factory for dependency injection integration."""

from __future__ import annotations

import logging

from pydantic import ValidationError

from classmeta.cache import ParentsCache
from classmeta.di.configuration import ClassReaderConfiguration
from classmeta.introspection import RuntimeIntrospector
from classmeta.reader import ClassMetadataReader

logger = logging.getLogger(__name__)


class ClassReaderFactory:
    """Factory for creating ClassMetadataReader instances with DI support.

    Implements the ServiceFactory[ClassMetadataReader] protocol. The factory
    owns a single ParentsCache for its whole lifetime and injects it into
    every reader it creates, so parent relations computed through one reader
    are served from the cache to all others.

    Invalid configuration never raises: create() returns None and
    can_create() returns False.

    Example:
        ```python
        factory = ClassReaderFactory()
        reader = factory.create()
        if reader:
            signature = reader.read_constructor("myapp.services.Mailer")
        ```

    """

    def __init__(self, config: ClassReaderConfiguration | None = None) -> None:
        """Initialise factory with optional configuration.

        Args:
            config: Optional explicit configuration. If None, will attempt
                   to create configuration from environment variables.

        """
        self._config = config
        self._cache = ParentsCache()

    @property
    def cache(self) -> ParentsCache:
        """Get the parents cache shared by all readers of this factory."""
        return self._cache

    def _get_config(self) -> ClassReaderConfiguration | None:
        if self._config:
            return self._config

        try:
            return ClassReaderConfiguration.from_properties({})
        except ValidationError as e:
            logger.warning(
                f"Cannot create class reader configuration from environment: {e}"
            )
            return None

    def can_create(self) -> bool:
        """Check if a reader can be created with current configuration."""
        return self._get_config() is not None

    def create(self) -> ClassMetadataReader | None:
        """Create a reader sharing this factory's parents cache.

        Returns:
            ClassMetadataReader instance, or None if configuration is invalid.

        """
        config = self._get_config()
        if not config:
            logger.debug("Cannot create class reader - configuration invalid")
            return None

        introspector = RuntimeIntrospector(
            primitive_modules=config.primitive_modules,
            abstract_interfaces=config.abstract_interfaces,
        )
        logger.debug(
            f"Class reader created (primitive_modules={sorted(config.primitive_modules)}, "
            f"abstract_interfaces={config.abstract_interfaces})"
        )
        return ClassMetadataReader(introspector, self._cache)
