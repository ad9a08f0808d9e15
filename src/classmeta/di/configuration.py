"""Configuration for the class metadata reader with environment fallback."""

from __future__ import annotations

import os
from typing import Any, Self

from pydantic import BaseModel, ConfigDict, Field, field_validator

PRIMITIVE_MODULES_ENV = "CLASSMETA_PRIMITIVE_MODULES"
ABSTRACT_INTERFACES_ENV = "CLASSMETA_ABSTRACT_INTERFACES"


class ClassReaderConfiguration(BaseModel):
    """Configuration for ClassMetadataReader instances built by the DI factory.

    Attributes:
        primitive_modules: Modules whose classes are treated as primitive
            parameter types (never resolved to a type reference)
        abstract_interfaces: Whether pure abstract base classes count as
            interfaces in addition to ``typing.Protocol`` classes

    Example:
        ```python
        # Explicit configuration
        config = ClassReaderConfiguration(
            primitive_modules=frozenset({"builtins", "datetime"})
        )

        # From properties dict with env fallback
        config = ClassReaderConfiguration.from_properties({})
        ```

    """

    model_config = ConfigDict(
        # Immutable - configuration cannot be modified after creation
        frozen=True,
        # Strict - extra fields not in the model are rejected
        extra="forbid",
        validate_assignment=True,
    )

    primitive_modules: frozenset[str] = Field(
        default=frozenset({"builtins"}),
        description="Modules whose classes are never resolved as type references",
    )
    abstract_interfaces: bool = Field(
        default=True,
        description="Treat pure abstract base classes as interfaces",
    )

    @field_validator("primitive_modules")
    @classmethod
    def validate_primitive_modules(cls, v: frozenset[str]) -> frozenset[str]:
        """Normalise module names and make sure builtins is always included.

        Raises:
            ValueError: If a module name is blank

        """
        names = {name.strip() for name in v}
        if "" in names:
            raise ValueError("Primitive module names cannot be empty")
        return frozenset(names | {"builtins"})

    @classmethod
    def from_properties(cls, properties: dict[str, Any]) -> Self:
        """Create configuration from properties with environment fallback.

        Layering:
        1. Explicit properties (highest priority)
        2. Environment variables (fallback)
        3. Defaults (lowest priority)

        Environment variables used:
        - CLASSMETA_PRIMITIVE_MODULES: Comma-separated module names
        - CLASSMETA_ABSTRACT_INTERFACES: "true"/"1"/"yes" to enable

        Args:
            properties: Configuration properties dictionary

        Returns:
            Validated configuration instance

        Raises:
            ValidationError: If configuration is invalid

        """
        config_data = properties.copy()

        if "primitive_modules" not in config_data:
            modules_env = os.getenv(PRIMITIVE_MODULES_ENV)
            if modules_env is not None:
                config_data["primitive_modules"] = frozenset(modules_env.split(","))

        if "abstract_interfaces" not in config_data:
            abstract_env = os.getenv(ABSTRACT_INTERFACES_ENV)
            if abstract_env is not None:
                config_data["abstract_interfaces"] = abstract_env.strip().lower() in (
                    "true",
                    "1",
                    "yes",
                )

        return cls.model_validate(config_data)
