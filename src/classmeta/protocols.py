"""Protocols at the seams of the class metadata reader."""

from collections.abc import Callable, Sequence
from typing import Any, Protocol

from classmeta.types import ConstructorSignature, DeclaredType, ParentsList


class ParameterHandle(Protocol):
    """Protocol for a single constructor parameter as seen by an introspector."""

    @property
    def name(self) -> str:
        """Parameter name."""
        ...

    def declared_type(self) -> DeclaredType | None:
        """Return the declared type, or None if the parameter is unannotated.

        Raises:
            TypeResolutionError: If the annotation cannot be evaluated

        """
        ...

    def is_optional(self) -> bool:
        """Check whether a call may omit this parameter."""
        ...

    def has_default(self) -> bool:
        """Check whether a default value is available."""
        ...

    def default_value(self) -> Any:
        """Return the default value. Only valid when has_default() is True."""
        ...

    def is_variadic(self) -> bool:
        """Check whether the parameter collects variable-length arguments."""
        ...

    def is_keyword_variadic(self) -> bool:
        """Check whether the parameter collects variable keyword arguments."""
        ...

    def describe(self) -> str:
        """Return a human-readable description for diagnostics."""
        ...


class TypeIntrospector(Protocol):
    """Protocol for the capability that answers structural questions about types.

    The reader never touches the interpreter's reflection API directly; all
    facts flow through an introspector so that tests can substitute a spy and
    embedders can substitute a generated registry.
    """

    def resolve_type(self, name: str | type) -> type:
        """Resolve a type name (or pass through a class).

        Raises:
            TypeResolutionError: If the name does not denote a known class

        """
        ...

    def get_constructor(self, cls: type) -> Callable[..., Any] | None:
        """Return the constructor the class uses, or None if it declares none."""
        ...

    def get_parameters(
        self, constructor: Callable[..., Any], owner: type
    ) -> Sequence[ParameterHandle]:
        """Return the constructor's parameters in declaration order."""
        ...

    def get_parent(self, cls: type) -> type | None:
        """Return the direct parent class, or None."""
        ...

    def get_interfaces(self, cls: type) -> Sequence[str]:
        """Return names of all interfaces the class implements, in stable order."""
        ...


class ClassReader(Protocol):
    """Protocol for readers consumed by a dependency injection container."""

    def read_constructor(self, type_name: str | type) -> ConstructorSignature | None:
        """Read the constructor signature of a type.

        Returns:
            Parameter descriptors in declaration order, or None when the type
            has no constructor.

        """
        ...

    def read_parents(self, type_name: str | type) -> ParentsList:
        """Read the parent class and newly implemented interfaces of a type."""
        ...


class ServiceFactory[T](Protocol):
    """Protocol for factories that create long-lived service instances.

    The protocol methods take no parameters; configuration is held by the
    factory instance, not passed per call.
    """

    def create(self) -> T | None:
        """Create a service instance.

        Returns:
            Service instance, or None if service unavailable.

        """
        ...

    def can_create(self) -> bool:
        """Check if factory can create service instance."""
        ...
