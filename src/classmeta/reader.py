"""Class metadata reader for dependency injection containers."""

import logging
from typing import Any

from classmeta.cache import ParentsCache
from classmeta.errors import ParameterResolutionError, TypeResolutionError
from classmeta.introspection import RuntimeIntrospector, qualified_name
from classmeta.protocols import ParameterHandle, TypeIntrospector
from classmeta.types import (
    NO_PARENT,
    ConstructorSignature,
    ParameterDescriptor,
    ParentsList,
)

logger = logging.getLogger(__name__)


class ClassMetadataReader:
    """Reads constructor signatures and parent relations of classes.

    A container asks the reader what a class needs to be instantiated
    (read_constructor) and which parent and interfaces it introduces at its
    level of the hierarchy (read_parents). Parents lists are memoised in the
    injected ParentsCache; constructor signatures are read fresh every time.

    Example:
        >>> reader = ClassMetadataReader()
        >>> reader.read_constructor("json.JSONDecoder")[0].name
        'object_hook'
        >>> reader.read_parents("collections.OrderedDict")
        ('builtins.dict',)

    """

    def __init__(
        self,
        introspector: TypeIntrospector | None = None,
        cache: ParentsCache | None = None,
    ) -> None:
        """Initialise the reader.

        Args:
            introspector: Source of type facts; defaults to RuntimeIntrospector
            cache: Parents cache to share; a private one is created if None

        """
        self._introspector = introspector or RuntimeIntrospector()
        self._cache = cache if cache is not None else ParentsCache()

    @property
    def cache(self) -> ParentsCache:
        """Get the parents cache this reader writes to."""
        return self._cache

    def read_constructor(self, type_name: str | type) -> ConstructorSignature | None:
        """Read the constructor signature of a type.

        Args:
            type_name: Dotted class name, or the class itself

        Returns:
            Parameter descriptors in declaration order, or None when the type
            has no constructor of its own or inherited from a base other
            than ``object``. A constructor without parameters yields ``()``.

        Raises:
            TypeResolutionError: If the type cannot be resolved
            ParameterResolutionError: If any parameter cannot be processed

        """
        cls = self._introspector.resolve_type(type_name)
        constructor = self._introspector.get_constructor(cls)
        if constructor is None:
            return None

        name = self._name_of(type_name, cls)
        result: list[ParameterDescriptor] = []
        for parameter in self._introspector.get_parameters(constructor, cls):
            try:
                result.append(
                    ParameterDescriptor(
                        name=parameter.name,
                        type_ref=self._parameter_class(parameter),
                        required=not parameter.is_optional()
                        and not parameter.has_default(),
                        default=self._default_value(parameter),
                        variadic=parameter.is_variadic(),
                    )
                )
            except Exception as e:
                description = parameter.describe()
                logger.error(
                    f"Cannot process constructor argument {description} of {name}: {e}"
                )
                raise ParameterResolutionError(description, name) from e

        return tuple(result)

    def read_parents(self, type_name: str | type) -> ParentsList:
        """Read the direct parent and newly implemented interfaces of a type.

        The result has one of three shapes:
            (parent, *interfaces not implemented by parent)
            (NO_PARENT, *interfaces)  when the type has no parent
            ()                        when it has neither

        Results are cached per type name and returned as shared, immutable
        tuples; a cached type is never introspected again.

        Args:
            type_name: Dotted class name, or the class itself

        Returns:
            Parents list of type names

        Raises:
            TypeResolutionError: If the type cannot be resolved

        """
        if isinstance(type_name, str):
            key = type_name
        elif isinstance(type_name, type):
            key = qualified_name(type_name)
        else:
            raise TypeResolutionError(f"Invalid type name: {type_name!r}")
        return self._cache.get_or_compute(key, lambda: self._compute_parents(type_name))

    def _compute_parents(self, type_name: str | type) -> ParentsList:
        cls = self._introspector.resolve_type(type_name)
        parent = self._introspector.get_parent(cls)
        interfaces = self._introspector.get_interfaces(cls)

        if parent is not None:
            inherited = set(self._introspector.get_interfaces(parent))
            introduced = [name for name in interfaces if name not in inherited]
            return (qualified_name(parent), *introduced)

        if interfaces:
            return (NO_PARENT, *interfaces)
        return ()

    def _parameter_class(self, parameter: ParameterHandle) -> type | None:
        declared = parameter.declared_type()
        if declared is None or declared.is_primitive:
            return None
        return self._introspector.resolve_type(declared.annotation)

    @staticmethod
    def _default_value(parameter: ParameterHandle) -> Any:
        if parameter.is_variadic():
            return {} if parameter.is_keyword_variadic() else []
        return parameter.default_value() if parameter.has_default() else None

    @staticmethod
    def _name_of(type_name: str | type, cls: type) -> str:
        return type_name if isinstance(type_name, str) else qualified_name(cls)
