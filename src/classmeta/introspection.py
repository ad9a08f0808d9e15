"""Runtime type introspection backed by importlib and inspect.

This module provides:
- RuntimeIntrospector: TypeIntrospector over the live interpreter
- RuntimeParameter: ParameterHandle wrapping an inspect.Parameter
- qualified_name: canonical ``module.QualName`` of a class

Python has no interface keyword, so a class counts as an interface when it
is a ``typing.Protocol`` class or, unless disabled, a pure abstract base
(every public function, property or descriptor it declares is abstract,
and it defines no concrete constructor of its own).
"""

from __future__ import annotations

import abc
import builtins
import importlib
import inspect
import logging
import types
import typing
from collections.abc import Callable, Iterable
from typing import Annotated, Any, Union, get_args, get_origin, get_type_hints

from classmeta.errors import TypeResolutionError
from classmeta.types import DeclaredType

logger = logging.getLogger(__name__)

_TYPING_MODULES = frozenset({"typing", "typing_extensions"})

# Bases that carry no inheritance meaning of their own
_MARKER_BASES = frozenset({object, abc.ABC, typing.Generic, typing.Protocol})

_SELF_KINDS = (
    inspect.Parameter.POSITIONAL_ONLY,
    inspect.Parameter.POSITIONAL_OR_KEYWORD,
)

_MEMBER_TYPES = (types.FunctionType, property, classmethod, staticmethod)


def qualified_name(cls: type) -> str:
    """Return the canonical dotted name of a class."""
    return f"{cls.__module__}.{cls.__qualname__}"


def _is_protocol(cls: type) -> bool:
    return cls is not typing.Protocol and bool(getattr(cls, "_is_protocol", False))


def _unwrap(annotation: Any) -> Any:
    """Strip ``Annotated`` metadata and the ``None`` member of optional types."""
    origin = get_origin(annotation)
    if origin is Annotated:
        return _unwrap(get_args(annotation)[0])
    if origin is Union or origin is types.UnionType:
        members = [arg for arg in get_args(annotation) if arg is not type(None)]
        if len(members) == 1:
            return _unwrap(members[0])
    return annotation


class RuntimeParameter:
    """ParameterHandle over a parameter of a live constructor."""

    def __init__(
        self,
        parameter: inspect.Parameter,
        position: int,
        constructor: Callable[..., Any],
        owner: type,
        primitive_modules: frozenset[str],
    ) -> None:
        self._parameter = parameter
        self._position = position
        self._constructor = constructor
        self._owner = owner
        self._primitive_modules = primitive_modules

    @property
    def name(self) -> str:
        return self._parameter.name

    def declared_type(self) -> DeclaredType | None:
        annotation = self._parameter.annotation
        if annotation is inspect.Parameter.empty:
            return None
        if isinstance(annotation, str):
            annotation = self._evaluate(annotation)
        annotation = _unwrap(annotation)
        if isinstance(annotation, typing.ForwardRef):
            annotation = _unwrap(self._evaluate(annotation.__forward_arg__))
        return DeclaredType(annotation, self._is_primitive(annotation))

    def is_optional(self) -> bool:
        return self.has_default() or self.is_variadic()

    def has_default(self) -> bool:
        return self._parameter.default is not inspect.Parameter.empty

    def default_value(self) -> Any:
        return self._parameter.default

    def is_variadic(self) -> bool:
        return self._parameter.kind in (
            inspect.Parameter.VAR_POSITIONAL,
            inspect.Parameter.VAR_KEYWORD,
        )

    def is_keyword_variadic(self) -> bool:
        return self._parameter.kind is inspect.Parameter.VAR_KEYWORD

    def describe(self) -> str:
        return f"Parameter #{self._position} [ {self._parameter} ]"

    def _evaluate(self, annotation: str) -> Any:
        """Resolve a string annotation with ``typing.get_type_hints``.

        Names are looked up in the namespace of the class that owns the
        constructor, then in the constructor's globals.
        """
        constructor = inspect.unwrap(self._constructor)
        globalns = getattr(constructor, "__globals__", None)
        if globalns is None:
            module = importlib.import_module(self._owner.__module__)
            globalns = vars(module)
        localns = dict(vars(self._owner))
        holder = types.SimpleNamespace(
            __annotations__={self._parameter.name: annotation}
        )
        try:
            hints = get_type_hints(
                holder, globalns=globalns, localns=localns, include_extras=True
            )
        except Exception as e:
            raise TypeResolutionError(
                f"Cannot resolve annotation {annotation!r} "
                f"of parameter '{self._parameter.name}'"
            ) from e
        return hints[self._parameter.name]

    def _is_primitive(self, annotation: Any) -> bool:
        if get_origin(annotation) is not None or not isinstance(annotation, type):
            return True
        module = annotation.__module__
        return module in self._primitive_modules or module in _TYPING_MODULES


class RuntimeIntrospector:
    """TypeIntrospector over the classes loaded in the running interpreter."""

    def __init__(
        self,
        primitive_modules: Iterable[str] = ("builtins",),
        abstract_interfaces: bool = True,
    ) -> None:
        """Initialise the introspector.

        Args:
            primitive_modules: Modules whose classes are never injectable;
                ``builtins`` is always included
            abstract_interfaces: Whether pure abstract bases count as interfaces

        """
        self._primitive_modules = frozenset(primitive_modules) | {"builtins"}
        self._abstract_interfaces = abstract_interfaces

    def resolve_type(self, name: str | type) -> type:
        if isinstance(name, type):
            return name
        if not isinstance(name, str) or not name or "" in name.split("."):
            raise TypeResolutionError(f"Invalid type name: {name!r}")

        target = self._import_target(name)
        if not isinstance(target, type):
            raise TypeResolutionError(f"{name} does not name a class")
        return target

    def get_constructor(self, cls: type) -> Callable[..., Any] | None:
        for klass in cls.__mro__:
            if klass in _MARKER_BASES or _is_protocol(klass):
                continue
            for attribute in ("__init__", "__new__"):
                constructor = klass.__dict__.get(attribute)
                if constructor is None:
                    continue
                if isinstance(constructor, staticmethod):
                    constructor = constructor.__func__
                return constructor
        return None

    def get_parameters(
        self, constructor: Callable[..., Any], owner: type
    ) -> list[RuntimeParameter]:
        try:
            signature = inspect.signature(constructor)
        except (TypeError, ValueError, NameError) as e:
            raise TypeResolutionError(
                f"Cannot read constructor signature of {qualified_name(owner)}"
            ) from e

        parameters = list(signature.parameters.values())
        # Drop the instance (or class, for __new__) the constructor is bound to
        if parameters and parameters[0].kind in _SELF_KINDS:
            parameters = parameters[1:]

        return [
            RuntimeParameter(
                parameter, position, constructor, owner, self._primitive_modules
            )
            for position, parameter in enumerate(parameters)
        ]

    def get_parent(self, cls: type) -> type | None:
        for base in cls.__bases__:
            if base in _MARKER_BASES or self.is_interface(base):
                continue
            return base
        return None

    def get_interfaces(self, cls: type) -> list[str]:
        return [
            qualified_name(klass)
            for klass in cls.__mro__[1:]
            if self.is_interface(klass)
        ]

    def is_interface(self, cls: type) -> bool:
        """Check whether a class plays the role of an interface."""
        if cls in _MARKER_BASES:
            return False
        if _is_protocol(cls):
            return True
        if not self._abstract_interfaces or not inspect.isabstract(cls):
            return False

        # A class that builds its own instances holds state: it is a parent
        for attribute in ("__init__", "__new__"):
            constructor = vars(cls).get(attribute)
            if constructor is not None and not getattr(
                constructor, "__isabstractmethod__", False
            ):
                return False

        abstract_names = cls.__abstractmethods__
        return all(
            name in abstract_names
            for name, member in vars(cls).items()
            if not name.startswith("_") and isinstance(member, _MEMBER_TYPES)
        )

    def _import_target(self, name: str) -> Any:
        parts = name.split(".")
        if len(parts) == 1:
            try:
                return getattr(builtins, name)
            except AttributeError as e:
                raise TypeResolutionError(f"Class {name} does not exist") from e

        for index in range(len(parts) - 1, 0, -1):
            module_name = ".".join(parts[:index])
            try:
                target: Any = importlib.import_module(module_name)
            except ImportError:
                continue
            except Exception as e:
                raise TypeResolutionError(
                    f"Cannot load module {module_name} for class {name}"
                ) from e

            try:
                for attribute in parts[index:]:
                    target = getattr(target, attribute)
            except AttributeError as e:
                raise TypeResolutionError(f"Class {name} does not exist") from e
            logger.debug(f"Resolved {name} from module {module_name}")
            return target

        raise TypeResolutionError(f"Class {name} does not exist")
