"""Core type definitions for the class metadata reader."""

from dataclasses import dataclass
from typing import Any, Final

NO_PARENT: Final = None
"""Placeholder occupying the parent slot of a parents list for parentless types."""

type ConstructorSignature = tuple[ParameterDescriptor, ...]
type ParentsList = tuple[str | None, ...]


@dataclass(frozen=True, slots=True)
class ParameterDescriptor:
    """Describes one constructor parameter, in declaration order.

    Attributes:
        name: Parameter name
        type_ref: Resolved class of the declared type, or None when the
            parameter is untyped or typed with a primitive annotation
        required: True when the parameter has no default and is not optional
        default: Default value; an empty container for variadic parameters
        variadic: True when the parameter collects a variable-length list

    """

    name: str
    type_ref: type | None
    required: bool
    default: Any
    variadic: bool


@dataclass(frozen=True, slots=True)
class DeclaredType:
    """Declared type of a parameter after annotation evaluation.

    Attributes:
        annotation: The evaluated annotation (Optional/Annotated unwrapped)
        is_primitive: True for builtins, typing constructs and generic aliases

    """

    annotation: Any
    is_primitive: bool
