"""Error classes for the class metadata reader.

This module provides:
- ClassMetadataError: Base exception class for all reader errors
- TypeResolutionError: A named type cannot be found or loaded
- ParameterResolutionError: A constructor parameter cannot be processed
"""


class ClassMetadataError(Exception):
    """Base exception for all class metadata reader errors."""

    pass


class TypeResolutionError(ClassMetadataError):
    """Raised when a type name cannot be resolved to a class."""

    pass


class ParameterResolutionError(ClassMetadataError):
    """Raised when a constructor parameter of a type cannot be processed.

    The original failure is always chained as ``__cause__``.

    Attributes:
        parameter: Human-readable description of the failing parameter
        type_name: Name of the type whose constructor declares the parameter

    """

    def __init__(self, parameter: str, type_name: str) -> None:
        """Initialise with the failing parameter and its enclosing type.

        Args:
            parameter: Human-readable description of the parameter
            type_name: Name of the enclosing type

        """
        self.parameter = parameter
        self.type_name = type_name
        super().__init__(
            f"Impossible to process constructor argument {parameter} of {type_name} class"
        )
