"""Tests for ClassMetadataReader.read_constructor().

These tests verify the reader's ability to:
- Distinguish "no constructor" (None) from "no parameters" (())
- Preserve declaration order of parameters
- Resolve class-typed parameters and skip primitive ones
- Report required/default/variadic flags correctly
- Wrap per-parameter failures in ParameterResolutionError
"""

import logging
from dataclasses import dataclass
from typing import Annotated, Any, NamedTuple, Optional

import pytest

from classmeta import (
    ClassMetadataReader,
    ParameterDescriptor,
    ParameterResolutionError,
    TypeResolutionError,
)

# =============================================================================
# Sample classes
# =============================================================================


class Mailer:
    pass


class NoConstructor:
    pass


class EmptyConstructor:
    def __init__(self) -> None:
        pass


class Widget:
    def __init__(self, id: int, label: str = "untitled", *tags: str) -> None:
        self.id = id
        self.label = label
        self.tags = tags


class Newsletter:
    def __init__(
        self,
        mailer: Mailer,
        fallback: Optional[Mailer] = None,
        retries: int = 3,
        audit: Annotated[Mailer, "audit"] | None = None,
    ) -> None:
        self.mailer = mailer


class DailyNewsletter(Newsletter):
    pass


class Untyped:
    def __init__(self, anything, other=None) -> None:  # noqa: ANN001
        self.anything = anything


class NonInjectable:
    def __init__(
        self,
        names: list[str],
        extra: Any,
        choice: Mailer | int,
        count: int | None = None,
    ) -> None:
        pass


class Variadic:
    def __init__(self, *args: Mailer, **options: Any) -> None:
        pass


class KeywordOnly:
    def __init__(self, *, mailer: Mailer, timeout: float = 1.5) -> None:
        pass


class BrokenDependency:
    def __init__(self, mailer: Mailer, missing: "MissingService") -> None:  # noqa: F821
        pass


@dataclass
class Settings:
    host: str
    port: int = 8080


class Point(NamedTuple):
    x: int
    y: int = 0


def _name(cls: type) -> str:
    return f"{__name__}.{cls.__qualname__}"


# =============================================================================
# Constructor presence
# =============================================================================


class TestConstructorPresence:
    """Tests for distinguishing absent constructors from empty ones."""

    def test_returns_none_when_type_has_no_constructor(self) -> None:
        """A class without __init__ anywhere but object has no constructor."""
        reader = ClassMetadataReader()

        result = reader.read_constructor(_name(NoConstructor))

        assert result is None

    def test_returns_empty_tuple_for_constructor_without_parameters(self) -> None:
        """A zero-parameter constructor is distinguishable from no constructor."""
        reader = ClassMetadataReader()

        result = reader.read_constructor(_name(EmptyConstructor))

        assert result == ()
        assert result is not None

    def test_inherited_constructor_is_read_from_parent(self) -> None:
        """A subclass without its own __init__ exposes the parent's parameters."""
        reader = ClassMetadataReader()

        result = reader.read_constructor(_name(DailyNewsletter))

        assert result is not None
        assert [p.name for p in result] == ["mailer", "fallback", "retries", "audit"]

    def test_accepts_class_object_instead_of_name(self) -> None:
        """Passing the class itself gives the same result as its dotted name."""
        reader = ClassMetadataReader()

        by_class = reader.read_constructor(Widget)
        by_name = reader.read_constructor(_name(Widget))

        assert by_class == by_name


# =============================================================================
# Parameter descriptors
# =============================================================================


class TestParameterDescriptors:
    """Tests for the fields of each ParameterDescriptor."""

    def test_widget_signature_matches_declaration(self) -> None:
        """Scalar, defaulted and variadic parameters are described in order."""
        # Arrange
        reader = ClassMetadataReader()

        # Act
        result = reader.read_constructor(_name(Widget))

        # Assert
        assert result == (
            ParameterDescriptor(
                name="id", type_ref=None, required=True, default=None, variadic=False
            ),
            ParameterDescriptor(
                name="label",
                type_ref=None,
                required=False,
                default="untitled",
                variadic=False,
            ),
            ParameterDescriptor(
                name="tags", type_ref=None, required=False, default=[], variadic=True
            ),
        )

    def test_class_typed_parameter_resolves_type_reference(self) -> None:
        """A parameter typed with a user class carries that class as type_ref."""
        reader = ClassMetadataReader()

        result = reader.read_constructor(Newsletter)

        assert result is not None
        mailer = result[0]
        assert mailer.type_ref is Mailer
        assert mailer.required is True
        assert mailer.default is None

    def test_optional_and_annotated_types_are_unwrapped(self) -> None:
        """Optional[X] and Annotated[X, ...] | None both resolve to X."""
        reader = ClassMetadataReader()

        result = reader.read_constructor(Newsletter)

        assert result is not None
        fallback, retries, audit = result[1], result[2], result[3]
        assert fallback.type_ref is Mailer
        assert fallback.required is False
        assert fallback.default is None
        assert retries.type_ref is None
        assert retries.default == 3
        assert audit.type_ref is Mailer

    def test_untyped_parameters_have_no_type_reference(self) -> None:
        """Unannotated parameters never carry a type reference."""
        reader = ClassMetadataReader()

        result = reader.read_constructor(Untyped)

        assert result is not None
        assert [(p.name, p.type_ref, p.required) for p in result] == [
            ("anything", None, True),
            ("other", None, False),
        ]

    def test_non_introspectable_annotations_have_no_type_reference(self) -> None:
        """Generic aliases, Any, multi-member unions and builtins are primitive."""
        reader = ClassMetadataReader()

        result = reader.read_constructor(NonInjectable)

        assert result is not None
        assert [p.type_ref for p in result] == [None, None, None, None]

    def test_variadic_parameters_default_to_empty_containers(self) -> None:
        """*args defaults to [] and **kwargs to {}; neither is required."""
        reader = ClassMetadataReader()

        result = reader.read_constructor(Variadic)

        assert result is not None
        args, options = result
        assert args.variadic is True
        assert args.required is False
        assert args.default == []
        assert args.type_ref is Mailer
        assert options.variadic is True
        assert options.required is False
        assert options.default == {}

    def test_variadic_default_is_a_fresh_list_per_call(self) -> None:
        """Callers mutating one signature's default never affect another."""
        reader = ClassMetadataReader()

        first = reader.read_constructor(Widget)
        assert first is not None
        first[2].default.append("leak")

        second = reader.read_constructor(Widget)
        assert second is not None
        assert second[2].default == []

    def test_keyword_only_parameters_keep_required_flag(self) -> None:
        """Keyword-only parameters without defaults are required."""
        reader = ClassMetadataReader()

        result = reader.read_constructor(KeywordOnly)

        assert result is not None
        mailer, timeout = result
        assert mailer.required is True
        assert mailer.type_ref is Mailer
        assert timeout.required is False
        assert timeout.default == 1.5

    def test_dataclass_generated_constructor_is_read(self) -> None:
        """Dataclass fields become constructor parameters in field order."""
        reader = ClassMetadataReader()

        result = reader.read_constructor(Settings)

        assert result is not None
        assert [(p.name, p.required, p.default) for p in result] == [
            ("host", True, None),
            ("port", False, 8080),
        ]

    def test_named_tuple_constructor_is_read_from_new(self) -> None:
        """Classes constructed through __new__ expose its parameters."""
        reader = ClassMetadataReader()

        result = reader.read_constructor(Point)

        assert result is not None
        assert [(p.name, p.required, p.default) for p in result] == [
            ("x", True, None),
            ("y", False, 0),
        ]

    def test_reads_standard_library_class_by_dotted_name(self) -> None:
        """Dotted names of importable classes are resolved through importlib."""
        reader = ClassMetadataReader()

        result = reader.read_constructor("json.JSONDecoder")

        assert result is not None
        assert [p.name for p in result] == [
            "object_hook",
            "parse_float",
            "parse_int",
            "parse_constant",
            "strict",
            "object_pairs_hook",
        ]
        assert all(p.required is False for p in result)


# =============================================================================
# Error handling
# =============================================================================


class TestConstructorErrors:
    """Tests for error propagation from read_constructor()."""

    def test_unknown_type_raises_type_resolution_error(self) -> None:
        """A name that does not resolve fails before any parameter work."""
        reader = ClassMetadataReader()

        with pytest.raises(TypeResolutionError):
            reader.read_constructor(f"{__name__}.DoesNotExist")

    def test_unresolvable_parameter_type_raises_parameter_resolution_error(
        self,
    ) -> None:
        """A broken annotation is reported with the parameter and enclosing type."""
        # Arrange
        reader = ClassMetadataReader()
        type_name = _name(BrokenDependency)

        # Act
        with pytest.raises(ParameterResolutionError) as exc_info:
            reader.read_constructor(type_name)

        # Assert
        error = exc_info.value
        assert error.type_name == type_name
        assert error.parameter.startswith("Parameter #1 [ missing")
        assert "MissingService" in error.parameter
        assert type_name in str(error)
        assert isinstance(error.__cause__, TypeResolutionError)

    def test_parameter_failure_is_logged_before_raising(
        self, caplog: pytest.LogCaptureFixture
    ) -> None:
        """The error log names the parameter and the enclosing type."""
        reader = ClassMetadataReader()
        type_name = _name(BrokenDependency)

        with caplog.at_level(logging.ERROR, logger="classmeta.reader"):
            with pytest.raises(ParameterResolutionError):
                reader.read_constructor(type_name)

        assert "Cannot process constructor argument Parameter #1 [ missing" in caplog.text
        assert f"of {type_name}: Cannot resolve annotation" in caplog.text
