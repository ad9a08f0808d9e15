"""Tests for classmeta error classes."""

from classmeta import (
    ClassMetadataError,
    ParameterResolutionError,
    TypeResolutionError,
)


class TestErrors:
    """Tests for the error hierarchy and messages."""

    def test_all_errors_share_base_class(self) -> None:
        assert issubclass(TypeResolutionError, ClassMetadataError)
        assert issubclass(ParameterResolutionError, ClassMetadataError)
        assert not issubclass(ParameterResolutionError, TypeResolutionError)

    def test_parameter_error_carries_parameter_and_type(self) -> None:
        """Both the parameter description and the type appear in the message."""
        error = ParameterResolutionError(
            "Parameter #0 [ mailer: 'Mailer' ]", "myapp.Newsletter"
        )

        assert error.parameter == "Parameter #0 [ mailer: 'Mailer' ]"
        assert error.type_name == "myapp.Newsletter"
        assert str(error) == (
            "Impossible to process constructor argument "
            "Parameter #0 [ mailer: 'Mailer' ] of myapp.Newsletter class"
        )
