"""Tests for MockArguments."""

import pytest

from swapspy.core.arguments import MockArguments
from swapspy.errors import SwapSpyError, UnsupportedKeyTypeError


class TestMockArguments:
    """Test suite for MockArguments."""

    @pytest.fixture
    def arguments(self) -> MockArguments:
        """Arguments of a call with two positional and two keyword arguments."""
        return MockArguments(args=("banana", 42), kwargs={"stand": True, "cash": None})

    @pytest.mark.unit
    def test_positional_access_by_index(self, arguments: MockArguments) -> None:
        """Test positional arguments are read by integer index."""
        assert arguments[0] == "banana"
        assert arguments[1] == 42
        assert arguments[-1] == 42

    @pytest.mark.unit
    def test_keyword_access_by_name(self, arguments: MockArguments) -> None:
        """Test keyword arguments are read by parameter name."""
        assert arguments["stand"] is True
        assert arguments["cash"] is None

    @pytest.mark.unit
    def test_missing_arguments_are_none(self, arguments: MockArguments) -> None:
        """Test out of range indexes and unknown names give None."""
        assert arguments[2] is None
        assert arguments[-5] is None
        assert arguments["missing"] is None

    @pytest.mark.unit
    @pytest.mark.parametrize("key", [1.0, True, None, ("stand",), b"stand"])
    def test_unsupported_key_types(self, arguments: MockArguments, key: object) -> None:
        """Test keys other than int and str are rejected."""
        with pytest.raises(UnsupportedKeyTypeError, match="Cannot access by type"):
            arguments[key]

    @pytest.mark.unit
    def test_unsupported_key_error_is_type_error(self, arguments: MockArguments) -> None:
        """Test the key error can be caught as a TypeError or a SwapSpyError."""
        with pytest.raises(TypeError):
            arguments[1.5]
        with pytest.raises(SwapSpyError):
            arguments[1.5]

    @pytest.mark.unit
    def test_values_keys_first_last(self, arguments: MockArguments) -> None:
        """Test the collection helpers cover positional then keyword values."""
        assert arguments.keys() == ["stand", "cash"]
        assert arguments.values() == ["banana", 42, True, None]
        assert list(arguments) == ["banana", 42, True, None]
        assert len(arguments) == 4
        assert arguments.first() == "banana"
        assert arguments.last() is None

    @pytest.mark.unit
    def test_empty_arguments(self) -> None:
        """Test a call without arguments."""
        arguments = MockArguments()

        assert arguments.is_empty()
        assert arguments.first() is None
        assert arguments.last() is None
        assert arguments[0] is None
        assert arguments.keys() == []
        assert len(arguments) == 0

    @pytest.mark.unit
    def test_keyword_only_arguments_are_not_empty(self) -> None:
        """Test a call with only keyword arguments is not empty."""
        arguments = MockArguments(kwargs={"fact": "flat"})

        assert not arguments.is_empty()
        assert arguments.first() == "flat"
        assert arguments[0] is None

    @pytest.mark.unit
    def test_arguments_are_frozen_at_construction(self) -> None:
        """Test later changes to the source collections are not seen."""
        args = ["a", "b"]
        kwargs = {"key": "value"}
        arguments = MockArguments(args=args, kwargs=kwargs)

        args.append("c")
        kwargs["other"] = "value"

        assert arguments.args == ("a", "b")
        assert dict(arguments.kwargs) == {"key": "value"}
        with pytest.raises(TypeError):
            arguments.kwargs["key"] = "changed"  # type: ignore[index]

    @pytest.mark.unit
    def test_equality_and_repr(self) -> None:
        """Test arguments compare by value and render like a call."""
        arguments = MockArguments(args=("a",), kwargs={"k": "v"})

        assert arguments == MockArguments(args=["a"], kwargs={"k": "v"})
        assert arguments != MockArguments(args=("a",))
        assert arguments != ("a",)
        assert repr(arguments) == "MockArguments('a', k='v')"
