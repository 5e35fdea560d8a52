"""Tests for the module-level helpers."""

import pytest

import swapspy
from swapspy.core.mock_store import current_store
from tests.fixtures.targets import Mark, Target


class TestMockAndSpy:
    """Test suite for mock and spy_on."""

    @pytest.mark.unit
    def test_mock(self, target: Target) -> None:
        """Test mock substitutes a return value straight away."""
        full_name = swapspy.mock(Target, "full_name", "Gob Bluth")

        assert isinstance(full_name, swapspy.MockMethod)
        assert full_name.state is swapspy.MockState.SUBSTITUTED
        assert target.full_name() == "Gob Bluth"
        assert full_name.mock.count == 1

    @pytest.mark.unit
    def test_mock_defaults_to_none(self, target: Target) -> None:
        """Test mock without a value substitutes None."""
        swapspy.mock(Target, "full_name")

        assert target.full_name() is None

    @pytest.mark.unit
    def test_spy_on(self, target: Target) -> None:
        """Test spy_on records calls without changing behaviour."""
        convince = swapspy.spy_on(Target, "convince")

        assert target.convince("the earth is flat") == ["the earth is flat"]
        assert convince.mock.calls == [swapspy.MockArguments(("the earth is flat",))]
        assert convince.mock.results == [["the earth is flat"]]

    @pytest.mark.unit
    def test_is_mocked(self) -> None:
        """Test is_mocked follows the lifecycle of a mock."""
        assert not swapspy.is_mocked(Target, "full_name")

        spy = swapspy.spy_on(Target, "full_name")
        assert swapspy.is_mocked(Target, "full_name")
        assert not swapspy.is_mocked(Mark, "full_name")

        spy.mock_restore()
        assert not swapspy.is_mocked(Target, "full_name")

    @pytest.mark.unit
    def test_is_restricted(self) -> None:
        """Test is_restricted reports the restriction table."""
        assert swapspy.is_restricted(str, "upper")
        assert not swapspy.is_restricted(Target, "full_name")

    @pytest.mark.unit
    def test_mock_restricted(self) -> None:
        """Test restricted methods cannot be mocked through the helpers."""
        with pytest.raises(swapspy.RestrictedTargetError):
            swapspy.mock(str, "upper", "no")
        with pytest.raises(swapspy.RestrictedTargetError):
            swapspy.spy_on(str, "upper")

        assert "abc".upper() == "ABC"

    @pytest.mark.unit
    def test_mock_twice(self) -> None:
        """Test a method cannot be mocked twice at once."""
        swapspy.mock(Target, "full_name", "one")

        with pytest.raises(swapspy.AlreadyInterceptedError):
            swapspy.mock(Target, "full_name", "two")

    @pytest.mark.unit
    def test_mock_store_is_current_store(self) -> None:
        """Test the helpers share the context's store."""
        spy = swapspy.spy_on(Target, "full_name")

        assert swapspy.mock_store() is current_store()
        assert swapspy.mock_store().mocks() == [spy]


class TestBulkHelpers:
    """Test suite for the clear, reset and restore helpers."""

    @pytest.fixture
    def mocks(self) -> dict[str, swapspy.MockMethod]:
        """Mocks on Target and Mark, each called once."""
        mocks = {
            "full_name": swapspy.mock(Target, "full_name", "Gob"),
            "convince": swapspy.spy_on(Target, "convince"),
            "upgrade": swapspy.mock(Mark, "upgrade", 100),
        }
        Target().full_name()
        Target().convince("fact")
        Mark().upgrade()
        return mocks

    @pytest.mark.unit
    def test_clear_mocks(self, mocks: dict[str, swapspy.MockMethod]) -> None:
        """Test clearing one class keeps its substitutions."""
        cleared = swapspy.clear_mocks(Target)

        assert len(cleared) == 2
        assert all(executions.is_empty() for executions in cleared)
        assert mocks["upgrade"].mock.count == 1
        assert Target().full_name() == "Gob"

    @pytest.mark.unit
    def test_clear_all_mocks(self, mocks: dict[str, swapspy.MockMethod]) -> None:
        """Test clearing every mock."""
        assert len(swapspy.clear_all_mocks()) == 3
        assert all(unit.mock.is_empty() for unit in mocks.values())

    @pytest.mark.unit
    def test_reset_mocks(self, mocks: dict[str, swapspy.MockMethod]) -> None:
        """Test resetting one class substitutes None for its methods."""
        reset = swapspy.reset_mocks(Target)

        assert len(reset) == 2
        assert Target().full_name() is None
        assert Target().convince("fact") is None
        assert Mark().upgrade() == 100

    @pytest.mark.unit
    def test_reset_all_mocks(self, mocks: dict[str, swapspy.MockMethod]) -> None:
        """Test resetting every mock."""
        swapspy.reset_all_mocks()

        assert Mark().upgrade() is None
        assert all(
            unit.state is swapspy.MockState.SUBSTITUTED for unit in mocks.values()
        )

    @pytest.mark.unit
    def test_restore_mocks(self, mocks: dict[str, swapspy.MockMethod]) -> None:
        """Test restoring one class drops its mocks only."""
        result = swapspy.restore_mocks(Target)

        assert result is swapspy.mock_store()
        assert Target().full_name() == "Tobias Funke"
        assert not swapspy.is_mocked(Target, "full_name")
        assert not swapspy.is_mocked(Target, "convince")
        assert swapspy.is_mocked(Mark, "upgrade")
        assert Mark().upgrade() == 100

    @pytest.mark.unit
    def test_restore_mocks_watching(self, mocks: dict[str, swapspy.MockMethod]) -> None:
        """Test restoring with watch keeps recording the originals."""
        ledgers = swapspy.restore_mocks(Target, watch=True)

        assert isinstance(ledgers, list) and len(ledgers) == 2
        assert Target().full_name() == "Tobias Funke"
        assert mocks["full_name"].state is swapspy.MockState.WATCHING
        assert mocks["full_name"].mock.results == ["Tobias Funke"]
        assert swapspy.is_mocked(Target, "full_name")

    @pytest.mark.unit
    def test_restore_all_mocks(self, mocks: dict[str, swapspy.MockMethod]) -> None:
        """Test restoring every mock empties the store."""
        swapspy.restore_all_mocks()

        assert swapspy.mock_store().is_empty()
        assert Mark().upgrade() == 1
        assert all(unit.state is swapspy.MockState.UNARMED for unit in mocks.values())

    @pytest.mark.unit
    def test_restore_all_mocks_watching(
        self, mocks: dict[str, swapspy.MockMethod]
    ) -> None:
        """Test restoring every mock while watching keeps them in the store."""
        ledgers = swapspy.restore_all_mocks(watch=True)

        assert len(ledgers) == 3
        assert len(swapspy.mock_store()) == 3
        assert Mark().upgrade() == 1


class TestPackage:
    """Test suite for the package namespace."""

    @pytest.mark.unit
    def test_exports(self) -> None:
        """Test the public names are importable from the package."""
        for name in swapspy.__all__:
            assert hasattr(swapspy, name)
        assert swapspy.__version__ == "0.1.0"
