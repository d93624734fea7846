"""Tests for environment configuration."""

from __future__ import annotations

import importlib
from collections.abc import Iterator

import pytest

from cidkit import config


@pytest.fixture
def reload_config(monkeypatch: pytest.MonkeyPatch) -> Iterator[pytest.MonkeyPatch]:
    """Yield monkeypatch; restore the module from the pinned environment afterwards."""
    yield monkeypatch
    monkeypatch.undo()
    importlib.reload(config)


class TestHexCase:
    """Tests for CIDKIT_HEX_CASE."""

    def test_default(self, reload_config: pytest.MonkeyPatch) -> None:
        """Unset means uppercase."""
        reload_config.delenv("CIDKIT_HEX_CASE", raising=False)
        assert importlib.reload(config).CIDKIT_HEX_CASE == "upper"

    def test_case_insensitive(self, reload_config: pytest.MonkeyPatch) -> None:
        """The value is normalised to lowercase."""
        reload_config.setenv("CIDKIT_HEX_CASE", " Lower ")
        assert importlib.reload(config).CIDKIT_HEX_CASE == "lower"

    def test_invalid_value(self, reload_config: pytest.MonkeyPatch) -> None:
        """An unknown value fails at import."""
        reload_config.setenv("CIDKIT_HEX_CASE", "mixed")
        with pytest.raises(ValueError, match="CIDKIT_HEX_CASE"):
            importlib.reload(config)
