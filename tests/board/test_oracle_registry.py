"""Tests for the oracle factory registry and protocols."""

from __future__ import annotations

import pytest

from fake_oracle import FakeOracle, FakeOracleFactory
from trihex.board.protocol import OracleFactory, RulesOracle
from trihex.board.registry import OracleRegistry


class TestProtocols:
    def test_fake_oracle_conforms(self) -> None:
        assert isinstance(FakeOracle.starting(), RulesOracle)
        assert isinstance(FakeOracleFactory(), OracleFactory)

    def test_non_oracle(self) -> None:
        assert not isinstance(object(), RulesOracle)


class TestOracleRegistry:
    def test_register_and_get(self, test_registry: OracleRegistry, factory: FakeOracleFactory) -> None:
        assert test_registry.get("fake") is factory

    def test_list_variants(self, test_registry: OracleRegistry) -> None:
        assert test_registry.list_variants() == ["fake"]

    def test_duplicate_raises(self, test_registry: OracleRegistry) -> None:
        with pytest.raises(ValueError, match="already registered"):
            test_registry.register(FakeOracleFactory())

    def test_get_unknown_raises(self) -> None:
        with pytest.raises(KeyError, match="Unknown variant"):
            OracleRegistry().get("nonexistent")

    def test_factory_creates_independent_oracles(self, factory: FakeOracleFactory) -> None:
        first = factory.new_default()
        second = factory.new(first.get_fen())
        assert first is not second
        assert first.get_fen() == second.get_fen()


class TestLoad:
    def test_load_class(self) -> None:
        registry = OracleRegistry()
        factory = registry.load("fake_oracle:FakeOracleFactory")
        assert isinstance(factory, FakeOracleFactory)
        assert registry.get("fake") is factory

    def test_load_instance(self, monkeypatch: pytest.MonkeyPatch) -> None:
        import fake_oracle as module

        instance = FakeOracleFactory()
        monkeypatch.setattr(module, "FACTORY", instance, raising=False)
        assert OracleRegistry().load("fake_oracle:FACTORY") is instance

    @pytest.mark.parametrize("path", ["fake_oracle", ":FakeOracleFactory", "fake_oracle:"])
    def test_bad_path(self, path: str) -> None:
        with pytest.raises(ValueError):
            OracleRegistry().load(path)

    def test_missing_attribute(self) -> None:
        with pytest.raises(AttributeError):
            OracleRegistry().load("fake_oracle:NoSuchFactory")

    def test_missing_module(self) -> None:
        with pytest.raises(ImportError):
            OracleRegistry().load("no_such_module_anywhere:Factory")


class TestDefaultVariant:
    def test_uses_configured_default(self, factory: FakeOracleFactory, monkeypatch: pytest.MonkeyPatch) -> None:
        from trihex.config import settings

        monkeypatch.setattr(settings, "default_variant", "fake")
        registry = OracleRegistry()
        registry.register(factory)
        assert registry.get() is factory

    def test_missing_default(self) -> None:
        with pytest.raises(KeyError):
            OracleRegistry().get()
