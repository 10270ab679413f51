"""Tests for the plugin registry."""

from __future__ import annotations

import logging

import pytest

from kinetix_bench.exceptions import RegistryError
from kinetix_bench.utils.registry import INTERVENTION_REGISTRY, MODEL_REGISTRY, Registry


class TestRegistry:
    def test_register_and_get(self):
        reg = Registry("test")

        @reg.register("thing")
        class Thing:
            pass

        assert reg.get("thing") is Thing

    def test_get_missing_key_raises(self):
        reg = Registry("test")
        with pytest.raises(RegistryError, match="'missing' not found in test registry"):
            reg.get("missing")

    def test_list_keys_sorted(self):
        reg = Registry("test")
        for key in ("b", "a", "c"):
            reg.register(key)(type(key.upper(), (), {}))
        assert reg.list_keys() == ["a", "b", "c"]

    def test_contains(self):
        reg = Registry("test")
        reg.register("x")(type("X", (), {}))
        assert "x" in reg
        assert "y" not in reg

    def test_repr(self):
        reg = Registry("demo")
        reg.register("one")(type("One", (), {}))
        assert repr(reg) == "Registry('demo', keys=[one])"

    def test_overwrite_warning(self, caplog):
        reg = Registry("test")
        reg.register("dup")(type("A", (), {}))
        with caplog.at_level(logging.WARNING, logger="kinetix_bench"):
            reg.register("dup")(type("B", (), {}))
        assert "Overwriting" in caplog.text
        assert reg.get("dup").__name__ == "B"

    def test_create_instantiates(self):
        reg = Registry("test")

        @reg.register("pair")
        class Pair:
            def __init__(self, a, b=0):
                self.a, self.b = a, b

        obj = reg.create("pair", 1, b=2)
        assert isinstance(obj, Pair)
        assert (obj.a, obj.b) == (1, 2)

    def test_create_missing_raises(self):
        with pytest.raises(RegistryError):
            Registry("test").create("nothing")

    def test_describe(self):
        reg = Registry("test")

        @reg.register("documented")
        class Documented:
            """First line.

            More detail.
            """

        reg.register("bare")(type("Bare", (), {}))
        assert reg.describe() == {"bare": "", "documented": "First line."}

    def test_register_returns_original_class(self):
        reg = Registry("test")

        class Original:
            pass

        assert reg.register("orig")(Original) is Original


class TestGlobalRegistries:
    def test_model_registry_has_hidden(self):
        assert "hidden" in MODEL_REGISTRY

    @pytest.mark.parametrize("key", ["initial", "blockreactions", "initial_blockreactions"])
    def test_intervention_registry(self, key):
        assert key in INTERVENTION_REGISTRY

    def test_create_hidden_model(self):
        model = MODEL_REGISTRY.create("hidden")
        assert model.num_species == 9
