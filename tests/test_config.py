"""Tests for environment configuration."""

import pytest

from pokestack.config import Config


class TestConfig:
    def test_defaults(self, monkeypatch):
        for var in ("POKESTACK_DATABASE", "POKESTACK_BASE_STATS", "POKESTACK_SEED", "POKESTACK_CAPTURE_RETRIES"):
            monkeypatch.delenv(var, raising=False)
        config = Config.from_env()
        assert config == Config()
        assert config.seed is None
        assert config.capture_retries == 3

    def test_reads_environment(self, monkeypatch):
        monkeypatch.setenv("POKESTACK_DATABASE", "/tmp/world.json")
        monkeypatch.setenv("POKESTACK_SEED", "42")
        monkeypatch.setenv("POKESTACK_CAPTURE_RETRIES", "5")
        config = Config.from_env()
        assert config.database_path == "/tmp/world.json"
        assert config.seed == 42
        assert config.capture_retries == 5

    @pytest.mark.parametrize("var,value", [
        ("POKESTACK_SEED", "abc"),
        ("POKESTACK_CAPTURE_RETRIES", "many"),
        ("POKESTACK_CAPTURE_RETRIES", "0"),
    ])
    def test_invalid_values(self, monkeypatch, var, value):
        monkeypatch.setenv(var, value)
        with pytest.raises(ValueError):
            Config.from_env()


class TestSharedToolkit:
    def test_lazy_instance_uses_environment(self, monkeypatch, config):
        import pokestack
        from pokestack.toolkit import Toolkit

        monkeypatch.setenv("POKESTACK_DATABASE", config.database_path)
        monkeypatch.setenv("POKESTACK_BASE_STATS", config.base_stats_path)
        monkeypatch.setattr(pokestack, "_instances", {})

        tk = pokestack.tk
        assert isinstance(tk, Toolkit)
        assert tk.config.database_path == config.database_path
        assert pokestack.tk is tk

    def test_unknown_attribute(self):
        import pokestack

        with pytest.raises(AttributeError):
            pokestack.nope
