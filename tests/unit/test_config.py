"""
Configuration Unit Tests
Tests for authtree/config/runtime.py and authtree_cli/config.py
"""
import json

import pytest

from authtree.config import LoggingConfig, RuntimeConfig, TreeConfig
from authtree.storage import FileNodeStore, MemoryNodeStore

from authtree_cli.config import (
    get_default_config_template,
    load_config,
    load_config_from_file,
)


class TestRuntimeConfig:
    """Loading and merging configuration."""

    def test_defaults(self):
        config = RuntimeConfig()
        assert config.tree.backend == "file"
        assert config.tree.store_path == ".authtree"
        assert config.tree.depth is None
        assert config.logging.level == "INFO"

    def test_from_dict_partial(self):
        config = RuntimeConfig.from_dict({"tree": {"depth": 8}})
        assert config.tree.depth == 8
        assert config.tree.backend == "file"
        assert config.logging == LoggingConfig()

    def test_to_dict_round_trip(self):
        config = RuntimeConfig(tree=TreeConfig(backend="memory", depth=5, hasher="blake2b"))
        assert RuntimeConfig.from_dict(config.to_dict()) == config

    def test_from_yaml(self, tmp_path):
        path = tmp_path / "authtree.yaml"
        path.write_text("tree:\n  store_path: /data/tree\n  depth: 12\nlogging:\n  level: DEBUG\n")
        config = RuntimeConfig.from_yaml(path)
        assert config.tree.store_path == "/data/tree"
        assert config.tree.depth == 12
        assert config.logging.level == "DEBUG"

    def test_from_yaml_missing(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            RuntimeConfig.from_yaml(tmp_path / "nope.yaml")

    def test_env_overrides(self, monkeypatch):
        monkeypatch.setenv("AUTHTREE_STORE", "/tmp/elsewhere")
        monkeypatch.setenv("AUTHTREE_DEPTH", "6")
        monkeypatch.setenv("AUTHTREE_LOG_LEVEL", "WARNING")

        base = RuntimeConfig()
        config = base.with_env_overrides()
        assert config.tree.store_path == "/tmp/elsewhere"
        assert config.tree.depth == 6
        assert config.logging.level == "WARNING"
        assert base.tree.store_path == ".authtree"

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("AUTHTREE_BACKEND", "memory")
        monkeypatch.setenv("AUTHTREE_HASHER", "blake2b")
        config = RuntimeConfig.from_env()
        assert config.tree.backend == "memory"
        assert config.tree.hasher == "blake2b"

    def test_no_overrides_returns_same_object(self):
        config = RuntimeConfig()
        assert config.with_env_overrides() is config


class TestOpenStore:
    """Backend selection."""

    def test_memory(self):
        assert isinstance(TreeConfig(backend="memory").open_store(), MemoryNodeStore)

    def test_file(self, tmp_path):
        store = TreeConfig(store_path=str(tmp_path / "s")).open_store()
        assert isinstance(store, FileNodeStore)
        assert store.path == tmp_path / "s"

    def test_unknown(self):
        with pytest.raises(ValueError, match="Unknown storage backend"):
            TreeConfig(backend="redis").open_store()


class TestCLIConfig:
    """Config file discovery for the CLI."""

    def test_template_is_valid_json(self):
        data = json.loads(get_default_config_template())
        config = RuntimeConfig.from_dict(data)
        assert config.tree.depth == 20
        assert config.tree.hasher == "sha256"

    def test_load_explicit_json(self, tmp_path):
        path = tmp_path / "custom.json"
        path.write_text(json.dumps({"tree": {"store_path": "x", "depth": 4}}))
        config = load_config(path)
        assert config.tree.store_path == "x"
        assert config.tree.depth == 4

    def test_load_explicit_yaml(self, tmp_path):
        path = tmp_path / "custom.yml"
        path.write_text("tree:\n  backend: memory\n")
        assert load_config_from_file(path).tree.backend == "memory"

    def test_discovers_cwd_file(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        (tmp_path / "authtree.json").write_text(json.dumps({"tree": {"depth": 7}}))
        assert load_config().tree.depth == 7

    def test_env_beats_file(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        (tmp_path / "authtree.json").write_text(json.dumps({"tree": {"depth": 7}}))
        monkeypatch.setenv("AUTHTREE_DEPTH", "9")
        assert load_config().tree.depth == 9

    def test_missing_explicit_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_config(tmp_path / "missing.json")


class TestDefaultConfig:
    """Process-wide default configuration."""

    def test_cached_from_env(self, monkeypatch):
        from authtree.config import runtime

        monkeypatch.setattr(runtime, "_default_config", None)
        monkeypatch.setenv("AUTHTREE_BACKEND", "memory")
        config = runtime.get_default_config()
        assert config.tree.backend == "memory"
        assert runtime.get_default_config() is config
