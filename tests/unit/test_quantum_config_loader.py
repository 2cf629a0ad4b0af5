"""Tests for config file loading, caching and fail-open reloads."""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path

import pytest

CONFIG_DATA = {
    "content": ["./**/*.html"],
    "theme": {"extend": {"spacing": {"4": "1.2rem", "5": "1.3rem"}}},
    "componentPresets": {"panel": "p-4 rounded-lg"},
}


def _write_json(path: Path, data: dict) -> Path:
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


def _bump_mtime(path: Path) -> None:
    stat = path.stat()
    os.utime(path, ns=(stat.st_atime_ns, stat.st_mtime_ns + 1_000_000_000))


# =============================================================================
# Strict loading
# =============================================================================


class TestLoadConfig:
    """Test load_config for each supported format."""

    def test_json(self, tmp_path):
        from quantumcss.core.config_loader import load_config

        config = load_config(_write_json(tmp_path / "quantum.config.json", CONFIG_DATA))
        assert config.content == ["./**/*.html"]
        assert config.theme.extend.spacing == {"4": "1.2rem", "5": "1.3rem"}
        assert config.component_presets == {"panel": "p-4 rounded-lg"}

    def test_yaml(self, tmp_path):
        from quantumcss.core.config_loader import load_config

        path = tmp_path / "quantum.config.yaml"
        path.write_text(
            "content:\n"
            "  - src/**/*.html\n"
            "theme:\n"
            "  extend:\n"
            "    spacing:\n"
            "      4: 1.2rem\n"
            "componentPresets:\n"
            "  panel: p-4 rounded-lg\n",
            encoding="utf-8",
        )
        config = load_config(path)
        assert config.content == ["src/**/*.html"]
        assert config.theme.extend.spacing == {"4": "1.2rem"}

    def test_toml(self, tmp_path):
        from quantumcss.core.config_loader import load_config

        path = tmp_path / "quantum.config.toml"
        path.write_text(
            'content = ["**/*.html"]\n'
            "preflight = true\n"
            "\n"
            "[theme.extend.colors]\n"
            'brand = "#ff6600"\n',
            encoding="utf-8",
        )
        config = load_config(path)
        assert config.preflight is True
        assert config.theme.extend.colors == {"brand": "#ff6600"}

    def test_empty_yaml_is_defaults(self, tmp_path):
        from quantumcss.core.config_loader import load_config

        path = tmp_path / "quantum.config.yml"
        path.write_text("", encoding="utf-8")
        assert load_config(path).content == []

    @pytest.mark.parametrize(
        ("name", "text"),
        [
            ("quantum.config.json", "{not json"),
            ("quantum.config.yaml", "content: [unclosed"),
            ("quantum.config.toml", "content = "),
            ("quantum.config.json", "[1, 2, 3]"),
            ("quantum.config.json", '{"content": {"bad": 1}}'),
            ("quantum.config.ini", "[x]"),
        ],
    )
    def test_invalid_raises_config_error(self, tmp_path, name, text):
        from quantumcss.core.config_loader import load_config
        from quantumcss.core.errors import ConfigError

        path = tmp_path / name
        path.write_text(text, encoding="utf-8")
        with pytest.raises(ConfigError) as exc_info:
            load_config(path)
        assert exc_info.value.path == path

    def test_missing_raises(self, tmp_path):
        from quantumcss.core.config_loader import load_config
        from quantumcss.core.errors import ConfigError

        with pytest.raises(ConfigError, match="not found"):
            load_config(tmp_path / "nope.json")


class TestFindConfig:
    """Test config discovery."""

    def test_finds_first_candidate(self, tmp_path):
        from quantumcss.core.config_loader import find_config

        (tmp_path / "quantum.config.toml").write_text("", encoding="utf-8")
        _write_json(tmp_path / "quantum.config.json", {})
        assert find_config(tmp_path) == tmp_path / "quantum.config.json"

    def test_none_when_absent(self, tmp_path):
        from quantumcss.core.config_loader import find_config

        assert find_config(tmp_path) is None

    def test_base_dir_is_config_parent(self, tmp_path):
        from quantumcss.core.config_loader import config_base_dir

        path = _write_json(tmp_path / "quantum.config.json", {})
        assert config_base_dir(path) == tmp_path.resolve()


# =============================================================================
# Fail-open reload
# =============================================================================


class TestReloadConfig:
    """Test reload_config fallbacks and caching."""

    def test_missing_file_falls_back(self, tmp_path, caplog):
        from quantumcss.core.config_loader import reload_config
        from quantumcss.core.ir import QuantumConfig

        with caplog.at_level(logging.WARNING, logger="quantumcss.core.config_loader"):
            config = reload_config(tmp_path / "quantum.config.json")
        assert config == QuantumConfig()
        assert "using defaults" in caplog.text

    def test_broken_file_falls_back(self, tmp_path):
        from quantumcss.core.config_loader import reload_config

        path = tmp_path / "quantum.config.json"
        path.write_text("{broken", encoding="utf-8")
        config = reload_config(path)
        assert config.content == []
        assert config.component_presets == {}

    def test_none_path_is_defaults(self):
        from quantumcss.core.config_loader import reload_config
        from quantumcss.core.ir import QuantumConfig

        assert reload_config(None) == QuantumConfig()

    def test_cache_hit_returns_same_object(self, tmp_path):
        from quantumcss.core.config_loader import ConfigCache, reload_config

        path = _write_json(tmp_path / "quantum.config.json", CONFIG_DATA)
        cache = ConfigCache()
        first = reload_config(path, cache)
        assert reload_config(path, cache) is first
        assert len(cache) == 1

    def test_changed_file_reparsed(self, tmp_path):
        from quantumcss.core.config_loader import ConfigCache, reload_config

        path = _write_json(tmp_path / "quantum.config.json", CONFIG_DATA)
        cache = ConfigCache()
        reload_config(path, cache)

        _write_json(path, {**CONFIG_DATA, "content": ["other/*.html"]})
        _bump_mtime(path)
        assert reload_config(path, cache).content == ["other/*.html"]

    def test_broken_edit_drops_cache_entry(self, tmp_path):
        from quantumcss.core.config_loader import ConfigCache, reload_config

        path = _write_json(tmp_path / "quantum.config.json", CONFIG_DATA)
        cache = ConfigCache()
        reload_config(path, cache)

        path.write_text("{broken", encoding="utf-8")
        _bump_mtime(path)
        assert reload_config(path, cache).content == []
        assert len(cache) == 0

    def test_caches_are_independent(self, tmp_path):
        from quantumcss.core.config_loader import ConfigCache, reload_config

        path = _write_json(tmp_path / "quantum.config.json", CONFIG_DATA)
        one, two = ConfigCache(), ConfigCache()
        reload_config(path, one)
        assert len(one) == 1
        assert len(two) == 0

    def test_invalidate(self, tmp_path):
        from quantumcss.core.config_loader import ConfigCache, reload_config

        path = _write_json(tmp_path / "quantum.config.json", CONFIG_DATA)
        cache = ConfigCache()
        reload_config(path, cache)
        cache.invalidate(path)
        assert len(cache) == 0
