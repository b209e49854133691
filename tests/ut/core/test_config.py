"""Config 加载测试"""

from __future__ import annotations

from pathlib import Path

import pytest

from winebox.core.config import DEFAULT_FEED_URL, Config, default_config_path
from winebox.core.exceptions import ConfigError


class TestDefaults:
    def test_xdg_locations(self, monkeypatch, tmp_path: Path) -> None:
        monkeypatch.setenv("XDG_CACHE_HOME", str(tmp_path / "cache"))
        monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "data"))
        cfg = Config()
        assert cfg.cache_file == str(tmp_path / "cache" / "winebox" / "releases.json")
        assert cfg.packages_dir == str(tmp_path / "data" / "winebox" / "packages")
        assert cfg.prefixes_dir == str(tmp_path / "data" / "winebox" / "prefixes")
        assert cfg.feed_url == DEFAULT_FEED_URL
        assert cfg.required_programs == ["tar"]

    def test_config_path_from_env(self, monkeypatch) -> None:
        monkeypatch.setenv("WINEBOX_CONFIG", "/etc/winebox.yml")
        assert default_config_path() == "/etc/winebox.yml"

    def test_config_path_xdg(self, monkeypatch, tmp_path: Path) -> None:
        monkeypatch.delenv("WINEBOX_CONFIG", raising=False)
        monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))
        assert default_config_path() == str(tmp_path / "winebox" / "config.yml")

    def test_home_expanded(self, monkeypatch, tmp_path: Path) -> None:
        monkeypatch.setenv("HOME", str(tmp_path))
        cfg = Config(packages_dir="~/wine/packages")
        assert cfg.packages_dir == str(tmp_path / "wine" / "packages")


class TestFromFile:
    def test_missing_file_gives_defaults(self, tmp_path: Path) -> None:
        cfg = Config.from_file(str(tmp_path / "nope.yml"))
        assert cfg.cache_days == 7

    def test_known_and_extra_keys(self, tmp_path: Path) -> None:
        path = tmp_path / "config.yml"
        path.write_text(
            "cache_days: 1\n"
            "prefixes_dir: /srv/prefixes\n"
            "required_programs: [tar, xz]\n"
            "theme: dark\n",
            encoding="utf-8",
        )
        cfg = Config.from_file(str(path))
        assert cfg.cache_days == 1
        assert cfg.prefixes_dir == "/srv/prefixes"
        assert cfg.required_programs == ["tar", "xz"]
        assert cfg.extra == {"theme": "dark"}

    def test_invalid_yaml(self, tmp_path: Path) -> None:
        path = tmp_path / "config.yml"
        path.write_text("cache_days: [unclosed\n", encoding="utf-8")
        with pytest.raises(ConfigError, match="无法读取配置文件"):
            Config.from_file(str(path))

    def test_non_mapping_is_ignored(self, tmp_path: Path) -> None:
        path = tmp_path / "config.yml"
        path.write_text("- just\n- a list\n", encoding="utf-8")
        assert Config.from_file(str(path)).marker_file == ".winebox-package"

    def test_env_selects_file(self, tmp_path: Path, monkeypatch) -> None:
        path = tmp_path / "custom.yml"
        path.write_text("asset_suffix: .tar.gz\n", encoding="utf-8")
        monkeypatch.setenv("WINEBOX_CONFIG", str(path))
        assert Config.from_file().asset_suffix == ".tar.gz"

    def test_to_dict(self) -> None:
        data = Config(cache_file="/c", packages_dir="/p", prefixes_dir="/x").to_dict()
        assert data["packages_dir"] == "/p"
        assert data["bootstrap_args"] == ["wineboot", "--init"]
