"""集中配置管理

替代各模块散落的路径常量，提供统一的配置入口。
支持从 YAML 文件加载 + 编程式覆盖。

配置文件查找顺序:
  1. 命令行 -c/--config
  2. 环境变量 WINEBOX_CONFIG
  3. $XDG_CONFIG_HOME/winebox/config.yml
"""

from __future__ import annotations

import logging
import os
from dataclasses import asdict, dataclass, field
from pathlib import Path

import yaml

from winebox.core.exceptions import ConfigError
from winebox.utils.yaml_io import load_yaml

logger = logging.getLogger(__name__)

APP_NAME = "winebox"
DEFAULT_FEED_URL = "https://api.github.com/repos/Kron4ek/Wine-Builds/releases"


def _xdg_dir(env_key: str, fallback: str) -> Path:
    base = os.getenv(env_key) or os.path.expanduser(fallback)
    return Path(base) / APP_NAME


def default_config_path() -> str:
    """默认配置文件路径"""
    env_path = os.getenv("WINEBOX_CONFIG")
    if env_path:
        return env_path
    return str(_xdg_dir("XDG_CONFIG_HOME", "~/.config") / "config.yml")


@dataclass
class Config:
    """全局配置"""

    # 目录
    cache_file: str = field(
        default_factory=lambda: str(_xdg_dir("XDG_CACHE_HOME", "~/.cache") / "releases.json"),
    )
    packages_dir: str = field(
        default_factory=lambda: str(_xdg_dir("XDG_DATA_HOME", "~/.local/share") / "packages"),
    )
    prefixes_dir: str = field(
        default_factory=lambda: str(_xdg_dir("XDG_DATA_HOME", "~/.local/share") / "prefixes"),
    )
    download_dir: str = ""  # 空表示使用系统临时目录

    # 远程源
    feed_url: str = DEFAULT_FEED_URL
    asset_suffix: str = ".tar.xz"
    cache_days: int = 7

    # 包 / 前缀布局
    marker_file: str = ".winebox-package"
    runtime_binary: str = "bin/wine"
    bootstrap_args: list[str] = field(default_factory=lambda: ["wineboot", "--init"])
    strip_components: int = 1

    # 外部程序
    tricks_program: str = "winetricks"
    required_programs: list[str] = field(default_factory=lambda: ["tar"])

    # 自定义扩展 (放不到字段里的配置项)
    extra: dict = field(default_factory=dict)

    def __post_init__(self) -> None:
        for key in ("cache_file", "packages_dir", "prefixes_dir", "download_dir"):
            value = getattr(self, key)
            if value:
                setattr(self, key, os.path.expandvars(os.path.expanduser(value)))

    @classmethod
    def from_file(cls, path: str = "") -> Config:
        """从 YAML 文件加载配置，不存在则返回默认"""
        path = path or default_config_path()
        try:
            data = load_yaml(path)
        except (yaml.YAMLError, OSError, ValueError) as e:
            raise ConfigError(f"无法读取配置文件 {path}: {e}") from e
        if not data:
            return cls()
        known = {f.name for f in cls.__dataclass_fields__.values()}
        matched = {k: v for k, v in data.items() if k in known and k != "extra"}
        extra = {k: v for k, v in data.items() if k not in known}
        try:
            cfg = cls(**matched)
        except TypeError as e:
            raise ConfigError(f"配置文件内容无效 {path}: {e}") from e
        cfg.extra = extra
        logger.debug("配置已加载: %s", path)
        return cfg

    def to_dict(self) -> dict:
        return asdict(self)
