"""核心数据模型

包、前缀、远程包描述、缓存状态等数据类集中定义，
registry / cache / cli 统一从此处导入。
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class RemotePackage:
    """远程源中的一个可下载包（由 release asset 派生）"""

    name: str         # 去掉后缀后的包名，如 wine-7.0-amd64
    url: str          # browser_download_url
    date: str         # created_at，ISO-8601
    asset_name: str   # 原始文件名，如 wine-7.0-amd64.tar.xz


@dataclass(frozen=True)
class InstalledPackage:
    """本地已安装的包，目录存在即视为已安装"""

    name: str
    path: Path


@dataclass(frozen=True)
class PrefixRecord:
    """前缀记录 — 前缀目录 + 绑定的包名"""

    name: str
    package: str
    path: Path


@dataclass(frozen=True)
class CacheInfo:
    """缓存文件状态"""

    path: Path
    exists: bool
    age_seconds: float | None
    fresh: bool
    releases: int = 0
