"""远程源客户端

从缓存的 release 列表中提取所有 asset，派生为 RemotePackage:
  - name: 去掉固定后缀（默认 .tar.xz）后的文件名
  - url:  browser_download_url
  - date: created_at

过滤正则作用于原始文件名（未去后缀），re.search 非锚定匹配。
结果保持源中顺序，不排序。
"""

from __future__ import annotations

import logging
import re

from winebox.core.cache import FeedCache
from winebox.core.exceptions import ValidationError
from winebox.core.models import RemotePackage

logger = logging.getLogger(__name__)


def strip_suffix(name: str, suffix: str) -> str:
    """去掉文件名后缀；没有该后缀时原样返回"""
    if suffix and name.endswith(suffix):
        return name[: -len(suffix)]
    return name


def compile_pattern(pattern: str, *, label: str = "pattern") -> re.Pattern[str]:
    """编译用户输入的正则，非法时抛 ValidationError"""
    try:
        return re.compile(pattern)
    except re.error as e:
        raise ValidationError(f"无效的正则表达式 ({label}): {pattern!r} - {e}") from e


class FeedClient:
    """远程包列表（经由缓存）"""

    def __init__(self, cache: FeedCache, suffix: str = ".tar.xz") -> None:
        self.cache = cache
        self.suffix = suffix

    def list_assets(self, pattern: str | None = None) -> list[RemotePackage]:
        regex = compile_pattern(pattern) if pattern is not None else None
        result: list[RemotePackage] = []
        for release in self.cache.read():
            for asset in release.get("assets") or []:
                asset_name = str(asset.get("name") or "")
                if not asset_name:
                    continue
                if regex is not None and not regex.search(asset_name):
                    continue
                result.append(RemotePackage(
                    name=strip_suffix(asset_name, self.suffix),
                    url=str(asset.get("browser_download_url") or ""),
                    date=str(asset.get("created_at") or ""),
                    asset_name=asset_name,
                ))
        logger.debug("远程包: %d 个 (pattern=%s)", len(result), pattern)
        return result

    def index(self) -> dict[str, RemotePackage]:
        """包名 → 远程包描述；同名时保留先出现的"""
        index: dict[str, RemotePackage] = {}
        for pkg in self.list_assets():
            index.setdefault(pkg.name, pkg)
        return index
