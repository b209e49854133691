"""远程源缓存

单个 JSON 文件保存最近一次拉取的 release 列表，以文件 mtime 作为时间戳。

新鲜度规则:
  - 文件存在且 (now - mtime) 按整天计算小于 max_age_days 时视为新鲜
  - 恰好满 max_age_days * 86400 秒即视为过期
  - 过期后读取前必须先刷新

无并发保护：两个进程同时刷新会互相覆盖。
"""

from __future__ import annotations

import json
import logging
import time
from collections.abc import Callable
from pathlib import Path
from typing import Any

from winebox.core.exceptions import CorruptRecordError, ExecutionError
from winebox.core.models import CacheInfo
from winebox.utils.net import fetch_text
from winebox.utils.yaml_io import atomic_write

logger = logging.getLogger(__name__)

SECONDS_PER_DAY = 86400


def _shape_problem(doc: Any) -> str | None:
    """检查 release 列表结构，合法返回 None，否则返回问题描述"""
    if not isinstance(doc, list):
        return f"顶层应为数组，实际为 {type(doc).__name__}"
    for i, release in enumerate(doc):
        if not isinstance(release, dict):
            return f"第 {i} 个 release 不是对象"
        assets = release.get("assets")
        if assets is None:
            continue
        if not isinstance(assets, list):
            return f"第 {i} 个 release 的 assets 不是数组"
        if any(not isinstance(a, dict) for a in assets):
            return f"第 {i} 个 release 含有非对象的 asset"
    return None


class FeedCache:
    """远程 release 列表的本地缓存"""

    def __init__(
        self,
        path: str | Path,
        url: str,
        *,
        max_age_days: int = 7,
        fetch: Callable[[str], str] = fetch_text,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self.path = Path(path)
        self.url = url
        self.max_age_days = max_age_days
        self._fetch = fetch
        self._clock = clock

    def _ensure_dir(self) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)

    def age_seconds(self) -> float | None:
        """缓存文件年龄（秒），不存在返回 None"""
        try:
            mtime = self.path.stat().st_mtime
        except FileNotFoundError:
            return None
        return self._clock() - mtime

    def is_fresh(self) -> bool:
        age = self.age_seconds()
        if age is None:
            return False
        return int(age) // SECONDS_PER_DAY < self.max_age_days

    def refresh(self) -> Path:
        """重新拉取远程源并覆盖缓存文件"""
        self._ensure_dir()
        text = self._fetch(self.url)
        try:
            doc = json.loads(text)
        except json.JSONDecodeError as e:
            raise ExecutionError(f"远程源返回的不是合法 JSON: {self.url} - {e}") from e
        problem = _shape_problem(doc)
        if problem:
            detail = doc.get("message", "") if isinstance(doc, dict) else ""
            raise ExecutionError(
                f"远程源返回格式异常: {self.url} - {detail or problem}"
            )
        atomic_write(self.path, text)
        logger.info("缓存已更新: %s (%d 个 release)", self.path, len(doc))
        return self.path

    def read(self) -> list[dict[str, Any]]:
        """读取缓存文档，过期或不存在时先刷新"""
        self._ensure_dir()
        if not self.is_fresh():
            logger.info("缓存不存在或已过期，重新拉取")
            self.refresh()
        return self._load()

    def _load(self) -> list[dict[str, Any]]:
        try:
            doc = json.loads(self.path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as e:
            raise CorruptRecordError(
                f"缓存文件已损坏: {self.path}，请执行 'winebox cache refresh'"
            ) from e
        problem = _shape_problem(doc)
        if problem:
            raise CorruptRecordError(
                f"缓存文件格式异常 ({problem}): {self.path}，请执行 'winebox cache refresh'"
            )
        return doc

    def info(self) -> CacheInfo:
        age = self.age_seconds()
        releases = 0
        if age is not None:
            try:
                releases = len(self._load())
            except CorruptRecordError:
                logger.warning("缓存文件无法解析: %s", self.path)
        return CacheInfo(
            path=self.path,
            exists=age is not None,
            age_seconds=age,
            fresh=self.is_fresh(),
            releases=releases,
        )

    def clear(self) -> bool:
        """删除缓存文件"""
        if not self.path.exists():
            return False
        self.path.unlink()
        logger.info("缓存已删除: %s", self.path)
        return True
