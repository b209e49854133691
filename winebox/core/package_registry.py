"""包注册表

包根目录下每个子目录是一个已安装的包，目录存在是"已安装"的唯一依据。

安装流程:
  1. 在远程列表中按名查找 → 不存在抛 PackageNotFoundError
  2. 本地已存在 → AlreadyInstalledError
  3. 下载到临时目录 → 解压到 <root>/<name>/
  下载 / 解压失败抛 ExecutionError，不清理已解压的部分内容。

删除流程:
  扫描所有前缀的绑定，仍被引用时抛 DependencyConflictError 并列出全部前缀。
"""

from __future__ import annotations

import logging
import tempfile
from collections.abc import Callable, Iterable
from pathlib import Path

from winebox.core.archive import Extractor, TarExtractor
from winebox.core.exceptions import (
    AlreadyInstalledError,
    DependencyConflictError,
    NotInstalledError,
    PackageNotFoundError,
    WineboxError,
)
from winebox.core.feed import FeedClient
from winebox.core.models import InstalledPackage, PrefixRecord
from winebox.core.registry import DirectoryRegistry
from winebox.utils.net import download_file

logger = logging.getLogger(__name__)


class PackageRegistry(DirectoryRegistry):
    """已安装包的目录注册表"""

    kind = "包"

    def __init__(
        self,
        root: str | Path,
        *,
        feed: FeedClient | None = None,
        extractor: Extractor | None = None,
        downloader: Callable[[str, Path], Path] = download_file,
        download_dir: str = "",
        runtime_binary: str = "bin/wine",
        bindings: Callable[[], Iterable[PrefixRecord]] | None = None,
    ) -> None:
        super().__init__(root)
        self._feed = feed
        self._extractor = extractor or TarExtractor()
        self._download = downloader
        self.download_dir = download_dir
        self.runtime_binary_path = runtime_binary
        self._bindings = bindings

    # ------------------------------------------------------------------
    # 查询
    # ------------------------------------------------------------------

    def list_installed(self) -> set[str]:
        return set(self._names())

    def get(self, name: str) -> InstalledPackage | None:
        path = self._path(name)
        if not path.is_dir():
            return None
        return InstalledPackage(name=name, path=path)

    def is_installed(self, name: str) -> bool:
        return self._exists(name)

    def runtime_binary(self, name: str) -> Path:
        """包内 wine 可执行文件路径（不检查是否存在）"""
        return self._path(name) / self.runtime_binary_path

    def dependents(self, name: str) -> list[str]:
        """绑定到该包的所有前缀名"""
        if self._bindings is None:
            return []
        return [r.name for r in self._bindings() if r.package == name]

    # ------------------------------------------------------------------
    # 安装 / 删除
    # ------------------------------------------------------------------

    def install(self, name: str) -> InstalledPackage:
        dest = self._path(name)
        if self._feed is None:
            raise WineboxError("未配置远程源，无法安装")
        remote = self._feed.index().get(name)
        if remote is None:
            raise PackageNotFoundError(f"远程源中不存在包: {name}")
        if dest.is_dir():
            raise AlreadyInstalledError(f"包已安装: {name}")

        staging_root = None
        if self.download_dir:
            staging_root = Path(self.download_dir)
            staging_root.mkdir(parents=True, exist_ok=True)

        with tempfile.TemporaryDirectory(prefix="winebox-", dir=staging_root) as staging:
            archive = self._download(remote.url, Path(staging) / remote.asset_name)
            self.root.mkdir(parents=True, exist_ok=True)
            self._extractor.extract(archive, dest)

        logger.info("已安装: %s -> %s", name, dest)
        return InstalledPackage(name=name, path=dest)

    def remove(self, name: str) -> None:
        path = self._path(name)
        if not path.is_dir():
            raise NotInstalledError(f"包未安装: {name}")
        users = self.dependents(name)
        if users:
            raise DependencyConflictError(name, users)
        self._rmtree(path)

