"""服务容器 — 每个进程构造一次，统一持有缓存、远程源、注册表与运行时

同一容器内的实例共享状态；CLI 通过 click 上下文对象传递容器，不使用全局单例。

依赖关系图（→ 表示依赖）:
  feed     → cache
  packages → feed, prefixes（删除时的引用检查，延迟解析）
  prefixes → packages, runtime

用法:
    container = ServiceContainer(Config.from_file())
    container.packages.install("wine-9.0-amd64")
    container.prefixes.create(["work"], "wine-9.0-amd64")

    # 测试中注入 mock 执行器 / 下载函数
    container = ServiceContainer(cfg, executor=FakeExecutor(), fetch=fake_fetch)
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from pathlib import Path
from typing import TYPE_CHECKING

from winebox.core.config import Config
from winebox.utils.net import download_file, fetch_text
from winebox.utils.shell import CommandExecutor, LocalExecutor

if TYPE_CHECKING:
    from winebox.core.cache import FeedCache
    from winebox.core.feed import FeedClient
    from winebox.core.package_registry import PackageRegistry
    from winebox.core.prefix_registry import PrefixRegistry
    from winebox.services.runtime import WineRuntime

logger = logging.getLogger(__name__)


class ServiceContainer:
    """懒加载服务容器"""

    def __init__(
        self,
        config: Config | None = None,
        *,
        executor: CommandExecutor | None = None,
        fetch: Callable[[str], str] = fetch_text,
        downloader: Callable[[str, Path], Path] = download_file,
    ) -> None:
        self._config = config or Config()
        self._executor = executor or LocalExecutor()
        self._fetch = fetch
        self._downloader = downloader
        self._instances: dict[str, object] = {}

    @property
    def config(self) -> Config:
        return self._config

    @property
    def cache(self) -> FeedCache:
        if "cache" not in self._instances:
            from winebox.core.cache import FeedCache
            self._instances["cache"] = FeedCache(
                self._config.cache_file,
                self._config.feed_url,
                max_age_days=self._config.cache_days,
                fetch=self._fetch,
            )
        return self._instances["cache"]  # type: ignore[return-value]

    @property
    def feed(self) -> FeedClient:
        if "feed" not in self._instances:
            from winebox.core.feed import FeedClient
            self._instances["feed"] = FeedClient(
                self.cache, suffix=self._config.asset_suffix,
            )
        return self._instances["feed"]  # type: ignore[return-value]

    @property
    def runtime(self) -> WineRuntime:
        if "runtime" not in self._instances:
            from winebox.services.runtime import WineRuntime
            self._instances["runtime"] = WineRuntime(
                self._executor,
                bootstrap_args=self._config.bootstrap_args,
                tricks_program=self._config.tricks_program,
            )
        return self._instances["runtime"]  # type: ignore[return-value]

    @property
    def packages(self) -> PackageRegistry:
        if "packages" not in self._instances:
            from winebox.core.archive import TarExtractor
            from winebox.core.package_registry import PackageRegistry
            self._instances["packages"] = PackageRegistry(
                self._config.packages_dir,
                feed=self.feed,
                extractor=TarExtractor(
                    self._executor,
                    strip_components=self._config.strip_components,
                ),
                downloader=self._downloader,
                download_dir=self._config.download_dir,
                runtime_binary=self._config.runtime_binary,
                bindings=lambda: self.prefixes.list_all(),
            )
        return self._instances["packages"]  # type: ignore[return-value]

    @property
    def prefixes(self) -> PrefixRegistry:
        if "prefixes" not in self._instances:
            from winebox.core.prefix_registry import PrefixRegistry
            self._instances["prefixes"] = PrefixRegistry(
                self._config.prefixes_dir,
                packages=self.packages,
                runtime=self.runtime,
                marker_file=self._config.marker_file,
            )
        return self._instances["prefixes"]  # type: ignore[return-value]
