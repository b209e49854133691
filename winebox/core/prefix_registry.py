"""前缀注册表

前缀根目录下每个子目录是一个 Wine 前缀，目录内的标记文件（单行）记录绑定的包名。
多个前缀可以绑定同一个包；每个前缀同一时刻只绑定一个包。

批量操作的存在性不匹配策略（continue_on_mismatch）:
  - create: 已存在的名字 → 警告并跳过
  - update: 不存在的名字 → 警告并跳过
  - remove: 不存在或删除失败 → 立即中止，后续名字不再处理

标记文件缺失的前缀目录:
  - list_all / filter 中警告并跳过
  - get / run / tricks / clone 中抛 CorruptRecordError
"""

from __future__ import annotations

import logging
import shutil
from collections.abc import Callable
from pathlib import Path

from winebox.core.exceptions import (
    AlreadyExistsError,
    CorruptRecordError,
    ExecutionError,
    NoCommandError,
    NoPackageSpecifiedError,
    NoPrefixError,
    NotInstalledError,
    PrefixNotFoundError,
)
from winebox.core.feed import compile_pattern
from winebox.core.models import PrefixRecord
from winebox.core.package_registry import PackageRegistry
from winebox.core.registry import DirectoryRegistry, validate_name
from winebox.services.runtime import WineRuntime

logger = logging.getLogger(__name__)

MATCH_ALL = ".*"


class PrefixRegistry(DirectoryRegistry):
    """Wine 前缀的目录注册表"""

    kind = "前缀"

    def __init__(
        self,
        root: str | Path,
        *,
        packages: PackageRegistry,
        runtime: WineRuntime | None = None,
        marker_file: str = ".winebox-package",
    ) -> None:
        super().__init__(root)
        self.packages = packages
        self.runtime = runtime or WineRuntime()
        self.marker_file = marker_file

    # ------------------------------------------------------------------
    # 绑定标记
    # ------------------------------------------------------------------

    def _read_binding(self, path: Path) -> str | None:
        try:
            text = (path / self.marker_file).read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError):
            return None
        lines = text.strip().splitlines()
        return lines[0].strip() if lines else None

    def _write_binding(self, path: Path, package: str) -> None:
        path.mkdir(parents=True, exist_ok=True)
        (path / self.marker_file).write_text(package + "\n", encoding="utf-8")

    # ------------------------------------------------------------------
    # 查询
    # ------------------------------------------------------------------

    def list_all(self) -> list[PrefixRecord]:
        records: list[PrefixRecord] = []
        for name in self._names():
            path = self.root / name
            package = self._read_binding(path)
            if package is None:
                logger.warning("前缀缺少包绑定标记，已跳过: %s", name)
                continue
            records.append(PrefixRecord(name=name, package=package, path=path))
        return records

    def filter(
        self, prefix_pattern: str | None = None, package_pattern: str | None = None,
    ) -> list[PrefixRecord]:
        """两个正则都匹配（re.search）才保留"""
        prefix_re = compile_pattern(prefix_pattern or MATCH_ALL, label="prefix")
        package_re = compile_pattern(package_pattern or MATCH_ALL, label="package")
        return [
            r for r in self.list_all()
            if prefix_re.search(r.name) and package_re.search(r.package)
        ]

    def get(self, name: str) -> PrefixRecord | None:
        path = self._path(name)
        if not path.is_dir():
            return None
        package = self._read_binding(path)
        if package is None:
            raise CorruptRecordError(
                f"前缀缺少包绑定标记: {name} ({path / self.marker_file})"
            )
        return PrefixRecord(name=name, package=package, path=path)

    def _require(self, name: str) -> PrefixRecord:
        if not name:
            raise NoPrefixError()
        record = self.get(name)
        if record is None:
            raise PrefixNotFoundError(f"前缀不存在: {name}")
        return record

    def _require_package(self, package: str | None) -> str:
        if not package:
            raise NoPackageSpecifiedError()
        validate_name(package, kind="包")
        if not self.packages.is_installed(package):
            raise NotInstalledError(f"包未安装: {package}")
        return package

    def _wine(self, record: PrefixRecord) -> Path:
        if not self.packages.is_installed(record.package):
            raise NotInstalledError(
                f"前缀 '{record.name}' 绑定的包未安装: {record.package}"
            )
        return self.packages.runtime_binary(record.package)

    # ------------------------------------------------------------------
    # 批量操作
    # ------------------------------------------------------------------

    def _batch(
        self,
        names: list[str],
        action: Callable[[str], None],
        *,
        expect_exists: bool,
        continue_on_mismatch: bool,
    ) -> list[str]:
        """对每个名字执行 action，返回实际处理的名字

        存在性与 expect_exists 不符时，continue_on_mismatch 决定跳过还是中止。
        action 抛出的异常总是中止整个批次。
        """
        done: list[str] = []
        for name in names:
            if self._exists(name) == expect_exists:
                action(name)
                done.append(name)
                continue
            if not continue_on_mismatch:
                if expect_exists:
                    raise PrefixNotFoundError(f"前缀不存在: {name}")
                raise AlreadyExistsError(f"前缀已存在: {name}")
            if expect_exists:
                logger.warning("前缀不存在，跳过: %s", name)
            elif self._read_binding(self.root / name) is None:
                logger.warning(
                    "前缀目录已存在但缺少包绑定标记，跳过: %s（可能是上次初始化失败，请先删除）",
                    name,
                )
            else:
                logger.warning("前缀已存在，跳过: %s", name)
        return done

    def _bind(self, name: str, package: str) -> None:
        path = self.root / name
        self.runtime.bootstrap(path, self.packages.runtime_binary(package))
        self._write_binding(path, package)
        logger.info("前缀 %s -> %s", name, package)

    def create(self, names: list[str], package: str | None) -> list[str]:
        """创建前缀并绑定到 package，返回实际创建的名字"""
        package = self._require_package(package)
        if not names:
            raise NoPrefixError()
        self.root.mkdir(parents=True, exist_ok=True)
        return self._batch(
            names, lambda n: self._bind(n, package),
            expect_exists=False, continue_on_mismatch=True,
        )

    def update(self, names: list[str], package: str | None) -> list[str]:
        """把已有前缀重新绑定到 package，返回实际更新的名字"""
        package = self._require_package(package)
        if not names:
            raise NoPrefixError()
        return self._batch(
            names, lambda n: self._bind(n, package),
            expect_exists=True, continue_on_mismatch=True,
        )

    def remove(self, names: list[str]) -> list[str]:
        if not names:
            raise NoPrefixError()
        return self._batch(
            names, lambda n: self._rmtree(self.root / n),
            expect_exists=True, continue_on_mismatch=False,
        )

    # ------------------------------------------------------------------
    # 执行
    # ------------------------------------------------------------------

    def run(self, name: str, command: list[str]) -> int:
        """在前缀中用绑定包的 wine 执行命令，返回子进程退出码"""
        if not name:
            raise NoPrefixError()
        if not command:
            raise NoCommandError()
        record = self._require(name)
        return self.runtime.run(record.path, self._wine(record), command)

    def apply_tricks(self, name: str, verbs: list[str]) -> int:
        """在前缀中执行 winetricks verbs，返回子进程退出码"""
        if not name:
            raise NoPrefixError()
        if not verbs:
            raise NoCommandError("未指定 winetricks 动作")
        self.runtime.require_tricks()
        record = self._require(name)
        return self.runtime.tricks(record.path, self._wine(record), verbs)

    # ------------------------------------------------------------------
    # 复制 / 重命名
    # ------------------------------------------------------------------

    def clone(self, src: str, dest: str) -> PrefixRecord:
        """完整复制前缀目录（含绑定标记）"""
        record = self._require(src)
        dest_path = self._path(dest)
        if dest_path.exists():
            raise AlreadyExistsError(f"前缀已存在: {dest}")
        try:
            shutil.copytree(record.path, dest_path, symlinks=True)
        except OSError as e:
            raise ExecutionError(f"复制失败: {record.path} -> {dest_path} - {e}") from e
        logger.info("已复制前缀: %s -> %s", src, dest)
        return PrefixRecord(name=dest, package=record.package, path=dest_path)

    def rename(self, old: str, new: str) -> Path:
        """重命名前缀目录，绑定随目录一起移动"""
        if not old:
            raise NoPrefixError()
        old_path = self._path(old)
        if not old_path.is_dir():
            raise PrefixNotFoundError(f"前缀不存在: {old}")
        new_path = self._path(new)
        if new_path.exists():
            raise AlreadyExistsError(f"前缀已存在: {new}")
        try:
            old_path.rename(new_path)
        except OSError as e:
            raise ExecutionError(f"重命名失败: {old_path} -> {new_path} - {e}") from e
        logger.info("已重命名前缀: %s -> %s", old, new)
        return new_path
