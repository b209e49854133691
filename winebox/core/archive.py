"""归档解压 — 通过 tar 外部程序展开到包目录"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Protocol

from winebox.core.exceptions import ExecutionError
from winebox.utils.shell import CommandExecutor, LocalExecutor

logger = logging.getLogger(__name__)


class Extractor(Protocol):
    def extract(self, archive: Path, dest: Path) -> None:
        """把 archive 展开到 dest 目录，失败抛 ExecutionError"""
        ...


class TarExtractor:
    """tar 解压器

    Wine 构建包的顶层通常是一个与包同名的目录，
    strip_components=1 时直接把其内容平铺到 dest。
    """

    def __init__(
        self,
        executor: CommandExecutor | None = None,
        strip_components: int = 1,
    ) -> None:
        self._executor = executor or LocalExecutor()
        self.strip_components = strip_components

    def extract(self, archive: Path, dest: Path) -> None:
        dest.mkdir(parents=True, exist_ok=True)
        cmd = ["tar", "-xf", str(archive), "-C", str(dest)]
        if self.strip_components:
            cmd.append(f"--strip-components={self.strip_components}")
        logger.info("解压: %s -> %s", archive.name, dest)
        r = self._executor.execute(cmd)
        if not r.success:
            raise ExecutionError(f"解压失败 (rc={r.returncode}): {r.stderr[:500]}")
