"""Wine 运行时 — 在指定前缀中初始化、执行命令、调用 winetricks

所有子进程经由 CommandExecutor 协议执行，测试时注入 mock 实现。
环境绑定:
  WINEPREFIX  前缀目录
  WINE        包内的 wine 可执行文件（仅 winetricks 需要）
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

from winebox.core.exceptions import ExecutionError
from winebox.utils.shell import CommandExecutor, LocalExecutor, require_programs

logger = logging.getLogger(__name__)


class WineRuntime:
    """Wine 启动 / 执行原语"""

    def __init__(
        self,
        executor: CommandExecutor | None = None,
        *,
        bootstrap_args: list[str] | None = None,
        tricks_program: str = "winetricks",
    ) -> None:
        self._executor = executor or LocalExecutor()
        self.bootstrap_args = list(bootstrap_args or ["wineboot", "--init"])
        self.tricks_program = tricks_program

    @staticmethod
    def _env(prefix_dir: Path, **extra: str) -> dict[str, str]:
        return {**os.environ, "WINEPREFIX": str(prefix_dir), **extra}

    def bootstrap(self, prefix_dir: Path, wine: Path) -> None:
        """在 prefix_dir 中初始化 Wine 环境，失败抛 ExecutionError"""
        logger.info("初始化前缀: %s (wine=%s)", prefix_dir, wine)
        r = self._executor.execute(
            [str(wine), *self.bootstrap_args], env=self._env(prefix_dir),
        )
        if not r.success:
            raise ExecutionError(
                f"前缀初始化失败 (rc={r.returncode}): {prefix_dir} {r.stderr[:500]}"
            )

    def run(self, prefix_dir: Path, wine: Path, command: list[str]) -> int:
        """用 wine 执行 command，stdio 直通终端，返回退出码"""
        logger.debug("执行: %s %s (WINEPREFIX=%s)", wine, command, prefix_dir)
        r = self._executor.execute(
            [str(wine), *command], env=self._env(prefix_dir), capture=False,
        )
        return r.returncode

    def require_tricks(self) -> None:
        """winetricks 不在 PATH 中时抛 MissingDependencyError"""
        require_programs([self.tricks_program])

    def tricks(self, prefix_dir: Path, wine: Path, verbs: list[str]) -> int:
        """调用 winetricks，返回退出码（调用方先 require_tricks）"""
        logger.debug("winetricks %s (WINEPREFIX=%s)", verbs, prefix_dir)
        r = self._executor.execute(
            [self.tricks_program, *verbs],
            env=self._env(prefix_dir, WINE=str(wine)),
            capture=False,
        )
        return r.returncode
