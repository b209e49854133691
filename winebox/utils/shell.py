"""Shell 命令执行工具 — 统一子进程调用

通过 CommandExecutor 协议抽象子进程执行，方便测试替换。
"""

from __future__ import annotations

import logging
import shutil
import subprocess
from dataclasses import dataclass
from typing import Protocol

from winebox.core.exceptions import ExecutionError, MissingDependencyError

logger = logging.getLogger(__name__)


# =========================================================================
# 命令执行结果
# =========================================================================

@dataclass
class CommandResult:
    """命令执行结果（与 subprocess 解耦）"""

    returncode: int
    stdout: str = ""
    stderr: str = ""

    @property
    def success(self) -> bool:
        return self.returncode == 0


# =========================================================================
# 命令执行器协议
# =========================================================================

class CommandExecutor(Protocol):
    """命令执行器协议 — 抽象子进程调用

    测试时可注入 mock 实现，无需 patch subprocess。
    capture=False 时子进程继承当前终端的 stdin/stdout/stderr。
    """

    def execute(
        self,
        cmd: list[str],
        *,
        cwd: str | None = None,
        env: dict[str, str] | None = None,
        capture: bool = True,
    ) -> CommandResult:
        """执行命令并返回结果"""
        ...


# =========================================================================
# 默认实现: 本地执行器
# =========================================================================

class LocalExecutor:
    """本地命令执行器（默认实现）"""

    def execute(
        self,
        cmd: list[str],
        *,
        cwd: str | None = None,
        env: dict[str, str] | None = None,
        capture: bool = True,
    ) -> CommandResult:
        logger.debug("执行: %s (cwd=%s)", cmd, cwd or ".")
        try:
            r = subprocess.run(
                cmd, capture_output=capture, text=True,
                cwd=cwd, env=env, check=False,
            )
        except OSError as e:
            raise ExecutionError(f"无法启动 {cmd[0]}: {e}") from e
        return CommandResult(
            returncode=r.returncode,
            stdout=r.stdout or "",
            stderr=r.stderr or "",
        )


# =========================================================================
# 外部程序检查
# =========================================================================

def missing_programs(programs: list[str]) -> list[str]:
    """返回 PATH 中找不到的程序"""
    return [p for p in programs if shutil.which(p) is None]


def require_programs(programs: list[str]) -> None:
    """检查外部程序是否存在，缺失则抛 MissingDependencyError"""
    missing = missing_programs(programs)
    if missing:
        raise MissingDependencyError(missing)
