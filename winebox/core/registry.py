"""目录注册表基类 — 包注册表与前缀注册表共享的目录扫描 / 命名校验逻辑

每条记录对应根目录下的一个子目录，目录名即记录名。
隐藏目录（以 . 开头）不计入。

子类用法:
    class MyRegistry(DirectoryRegistry):
        kind = "条目"
"""

from __future__ import annotations

import logging
import shutil
from pathlib import Path

from winebox.core.exceptions import ExecutionError, ValidationError

logger = logging.getLogger(__name__)


def validate_name(name: str, *, kind: str = "名称") -> None:
    """名称必须是单级、非隐藏的目录名

    以 . 开头的目录不会出现在列表中，因此不允许作为名称。
    """
    if not name or name.startswith(".") or "/" in name or "\0" in name:
        raise ValidationError(f"无效的{kind}名称: {name!r}")


class DirectoryRegistry:
    """目录注册表基类"""

    kind: str = "条目"

    def __init__(self, root: str | Path) -> None:
        self.root = Path(root)

    def _path(self, name: str) -> Path:
        validate_name(name, kind=self.kind)
        return self.root / name

    def _exists(self, name: str) -> bool:
        return self._path(name).is_dir()

    def _names(self) -> list[str]:
        """根目录下所有记录名（排序），根目录不存在时为空"""
        if not self.root.is_dir():
            return []
        return sorted(
            d.name for d in self.root.iterdir()
            if d.is_dir() and not d.name.startswith(".")
        )

    def _rmtree(self, path: Path) -> None:
        try:
            shutil.rmtree(path)
        except OSError as e:
            raise ExecutionError(f"删除失败: {path} - {e}") from e
        logger.info("已删除: %s", path)
