"""本地文件读写 — 配置文件的 YAML 解析与缓存文件的原子替换"""

from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path
from typing import Any

import yaml

logger = logging.getLogger(__name__)

# 配置文件上限 1MB
MAX_YAML_SIZE = 1024 * 1024


def atomic_write(path: Path, content: str) -> None:
    """写入同目录临时文件后 os.replace 覆盖目标

    读者要么看到旧内容，要么看到完整的新内容。
    失败时删除临时文件并重新抛出原异常。
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp = tempfile.mkstemp(dir=str(path.parent), prefix=f".{path.name}.", suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(content)
        os.replace(tmp, path)
    except BaseException:
        Path(tmp).unlink(missing_ok=True)
        raise


def load_yaml(path: str | Path) -> dict[str, Any]:
    """读取 YAML 映射

    文件不存在、为空或顶层不是映射时返回 {}。

    异常:
        yaml.YAMLError: 语法错误
        OSError: 读取失败
        ValueError: 超过 MAX_YAML_SIZE
    """
    p = Path(path)
    if not p.is_file():
        return {}

    size = p.stat().st_size
    if size > MAX_YAML_SIZE:
        raise ValueError(f"YAML 文件过大: {p} ({size} 字节，上限 {MAX_YAML_SIZE})")

    with open(p, encoding="utf-8") as f:
        data = yaml.safe_load(f)

    if data is None:
        return {}
    if not isinstance(data, dict):
        logger.warning("%s 顶层不是映射 (%s)，已忽略", p, type(data).__name__)
        return {}
    return data
