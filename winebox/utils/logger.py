"""winebox 日志配置

日志统一输出到 stderr，stdout 只留给命令结果（表格、路径等），
便于脚本管道消费。支持人类可读与 JSON 两种格式。
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from typing import TextIO

# 命令行场景下不需要时间戳，级别 + 消息即可
_CLI_FORMAT = "%(levelname)s: %(message)s"
_DEBUG_FORMAT = "%(asctime)s [%(levelname)-7s] %(name)s: %(message)s"


class JSONFormatter(logging.Formatter):
    """结构化 JSON 日志格式器

    输出格式:
        {"timestamp": "...", "level": "INFO", "logger": "winebox.core.cache",
         "message": "...", "exception": "..." (仅在有异常时)}
    """

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": datetime.fromtimestamp(
                record.created, tz=timezone.utc,
            ).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info and record.exc_info[1]:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, ensure_ascii=False)


def setup_logging(
    level: str = "INFO",
    json_output: bool = False,
    stream: TextIO | None = None,
) -> None:
    """配置 winebox 根日志器

    参数:
        level: 日志级别字符串（DEBUG, INFO, WARNING, ERROR）
        json_output: 为 True 时使用 JSON 格式
        stream: 输出流，默认 stderr

    重复调用会替换已有 handler，不会重复输出。
    """
    root = logging.getLogger("winebox")
    for handler in root.handlers[:]:
        root.removeHandler(handler)
        handler.close()

    numeric = getattr(logging, level.upper(), logging.INFO)
    root.setLevel(numeric)

    handler = logging.StreamHandler(stream or sys.stderr)
    if json_output:
        handler.setFormatter(JSONFormatter())
    elif numeric <= logging.DEBUG:
        handler.setFormatter(logging.Formatter(_DEBUG_FORMAT))
    else:
        handler.setFormatter(logging.Formatter(_CLI_FORMAT))
    root.addHandler(handler)
