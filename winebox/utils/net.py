"""网络工具 — URL 安全校验、文本拉取、文件下载"""

from __future__ import annotations

import logging
import urllib.error
import urllib.request
from pathlib import Path
from urllib.parse import urlparse

from winebox import __version__
from winebox.core.exceptions import ExecutionError, ValidationError

logger = logging.getLogger(__name__)

_ALLOWED_SCHEMES = frozenset(("http", "https"))
_USER_AGENT = f"winebox/{__version__}"


def validate_url_scheme(url: str, *, context: str = "") -> None:
    """校验 URL 仅使用 http/https，防止 file:// 等非预期协议访问

    Raises:
        ValidationError: URL scheme 不在白名单内
    """
    parsed = urlparse(url)
    if parsed.scheme not in _ALLOWED_SCHEMES:
        label = f" ({context})" if context else ""
        raise ValidationError(
            f"不允许的 URL 协议 '{parsed.scheme}'{label}，"
            f"仅支持 http/https: {url}"
        )


def fetch_text(url: str) -> str:
    """GET 请求并返回响应文本，失败抛 ExecutionError"""
    validate_url_scheme(url, context="feed")
    req = urllib.request.Request(url, headers={"User-Agent": _USER_AGENT})
    logger.info("拉取: %s", url)
    try:
        with urllib.request.urlopen(req) as resp:  # nosec B310
            return resp.read().decode("utf-8")
    except (urllib.error.HTTPError, urllib.error.URLError, OSError) as e:
        raise ExecutionError(f"拉取失败: {url} - {e}") from e


def download_file(url: str, dest: Path) -> Path:
    """下载文件到 dest，失败时删除残留文件并抛 ExecutionError"""
    validate_url_scheme(url, context="download")
    dest.parent.mkdir(parents=True, exist_ok=True)
    logger.info("下载: %s", url)
    try:
        urllib.request.urlretrieve(url, str(dest))  # nosec B310
    except (urllib.error.HTTPError, urllib.error.URLError, OSError) as e:
        dest.unlink(missing_ok=True)
        raise ExecutionError(f"下载失败: {url} - {e}") from e
    logger.info("已保存: %s", dest)
    return dest
