"""表格渲染 — 纯格式化，无状态

按显示宽度对齐（中日韩字符占两列），列间两个空格，表头下加分隔线。
"""

from __future__ import annotations

import unicodedata
from collections.abc import Iterable, Sequence


def display_width(text: str) -> int:
    """终端显示宽度"""
    return sum(
        2 if unicodedata.east_asian_width(ch) in ("W", "F") else 1
        for ch in text
    )


def _pad(text: str, width: int) -> str:
    return text + " " * (width - display_width(text))


def render_table(headers: Sequence[str], rows: Iterable[Sequence[object]]) -> str:
    """渲染表格，返回不带结尾换行的文本

    示例:
        >>> print(render_table(["NAME", "PACKAGE"], [("work", "wine-7.0-amd64")]))
        NAME  PACKAGE
        ----  --------------
        work  wine-7.0-amd64
    """
    cells = [["" if c is None else str(c) for c in row] for row in rows]
    for row in cells:
        if len(row) != len(headers):
            raise ValueError(f"列数不匹配: 期望 {len(headers)}，实际 {len(row)}")

    widths = [display_width(h) for h in headers]
    for row in cells:
        for i, c in enumerate(row):
            widths[i] = max(widths[i], display_width(c))

    def _line(values: Sequence[str]) -> str:
        return "  ".join(_pad(v, w) for v, w in zip(values, widths)).rstrip()

    lines = [_line(headers), _line(["-" * w for w in widths])]
    lines.extend(_line(row) for row in cells)
    return "\n".join(lines)
