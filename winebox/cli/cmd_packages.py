"""CLI — 包管理命令（list / install / remove）"""

from __future__ import annotations

import click

from winebox.cli.base import POSITIONAL, WineboxCommand, _svc
from winebox.core.feed import compile_pattern
from winebox.utils.table import render_table


def register(group: click.Group) -> None:
    group.add_command(list_packages)
    group.add_command(install)
    group.add_command(remove)
    group.add_command(remove, name="uninstall")


@click.command(name="list", cls=WineboxCommand, context_settings=POSITIONAL)
@click.argument("pattern", required=False)
@click.option("--installed", "-i", is_flag=True, help="只列出本地已安装的包（不访问网络）")
def list_packages(pattern: str | None, installed: bool) -> None:
    """列出可用的包，PATTERN 为按文件名过滤的正则"""
    svc = _svc()
    local = svc.packages.list_installed()

    if installed:
        regex = compile_pattern(pattern) if pattern else None
        names = sorted(n for n in local if regex is None or regex.search(n))
        if not names:
            click.echo("没有已安装的包。")
            return
        click.echo(render_table(["包名"], [(n,) for n in names]))
        return

    remote = svc.feed.list_assets(pattern)
    if not remote:
        click.echo("没有匹配的包。")
        return
    rows = [
        (p.name, p.date[:10], "已安装" if p.name in local else "")
        for p in remote
    ]
    click.echo(render_table(["包名", "发布日期", "状态"], rows))


@click.command(cls=WineboxCommand, context_settings=POSITIONAL)
@click.argument("names", nargs=-1, required=True)
def install(names: tuple[str, ...]) -> None:
    """下载并安装包（遇到第一个失败即中止）"""
    packages = _svc().packages
    for name in names:
        pkg = packages.install(name)
        click.echo(f"已安装: {pkg.name} -> {pkg.path}")


@click.command(cls=WineboxCommand, context_settings=POSITIONAL)
@click.argument("names", nargs=-1, required=True)
def remove(names: tuple[str, ...]) -> None:
    """删除已安装的包（仍被前缀使用时拒绝）"""
    packages = _svc().packages
    for name in names:
        packages.remove(name)
        click.echo(f"已删除: {name}")
