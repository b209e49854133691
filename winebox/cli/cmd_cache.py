"""CLI — 远程源缓存命令"""

from __future__ import annotations

import click

from winebox.cli.base import WineboxGroup, _svc
from winebox.core.cache import SECONDS_PER_DAY


def register(group: click.Group) -> None:
    group.add_command(cache_group)


@click.group(name="cache", cls=WineboxGroup, invoke_without_command=True)
@click.pass_context
def cache_group(ctx: click.Context) -> None:
    """远程源缓存管理（不带子命令时等同 refresh）"""
    if ctx.invoked_subcommand is None:
        ctx.invoke(cache_refresh)


@cache_group.command(name="refresh")
def cache_refresh() -> None:
    """立即重新拉取远程源"""
    path = _svc().cache.refresh()
    click.echo(f"缓存已更新: {path}")


@cache_group.command(name="info")
def cache_info() -> None:
    """查看缓存状态"""
    info = _svc().cache.info()
    click.echo(f"路径: {info.path}")
    if not info.exists or info.age_seconds is None:
        click.echo("状态: 不存在")
        return
    days = info.age_seconds / SECONDS_PER_DAY
    status = "有效" if info.fresh else "已过期"
    click.echo(f"状态: {status}  (已缓存 {days:.1f} 天, release 数: {info.releases})")


@cache_group.command(name="clear")
def cache_clear() -> None:
    """删除缓存文件"""
    if _svc().cache.clear():
        click.echo("缓存已删除。")
    else:
        click.echo("缓存不存在。")
