"""CLI — 前缀管理命令

prefix 组下: create / update / list / run / tricks / clone / rename / remove|uninstall / help
顶层快捷方式: create / update / run / tricks / clone / rename 直接复用同一命令对象。
"""

from __future__ import annotations

import click

from winebox.cli.base import (
    PASSTHROUGH,
    POSITIONAL,
    WineboxGroup,
    _svc,
    help_command,
)
from winebox.core.exceptions import EXIT_FAILURE
from winebox.utils.table import render_table

_SHORTCUTS = ("create", "update", "run", "tricks", "clone", "rename")

package_option = click.option(
    "-p", "--pkg", "--package", "package", default=None, metavar="PACKAGE",
    help="绑定的包名",
)


def register(group: click.Group) -> None:
    group.add_command(prefix_group)
    for name in _SHORTCUTS:
        cmd = prefix_group.commands[name]
        group.add_command(cmd, name=name)


@click.group(name="prefix", cls=WineboxGroup, invoke_without_command=True)
@click.pass_context
def prefix_group(ctx: click.Context) -> None:
    """Wine 前缀管理"""
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())
        ctx.exit(EXIT_FAILURE)


@prefix_group.command(name="create", context_settings=POSITIONAL)
@click.argument("names", nargs=-1)
@package_option
def prefix_create(names: tuple[str, ...], package: str | None) -> None:
    """创建前缀并绑定到包（已存在的前缀跳过）"""
    for name in _svc().prefixes.create(list(names), package):
        click.echo(f"前缀已创建: {name} ({package})")


@prefix_group.command(name="update", context_settings=POSITIONAL)
@click.argument("names", nargs=-1)
@package_option
def prefix_update(names: tuple[str, ...], package: str | None) -> None:
    """把已有前缀重新绑定到包（不存在的前缀跳过）"""
    for name in _svc().prefixes.update(list(names), package):
        click.echo(f"前缀已更新: {name} ({package})")


@prefix_group.command(name="list", context_settings=POSITIONAL)
@click.argument("pattern", required=False)
@click.option(
    "-p", "--pkg", "--package", "package_pattern", default=None, metavar="REGEX",
    help="按绑定包名过滤的正则",
)
def prefix_list(pattern: str | None, package_pattern: str | None) -> None:
    """列出前缀，PATTERN 为按前缀名过滤的正则"""
    svc = _svc()
    records = svc.prefixes.filter(pattern, package_pattern)
    if not records:
        click.echo("没有匹配的前缀。")
        return
    installed = svc.packages.list_installed()
    rows = [
        (r.name, r.package, "" if r.package in installed else "包未安装")
        for r in records
    ]
    click.echo(render_table(["前缀", "包名", "状态"], rows))


@prefix_group.command(name="run", context_settings=PASSTHROUGH)
@click.argument("args", nargs=-1, type=click.UNPROCESSED)
@click.pass_context
def prefix_run(ctx: click.Context, args: tuple[str, ...]) -> None:
    """在前缀中用 wine 执行命令: run PREFIX COMMAND [ARGS]...

    退出码与被执行命令一致。
    """
    name = args[0] if args else ""
    ctx.exit(_svc().prefixes.run(name, list(args[1:])))


@prefix_group.command(name="tricks", context_settings=PASSTHROUGH)
@click.argument("args", nargs=-1, type=click.UNPROCESSED)
@click.pass_context
def prefix_tricks(ctx: click.Context, args: tuple[str, ...]) -> None:
    """在前缀中执行 winetricks: tricks PREFIX VERB [VERB]..."""
    name = args[0] if args else ""
    ctx.exit(_svc().prefixes.apply_tricks(name, list(args[1:])))


@prefix_group.command(name="clone", context_settings=POSITIONAL)
@click.argument("src")
@click.argument("dest")
def prefix_clone(src: str, dest: str) -> None:
    """完整复制前缀（包括包绑定）"""
    record = _svc().prefixes.clone(src, dest)
    click.echo(f"前缀已复制: {src} -> {record.name} ({record.package})")


@prefix_group.command(name="rename", context_settings=POSITIONAL)
@click.argument("old")
@click.argument("new")
def prefix_rename(old: str, new: str) -> None:
    """重命名前缀"""
    _svc().prefixes.rename(old, new)
    click.echo(f"前缀已重命名: {old} -> {new}")


@prefix_group.command(name="remove", context_settings=POSITIONAL)
@click.argument("names", nargs=-1)
def prefix_remove(names: tuple[str, ...]) -> None:
    """删除前缀（遇到第一个失败即中止）"""
    for name in _svc().prefixes.remove(list(names)):
        click.echo(f"前缀已删除: {name}")


prefix_group.add_command(prefix_remove, name="uninstall")
prefix_group.add_command(help_command)
