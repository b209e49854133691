"""CLI 基础设施 — 统一的异常映射与服务容器获取

WineboxError 在命令 / 命令组的 invoke 中统一转换:
  UsageError 子类      → click.UsageError（打印用法），退出码 1
  其他 WineboxError    → click.ClickException，退出码取异常的 exit_code
click 自身的参数解析错误退出码也统一为 1。
"""

from __future__ import annotations

from typing import Any

import click

from winebox.core.exceptions import EXIT_FAILURE, UsageError, WineboxError
from winebox.services.container import ServiceContainer

CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}

# 以 - 开头但未定义的选项按位置参数处理
POSITIONAL = {"ignore_unknown_options": True}

# 第一个位置参数之后的所有内容原样透传（run / tricks）
PASSTHROUGH = {"ignore_unknown_options": True, "allow_interspersed_args": False}


class CliError(click.ClickException):
    """携带 WineboxError 退出码的 click 异常"""

    def __init__(self, error: WineboxError) -> None:
        super().__init__(str(error))
        self.exit_code = error.exit_code
        self.error = error


def _usage_error(message: str, ctx: click.Context | None) -> click.UsageError:
    err = click.UsageError(message, ctx=ctx)
    err.exit_code = EXIT_FAILURE
    return err


class _ErrorMapping:
    """Command / Group 共用的异常映射"""

    def make_context(
        self, info_name: str | None, args: list[str],
        parent: click.Context | None = None, **extra: Any,
    ) -> click.Context:
        try:
            return super().make_context(  # type: ignore[misc]
                info_name, args, parent=parent, **extra,
            )
        except click.UsageError as e:
            e.exit_code = EXIT_FAILURE
            raise

    def invoke(self, ctx: click.Context) -> Any:
        try:
            return super().invoke(ctx)  # type: ignore[misc]
        except click.UsageError as e:
            e.exit_code = EXIT_FAILURE
            raise
        except UsageError as e:
            raise _usage_error(str(e), ctx) from e
        except WineboxError as e:
            raise CliError(e) from e


class WineboxCommand(_ErrorMapping, click.Command):
    pass


class WineboxGroup(_ErrorMapping, click.Group):
    command_class = WineboxCommand


WineboxGroup.group_class = WineboxGroup


def _svc() -> ServiceContainer:
    """获取当前上下文中的服务容器（由根命令组创建）"""
    ctx = click.get_current_context()
    container = ctx.find_object(ServiceContainer)
    if container is None:
        raise click.ClickException("服务容器未初始化")
    return container


@click.command(name="help", cls=WineboxCommand)
@click.pass_context
def help_command(ctx: click.Context) -> None:
    """显示帮助"""
    parent = ctx.parent or ctx
    click.echo(parent.get_help())
