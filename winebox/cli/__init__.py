"""winebox 命令行接口

CLI 按领域拆分为子模块，每个模块注册自己的命令到 main group。
"""

import os

import click

from winebox import __version__
from winebox.cli.base import CONTEXT_SETTINGS, WineboxGroup
from winebox.core.config import Config
from winebox.core.exceptions import EXIT_FAILURE
from winebox.services.container import ServiceContainer
from winebox.utils.logger import setup_logging
from winebox.utils.shell import require_programs


@click.group(
    cls=WineboxGroup, invoke_without_command=True, context_settings=CONTEXT_SETTINGS,
)
@click.version_option(version=__version__, prog_name="winebox")
@click.option("--config", "-c", "config_path", default="", help="配置文件路径")
@click.pass_context
def main(ctx: click.Context, config_path: str) -> None:
    """winebox - Wine 构建包与前缀管理工具"""
    setup_logging(
        level=os.getenv("WINEBOX_LOG_LEVEL", "INFO"),
        json_output=os.getenv("WINEBOX_LOG_JSON", "") == "1",
    )
    if not isinstance(ctx.obj, ServiceContainer):
        ctx.obj = ServiceContainer(Config.from_file(config_path))
    require_programs(ctx.obj.config.required_programs)
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())
        ctx.exit(EXIT_FAILURE)


# 注册各领域子命令
from winebox.cli.cmd_packages import register as _reg_packages  # noqa: E402
from winebox.cli.cmd_cache import register as _reg_cache  # noqa: E402
from winebox.cli.cmd_prefix import register as _reg_prefix  # noqa: E402
from winebox.cli.base import help_command  # noqa: E402

_reg_packages(main)
_reg_cache(main)
_reg_prefix(main)
main.add_command(help_command)
