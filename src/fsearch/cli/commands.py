"""CLI command implementations."""

import logging
import sys
from pathlib import Path
from typing import Optional

import click
import yaml

from ..config import ConfigManager
from ..config.loader import config_to_key_file, read_config
from ..errors import ConfigLoadError
from ..models.config import INTERFACE_FIELDS, SEARCH_FIELDS, FsearchConfig

logger = logging.getLogger(__name__)

SCALAR_FIELDS = INTERFACE_FIELDS + SEARCH_FIELDS


def _manager(ctx: click.Context) -> ConfigManager:
    return ctx.obj["config_manager"]


def _save_or_exit(manager: ConfigManager) -> None:
    if not manager.save():
        click.echo(f"保存配置失败: {manager.config_path}", err=True)
        sys.exit(1)


@click.command("path")
@click.pass_context
def path_command(ctx):
    """显示配置文件路径。"""
    click.echo(str(_manager(ctx).config_path))


@click.command("show")
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["ini", "yaml"]),
    default="ini",
    help="Output format"
)
@click.pass_context
def show_command(ctx, output_format: str):
    """显示当前配置（无配置文件时显示默认值）。"""
    config = _manager(ctx).config

    if output_format == "yaml":
        click.echo(yaml.safe_dump(
            config.model_dump(),
            default_flow_style=False,
            allow_unicode=True,
            sort_keys=False
        ), nl=False)
    else:
        click.echo(config_to_key_file(config).to_string(), nl=False)


@click.command("init")
@click.option("--force", is_flag=True, help="Overwrite an existing configuration file")
@click.pass_context
def init_command(ctx, force: bool):
    """生成默认配置文件。"""
    manager = _manager(ctx)

    if manager.config_path.exists() and not force:
        click.echo(f"配置文件已存在: {manager.config_path}（使用 --force 覆盖）", err=True)
        sys.exit(1)

    manager.reset()
    _save_or_exit(manager)
    click.echo(f"配置已保存到: {manager.config_path}")


@click.command("set")
@click.argument("key", type=click.Choice(SCALAR_FIELDS))
@click.argument("value")
@click.pass_context
def set_command(ctx, key: str, value: str):
    """设置单个配置项并保存。"""
    manager = _manager(ctx)

    try:
        manager.update(**{key: value})
    except ValueError as e:
        click.echo(f"无效的配置值 {key}={value}: {e}", err=True)
        sys.exit(1)

    _save_or_exit(manager)
    click.echo(f"{key} = {getattr(manager.config, key)}")


@click.group("location")
def location_command():
    """搜索位置管理命令。"""
    pass


@location_command.command("list")
@click.pass_context
def list_locations(ctx):
    """列出已配置的搜索位置。"""
    for location in _manager(ctx).config.locations:
        click.echo(location)


@location_command.command("add")
@click.argument("location", type=click.Path(path_type=Path))
@click.pass_context
def add_location(ctx, location: Path):
    """添加搜索位置。"""
    manager = _manager(ctx)
    location_str = str(location.expanduser().absolute())

    if not manager.add_location(location_str):
        click.echo(f"搜索位置已存在: {location_str}")
        return

    _save_or_exit(manager)
    click.echo(f"已添加搜索位置: {location_str}")


@location_command.command("remove")
@click.argument("location", type=click.Path(path_type=Path))
@click.pass_context
def remove_location(ctx, location: Path):
    """移除搜索位置。"""
    manager = _manager(ctx)
    location_str = str(location.expanduser().absolute())

    if not manager.remove_location(location_str):
        click.echo(f"未配置该搜索位置: {location_str}", err=True)
        sys.exit(1)

    _save_or_exit(manager)
    click.echo(f"已移除搜索位置: {location_str}")


@click.command("validate")
@click.argument("config_file", type=click.Path(dir_okay=False, path_type=Path), required=False)
@click.pass_context
def validate_command(ctx, config_file: Optional[Path]):
    """验证配置文件，并列出使用默认值的配置项。"""
    path = config_file or _manager(ctx).config_path

    try:
        config, defaulted = read_config(path)
    except ConfigLoadError as e:
        click.echo(f"配置验证失败: {e}", err=True)
        sys.exit(1)

    click.echo(f"配置文件有效: {path}")
    for name in defaulted:
        default = FsearchConfig.model_fields[name].default
        click.echo(f"  {name}: 使用默认值 {default}")
    click.echo(f"  locations: {len(config.locations)}")
